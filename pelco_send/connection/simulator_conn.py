"""
Simulator connection for PTZ camera testing.

This module provides a simulated connection that accepts Pelco D packets
without requiring actual hardware.
"""
import logging
from typing import List

from .base import ConnectionBase
from ..errors import WriteCallFailed
from ..protocol import parse_packet, describe_packet

logger = logging.getLogger(__name__)


class SimulatorConnection(ConnectionBase):
    """
    Simulated connection for PTZ camera testing.

    Every packet sent is recorded in ``sent``. Sending never fails while
    the connection is open.
    """

    def __init__(self, device: str = 'SIMULATOR'):
        self._device = device
        self._open = False
        self._configured = False
        self.sent: List[bytes] = []
        self.flushed = False

    @property
    def name(self) -> str:
        return self._device

    @property
    def configured(self) -> bool:
        return self._configured

    def open(self) -> None:
        logger.info("Opening simulator connection")
        self._open = True

    def configure(self) -> None:
        self._configured = True

    def send(self, data: bytes) -> int:
        """
        Send data to the simulated camera.

        Args:
            data: Command bytes

        Returns:
            Number of bytes sent

        Raises:
            WriteCallFailed: If connection is not open
        """
        if not self.is_open():
            raise WriteCallFailed("Simulator connection is not open")

        logger.info("[SIM TX] >>> %s | Length: %d bytes",
                    ' '.join(f'{b:02X}' for b in data), len(data))
        try:
            logger.info("[SIM] %s", describe_packet(parse_packet(data)))
        except ValueError as e:
            logger.warning("[SIM] Camera would ignore this packet: %s", e)

        self.sent.append(bytes(data))
        return len(data)

    def flush(self) -> None:
        self.flushed = True

    def close(self) -> None:
        if self._open:
            logger.info("Closing simulator connection")
        self._open = False

    def is_open(self) -> bool:
        return self._open
