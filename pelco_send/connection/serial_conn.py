"""
Serial connection implementation for PTZ cameras.

This module provides a concrete implementation of ConnectionBase
for serial connections (RS485/RS422) to PTZ cameras.
"""
import logging
from typing import Optional, Dict, Any

import serial

from .base import ConnectionBase
from ..config import SerialConfig
from ..errors import PortUnavailable, ConfigFailed, WriteCallFailed

logger = logging.getLogger(__name__)

_BYTESIZES = {
    5: serial.FIVEBITS,
    6: serial.SIXBITS,
    7: serial.SEVENBITS,
    8: serial.EIGHTBITS,
}

_STOPBITS = {
    1: serial.STOPBITS_ONE,
    1.5: serial.STOPBITS_ONE_POINT_FIVE,
    2: serial.STOPBITS_TWO,
}

_PARITIES = {
    'N': serial.PARITY_NONE,
    'E': serial.PARITY_EVEN,
    'O': serial.PARITY_ODD,
    'M': serial.PARITY_MARK,
    'S': serial.PARITY_SPACE,
}


class SerialConnection(ConnectionBase):
    """
    Serial connection implementation for PTZ cameras.

    Wraps a pyserial port. The device may be a plain path ('COM3',
    '/dev/ttyUSB0') or any pyserial URL ('loop://', 'rfc2217://...').
    """

    def __init__(self, config: SerialConfig, packet_length: int = 7):
        """
        Initialize serial connection.

        Args:
            config: Serial parameters to apply after opening
            packet_length: Size of the transfer the timeouts are sized for
        """
        self._config = config
        self._packet_length = packet_length
        self._serial: Optional[serial.SerialBase] = None

    @property
    def name(self) -> str:
        return self._config.device

    def open(self) -> None:
        """
        Open the serial device with exclusive access.

        Raises:
            PortUnavailable: If the device is missing or already in use
        """
        port = None
        try:
            port = serial.serial_for_url(self._config.device, do_not_open=True)
            port.exclusive = True
            port.open()
        except (serial.SerialException, OSError, ValueError) as e:
            if port is not None and port.is_open:
                port.close()
            raise PortUnavailable(f"Unable to open serial port {self._config.device}: {e}") from e

        self._serial = port
        logger.debug("Opened serial port %s", self._config.device)

    def _settings(self, current: Dict[str, Any]) -> Dict[str, Any]:
        settings = dict(current)
        settings.update(
            baudrate=self._config.baudrate,
            bytesize=_BYTESIZES[self._config.bytesize],
            stopbits=_STOPBITS[self._config.stopbits],
            parity=_PARITIES[self._config.parity.upper()],
            inter_byte_timeout=self._config.inter_byte_timeout,
            timeout=self._config.read_timeout(self._packet_length),
            write_timeout=self._config.write_timeout(self._packet_length),
        )
        return settings

    def configure(self) -> None:
        """
        Apply baud rate, 8N1 framing and timeouts.

        The current settings are read first so every field not named
        here keeps the driver's value.

        Raises:
            ConfigFailed: If reading or applying the settings fails
        """
        if not self.is_open():
            raise ConfigFailed("Serial connection is not open")

        try:
            current = self._serial.get_settings()
        except (serial.SerialException, OSError) as e:
            raise ConfigFailed(f"Error getting device state for {self.name}: {e}") from e

        try:
            self._serial.apply_settings(self._settings(current))
        except (serial.SerialException, OSError, ValueError) as e:
            raise ConfigFailed(f"Error setting device parameters for {self.name}: {e}") from e

        logger.debug("Configured %s: %s baud, %s%s%s, write timeout %.3fs",
                     self.name, self._config.baudrate, self._config.bytesize,
                     self._config.parity, self._config.stopbits,
                     self._config.write_timeout(self._packet_length))

    def send(self, data: bytes) -> int:
        """
        Send data over the serial connection.

        Args:
            data: Bytes to send

        Returns:
            Number of bytes written; 0 when the write timed out

        Raises:
            WriteCallFailed: If connection is not open or the write fails
        """
        if not self.is_open():
            raise WriteCallFailed("Serial connection is not open")

        logger.debug("[SERIAL TX] >>> %s | Len: %d bytes",
                     ' '.join(f'{b:02X}' for b in data), len(data))
        try:
            written = self._serial.write(data)
        except serial.SerialTimeoutException as e:
            # pyserial does not report how much went out before the timeout
            logger.warning("Write to %s timed out, partial count unknown: %s", self.name, e)
            return 0
        except (serial.SerialException, OSError) as e:
            raise WriteCallFailed(f"Error writing to {self.name}: {e}") from e

        return len(data) if written is None else written

    def flush(self) -> None:
        """Wait until all written data has been transmitted."""
        if not self.is_open():
            return
        try:
            self._serial.flush()
        except (serial.SerialException, OSError) as e:
            logger.warning("Error flushing %s: %s", self.name, e)

    def close(self) -> None:
        """Close the serial connection."""
        if self._serial is None:
            return
        try:
            self._serial.close()
            logger.debug("Closed serial port %s", self.name)
        finally:
            self._serial = None

    def is_open(self) -> bool:
        """
        Check if the serial connection is open.

        Returns:
            True if connection is open, False otherwise
        """
        return self._serial is not None and self._serial.is_open
