"""
Deliver one Pelco D packet over a serial connection.

One call to send_packet is one session:

    open -> configure -> write -> verify count -> flush -> close

Open failures raise before anything else runs. Every later failure
closes the connection before the error propagates. A short write is
reported on the result and logged, but is not an error.
"""
from __future__ import annotations
import logging
from dataclasses import dataclass
from typing import Callable, Optional

from .config import SerialConfig, SIMULATOR_DEVICE
from .connection import ConnectionBase, SerialConnection, SimulatorConnection
from .protocol import PACKET_LENGTH, PelcoPacket, describe_packet

log = logging.getLogger(__name__)

ConnectionFactory = Callable[[SerialConfig], ConnectionBase]


@dataclass(frozen=True)
class SendResult:
    packet: PelcoPacket
    device: str
    bytes_written: int

    @property
    def complete(self) -> bool:
        return self.bytes_written == PACKET_LENGTH


def create_connection(config: SerialConfig) -> ConnectionBase:
    """Pick the transport for a device name."""
    if config.device == SIMULATOR_DEVICE:
        log.info("Using simulator connection (explicit configuration)")
        return SimulatorConnection()
    return SerialConnection(config, packet_length=PACKET_LENGTH)


def send_packet(packet: PelcoPacket,
                config: SerialConfig,
                connection_factory: Optional[ConnectionFactory] = None) -> SendResult:
    """
    Send a single packet and report how many bytes went out.

    Args:
        packet: Encoded Pelco D packet
        config: Serial parameters for the device
        connection_factory: Builds the connection; defaults to create_connection

    Returns:
        SendResult; ``complete`` is False after a short write

    Raises:
        PortUnavailable: The device could not be opened
        ConfigFailed: Settings or timeouts were rejected
        WriteCallFailed: The write call itself failed
    """
    factory = connection_factory or create_connection
    data = bytes(packet)

    with factory(config) as connection:
        connection.configure()

        log.debug("Sending %s", describe_packet(packet))
        written = connection.send(data)
        result = SendResult(packet=packet, device=connection.name, bytes_written=written)

        if result.complete:
            log.info("%s (%d bytes written to %s)", packet.hex(), written, connection.name)
        else:
            log.warning("Error sending packet. %d of %d bytes confirmed written to %s",
                        written, len(data), connection.name)

        connection.flush()

    return result
