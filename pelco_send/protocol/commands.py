"""
Command builders for Pelco D protocol.

This module builds the 7-byte Pelco D packets sent to a camera:

    [0xFF, address, command1, command2, data1, data2, checksum]

Where:
- 0xFF is the sync byte
- address is the camera address (1-255)
- command1, command2 are command bytes
- data1, data2 are data bytes
- checksum is the sum of all bytes except 0xFF, modulo 256
"""
from typing import Iterable, NamedTuple
from .checksum import calculate_checksum, validate_checksum

SYNC_BYTE = 0xFF
PACKET_LENGTH = 7

# Command 2 byte for "go to preset"
CMD_CALL_PRESET = 0x07


class PelcoPacket(NamedTuple):
    """A complete Pelco D packet, one field per wire byte."""

    sync: int
    address: int
    command1: int
    command2: int
    data1: int
    data2: int
    checksum: int

    def __bytes__(self) -> bytes:
        return bytes(tuple(self))

    def hex(self) -> str:
        """Space separated upper-case hex, e.g. 'FF 01 00 07 00 01 09'."""
        return ' '.join(f'{b:02X}' for b in self)


def create_basic_command(address: int, cmd1: int, cmd2: int, data1: int, data2: int) -> PelcoPacket:
    """
    Create a basic Pelco D command.

    Every field is truncated to a single byte before the checksum is
    computed, so an address of 256 encodes as 0.

    Args:
        address: Camera address (1-255)
        cmd1: Command byte 1
        cmd2: Command byte 2
        data1: Data byte 1
        data2: Data byte 2

    Returns:
        The packet, checksum included
    """
    # Create message without checksum
    message = [SYNC_BYTE, address & 0xFF, cmd1 & 0xFF, cmd2 & 0xFF, data1 & 0xFF, data2 & 0xFF]

    # Calculate and append checksum
    message.append(calculate_checksum(message))

    return PelcoPacket(*message)


def create_call_preset_command(address: int, preset_id: int) -> PelcoPacket:
    """Create command to call a preset position"""
    return create_basic_command(address, 0x00, CMD_CALL_PRESET, 0x00, preset_id)


def encode(camera_address: int, preset: int) -> PelcoPacket:
    """
    Encode a "call preset" packet for the given camera.

    Args:
        camera_address: Camera address, truncated to one byte
        preset: Preset number, truncated to one byte

    Returns:
        The 7-byte packet
    """
    return create_call_preset_command(camera_address, preset)


def parse_packet(data: Iterable[int]) -> PelcoPacket:
    """
    Accept raw bytes as a Pelco D packet.

    Args:
        data: Exactly 7 bytes, starting with the sync byte

    Returns:
        The parsed packet

    Raises:
        ValueError: If the length, sync byte or checksum is wrong
    """
    raw = bytes(data)
    if len(raw) != PACKET_LENGTH:
        raise ValueError(f"Pelco D packet must be {PACKET_LENGTH} bytes, got {len(raw)}")
    if raw[0] != SYNC_BYTE:
        raise ValueError(f"Bad sync byte 0x{raw[0]:02X}, expected 0x{SYNC_BYTE:02X}")
    if not validate_checksum(raw):
        expected = calculate_checksum(raw[:-1])
        raise ValueError(f"Checksum mismatch: got 0x{raw[-1]:02X}, expected 0x{expected:02X}")
    return PelcoPacket(*raw)


def describe_packet(packet: PelcoPacket) -> str:
    """
    Describe a Pelco D packet for debug logs.

    Format: 0xFF add cmd1 cmd2 data1 data2 sum
    """
    if packet.command1 == 0x00 and packet.command2 == CMD_CALL_PRESET and packet.data1 == 0x00:
        details = f"Call Preset {packet.data2}"
    else:
        details = "Unknown"

    return (f"Addr: {packet.address}, Cmd: {packet.command1:02X} {packet.command2:02X}, "
            f"Data: {packet.data1:02X} {packet.data2:02X} | {details}")
