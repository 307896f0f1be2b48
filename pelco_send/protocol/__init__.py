"""
Protocol module for Pelco D preset packets.

This module provides the packet encoder used to call a stored preset
on a PTZ camera, together with the Pelco D checksum helpers.
"""

from .commands import (
    SYNC_BYTE,
    PACKET_LENGTH,
    CMD_CALL_PRESET,
    PelcoPacket,
    create_basic_command,
    create_call_preset_command,
    encode,
    parse_packet,
    describe_packet,
)
from .checksum import calculate_checksum, validate_checksum

__all__ = [
    'SYNC_BYTE',
    'PACKET_LENGTH',
    'CMD_CALL_PRESET',
    'PelcoPacket',
    'calculate_checksum',
    'validate_checksum',
    'create_basic_command',
    'create_call_preset_command',
    'encode',
    'parse_packet',
    'describe_packet',
]
