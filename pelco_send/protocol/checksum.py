"""
Utilities for calculating and validating checksums for Pelco D protocol.
"""
from typing import Iterable


def calculate_checksum(message: Iterable[int]) -> int:
    """
    Calculate the Pelco D checksum for a message.

    The checksum is the sum of every byte after the sync byte (0xFF),
    modulo 256. Pass the message without its trailing checksum byte.

    Args:
        message: Sequence of bytes representing the message (including sync byte)

    Returns:
        Calculated checksum as an integer (0-255)
    """
    # Skip sync byte (first byte) for checksum calculation
    return sum(list(message)[1:]) & 0xFF


def validate_checksum(message: Iterable[int]) -> bool:
    """
    Validate the checksum of a complete Pelco D message.

    Args:
        message: Complete message including checksum

    Returns:
        True if checksum is valid, False otherwise
    """
    message_bytes = list(message)
    if len(message_bytes) < 2:
        return False

    provided_checksum = message_bytes[-1]
    expected_checksum = calculate_checksum(message_bytes[:-1])

    return provided_checksum == expected_checksum
