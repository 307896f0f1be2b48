"""
Send a Pelco D "call preset" packet to a PTZ camera over a serial port.
"""

from .protocol import PelcoPacket, encode
from .config import SendConfig, SerialConfig
from .sender import SendResult, send_packet

__version__ = "1.0.0"

__all__ = [
    'PelcoPacket',
    'encode',
    'SendConfig',
    'SerialConfig',
    'SendResult',
    'send_packet',
]
