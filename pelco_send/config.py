"""
Utilities for loading and managing configuration.

Values are collected into frozen dataclasses once and passed explicitly
to the encoder and the transport.
"""
import os
import sys
from dataclasses import dataclass
from typing import Dict, Any, Optional

import yaml

from .errors import ArgumentError

DEFAULT_BAUDRATE = 2400
DEFAULT_PORT = 3
DEFAULT_CAMERA = 1

SIMULATOR_DEVICE = 'SIMULATOR'

# Timeouts in milliseconds
READ_INTERVAL_TIMEOUT_MS = 50
TOTAL_TIMEOUT_CONSTANT_MS = 50
TOTAL_TIMEOUT_MULTIPLIER_MS = 10


def default_device_prefix(platform: Optional[str] = None) -> str:
    """Device path prefix for the current (or given) platform."""
    platform = platform or sys.platform
    if platform.startswith('win'):
        return '\\\\.\\COM'
    return '/dev/ttyS'


def device_name(port_number: int, prefix: Optional[str] = None,
                platform: Optional[str] = None) -> str:
    """
    Build the device path for a numeric port.

    Args:
        port_number: Port number, e.g. 3 for COM3
        prefix: Path prefix; a pyserial URL (containing '://') or the
            simulator name is returned unchanged
        platform: Overrides sys.platform when picking the default prefix

    Returns:
        Device path such as '\\\\.\\COM3' or '/dev/ttyS3'
    """
    if prefix is None:
        prefix = default_device_prefix(platform)
    if '://' in prefix or prefix == SIMULATOR_DEVICE:
        return prefix
    return f"{prefix}{port_number}"


@dataclass(frozen=True)
class SerialConfig:
    """Serial parameters applied once to an open port."""

    device: str
    baudrate: int = DEFAULT_BAUDRATE
    bytesize: int = 8
    stopbits: int = 1
    parity: str = 'N'
    read_interval_timeout_ms: int = READ_INTERVAL_TIMEOUT_MS
    read_total_constant_ms: int = TOTAL_TIMEOUT_CONSTANT_MS
    read_total_multiplier_ms: int = TOTAL_TIMEOUT_MULTIPLIER_MS
    write_total_constant_ms: int = TOTAL_TIMEOUT_CONSTANT_MS
    write_total_multiplier_ms: int = TOTAL_TIMEOUT_MULTIPLIER_MS

    def __post_init__(self):
        if self.baudrate <= 0:
            raise ArgumentError(f"Baud rate must be positive, got {self.baudrate}")

    @property
    def inter_byte_timeout(self) -> float:
        return self.read_interval_timeout_ms / 1000.0

    def read_timeout(self, n_bytes: int) -> float:
        """Total read timeout in seconds for a transfer of n_bytes."""
        return (self.read_total_constant_ms + self.read_total_multiplier_ms * n_bytes) / 1000.0

    def write_timeout(self, n_bytes: int) -> float:
        """Total write timeout in seconds for a transfer of n_bytes."""
        return (self.write_total_constant_ms + self.write_total_multiplier_ms * n_bytes) / 1000.0


@dataclass(frozen=True)
class SendConfig:
    """Everything one invocation needs: who to address and where."""

    preset: int
    camera_address: int = DEFAULT_CAMERA
    baudrate: int = DEFAULT_BAUDRATE
    port_number: int = DEFAULT_PORT
    device_prefix: Optional[str] = None

    @property
    def device(self) -> str:
        return device_name(self.port_number, self.device_prefix)

    @property
    def port_label(self) -> str:
        return f"COM{self.port_number}"

    def serial_config(self) -> SerialConfig:
        return SerialConfig(device=self.device, baudrate=self.baudrate)


def load_config(config_path: Optional[str] = None) -> Dict[str, Any]:
    """
    Load configuration from YAML file.

    Args:
        config_path: Path to configuration file. If None, looks in
            'config/pelco_send.yaml' and 'pelco_send.yaml' under the
            current working directory

    Returns:
        Dictionary containing configuration (empty when no file exists
        in the standard locations)

    Raises:
        FileNotFoundError: If an explicit config file is not found
        yaml.YAMLError: If config file is not valid YAML
        ArgumentError: If the top level of the file is not a mapping
    """
    if config_path is None:
        possible_paths = [
            os.path.join(os.getcwd(), 'config', 'pelco_send.yaml'),
            os.path.join(os.getcwd(), 'pelco_send.yaml'),
        ]

        for path in possible_paths:
            if os.path.exists(path):
                config_path = path
                break

        if config_path is None:
            return {}

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f)

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ArgumentError(f"{config_path}: expected a mapping at the top level, got {type(config).__name__}")
    return config


def _section(config: Dict[str, Any], name: str) -> Dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise ArgumentError(f"config section '{name}' must be a mapping, got {type(section).__name__}")
    return section


def get_serial_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract serial configuration from loaded config.

    Args:
        config: Full configuration dictionary

    Returns:
        Serial configuration section (baudrate, port, device_prefix)
    """
    return _section(config, 'serial')


def get_camera_config(config: Dict[str, Any]) -> Dict[str, Any]:
    """
    Extract camera configuration from loaded config.

    Args:
        config: Full configuration dictionary

    Returns:
        Camera configuration section (address)
    """
    return _section(config, 'camera')
