"""Shared fixtures and test doubles."""

from typing import List, Optional

import pytest

from pelco_send.config import SerialConfig
from pelco_send.connection import ConnectionBase
from pelco_send.errors import ConfigFailed, PortUnavailable, WriteCallFailed


class FakeConnection(ConnectionBase):
    """Connection that records the calls made on it and fails on request."""

    def __init__(self, config: SerialConfig, fail_on: Optional[str] = None,
                 bytes_written: Optional[int] = None):
        self.config = config
        self.fail_on = fail_on
        self.bytes_written = bytes_written
        self.calls: List[str] = []
        self.data = b""
        self._open = False

    @property
    def name(self) -> str:
        return self.config.device

    def open(self) -> None:
        self.calls.append("open")
        if self.fail_on == "open":
            raise PortUnavailable(f"Unable to open serial port {self.name}")
        self._open = True

    def configure(self) -> None:
        self.calls.append("configure")
        if self.fail_on == "configure":
            raise ConfigFailed("Error setting device parameters")

    def send(self, data: bytes) -> int:
        self.calls.append("send")
        if self.fail_on == "send":
            raise WriteCallFailed(f"Error writing to {self.name}")
        self.data = data
        return len(data) if self.bytes_written is None else self.bytes_written

    def flush(self) -> None:
        self.calls.append("flush")

    def close(self) -> None:
        self.calls.append("close")
        self._open = False

    def is_open(self) -> bool:
        return self._open


@pytest.fixture
def serial_config():
    return SerialConfig(device="/dev/ttyS3", baudrate=2400)


@pytest.fixture
def fake_factory():
    """Returns (factory, created) where created collects every connection built."""
    def make(**kwargs):
        created: List[FakeConnection] = []

        def factory(config):
            conn = FakeConnection(config, **kwargs)
            created.append(conn)
            return conn
        return factory, created
    return make
