"""
Base abstract class for connections.

This module defines the interface that all connection types must implement.
"""
from abc import ABC, abstractmethod


class ConnectionBase(ABC):
    """
    Abstract base class for connections to PTZ cameras.

    A connection is a single-shot session: open, configure, send, flush,
    close. Used as a context manager, ``__enter__`` opens the device and
    ``__exit__`` always closes it. If opening fails the ``with`` body is
    never entered and nothing needs releasing.
    """

    @abstractmethod
    def open(self) -> None:
        """
        Open the connection to the device.

        Raises:
            PortUnavailable: If the device cannot be opened exclusively
        """

    @abstractmethod
    def configure(self) -> None:
        """
        Apply line settings and timeouts to the open device.

        Raises:
            ConfigFailed: If the settings cannot be read or applied
        """

    @abstractmethod
    def send(self, data: bytes) -> int:
        """
        Send data to the device with a single write call.

        Args:
            data: Bytes to send

        Returns:
            Number of bytes the platform reports as written

        Raises:
            WriteCallFailed: If the write call itself fails
        """

    @abstractmethod
    def flush(self) -> None:
        """Block until buffered output has been transmitted."""

    @abstractmethod
    def close(self) -> None:
        """Release the device. Safe to call on a closed connection."""

    @abstractmethod
    def is_open(self) -> bool:
        """
        Check if connection is currently open.

        Returns:
            True if connection is open, False otherwise
        """

    @property
    @abstractmethod
    def name(self) -> str:
        """Device name used in log messages."""

    def __enter__(self):
        self.open()
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()
        return False
