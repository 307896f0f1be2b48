"""
Errors raised while preparing or sending a Pelco D packet.

Transport failures also derive from ConnectionError so callers that only
care about I/O problems can catch the builtin.
"""


class PelcoSendError(Exception):
    """Base class for every fatal pelco-send error."""


class ArgumentError(PelcoSendError):
    """A command-line or configuration value is invalid."""


class PortUnavailable(PelcoSendError, ConnectionError):
    """The serial device does not exist or is held by another process."""


class ConfigFailed(PelcoSendError, ConnectionError):
    """Reading or applying the port settings or timeouts was rejected."""


class WriteCallFailed(PelcoSendError, ConnectionError):
    """The write call itself failed, as opposed to writing fewer bytes."""
