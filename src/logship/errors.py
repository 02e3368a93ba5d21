"""
Exceptions raised by the LogDNA ingest client.
"""

from typing import Optional


class LogShipError(Exception):
    """Base class for all logship errors."""


class ConfigurationError(LogShipError, ValueError):
    """The client cannot be built from the given configuration."""


class SerializationError(LogShipError):
    """Buffered lines could not be encoded as the JSON payload."""


class TransmissionError(LogShipError):
    """
    The payload could not be delivered to the ingest endpoint.

    ``status_code`` is set when the server answered with a non-2xx status
    and strict status checking is enabled; it is None for transport-level
    failures (connection refused, DNS, timeouts).
    """

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code
