"""
Buffered client for shipping log lines to the LogDNA ingest API.
"""

from .client import Client, LogEntry
from .config import DEFAULT_FLUSH_LIMIT, Config
from .endpoint import INGEST_BASE_URL
from .errors import (
    ConfigurationError,
    LogShipError,
    SerializationError,
    TransmissionError,
)
from .handler import IngestHandler

__version__ = "0.1.0"
__all__ = [
    "Client",
    "Config",
    "ConfigurationError",
    "DEFAULT_FLUSH_LIMIT",
    "INGEST_BASE_URL",
    "IngestHandler",
    "LogEntry",
    "LogShipError",
    "SerializationError",
    "TransmissionError",
]
