"""
Client configuration.
"""

from dataclasses import dataclass
from typing import Optional

# Number of buffered lines before the client flushes to LogDNA
DEFAULT_FLUSH_LIMIT = 5000


@dataclass(frozen=True)
class Config:
    """
    Immutable settings for a Client.

    Attributes:
        api_key: LogDNA ingestion key, embedded in the ingest URL
        hostname: Host the lines appear from in the LogDNA viewer
        log_file: File or app name attached to every line
        flush_limit: Lines to buffer before an automatic flush
            (0 means DEFAULT_FLUSH_LIMIT)
        timeout: HTTP timeout in seconds, None for no timeout
        strict_status: Treat non-2xx responses as failed sends
    """

    api_key: str
    hostname: str = ""
    log_file: str = ""
    flush_limit: int = 0
    timeout: Optional[float] = None
    strict_status: bool = False

    def __post_init__(self):
        if self.flush_limit < 0:
            raise ValueError("flush_limit must not be negative")

    @property
    def effective_flush_limit(self) -> int:
        return self.flush_limit or DEFAULT_FLUSH_LIMIT
