"""
Buffering client for the LogDNA ingest API.
"""

import json
import logging
from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Union

import requests

from .config import Config
from .endpoint import make_ingest_url
from .errors import ConfigurationError, SerializationError
from .sender import IngestSender

logger = logging.getLogger(__name__)

Timestamp = Union[datetime, int]

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)
_NS_PER_MS = 1_000_000


def to_unix_nanos(t: Timestamp) -> int:
    """
    Convert a timestamp to nanoseconds since the epoch.

    Accepts a datetime (naive values are local time, as with
    ``datetime.timestamp()``) or an int of nanoseconds. Floats are rejected
    since a float of seconds would silently be read as nanoseconds.
    """
    if isinstance(t, datetime):
        if t.tzinfo is None:
            t = t.astimezone(timezone.utc)
        delta = t - _EPOCH
        micros = (delta.days * 86400 + delta.seconds) * 1_000_000 + delta.microseconds
        return micros * 1000
    if isinstance(t, bool) or not isinstance(t, int):
        raise TypeError(
            f"timestamp must be a datetime or int nanoseconds, not {type(t).__name__}"
        )
    return t


@dataclass(frozen=True)
class LogEntry:
    """One buffered line."""

    timestamp_ns: int
    line: str
    file: str

    @property
    def timestamp_ms(self) -> int:
        # Ingest API wants milliseconds, truncated toward zero
        ms = abs(self.timestamp_ns) // _NS_PER_MS
        return ms if self.timestamp_ns >= 0 else -ms

    def to_wire(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp_ms,
            "line": self.line,
            "file": self.file,
        }


class Client:
    """
    Client that buffers log lines and sends them to LogDNA in batches.

    Lines accumulate in memory until the flush limit is reached, at which
    point the next call to log() sends the whole batch first. Anything still
    buffered must be sent with flush() or close(); there is no timer, so a
    client dropped without closing loses its pending lines.

    Not thread-safe. Callers with several producers must serialize access.

    Example:
        client = Client(Config(
            api_key=os.environ["LOGDNA_API_KEY"],
            hostname="web-1",
            log_file="app.log",
        ))

        client.log(datetime.now(timezone.utc), "Application started")

        # Sends whatever is still buffered
        client.close()
    """

    def __init__(
        self,
        config: Config,
        session: Optional[requests.Session] = None,
        now_ns: Optional[int] = None,
    ):
        """
        Initialize Client.

        Args:
            config: Client configuration
            session: Custom requests.Session to use for sending
            now_ns: Submission time for the ``now`` URL parameter,
                defaults to the current time

        Raises:
            ConfigurationError: If the ingest URL cannot be built
        """
        if not config.api_key:
            raise ConfigurationError("api_key is required")

        self.config = replace(config, flush_limit=config.effective_flush_limit)
        self.ingest_url = make_ingest_url(self.config, now_ns)
        self._lines: List[LogEntry] = []
        self._sender = IngestSender(
            self.ingest_url,
            timeout=self.config.timeout,
            session=session,
            strict_status=self.config.strict_status,
        )

    @property
    def flush_limit(self) -> int:
        return self.config.flush_limit

    def log(self, timestamp: Timestamp, message: str) -> None:
        """
        Add a line to the buffer.

        Flushes first if the buffer is already at the flush limit. If that
        flush fails the error propagates and the line is not added.
        """
        if self.size() == self.flush_limit:
            self.flush()

        self._lines.append(
            LogEntry(
                timestamp_ns=to_unix_nanos(timestamp),
                line=message,
                file=self.config.log_file,
            )
        )

    def size(self) -> int:
        """Number of lines waiting to be sent."""
        return len(self._lines)

    def __len__(self) -> int:
        return self.size()

    def payload(self) -> Dict[str, Any]:
        """The JSON-ready payload for the currently buffered lines."""
        return {"lines": [entry.to_wire() for entry in self._lines]}

    def _serialize(self) -> bytes:
        try:
            return json.dumps(self.payload(), ensure_ascii=False).encode(
                "utf-8"
            )
        except (TypeError, ValueError) as exc:
            raise SerializationError(
                f"cannot encode {self.size()} buffered lines: {exc}"
            ) from exc

    def flush(self) -> None:
        """
        Send buffered lines and clear the buffer.

        Does nothing when the buffer is empty. On failure the buffer is left
        as it was and the error is raised; nothing is retried.

        Raises:
            SerializationError: If the lines cannot be encoded
            TransmissionError: If the request fails
        """
        if not self._lines:
            return

        body = self._serialize()
        self._sender.send(body)

        count = len(self._lines)
        self._lines.clear()
        logger.debug("Flushed %d lines to %s", count, self.config.hostname)

    def close(self) -> None:
        """Send any buffered lines and release the HTTP session."""
        try:
            self.flush()
        finally:
            self._sender.close()

    def __enter__(self):
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        """Context manager exit."""
        self.close()
        return False
