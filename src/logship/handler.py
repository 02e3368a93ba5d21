"""
Standard logging handler for integration with Python's logging module.
"""

import logging
import sys
import threading
import traceback
from datetime import datetime, timezone
from typing import Optional

import requests

from .client import Client
from .config import Config
from .errors import LogShipError


class IngestHandler(logging.Handler):
    """
    Python logging handler that ships records to LogDNA through a Client.

    Records are buffered by the client and sent when the flush limit is
    reached, when flush() is called, or when the handler is closed. The
    handler lock serializes access to the client, so several threads may
    log through the same handler.

    Records emitted while the handler itself is sending (for example the
    client's own warnings, when the handler sits on the root logger) are
    dropped. Send failures in flush() and close() are reported on stderr
    and never raised, and the unsent records stay buffered.

    Example:
        import logging
        from logship import Config, IngestHandler

        handler = IngestHandler(Config(
            api_key="...",
            hostname="web-1",
            log_file="my_app",
            flush_limit=100,
        ))
        handler.setFormatter(logging.Formatter("%(levelname)s %(message)s"))

        logger = logging.getLogger("my_app")
        logger.addHandler(handler)

        logger.info("Hello from standard logging!")

        # Don't forget to close on shutdown
        handler.close()
    """

    def __init__(
        self,
        config: Config,
        session: Optional[requests.Session] = None,
        level: int = logging.NOTSET,
    ):
        """
        Initialize IngestHandler.

        Args:
            config: Client configuration
            session: Custom requests.Session to use for sending
            level: Minimum log level to process
        """
        super().__init__(level)
        self.client = Client(config, session=session)
        self._local = threading.local()

    @property
    def _busy(self) -> bool:
        return getattr(self._local, "busy", False)

    def _run(self, action) -> None:
        self._local.busy = True
        try:
            action()
        finally:
            self._local.busy = False

    def emit(self, record: logging.LogRecord) -> None:
        """Buffer a log record."""
        if self._busy:
            return
        try:
            timestamp = datetime.fromtimestamp(record.created, tz=timezone.utc)
            message = self.format(record)
            self._run(lambda: self.client.log(timestamp, message))
        except Exception:
            self.handleError(record)

    def _report_error(self, action: str) -> None:
        if logging.raiseExceptions and sys.stderr:
            sys.stderr.write(
                f"--- logship: {action} failed, "
                f"{self.client.size()} records still buffered ---\n"
            )
            traceback.print_exc(file=sys.stderr)

    def flush(self) -> None:
        """Send buffered records."""
        self.acquire()
        try:
            if not self._busy:
                self._run(self.client.flush)
        except LogShipError:
            self._report_error("flush")
        finally:
            self.release()

    def close(self) -> None:
        """Send remaining records and close the client."""
        self.acquire()
        try:
            self._run(self.client.close)
        except LogShipError:
            self._report_error("close")
        finally:
            self.release()
            super().close()
