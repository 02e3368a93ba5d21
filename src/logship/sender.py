"""
HTTP sender for the LogDNA ingest API.
"""

import logging
from typing import Optional

import requests

from .errors import TransmissionError

logger = logging.getLogger(__name__)


class IngestSender:
    """
    Posts JSON payloads to a fixed ingest URL.

    One request per call, no retries.
    """

    def __init__(
        self,
        ingest_url: str,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
        strict_status: bool = False,
    ):
        """
        Initialize IngestSender.

        Args:
            ingest_url: Full ingest URL including key and query parameters
            timeout: Request timeout in seconds, None to wait indefinitely
            session: Custom requests.Session to use (e.g., shared by application)
            strict_status: Raise TransmissionError on non-2xx responses
        """
        self.ingest_url = ingest_url
        self.timeout = timeout
        self.strict_status = strict_status
        self._owns_session = session is None
        self._session = self._prepare_session(
            requests.Session() if session is None else session
        )

    def _prepare_session(self, session: requests.Session) -> requests.Session:
        session.headers.update({"Content-Type": "application/json"})
        return session

    def reset_session(self) -> None:
        """Close and replace the internally owned HTTP session."""
        if not self._owns_session:
            return
        self._session.close()
        self._session = self._prepare_session(requests.Session())

    def send(self, payload: bytes) -> None:
        """
        Send one JSON payload.

        Args:
            payload: UTF-8 encoded JSON body

        Raises:
            TransmissionError: If the request fails, or the status is
                non-2xx and strict_status is set
        """
        try:
            response = self._session.post(
                self.ingest_url, data=payload, timeout=self.timeout
            )
        except requests.exceptions.RequestException as exc:
            # Refresh internal session so the next flush starts clean
            self.reset_session()
            raise TransmissionError(f"ingest request failed: {exc}") from exc

        status = response.status_code
        if status >= 300:
            if self.strict_status:
                raise TransmissionError(
                    f"ingest endpoint returned HTTP {status}", status_code=status
                )
            logger.warning("Ingest endpoint returned HTTP %d", status)

    def close(self) -> None:
        """Close the HTTP session."""
        if self._owns_session:
            self._session.close()
