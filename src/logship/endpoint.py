"""
Ingest URL construction for the LogDNA API.
"""

import time
from typing import Optional
from urllib.parse import quote, urlencode, urlsplit, urlunsplit

from .config import Config
from .errors import ConfigurationError

# Base URL for the LogDNA ingest API
INGEST_BASE_URL = "https://logs.logdna.com/logs/ingest"


def build_ingest_url(
    base_url: str, api_key: str, hostname: str, now_ns: int
) -> str:
    """
    Build a full ingest URL with the key as userinfo and required params.

    Args:
        base_url: Ingest endpoint without credentials or query
        api_key: Ingestion key, sent as the URL username
        hostname: Value of the ``hostname`` query parameter
        now_ns: Value of the ``now`` query parameter (ns since epoch)

    Returns:
        The URL as a string

    Raises:
        ConfigurationError: If base_url is not an absolute URL
    """
    try:
        parts = urlsplit(base_url)
        host = parts.hostname
    except ValueError as exc:
        raise ConfigurationError(f"invalid ingest URL {base_url!r}: {exc}") from exc

    if not parts.scheme or not host:
        raise ConfigurationError(f"invalid ingest URL {base_url!r}")

    netloc = f"{quote(api_key, safe='')}@{parts.netloc}"
    query = urlencode([("hostname", hostname), ("now", str(now_ns))])
    return urlunsplit((parts.scheme, netloc, parts.path, query, ""))


def make_ingest_url(config: Config, now_ns: Optional[int] = None) -> str:
    """Build the ingest URL for a client, stamping ``now`` once."""
    if now_ns is None:
        now_ns = time.time_ns()
    return build_ingest_url(
        INGEST_BASE_URL, config.api_key, config.hostname, now_ns
    )
