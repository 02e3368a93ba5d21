import json
from unittest.mock import MagicMock

import pytest

from logship import Client, Config


@pytest.fixture
def session():
    """A stand-in requests.Session whose POSTs succeed with HTTP 200."""
    sess = MagicMock()
    sess.post.return_value.status_code = 200
    return sess


@pytest.fixture
def make_client(session):
    def _make(**overrides):
        defaults = {"api_key": "abc", "hostname": "host1", "log_file": "app.log"}
        defaults.update(overrides)
        return Client(Config(**defaults), session=session, now_ns=42)

    return _make


@pytest.fixture
def sent_payloads(session):
    """Decode the JSON body of every POST made through the session."""

    def _payloads():
        return [json.loads(c.kwargs["data"]) for c in session.post.call_args_list]

    return _payloads
