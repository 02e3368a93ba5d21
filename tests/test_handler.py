"""Tests for the logging handler integration."""

import logging
from unittest.mock import MagicMock

import pytest
import requests

from logship import Config, IngestHandler


@pytest.fixture
def handler(session):
    h = IngestHandler(
        Config(api_key="abc", hostname="host1", log_file="my_app", flush_limit=2),
        session=session,
    )
    h.setFormatter(logging.Formatter("%(levelname)s %(message)s"))
    return h


def make_record(msg, created=1.5):
    record = logging.LogRecord("my_app", logging.INFO, __file__, 1, msg, None, None)
    record.created = created
    return record


def test_emit_buffers_formatted_record(handler, session):
    handler.handle(make_record("hello", created=1.50025))

    assert handler.client.size() == 1
    assert handler.client.payload()["lines"] == [
        {"timestamp": 1500, "line": "INFO hello", "file": "my_app"}
    ]
    session.post.assert_not_called()


def test_flush_limit_applies(handler, session, sent_payloads):
    for i in range(3):
        handler.handle(make_record(f"m{i}"))

    assert session.post.call_count == 1
    assert [l["line"] for l in sent_payloads()[0]["lines"]] == ["INFO m0", "INFO m1"]


def test_flush_and_close(handler, session):
    handler.handle(make_record("a"))
    handler.flush()
    assert session.post.call_count == 1

    handler.handle(make_record("b"))
    handler.close()
    assert session.post.call_count == 2
    assert handler.client.size() == 0


def test_send_failure_goes_to_handle_error(handler, session):
    handler.handleError = MagicMock()
    handler.handle(make_record("a"))
    handler.handle(make_record("b"))

    session.post.side_effect = requests.ConnectionError("down")
    handler.handle(make_record("c"))

    handler.handleError.assert_called_once()
    assert handler.client.size() == 2


def test_with_logger(handler, session):
    logger = logging.getLogger("logship.tests.handler")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    try:
        logger.warning("disk %d%% full", 91)
    finally:
        logger.removeHandler(handler)

    assert handler.client.payload()["lines"][0]["line"] == "WARNING disk 91% full"


def test_on_root_logger_does_not_ship_own_warnings(handler, session):
    session.post.return_value.status_code = 500
    root = logging.getLogger()
    old_level = root.level
    root.addHandler(handler)
    root.setLevel(logging.INFO)
    try:
        logger = logging.getLogger("my_app")
        for i in range(3):
            logger.info("m%d", i)
    finally:
        root.removeHandler(handler)
        root.setLevel(old_level)

    assert session.post.call_count == 1
    assert [l["line"] for l in handler.client.payload()["lines"]] == ["INFO m2"]


def test_flush_failure_reported_not_raised(handler, session, capsys):
    handler.handle(make_record("a"))
    session.post.side_effect = requests.ConnectionError("down")

    handler.flush()

    assert handler.client.size() == 1
    err = capsys.readouterr().err
    assert "logship: flush failed, 1 records still buffered" in err
    assert "TransmissionError" in err


def test_close_failure_reported_not_raised(handler, session, capsys):
    handler.handle(make_record("a"))
    session.post.side_effect = requests.ConnectionError("down")

    handler.close()

    assert "logship: close failed" in capsys.readouterr().err
    session.close.assert_not_called()


def test_flush_failure_silent_without_raise_exceptions(handler, session, capsys, monkeypatch):
    monkeypatch.setattr(logging, "raiseExceptions", False)
    handler.handle(make_record("a"))
    session.post.side_effect = requests.ConnectionError("down")

    handler.flush()

    assert capsys.readouterr().err == ""
