"""Unit tests for structured logging setup."""

import json
import logging

import pytest
import structlog

from trainerdesk.core.context import create_context, request_context
from trainerdesk.core.logging import LogContext, setup_logging


@pytest.fixture
def restore_logging():
    """Put the root logger back the way it was."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers = handlers
    root.setLevel(level)


def _json_lines(capsys) -> list[dict]:
    out = capsys.readouterr().out
    return [json.loads(line) for line in out.splitlines() if line.startswith("{")]


def test_json_output_includes_request_context(capsys, restore_logging):
    setup_logging(log_level="INFO", json_format=True)
    logger = structlog.get_logger("trainerdesk.tests")

    with request_context(create_context(subdomain="acme-gym")):
        logger.info("booking_created", booking_id="b-1")

    [entry] = _json_lines(capsys)
    assert entry["event"] == "booking_created"
    assert entry["booking_id"] == "b-1"
    assert entry["subdomain"] == "acme-gym"
    assert entry["level"] == "info"
    assert "request_id" in entry
    assert "environment" in entry
    assert "timestamp" in entry


def test_level_filters_debug(capsys, restore_logging):
    setup_logging(log_level="INFO", json_format=True)
    logger = structlog.get_logger("trainerdesk.tests")

    logger.debug("too_chatty")
    logger.warning("worth_seeing")

    assert [e["event"] for e in _json_lines(capsys)] == ["worth_seeing"]


def test_stdlib_records_keep_extra_fields(capsys, restore_logging):
    setup_logging(log_level="INFO", json_format=True)

    logging.getLogger("trainerdesk.api.requests").info(
        "request_completed", extra={"status_code": 200, "path": "/pages/acme"}
    )

    [entry] = _json_lines(capsys)
    assert entry["event"] == "request_completed"
    assert entry["status_code"] == 200
    assert entry["path"] == "/pages/acme"


def test_log_context_binds_and_unbinds(capsys, restore_logging):
    setup_logging(log_level="INFO", json_format=True)
    logger = structlog.get_logger("trainerdesk.tests")

    with LogContext(operation="register"):
        logger.info("inside")
    logger.info("outside")

    inside, outside = _json_lines(capsys)
    assert inside["operation"] == "register"
    assert "operation" not in outside
