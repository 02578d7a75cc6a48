r"""Unit tests for structured logging."""

from __future__ import annotations

import json
import logging
from io import StringIO

import pytest

from fcsigner.utils.structured_logging import StructuredFormatter, log_structured


@pytest.fixture
def json_logger() -> tuple[logging.Logger, StringIO]:
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    logger = logging.getLogger("fcsigner.tests.structured")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False
    return logger, stream


#########################################
#     Tests for StructuredFormatter     #
#########################################


def test_structured_formatter_standard_fields(json_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = json_logger
    logger.info("Call failed")
    data = json.loads(stream.getvalue())
    assert data["message"] == "Call failed"
    assert data["level"] == "INFO"
    assert data["logger"] == "fcsigner.tests.structured"
    assert data["timestamp"].endswith("Z")
    assert "function" in data
    assert "line" in data


def test_structured_formatter_extra_fields(json_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = json_logger
    logger.info("Call failed", extra={"request_id": "r-1", "status_code": 503})
    data = json.loads(stream.getvalue())
    assert data["request_id"] == "r-1"
    assert data["status_code"] == 503
    assert "args" not in data
    assert "msg" not in data


def test_structured_formatter_non_serializable_extra(
    json_logger: tuple[logging.Logger, StringIO],
) -> None:
    logger, stream = json_logger
    logger.info("Call failed", extra={"payload": b"raw"})
    assert json.loads(stream.getvalue())["payload"] == "b'raw'"


def test_structured_formatter_exception(json_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = json_logger
    try:
        msg = "broken"
        raise RuntimeError(msg)
    except RuntimeError:
        logger.exception("Unexpected error")
    data = json.loads(stream.getvalue())
    assert "RuntimeError: broken" in data["exception"]


####################################
#     Tests for log_structured     #
####################################


def test_log_structured(json_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = json_logger
    log_structured(logger, logging.WARNING, "Retrying", attempts=2, error_code="Busy")
    data = json.loads(stream.getvalue())
    assert data["level"] == "WARNING"
    assert data["attempts"] == 2
    assert data["error_code"] == "Busy"


def test_log_structured_respects_level(json_logger: tuple[logging.Logger, StringIO]) -> None:
    logger, stream = json_logger
    logger.setLevel(logging.ERROR)
    log_structured(logger, logging.INFO, "ignored", attempts=1)
    assert stream.getvalue() == ""
