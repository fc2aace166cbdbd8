"""Tests for app.core.logging module."""

import logging

import pytest
import structlog

from app.core.config import get_config
from app.core.logging import (
    QUIET_LOGGERS,
    add_app_context,
    get_logger,
    request_log_context,
    setup_logging,
)


@pytest.mark.unit
def test_setup_logging():
    """Test that setup_logging configures structlog."""
    setup_logging()

    logger = structlog.get_logger()
    assert logger is not None
    # Logger can be LazyProxy or BoundLogger depending on when it's accessed
    assert hasattr(logger, "info")
    assert hasattr(logger, "error")


@pytest.mark.unit
def test_get_logger():
    """Test get_logger returns configured logger."""
    setup_logging()

    logger = get_logger("test")
    assert logger is not None
    assert callable(logger.debug)
    assert callable(logger.info)
    assert callable(logger.warning)
    assert callable(logger.error)


@pytest.mark.unit
def test_add_app_context():
    """Test app name and environment are added to every event."""
    event = add_app_context(None, "info", {"event": "Upload started"})

    assert event["app"] == get_config().app_name
    assert event["env"] == get_config().app_env
    assert event["event"] == "Upload started"


@pytest.mark.unit
def test_logger_with_context():
    """Test logging with key-value context."""
    setup_logging()

    logger = get_logger("test")

    # This should not raise
    logger.info("Upload started", file_path="/tmp/v.mp4", parts="snippet,status")
    logger.error("Upload failed", error="Backend Error", status_code=500)


@pytest.mark.unit
def test_logger_exception_logging():
    """Test logging exceptions with traceback does not raise."""
    setup_logging()

    logger = get_logger("test")

    try:
        raise ValueError("Test exception")
    except ValueError:
        logger.exception("Error occurred")


@pytest.mark.unit
def test_request_log_context_binds_and_clears():
    """Test the request id is bound inside the block and removed after."""
    with request_log_context("abc123", path="/upload") as request_id:
        bound = structlog.contextvars.get_contextvars()
        assert request_id == "abc123"
        assert bound["request_id"] == "abc123"
        assert bound["path"] == "/upload"

    assert "request_id" not in structlog.contextvars.get_contextvars()


@pytest.mark.unit
def test_request_log_context_generates_id():
    """Test a random request id is generated when none is given."""
    with request_log_context() as first, request_log_context() as second:
        assert first
        assert first != second


@pytest.mark.unit
def test_client_library_loggers_are_quieted():
    """Test chatty HTTP client loggers log warnings and above only."""
    setup_logging()

    for name in QUIET_LOGGERS:
        assert logging.getLogger(name).level >= logging.WARNING
