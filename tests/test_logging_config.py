"""
Unit tests for logging setup and the request context filter.
"""

import logging

from logging_config import (
    APP_LOGGER_NAME,
    RequestContextFilter,
    bind_session,
    get_logger,
    get_session_logger,
    release_session,
    setup_logging,
)


def _record():
    return logging.LogRecord("x", logging.INFO, __file__, 1, "msg", None, None)


class TestContextFilter:
    """Test records are decorated with thread and session."""

    def test_default_session_tag(self):
        """Test records outside a request carry "-"."""
        record = _record()
        assert RequestContextFilter().filter(record) is True
        assert record.session_tag == "-"
        assert record.thread_name

    def test_bound_session(self):
        """Test a bound session shows its first 8 characters."""
        token = bind_session("abcdef0123456789")
        try:
            record = _record()
            RequestContextFilter().filter(record)
            assert record.session_tag == "abcdef01"
        finally:
            release_session(token)

        record = _record()
        RequestContextFilter().filter(record)
        assert record.session_tag == "-"


class TestLoggers:
    """Test logger naming and setup."""

    def test_namespaced(self):
        """Test module loggers live under the application logger."""
        assert get_logger("modules.pricing").name == f"{APP_LOGGER_NAME}.modules.pricing"
        assert get_logger(APP_LOGGER_NAME).name == APP_LOGGER_NAME

    def test_session_logger(self):
        """Test session loggers are keyed by the short id."""
        assert get_session_logger("0123456789").name == f"{APP_LOGGER_NAME}.session.01234567"

    def test_file_logging(self, tmp_path):
        """Test file handlers write to the given directory."""
        logger = setup_logging(log_level=logging.DEBUG, log_dir=tmp_path, enable_file_logging=True)
        try:
            assert len(logger.handlers) == 3
            assert (tmp_path / f"{APP_LOGGER_NAME}.log").exists()
        finally:
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()
