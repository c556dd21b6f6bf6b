"""
Centralized logging configuration for PrintIntakeWeb.

Every log record carries the thread name and the session tag of the
request that produced it, so queue activity from several kiosk sessions
can be told apart in one log file.

Log Format:
    2026-10-19 10:15:30 [INFO    ] [MainThread] [-] app - Starting application
    2026-10-19 10:15:31 [INFO    ] [Thread-3] [a1b2c3d4] services.print_queue - Added item
    2026-10-19 10:15:32 [DEBUG   ] [Thread-3] [a1b2c3d4] modules.pricing - Quote ...

Usage:
    # At application startup
    from logging_config import setup_logging, get_logger

    setup_logging(log_level=logging.INFO, enable_file_logging=True)

    # In modules
    logger = get_logger(__name__)
    logger.info("This message includes thread and session context")

    # Around a request
    token = bind_session("a1b2c3d4")
    ...
    release_session(token)
"""

import contextvars
import logging
import sys
import threading
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Optional


APP_LOGGER_NAME = "print_intake_web"

_session_tag: contextvars.ContextVar[str] = contextvars.ContextVar(
    "session_tag", default="-"
)


# =============================================================================
# CONTEXT FILTER
# =============================================================================

class RequestContextFilter(logging.Filter):
    """
    Logging filter that adds request context to all log records.

    Attributes added to each record:
        - thread_name: Name of the current thread
        - session_tag: Short tag of the kiosk session bound to this context
    """

    def filter(self, record: logging.LogRecord) -> bool:
        record.thread_name = threading.current_thread().name
        record.session_tag = _session_tag.get()
        # Never drops a record, only decorates it
        return True


def bind_session(session_id: str) -> contextvars.Token:
    """
    Bind a session tag to the current context.

    Args:
        session_id: Session identifier (only the first 8 chars are shown)

    Returns:
        Token to pass to release_session() when the request ends
    """
    return _session_tag.set(session_id[:8] if session_id else "-")


def release_session(token: contextvars.Token) -> None:
    """Restore the session tag that was active before bind_session()."""
    _session_tag.reset(token)


# =============================================================================
# LOGGING SETUP
# =============================================================================

def setup_logging(
    app_name: str = APP_LOGGER_NAME,
    log_level: int = logging.INFO,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
) -> logging.Logger:
    """
    Configure application logging with request context.

    This sets up:
    1. Console handler (always enabled)
    2. Rotating file handler (optional)
    3. Error file handler (optional) - ERROR/CRITICAL only
    4. Request context filter on every handler

    Args:
        app_name: Name of the root logger (default: "print_intake_web")
        log_level: Minimum log level (default: INFO)
        log_dir: Directory for log files (default: ./logs relative to this file)
        enable_file_logging: Whether to write to log files (default: True)

    Returns:
        Configured root logger instance
    """
    logger = logging.getLogger(app_name)
    logger.setLevel(log_level)
    logger.propagate = False  # Prevent duplicate logs to root logger

    # Allows re-configuration (tests create several apps)
    logger.handlers.clear()

    formatter = logging.Formatter(
        fmt=(
            "%(asctime)s [%(levelname)-8s] [%(thread_name)s] "
            "[%(session_tag)s] %(name)s - %(message)s"
        ),
        datefmt="%Y-%m-%d %H:%M:%S"
    )
    context_filter = RequestContextFilter()

    def attach(handler: logging.Handler, level: int) -> None:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        handler.addFilter(context_filter)
        logger.addHandler(handler)

    attach(logging.StreamHandler(sys.stdout), log_level)

    if enable_file_logging:
        log_dir = Path(log_dir) if log_dir else Path(__file__).parent / "logs"
        log_dir.mkdir(parents=True, exist_ok=True)

        # Full log plus an errors-only log, 5 x 10 MB each
        app_log_file = log_dir / f"{app_name}.log"
        for path, level in (
            (app_log_file, log_level),
            (log_dir / f"{app_name}_error.log", logging.ERROR),
        ):
            attach(
                RotatingFileHandler(
                    filename=path,
                    maxBytes=10 * 1024 * 1024,
                    backupCount=5,
                    encoding="utf-8",
                ),
                level,
            )

        logger.info(f"File logging enabled: {app_log_file}")

    logger.info(f"Logging configured at level {logging.getLevelName(log_level)}")
    return logger


# =============================================================================
# LOGGER FACTORY FUNCTIONS
# =============================================================================

def get_logger(name: str) -> logging.Logger:
    """
    Get a child logger with the application namespace.

    Args:
        name: Module name (typically __name__)

    Returns:
        Logger instance, e.g. "print_intake_web.modules.pricing"
    """
    if not name.startswith(APP_LOGGER_NAME):
        name = f"{APP_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def get_session_logger(session_id: str) -> logging.Logger:
    """
    Get a logger for the queue of one kiosk session.

    Args:
        session_id: Session identifier (only first 8 chars used in name)

    Returns:
        Logger named "print_intake_web.session.<short id>"
    """
    short_id = session_id[:8] if len(session_id) >= 8 else session_id
    return logging.getLogger(f"{APP_LOGGER_NAME}.session.{short_id}")
