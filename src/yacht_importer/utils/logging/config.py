# ABOUTME: Logging configuration using loguru sinks
# ABOUTME: Dual-mode operation: interactive CLI (files) vs production JSON logging to stderr

import logging
import os
import sys
from pathlib import Path
from typing import Any

import structlog
from loguru import logger

LOG_DIR = Path("logs")

THIRD_PARTY_LOGGERS = ["httpx", "httpcore", "urllib3", "asyncio", "charset_normalizer", "bs4"]


class LoggingMode:
    """Logging mode constants."""

    INTERACTIVE = "interactive"
    PRODUCTION = "production"


def detect_logging_mode() -> str:
    """Detect whether we're running in interactive or production mode."""
    mode = os.getenv("YACHT_IMPORTER_LOG_MODE")
    if mode and mode.lower() in [LoggingMode.INTERACTIVE, LoggingMode.PRODUCTION]:
        return mode.lower()

    return LoggingMode.INTERACTIVE if sys.stdout.isatty() else LoggingMode.PRODUCTION


def setup_third_party_logging() -> None:
    """Keep HTTP and parser libraries from flooding the CLI."""
    for logger_name in THIRD_PARTY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    logging.captureWarnings(True)
    logging.getLogger("py.warnings").setLevel(logging.ERROR)


class LoguruForwarder:
    """structlog logger that hands each event to the configured loguru sinks.

    The event text becomes the loguru message and the remaining key/value pairs
    are bound as ``extra``, so JSON sinks keep them as fields.
    """

    # Frames between the structlog call site and loguru: _log, the level method,
    # BoundLogger._proxy_to_logger and the filtering level method.
    _CALLER_DEPTH = 4

    def _log(self, level: str, event_dict: dict[str, Any]) -> None:
        event = event_dict.pop("event", "")
        logger.opt(depth=self._CALLER_DEPTH).bind(**event_dict).log(level, str(event))

    def debug(self, **event_dict: Any) -> None:
        self._log("DEBUG", event_dict)

    def info(self, **event_dict: Any) -> None:
        self._log("INFO", event_dict)

    msg = info

    def warning(self, **event_dict: Any) -> None:
        self._log("WARNING", event_dict)

    warn = warning

    def error(self, **event_dict: Any) -> None:
        self._log("ERROR", event_dict)

    exception = error

    def critical(self, **event_dict: Any) -> None:
        self._log("CRITICAL", event_dict)

    fatal = critical


def configure_structlog(numeric_level: int) -> None:
    """Forward structlog events into loguru, filtered at the configured level."""
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.format_exc_info,
            # No renderer: the event dict reaches LoguruForwarder as keyword arguments
        ],
        wrapper_class=structlog.make_filtering_bound_logger(numeric_level),
        logger_factory=lambda *args: LoguruForwarder(),
        cache_logger_on_first_use=False,
    )


def configure_logging(mode: str | None = None, log_level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging using loguru.

    Args:
        mode: Logging mode (interactive/production), auto-detected if None
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR)
        log_file: Custom log file path, uses default if None
    """
    if mode is None:
        mode = detect_logging_mode()

    setup_third_party_logging()

    log_level = log_level.upper()
    numeric_level = getattr(logging, log_level, logging.INFO)
    logging.getLogger().setLevel(numeric_level)

    # Remove default loguru handler
    logger.remove()

    if mode == LoggingMode.INTERACTIVE:
        try:
            LOG_DIR.mkdir(exist_ok=True)
        except OSError:
            # Read-only working directory: fall back to stderr JSON
            mode = LoggingMode.PRODUCTION

    configure_structlog(numeric_level)

    if mode == LoggingMode.PRODUCTION:
        # stderr keeps stdout free for --json command output
        logger.add(sys.stderr, level=log_level, format="{time} | {level} | {name} | {message}", serialize=True)
        return

    log_file_path = log_file or str(LOG_DIR / "yacht-importer.log")

    # Human-readable logs
    logger.add(
        log_file_path,
        level=log_level,
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message} | {extra}",
        rotation="10 MB",
        retention="7 days",
    )

    # JSON logs for machine processing
    logger.add(
        LOG_DIR / "yacht-importer.json",
        level=log_level,
        format="{time} | {level} | {name} | {message}",
        serialize=True,
        rotation="10 MB",
        retention="7 days",
    )

    # Errors only
    logger.add(
        LOG_DIR / "errors.log",
        level="ERROR",
        format="{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{function}:{line} - {message} | {extra}",
        backtrace=True,
        diagnose=True,
    )


def get_logging_status() -> dict[str, Any]:
    """Get current logging configuration status."""
    mode = detect_logging_mode()
    interactive = mode == LoggingMode.INTERACTIVE

    return {
        "mode": mode,
        "log_directory": str(LOG_DIR.absolute()) if LOG_DIR.exists() else None,
        "log_files": {
            "main": str(LOG_DIR / "yacht-importer.log") if interactive else None,
            "json": str(LOG_DIR / "yacht-importer.json") if interactive else None,
            "errors": str(LOG_DIR / "errors.log") if interactive else None,
        },
        "third_party_suppressed": list(THIRD_PARTY_LOGGERS) + ["py.warnings"],
    }
