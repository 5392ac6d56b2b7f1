# ABOUTME: Logging configuration and structured logger helpers
# ABOUTME: Provides loguru sink setup and structlog loggers with context binding

from .config import LoggingMode, configure_logging, configure_structlog, detect_logging_mode, get_logging_status
from .utils import (
    get_logger,
    log_extraction_step,
    with_operation_context,
    with_page_context,
    with_pipeline_context,
)

__all__ = [
    # Configuration
    "LoggingMode",
    "configure_logging",
    "configure_structlog",
    "detect_logging_mode",
    "get_logging_status",
    # Utilities
    "get_logger",
    "log_extraction_step",
    "with_operation_context",
    "with_page_context",
    "with_pipeline_context",
]
