"""Core module exports."""

from identscan.core.errors import (
    ConfigError,
    ErrorCode,
    FileReadError,
    GrammarError,
    IdentScanError,
    UsageError,
)
from identscan.core.logging import configure_logging, get_log_file_path, get_logger

__all__ = [
    # Errors
    "ConfigError",
    "ErrorCode",
    "FileReadError",
    "GrammarError",
    "IdentScanError",
    "UsageError",
    # Logging
    "configure_logging",
    "get_log_file_path",
    "get_logger",
]
