"""Config module exports."""

from identscan.config.loader import load_config
from identscan.config.models import (
    IdentScanConfig,
    LoggingConfig,
    LogOutputConfig,
    ScanConfig,
)

__all__ = [
    "load_config",
    "IdentScanConfig",
    "LoggingConfig",
    "LogOutputConfig",
    "ScanConfig",
]
