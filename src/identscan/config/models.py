"""Pydantic configuration models with env var support.

Configuration Hierarchy (highest to lowest precedence):
1. Direct kwargs to load_config()
2. Environment variables (IDENTSCAN__SECTION__KEY)
3. Project YAML (.identscan/config.yaml)
4. Global YAML (~/.config/identscan/config.yaml)
5. Built-in defaults (this file)

Environment Variable Format:
    IDENTSCAN__<SECTION>__<KEY>=<VALUE>

Examples:
    IDENTSCAN__LOGGING__LEVEL=DEBUG
    IDENTSCAN__SCAN__MAX_FILE_SIZE_MB=5
    IDENTSCAN__SCAN__DECODE_ERRORS=skip
"""

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
DecodeErrorPolicy = Literal["empty", "skip"]


class LogOutputConfig(BaseModel):
    """Single logging output configuration.

    Env vars: Not directly configurable via env (use YAML for multi-output).
    """

    format: Literal["json", "console"] = "console"
    destination: str = "stderr"  # stderr, stdout, or absolute file path
    level: LogLevel | None = None  # Inherits from parent if None

    @field_validator("destination")
    @classmethod
    def validate_destination(cls, v: str) -> str:
        if v in ("stderr", "stdout"):
            return v
        path = Path(v).expanduser()
        if not path.is_absolute():
            raise ValueError(f"File destination must be absolute path: {v}")
        return str(path)


class LoggingConfig(BaseModel):
    """Logging configuration.

    Env vars:
        IDENTSCAN__LOGGING__LEVEL: Log level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
    """

    level: LogLevel = Field(
        default="WARNING",
        description="Root log level. DEBUG logs one event per visited file.",
    )
    outputs: list[LogOutputConfig] = Field(default_factory=lambda: [LogOutputConfig()])


class ScanConfig(BaseModel):
    """Traversal and extraction configuration.

    Env vars:
        IDENTSCAN__SCAN__MAX_FILE_SIZE_MB: Skip source files larger than this
        IDENTSCAN__SCAN__DECODE_ERRORS: "empty" or "skip" for non-UTF-8 captures
    """

    max_file_size_mb: int | None = Field(
        default=None,
        description="Skip source files larger than this (MB). None disables the limit.",
    )
    decode_errors: DecodeErrorPolicy = Field(
        default="empty",
        description="What to print for a capture whose bytes are not valid UTF-8: "
        "an empty line ('empty') or nothing ('skip').",
    )

    @field_validator("max_file_size_mb")
    @classmethod
    def validate_max_file_size(cls, v: int | None) -> int | None:
        if v is not None and v <= 0:
            raise ValueError(f"max_file_size_mb must be positive, got {v}")
        return v

    @property
    def max_file_size_bytes(self) -> int | None:
        if self.max_file_size_mb is None:
            return None
        return self.max_file_size_mb * 1024 * 1024


class IdentScanConfig(BaseModel):
    """Root configuration model."""

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    scan: ScanConfig = Field(default_factory=ScanConfig)
