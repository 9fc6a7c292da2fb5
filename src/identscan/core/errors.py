"""identscan error types with typed error codes.

Error code ranges:
- 1xxx: Usage
- 2xxx: Config
- 3xxx: Grammar
- 4xxx: Filesystem
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any


class ErrorCode(IntEnum):
    """Typed error codes for programmatic handling."""

    # Usage (1xxx)
    USAGE_TOO_MANY_PATHS = 1001
    USAGE_MISSING_INPUT = 1002
    USAGE_HELP_REQUESTED = 1003

    # Config (2xxx)
    CONFIG_PARSE_ERROR = 2001
    CONFIG_INVALID_VALUE = 2002

    # Grammar (3xxx)
    GRAMMAR_MODULE_UNAVAILABLE = 3001
    GRAMMAR_QUERY_INVALID = 3002
    GRAMMAR_DUPLICATE_EXTENSION = 3003

    # Filesystem (4xxx)
    FILE_READ_FAILED = 4001


@dataclass(frozen=True, slots=True)
class IdentScanError(Exception):
    """Base error with structured context."""

    code: ErrorCode
    message: str
    details: dict[str, Any] = field(default_factory=dict)

    @property
    def error_name(self) -> str:
        """String identifier for logging (e.g., 'CONFIG_PARSE_ERROR')."""
        return self.code.name

    def to_dict(self) -> dict[str, Any]:
        return {
            "code": self.code.value,
            "error": self.error_name,
            "message": self.message,
            "details": self.details,
        }

    def __str__(self) -> str:
        return f"[{self.code.value}] {self.error_name}: {self.message}"


class UsageError(IdentScanError):
    """Bad command-line usage. Always fatal, reported with the usage synopsis."""

    @classmethod
    def too_many_paths(cls, paths: list[str]) -> "UsageError":
        return cls(
            code=ErrorCode.USAGE_TOO_MANY_PATHS,
            message="expected only one path provided",
            details={"paths": paths},
        )

    @classmethod
    def missing_input(cls) -> "UsageError":
        return cls(
            code=ErrorCode.USAGE_MISSING_INPUT,
            message="no path given and stream mode not enabled",
        )

    @classmethod
    def help_requested(cls) -> "UsageError":
        return cls(code=ErrorCode.USAGE_HELP_REQUESTED, message="help requested")


class ConfigError(IdentScanError):
    """Configuration-related errors."""

    @classmethod
    def parse_error(cls, path: str, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_PARSE_ERROR,
            message=f"Failed to parse config at {path}: {reason}",
            details={"path": path, "reason": reason},
        )

    @classmethod
    def invalid_value(cls, field: str, value: Any, reason: str) -> "ConfigError":
        return cls(
            code=ErrorCode.CONFIG_INVALID_VALUE,
            message=f"Invalid value for '{field}': {reason}",
            details={"field": field, "value": str(value), "reason": reason},
        )


class GrammarError(IdentScanError):
    """Broken grammar or query setup. Indicates a packaging defect, not bad input."""

    @classmethod
    def module_unavailable(
        cls, language: str, module: str, reason: str, package: str | None = None
    ) -> "GrammarError":
        message = f"Grammar for {language} not available ({module}): {reason}"
        details: dict[str, Any] = {"language": language, "module": module, "reason": reason}
        if package:
            message += f"; install '{package}'"
            details["package"] = package
        return cls(
            code=ErrorCode.GRAMMAR_MODULE_UNAVAILABLE,
            message=message,
            details=details,
        )

    @classmethod
    def query_invalid(cls, language: str, reason: str) -> "GrammarError":
        return cls(
            code=ErrorCode.GRAMMAR_QUERY_INVALID,
            message=f"Capture query for {language} failed to compile: {reason}",
            details={"language": language, "reason": reason},
        )

    @classmethod
    def duplicate_extension(cls, ext: str, first: str, second: str) -> "GrammarError":
        return cls(
            code=ErrorCode.GRAMMAR_DUPLICATE_EXTENSION,
            message=f"Extension '{ext}' registered for both {first} and {second}",
            details={"extension": ext, "languages": [first, second]},
        )


class FileReadError(IdentScanError):
    """A source file could not be read. Recovered per file by the traverser."""

    @classmethod
    def unreadable(cls, path: str, reason: str) -> "FileReadError":
        return cls(
            code=ErrorCode.FILE_READ_FAILED,
            message=f"Failed to read {path}: {reason}",
            details={"path": path, "reason": reason},
        )

