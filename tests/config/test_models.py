"""Tests for configuration models."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from identscan.config.models import (
    IdentScanConfig,
    LoggingConfig,
    LogOutputConfig,
    ScanConfig,
)


class TestLogOutputConfig:
    def test_defaults(self) -> None:
        config = LogOutputConfig()

        assert config.format == "console"
        assert config.destination == "stderr"
        assert config.level is None

    @pytest.mark.parametrize("destination", ["stderr", "stdout"])
    def test_stream_destinations_accepted(self, destination: str) -> None:
        assert LogOutputConfig(destination=destination).destination == destination

    def test_relative_file_destination_rejected(self) -> None:
        with pytest.raises(ValidationError, match="absolute path"):
            LogOutputConfig(destination="logs/scan.log")

    def test_absolute_file_destination_accepted(self) -> None:
        assert LogOutputConfig(destination="/tmp/scan.log").destination == "/tmp/scan.log"


class TestLoggingConfig:
    def test_defaults_to_warning_on_stderr(self) -> None:
        config = LoggingConfig()

        assert config.level == "WARNING"
        assert [o.destination for o in config.outputs] == ["stderr"]

    def test_invalid_level_rejected(self) -> None:
        with pytest.raises(ValidationError):
            LoggingConfig(level="LOUD")  # type: ignore[arg-type]


class TestScanConfig:
    def test_defaults(self) -> None:
        config = ScanConfig()

        assert config.max_file_size_mb is None
        assert config.max_file_size_bytes is None
        assert config.decode_errors == "empty"

    def test_max_file_size_bytes(self) -> None:
        assert ScanConfig(max_file_size_mb=2).max_file_size_bytes == 2 * 1024 * 1024

    @pytest.mark.parametrize("value", [0, -5])
    def test_non_positive_size_rejected(self, value: int) -> None:
        with pytest.raises(ValidationError, match="must be positive"):
            ScanConfig(max_file_size_mb=value)

    def test_decode_policy_values(self) -> None:
        assert ScanConfig(decode_errors="skip").decode_errors == "skip"
        with pytest.raises(ValidationError):
            ScanConfig(decode_errors="drop")  # type: ignore[arg-type]


class TestIdentScanConfig:
    def test_sections_default(self) -> None:
        config = IdentScanConfig()

        assert config.logging == LoggingConfig()
        assert config.scan == ScanConfig()
