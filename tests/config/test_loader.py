"""Tests for config/loader.py module.

Covers:
- _load_yaml() function
- _deep_merge() function
- load_config() precedence: kwargs > env > project yaml > global yaml > defaults
"""

from __future__ import annotations

from pathlib import Path

import pytest

from identscan.config.loader import _deep_merge, _load_yaml, load_config
from identscan.core.errors import ConfigError, ErrorCode


@pytest.fixture(autouse=True)
def isolated_env(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point the global config at a temp file and clear IDENTSCAN__ env vars."""
    global_path = tmp_path / "global" / "config.yaml"
    monkeypatch.setattr("identscan.config.loader.GLOBAL_CONFIG_PATH", global_path)
    for var in (
        "IDENTSCAN__LOGGING__LEVEL",
        "IDENTSCAN__SCAN__MAX_FILE_SIZE_MB",
        "IDENTSCAN__SCAN__DECODE_ERRORS",
    ):
        monkeypatch.delenv(var, raising=False)
    return global_path


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content)


class TestLoadYaml:
    """Tests for _load_yaml function."""

    def test_returns_empty_dict_for_missing_file(self, tmp_path: Path) -> None:
        assert _load_yaml(tmp_path / "nonexistent.yaml") == {}

    def test_loads_valid_yaml(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "config.yaml"
        yaml_file.write_text("logging:\n  level: DEBUG\n")

        assert _load_yaml(yaml_file) == {"logging": {"level": "DEBUG"}}

    def test_returns_empty_for_empty_file(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "empty.yaml"
        yaml_file.write_text("")

        assert _load_yaml(yaml_file) == {}

    def test_invalid_yaml_raises_config_error(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "bad.yaml"
        yaml_file.write_text("scan: [unclosed\n")

        with pytest.raises(ConfigError) as exc_info:
            _load_yaml(yaml_file)

        assert exc_info.value.code == ErrorCode.CONFIG_PARSE_ERROR

    def test_non_mapping_raises_config_error(self, tmp_path: Path) -> None:
        yaml_file = tmp_path / "list.yaml"
        yaml_file.write_text("- a\n- b\n")

        with pytest.raises(ConfigError, match="mapping"):
            _load_yaml(yaml_file)


class TestDeepMerge:
    def test_nested_values_merge(self) -> None:
        base = {"scan": {"max_file_size_mb": 5, "decode_errors": "empty"}}
        override = {"scan": {"decode_errors": "skip"}}

        assert _deep_merge(base, override) == {
            "scan": {"max_file_size_mb": 5, "decode_errors": "skip"}
        }

    def test_does_not_mutate_base(self) -> None:
        base = {"a": 1}

        _deep_merge(base, {"a": 2})

        assert base == {"a": 1}


class TestLoadConfig:
    def test_defaults(self, tmp_path: Path) -> None:
        config = load_config(tmp_path)

        assert config.logging.level == "WARNING"
        assert config.scan.max_file_size_mb is None
        assert config.scan.decode_errors == "empty"

    def test_project_yaml(self, tmp_path: Path) -> None:
        _write(tmp_path / ".identscan" / "config.yaml", "scan:\n  decode_errors: skip\n")

        config = load_config(tmp_path)

        assert config.scan.decode_errors == "skip"

    def test_project_yaml_overrides_global(self, tmp_path: Path, isolated_env: Path) -> None:
        _write(isolated_env, "scan:\n  max_file_size_mb: 3\n  decode_errors: skip\n")
        _write(tmp_path / ".identscan" / "config.yaml", "scan:\n  max_file_size_mb: 7\n")

        config = load_config(tmp_path)

        assert config.scan.max_file_size_mb == 7
        assert config.scan.decode_errors == "skip"

    def test_env_overrides_yaml(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write(tmp_path / ".identscan" / "config.yaml", "logging:\n  level: INFO\n")
        monkeypatch.setenv("IDENTSCAN__LOGGING__LEVEL", "DEBUG")

        config = load_config(tmp_path)

        assert config.logging.level == "DEBUG"

    def test_kwargs_override_env(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("IDENTSCAN__SCAN__DECODE_ERRORS", "skip")

        config = load_config(tmp_path, scan={"decode_errors": "empty"})

        assert config.scan.decode_errors == "empty"

    def test_invalid_value_raises_config_error(self, tmp_path: Path) -> None:
        _write(tmp_path / ".identscan" / "config.yaml", "scan:\n  max_file_size_mb: -1\n")

        with pytest.raises(ConfigError) as exc_info:
            load_config(tmp_path)

        assert exc_info.value.code == ErrorCode.CONFIG_INVALID_VALUE
        assert exc_info.value.details["field"].startswith("scan")

    def test_defaults_to_cwd(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        _write(tmp_path / ".identscan" / "config.yaml", "scan:\n  max_file_size_mb: 2\n")
        monkeypatch.chdir(tmp_path)

        config = load_config()

        assert config.scan.max_file_size_mb == 2
