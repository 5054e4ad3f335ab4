"""Unit tests for AuditConfig and load_config."""

import os
from pathlib import Path
from unittest.mock import patch

import pytest
from pydantic import ValidationError
from sunshine.core.config import AuditConfig, ConfigError, ConfigParseError, load_config


class TestAuditConfig:
    """Tests for AuditConfig Pydantic model."""

    def test_default_values(self) -> None:
        config = AuditConfig()

        assert config.default_roots == []
        assert config.max_workers is None
        assert config.verbose is False

    def test_expands_home_in_roots(self, tmp_path: Path) -> None:
        with patch.dict(os.environ, {"HOME": str(tmp_path)}):
            config = AuditConfig(default_roots=[Path("~/.ssh"), Path("/etc/ssh")])

        assert config.default_roots == [tmp_path / ".ssh", Path("/etc/ssh")]

    def test_max_workers_minimum(self) -> None:
        with pytest.raises(ValidationError):
            AuditConfig(max_workers=0)

    def test_max_workers_maximum(self) -> None:
        with pytest.raises(ValidationError):
            AuditConfig(max_workers=65)

    def test_extra_fields_forbidden(self) -> None:
        """Rules are fixed; unknown keys are rejected."""
        with pytest.raises(ValidationError):
            AuditConfig(rules=[])  # type: ignore[call-arg]


class TestLoadConfig:
    """Tests for load_config."""

    def test_missing_file_returns_defaults(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "config.toml") == AuditConfig()

    def test_loads_valid_file(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text('default_roots = ["/srv"]\nmax_workers = 2\nverbose = true\n')

        config = load_config(path)

        assert config.default_roots == [Path("/srv")]
        assert config.max_workers == 2
        assert config.verbose is True

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("max_workers = [")

        with pytest.raises(ConfigParseError, match="Invalid TOML syntax"):
            load_config(path)

    def test_invalid_content(self, tmp_path: Path) -> None:
        path = tmp_path / "config.toml"
        path.write_text("max_workers = 0\n")

        with pytest.raises(ConfigError, match="Invalid config content"):
            load_config(path)

    def test_default_path(self, tmp_path: Path) -> None:
        config_dir = tmp_path / "sunshine"
        config_dir.mkdir()
        (config_dir / "config.toml").write_text("max_workers = 3\n")

        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            config = load_config()

        assert config.max_workers == 3
