"""Unit tests for the rules and config commands."""

from pathlib import Path
from unittest.mock import patch

import pytest
from sunshine.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "xdg"))


class TestRulesCommand:
    """Tests for sunshine rules."""

    def test_lists_catalog(self) -> None:
        result = runner.invoke(app, ["rules"])

        assert result.exit_code == 0
        assert "Permission Policy" in result.stdout
        for rule_id in ("etc-ssh", "ssh-dir", "known-hosts", "home-dir"):
            assert rule_id in result.stdout

    def test_home_unavailable(self) -> None:
        with patch("sunshine.audit.session.Path.home", side_effect=RuntimeError("no home")):
            result = runner.invoke(app, ["rules"])

        assert result.exit_code == 1


class TestConfigCommand:
    """Tests for sunshine config."""

    def test_defaults(self) -> None:
        result = runner.invoke(app, ["config"])

        assert result.exit_code == 0
        assert '"max_workers": null' in result.stdout

    def test_custom_file(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text("max_workers = 4\n")

        result = runner.invoke(app, ["config", "--config", str(config)])

        assert result.exit_code == 0
        assert '"max_workers": 4' in result.stdout

    def test_invalid_file(self, tmp_path: Path) -> None:
        config = tmp_path / "config.toml"
        config.write_text("verbose = [")

        result = runner.invoke(app, ["config", "--config", str(config)])

        assert result.exit_code == 1

    def test_no_config_directory(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.delenv("XDG_CONFIG_HOME", raising=False)

        with patch("sunshine.core.paths.Path.home", side_effect=RuntimeError("no home")):
            result = runner.invoke(app, ["config"])

        assert result.exit_code == 1
