"""Tests for the financeflow CLI."""

import logging
from pathlib import Path

import pytest
from typer.testing import CliRunner

from financeflow.cli import app
from financeflow.commands.transactions import normalize_date
from financeflow.config import get_config_path, save_config

runner = CliRunner()


@pytest.fixture
def xdg_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config and data directories at a temporary location."""
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def initialized(xdg_home: Path) -> Path:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    return xdg_home


class TestNormalizeDate:
    """Tests for normalize_date."""

    def test_iso_date(self) -> None:
        """Should keep ISO dates."""
        assert normalize_date("2025-01-15") == "2025-01-15T00:00:00"

    def test_day_first(self) -> None:
        """Should read slashed dates day first."""
        assert normalize_date("15/01/2025") == "2025-01-15T00:00:00"

    def test_invalid(self) -> None:
        """Should raise ValueError for nonsense."""
        with pytest.raises(ValueError):
            normalize_date("not a date")


class TestLogging:
    """Tests for the log level chosen by the CLI."""

    def test_uses_configured_level(self, initialized: Path) -> None:
        """Should log at the level from the [logging] section."""
        save_config({"logging": {"level": "error"}}, get_config_path())

        runner.invoke(app, ["list"])

        assert logging.getLogger().level == logging.ERROR

    def test_default_level_without_config(self, xdg_home: Path) -> None:
        """Should fall back to INFO when no config file exists."""
        runner.invoke(app, ["list"])

        assert logging.getLogger().level == logging.INFO

    def test_verbose_overrides_config(self, initialized: Path) -> None:
        """Should log at DEBUG with -v whatever the config says."""
        save_config({"logging": {"level": "ERROR"}}, get_config_path())

        runner.invoke(app, ["-v", "list"])

        assert logging.getLogger().level == logging.DEBUG

    def test_unknown_level_falls_back(self, initialized: Path) -> None:
        """Should not fail on a level name logging does not know."""
        save_config({"logging": {"level": "loud"}}, get_config_path())

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert logging.getLogger().level == logging.INFO


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, xdg_home: Path) -> None:
        """Should create both files."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (xdg_home / "data" / "financeflow" / "financeflow.db").exists()
        assert (xdg_home / "config" / "financeflow" / "config.toml").exists()

    def test_refuses_to_overwrite(self, initialized: Path) -> None:
        """Should exit 1 without --force."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_commands_require_init(self, xdg_home: Path) -> None:
        """Should tell the user to run init first."""
        result = runner.invoke(app, ["list"])

        assert result.exit_code == 1
        assert "financeflow init" in result.output


class TestTransactionCommands:
    """Tests for add, edit, delete, show and list."""

    def test_add_and_list(self, initialized: Path) -> None:
        """Should store the transaction and show it in the list."""
        result = runner.invoke(app, ["add", "40.00", "Groceries", "-c", "food", "-d", "2024-03-10"])

        assert result.exit_code == 0, result.output
        assert "Transaction added (ID: 1)" in result.output

        listing = runner.invoke(app, ["list"])
        assert "Groceries" in listing.output
        assert "2024-03-10" in listing.output

    def test_add_invalid_amount(self, initialized: Path) -> None:
        """Should print the field error and exit 1."""
        result = runner.invoke(app, ["add", "12.345", "Too precise"])

        assert result.exit_code == 1
        assert "Invalid amount format" in result.output

    def test_edit(self, initialized: Path) -> None:
        """Should update only the given fields."""
        runner.invoke(app, ["add", "40.00", "Groceries", "-c", "food"])

        result = runner.invoke(app, ["edit", "1", "--description", "Market"])

        assert result.exit_code == 0, result.output
        assert "Market" in runner.invoke(app, ["show", "1"]).output

    def test_edit_missing(self, initialized: Path) -> None:
        """Should exit 1 for unknown ids."""
        result = runner.invoke(app, ["edit", "9", "--amount", "1.00"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_delete(self, initialized: Path) -> None:
        """Should delete once and then report not found."""
        runner.invoke(app, ["add", "40.00", "Groceries"])

        assert runner.invoke(app, ["delete", "1"]).exit_code == 0
        assert runner.invoke(app, ["delete", "1"]).exit_code == 1


class TestReportCommands:
    """Tests for summary, categories and monthly."""

    def test_categories_and_monthly(self, initialized: Path) -> None:
        """Should list expense categories and months."""
        runner.invoke(app, ["add", "40.00", "Groceries", "-c", "food", "-d", "2024-03-10"])
        runner.invoke(app, ["add", "12.00", "Bus", "-c", "transportation", "-d", "2024-02-10"])

        categories = runner.invoke(app, ["categories", "--no-histogram"])
        monthly = runner.invoke(app, ["monthly"])

        assert categories.exit_code == 0
        assert "food" in categories.output
        assert "transportation" in categories.output
        assert "$52.00" in categories.output
        assert monthly.exit_code == 0
        assert "2024-02" in monthly.output
        assert "2024-03" in monthly.output

    def test_summary_empty(self, initialized: Path) -> None:
        """Should show zeros with no data."""
        result = runner.invoke(app, ["summary"])

        assert result.exit_code == 0
        assert "Savings rate" in result.output
        assert "0.0%" in result.output
