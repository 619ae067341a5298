"""End-to-end tests for the lifeboard CLI using an isolated config and database."""

from pathlib import Path

import pytest
from typer.testing import CliRunner

from lifeboard.cli import app

runner = CliRunner()


@pytest.fixture(autouse=True)
def isolated_home(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path / "config"))
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path / "data"))
    return tmp_path


@pytest.fixture
def initialized(isolated_home: Path) -> Path:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0
    return isolated_home


class TestInit:
    """Tests for the init command."""

    def test_creates_database_and_config(self, isolated_home: Path) -> None:
        """Should create both files under the XDG directories."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 0
        assert (isolated_home / "data" / "lifeboard" / "lifeboard.db").exists()
        assert (isolated_home / "config" / "lifeboard" / "config.toml").exists()

    def test_refuses_to_overwrite(self, initialized: Path) -> None:
        """Should fail without --force when files already exist."""
        result = runner.invoke(app, ["init"])

        assert result.exit_code == 1
        assert "already exists" in result.output

    def test_reports_default_settings(self, isolated_home: Path) -> None:
        """Should tell the user which defaults were written."""
        result = runner.invoke(app, ["init"])

        assert "Currency PHP, paydays on the 15th, 30th, amounts hidden" in result.output

    def test_migrate_keeps_data(self, initialized: Path) -> None:
        """Should update the schema without dropping rows."""
        runner.invoke(app, ["add", "expense", "10", "Food", "--date", "2025-01-03"])

        result = runner.invoke(app, ["init", "--migrate"])

        assert result.exit_code == 0
        assert "kept 1 transaction(s), 0 recurring template(s)" in result.output

    def test_force_starts_over(self, initialized: Path) -> None:
        """Should replace the ledger with an empty one."""
        runner.invoke(app, ["add", "expense", "10", "Food", "--date", "2025-01-03"])

        assert runner.invoke(app, ["init", "--force"]).exit_code == 0

        assert "No transactions found" in runner.invoke(app, ["list"]).output


class TestBackup:
    """Tests for the backup command."""

    def test_backs_up_ledger_and_settings(self, initialized: Path) -> None:
        """Should write a database snapshot and a copy of the settings."""
        runner.invoke(app, ["add", "expense", "10", "Food", "--date", "2025-01-03"])
        runner.invoke(app, ["recurring", "add", "Rent", "expense", "5000", "Housing", "--start", "2025-01-01"])
        backup_dir = initialized / "backups"

        result = runner.invoke(app, ["backup", "--output", str(backup_dir)])

        assert result.exit_code == 0
        assert "1 transaction(s), 1 recurring template(s)" in result.output
        assert len(list(backup_dir.glob("lifeboard_*.db"))) == 1
        assert len(list(backup_dir.glob("config_*.toml"))) == 1

    def test_requires_database(self, isolated_home: Path) -> None:
        """Should fail before init."""
        result = runner.invoke(app, ["backup"])

        assert result.exit_code == 1


class TestTransactions:
    """Tests for add, list and delete."""

    def test_add_and_list_hides_amounts_by_default(self, initialized: Path) -> None:
        """Should mask amounts until privacy is turned off."""
        result = runner.invoke(app, ["add", "expense", "250.50", "Food", "--date", "2025-01-03"])
        assert result.exit_code == 0
        assert "Transaction 1 added" in result.output

        result = runner.invoke(app, ["list"])

        assert result.exit_code == 0
        assert "₱****" in result.output
        assert "250.50" not in result.output

    def test_list_shows_amounts_when_privacy_off(self, initialized: Path) -> None:
        """Should show formatted amounts once privacy is turned off."""
        runner.invoke(app, ["add", "income", "1000", "Salary", "--date", "2025-01-15"])
        result = runner.invoke(app, ["settings", "privacy", "--show"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["list"])

        assert "₱1,000.00" in result.output

    def test_rejects_unknown_type(self, initialized: Path) -> None:
        """Should exit with an error for a type other than income or expense."""
        result = runner.invoke(app, ["add", "transfer", "10", "Misc"])

        assert result.exit_code == 1
        assert "income" in result.output

    def test_delete_missing_transaction(self, initialized: Path) -> None:
        """Should report a missing transaction."""
        result = runner.invoke(app, ["delete", "42"])

        assert result.exit_code == 1
        assert "not found" in result.output

    def test_iso_date_is_stored_as_given(self, initialized: Path) -> None:
        """Should keep year-month-day order for ISO dates."""
        result = runner.invoke(app, ["add", "expense", "10", "Food", "--date", "2025-01-03"])
        assert "Date: 2025-01-03" in result.output

        january = runner.invoke(app, ["list", "--month", "2025-01"])
        march = runner.invoke(app, ["list", "--month", "2025-03"])

        assert "2025-01-03" in january.output
        assert "No transactions found" in march.output

    def test_day_first_date(self, initialized: Path) -> None:
        """Should read slashed dates day first."""
        result = runner.invoke(app, ["add", "expense", "10", "Food", "--date", "03/01/2025"])

        assert "Date: 2025-01-03" in result.output


class TestRecurring:
    """Tests for the recurring sub-commands."""

    def test_add_and_preview(self, initialized: Path) -> None:
        """Should list the days a monthly template lands on."""
        result = runner.invoke(
            app,
            ["recurring", "add", "Rent", "expense", "5000", "Housing", "--day", "31", "--start", "2025-01-01"],
        )
        assert result.exit_code == 0

        result = runner.invoke(app, ["recurring", "preview", "1", "--month", "2025-02"])

        assert result.exit_code == 0
        assert "28 Feb" in result.output
        assert "1 occurrence(s)" in result.output

    def test_weekly_from_iso_start(self, initialized: Path) -> None:
        """Should repeat on the weekday of the start date."""
        runner.invoke(
            app,
            ["recurring", "add", "Groceries", "expense", "800", "Food", "-f", "weekly", "--start", "2025-02-03"],
        )

        result = runner.invoke(app, ["recurring", "preview", "1", "--month", "2025-02"])

        assert result.exit_code == 0
        for day in ("Mon 03 Feb", "Mon 10 Feb", "Mon 17 Feb", "Mon 24 Feb"):
            assert day in result.output
        assert "4 occurrence(s)" in result.output

    def test_pause_stops_preview(self, initialized: Path) -> None:
        """Should stop a paused template from occurring."""
        runner.invoke(
            app,
            ["recurring", "add", "Coffee", "expense", "150", "Food", "-f", "daily", "--start", "2025-01-01"],
        )
        result = runner.invoke(app, ["recurring", "pause", "1"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["recurring", "preview", "1", "--month", "2025-03"])

        assert "No occurrences" in result.output

    def test_rejects_unknown_frequency(self, initialized: Path) -> None:
        """Should refuse a frequency outside the known set."""
        result = runner.invoke(app, ["recurring", "add", "Rent", "expense", "5000", "Housing", "-f", "yearly"])

        assert result.exit_code == 1
        assert "Unknown frequency" in result.output


class TestSettings:
    """Tests for the settings sub-commands."""

    def test_paydays(self, initialized: Path) -> None:
        """Should save and show payday dates."""
        result = runner.invoke(app, ["settings", "paydays", "5", "20"])
        assert result.exit_code == 0

        result = runner.invoke(app, ["settings", "show"])

        assert "5th, 20th" in result.output

    def test_paydays_out_of_range(self, initialized: Path) -> None:
        """Should reject days outside 1-31."""
        result = runner.invoke(app, ["settings", "paydays", "0", "15"])

        assert result.exit_code == 1

    def test_currency(self, initialized: Path) -> None:
        """Should use the chosen currency symbol."""
        runner.invoke(app, ["settings", "currency", "usd"])
        runner.invoke(app, ["settings", "privacy", "--show"])
        runner.invoke(app, ["add", "expense", "12.5", "Food", "--date", "2025-01-03"])

        result = runner.invoke(app, ["list"])

        assert "$12.50" in result.output


class TestReports:
    """Tests for the report commands."""

    def test_summary_totals_the_month(self, initialized: Path) -> None:
        """Should count an expense in the month it is dated in."""
        runner.invoke(app, ["settings", "privacy", "--show"])
        runner.invoke(app, ["add", "expense", "100", "Food", "--date", "2025-01-03"])

        january = runner.invoke(app, ["summary", "--month", "2025-01"])
        march = runner.invoke(app, ["summary", "--month", "2025-03"])

        assert january.exit_code == 0
        assert "January 2025" in january.output
        assert "Expenses: ₱100.00" in january.output
        assert "Expenses: ₱0.00" in march.output

    def test_summary_includes_recurring(self, initialized: Path) -> None:
        """Should add projected recurring income to the month."""
        runner.invoke(app, ["settings", "privacy", "--show"])
        runner.invoke(
            app,
            [
                "recurring",
                "add",
                "Salary",
                "income",
                "1000",
                "Salary",
                "-f",
                "semimonthly_15_eom",
                "--start",
                "2025-01-01",
            ],
        )

        result = runner.invoke(app, ["summary", "--month", "2025-02"])

        assert "Income: ₱2,000.00" in result.output
        assert "Includes ₱2,000.00 recurring" in result.output

    @pytest.mark.parametrize("command", [["calendar", "--month", "2025-02"], ["period"], ["periods"]])
    def test_commands_run(self, initialized: Path, command: list[str]) -> None:
        """Should run without errors on an empty database."""
        result = runner.invoke(app, command)

        assert result.exit_code == 0


class TestBrokenConfig:
    """Tests for commands run against an unreadable config file."""

    @pytest.mark.parametrize(
        "command",
        [
            ["period"],
            ["periods"],
            ["summary"],
            ["calendar"],
            ["list"],
            ["add", "expense", "10", "Food"],
            ["recurring", "list"],
            ["recurring", "preview", "1"],
            ["settings", "show"],
            ["settings", "privacy"],
            ["settings", "paydays", "15", "30"],
        ],
    )
    def test_reports_invalid_config(self, initialized: Path, command: list[str]) -> None:
        """Should print an error and exit 1 instead of a traceback."""
        (initialized / "config" / "lifeboard" / "config.toml").write_text("currency = [broken\n")

        result = runner.invoke(app, command)

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Invalid config file" in result.output
