"""Integration tests for end-to-end workflows."""

import pytest

from ledgerbook.cli.main import cli


@pytest.fixture(autouse=True)
def clean_session_env(monkeypatch):
    for name in (
        "LEDGERBOOK_SESSION_TOKEN",
        "LEDGERBOOK_SESSION_USER",
        "LEDGERBOOK_REQUIRE_SESSION",
    ):
        monkeypatch.delenv(name, raising=False)


def extract_id(output: str, marker: str) -> str:
    for line in output.split("\n"):
        if marker in line:
            return line.split(marker)[1].strip().rstrip(")")
    raise AssertionError(f"{marker!r} not in output")


def test_full_workflow(cli_runner, temp_db):
    """Customer → transactions → payments → balances → dashboard → delete."""
    db_args = ["--db-path", temp_db.database_path]

    result = cli_runner.invoke(cli, [*db_args, "customer", "add", "Rami Haddad"])
    assert result.exit_code == 0
    customer_id = extract_id(result.output, "ID:")

    result = cli_runner.invoke(
        cli,
        [
            *db_args,
            "transaction",
            "add",
            "--customer",
            customer_id,
            "--title",
            "Line March",
            "--type",
            "phoneline_charging",
            "--amount",
            "10.00",
        ],
    )
    assert result.exit_code == 0
    line_id = extract_id(result.output, "Transaction added:")

    result = cli_runner.invoke(
        cli,
        [
            *db_args,
            "transaction",
            "add",
            "--customer",
            customer_id,
            "--title",
            "Netflix March",
            "--type",
            "netflix_subscription",
            "--amount",
            "5.00",
        ],
    )
    assert result.exit_code == 0
    netflix_id = extract_id(result.output, "Transaction added:")

    for txn_id, amount in [(line_id, "2.50"), (netflix_id, "8.00")]:
        result = cli_runner.invoke(
            cli,
            [
                *db_args,
                "payment",
                "add",
                "--transaction",
                txn_id,
                "--amount",
                amount,
                "--method",
                "cash",
            ],
        )
        assert result.exit_code == 0

    result = cli_runner.invoke(cli, [*db_args, "customer", "show", customer_id])
    assert result.exit_code == 0
    assert "Net balance: 4.50" in result.output
    assert "-3.00" in result.output

    result = cli_runner.invoke(cli, [*db_args, "dashboard"])
    assert result.exit_code == 0
    assert "4.50" in result.output

    result = cli_runner.invoke(cli, [*db_args, "transaction", "delete", netflix_id, "--yes"])
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, [*db_args, "customer", "show", customer_id])
    assert "Should receive: 7.50" in result.output

    result = cli_runner.invoke(cli, [*db_args, "customer", "delete", customer_id, "-y"])
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, [*db_args, "transaction", "show", line_id])
    assert result.exit_code == 1
    assert f"Transaction {line_id} not found." in result.output


def test_db_path_from_environment(cli_runner, temp_db, monkeypatch):
    monkeypatch.setenv("LEDGERBOOK_DB_PATH", temp_db.database_path)

    result = cli_runner.invoke(cli, ["customer", "add", "Lina Khoury"])
    assert result.exit_code == 0

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "customer", "list"])
    assert "Lina Khoury" in result.output


def test_require_session_without_token(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--require-session", "customer", "list"]
    )
    assert result.exit_code == 1
    assert "Not signed in" in result.output


def test_require_session_from_environment(cli_runner, temp_db, monkeypatch):
    monkeypatch.setenv("LEDGERBOOK_REQUIRE_SESSION", "1")

    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "dashboard"])
    assert result.exit_code == 1

    monkeypatch.setenv("LEDGERBOOK_SESSION_TOKEN", "tok")
    monkeypatch.setenv("LEDGERBOOK_SESSION_USER", "maya")
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "dashboard"])
    assert result.exit_code == 0


def test_whoami(cli_runner, temp_db, monkeypatch):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "--require-session", "whoami"]
    )
    assert result.exit_code == 0
    assert "Not signed in." in result.output

    monkeypatch.setenv("LEDGERBOOK_SESSION_TOKEN", "tok")
    monkeypatch.setenv("LEDGERBOOK_SESSION_USER", "maya")
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "whoami"])
    assert "Signed in as maya" in result.output


def test_help_does_not_need_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])
    assert result.exit_code == 0
    assert "customer" in result.output
    assert "dashboard" in result.output


def test_unopenable_database_reports_error(cli_runner, tmp_path):
    db_path = tmp_path / "missing" / "ledgerbook.db"

    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "dashboard"])

    assert result.exit_code == 1
    assert "Error: Could not open database" in result.output
    assert isinstance(result.exception, SystemExit)
