from __future__ import annotations

import json

from conftest import sample_profile
from typer.testing import CliRunner

from bidforge.cli.app import app

runner = CliRunner()


def test_user_add_and_list() -> None:
    added = runner.invoke(app, ["user", "add", "--id", "manager-9", "--role", "manager", "--email", "m9@example.com"])
    assert added.exit_code == 0, added.output

    listed = runner.invoke(app, ["user", "list"])
    assert listed.exit_code == 0
    assert "manager-9" in listed.output


def test_unknown_role_fails_cleanly() -> None:
    result = runner.invoke(app, ["user", "add", "--id", "x", "--role", "owner"])

    assert result.exit_code == 1


def test_profile_import_and_list(tmp_path) -> None:
    runner.invoke(app, ["user", "add", "--id", "manager-9", "--role", "manager"])
    source = tmp_path / "profiles.json"
    source.write_text(
        json.dumps([sample_profile().model_dump(), sample_profile(first_name="John").model_dump()]),
        encoding="utf-8",
    )

    imported = runner.invoke(app, ["profile", "import", "--file", str(source), "--owner", "manager-9"])
    assert imported.exit_code == 0, imported.output

    listed = runner.invoke(app, ["profile", "list", "--as", "manager-9"])
    assert "Jane Doe" in listed.output
    assert "John Doe" in listed.output


def test_applications_list_rejects_unknown_status() -> None:
    result = runner.invoke(app, ["applications", "list", "--status", "bogus"])

    assert result.exit_code == 2
    assert isinstance(result.exception, SystemExit)
    assert "withdrawn" in result.output
