from __future__ import annotations

import json
from pathlib import Path

from typer.testing import CliRunner

from pb_typegen.main import app


def test_inspect_command_reports_summary(tmp_path: Path) -> None:
    schema_path = tmp_path / "pb_schema.json"
    schema_path.write_text(
        json.dumps(
            [
                {
                    "name": "users",
                    "type": "auth",
                    "schema": [{"name": "name", "type": "text"}],
                },
                {
                    "name": "places",
                    "type": "base",
                    "schema": [
                        {"name": "title", "type": "text"},
                        {"name": "title", "type": "text"},
                        {"name": "where", "type": "geoPoint"},
                    ],
                },
            ]
        )
    )

    result = CliRunner().invoke(app, ["inspect", "--json", str(schema_path)])

    assert result.exit_code == 0, result.output
    assert "Found 2 collections." in result.output
    assert "Collection places (base) has 3 fields." in result.output
    assert "Collection users (auth) has 1 fields." in result.output
    assert "[!] Duplicate field name title in places." in result.output
    assert '[!] Unknown field type "geoPoint" in places.where.' in result.output
    assert result.output.index("places") < result.output.index("users")


def test_version_command() -> None:
    result = CliRunner().invoke(app, ["version"])

    assert result.exit_code == 0
    assert result.output.startswith("pb-typegen ")
