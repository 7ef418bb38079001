from pathlib import Path

import pytest
import yaml
from typer.testing import CliRunner

from pb_typegen.core.config import Settings, load_typegen_config
from pb_typegen.main import app


def test_load_typegen_config_expands_env_and_defaults(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    config_path = tmp_path / "typegen.yaml"
    config_path.write_text(
        "\n".join(
            [
                "source:",
                "  url: ${PB_TYPEGEN_URL}",
                "  email: admin@example.com",
                "  password: ${PB_ADMIN_PASSWORD}",
            ]
        )
    )

    monkeypatch.setenv("PB_TYPEGEN_URL", "https://pb.example.com")
    monkeypatch.setenv("PB_ADMIN_PASSWORD", "secret")
    config = load_typegen_config(config_path, settings=Settings(_env_file=None))

    assert config.source.url == "https://pb.example.com"
    assert config.source.email == "admin@example.com"
    assert config.source.password == "secret"
    assert config.out == Path("pocketbase-types.ts")
    assert config.sdk is True
    assert config.generate_options().sdk is True


def test_load_typegen_config_reads_json_source(tmp_path: Path) -> None:
    config_path = tmp_path / "typegen.yaml"
    config_path.write_text("source:\n  json: schema.json\nout: types.ts\nsdk: false\n")

    config = load_typegen_config(config_path, settings=Settings(_env_file=None))

    assert config.source.json_path == Path("schema.json")
    assert config.out == Path("types.ts")
    assert config.generate_options().sdk is False


def test_load_typegen_config_rejects_non_mapping(tmp_path: Path) -> None:
    config_path = tmp_path / "typegen.yaml"
    config_path.write_text("- just\n- a list\n")

    with pytest.raises(ValueError, match="mapping"):
        load_typegen_config(config_path, settings=Settings(_env_file=None))


def test_settings_read_env_file(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    for name in ("PB_TYPEGEN_URL", "PB_TYPEGEN_EMAIL", "PB_TYPEGEN_PASSWORD"):
        monkeypatch.delenv(name, raising=False)
    env_file = tmp_path / ".env"
    env_file.write_text(
        "PB_TYPEGEN_URL=https://pb.example.com\n"
        "PB_TYPEGEN_EMAIL=admin@example.com\n"
        "PB_TYPEGEN_PASSWORD=secret\n"
    )

    settings = Settings(_env_file=env_file)

    assert settings.url == "https://pb.example.com"
    assert settings.has_credentials()


def test_init_command_writes_default_config(tmp_path: Path) -> None:
    config_path = tmp_path / "typegen.yaml"
    runner = CliRunner()

    result = runner.invoke(app, ["init", "--config", str(config_path)])

    assert result.exit_code == 0
    assert config_path.exists()

    data = yaml.safe_load(config_path.read_text())
    assert data["source"]["url"] == "${PB_TYPEGEN_URL}"
    assert data["source"]["email"] == "${PB_TYPEGEN_EMAIL}"
    assert data["source"]["password"] == "${PB_TYPEGEN_PASSWORD}"
    assert data["out"] == "pocketbase-types.ts"
    assert data["sdk"] is True


def test_init_command_refuses_to_overwrite(tmp_path: Path) -> None:
    config_path = tmp_path / "typegen.yaml"
    config_path.write_text("sdk: true\n")

    result = CliRunner().invoke(app, ["init", "--config", str(config_path)])

    assert result.exit_code != 0
    assert config_path.read_text() == "sdk: true\n"
