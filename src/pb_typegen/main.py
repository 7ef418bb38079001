from collections import Counter
import logging
from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError

from pb_typegen import __version__
from pb_typegen.codegen.renderer import generate as render_definitions
from pb_typegen.codegen.writer import write_typescript_file
from pb_typegen.core.config import (
    Settings,
    SourceConfig,
    TypegenConfig,
    load_typegen_config,
    write_default_typegen_config,
)
from pb_typegen.inspector.errors import SchemaSourceError
from pb_typegen.inspector.sources import load_schema, settings_source
from pb_typegen.schema.models import CollectionRecord, normalize_collections

app = typer.Typer(add_completion=False)

logger = logging.getLogger("pb_typegen")


@app.callback()
def _root(
    log_level: str = typer.Option("WARNING", "--log-level", help="Logging level"),
) -> None:
    """Generate TypeScript definitions for a PocketBase schema."""
    logging.basicConfig(
        level=log_level.upper(),
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def version() -> None:
    typer.echo(f"pb-typegen {__version__}")


@app.command()
def init(
    config: Path = typer.Option(
        "typegen.yaml",
        "--config",
        "-c",
        help="Path to write the default typegen.yaml",
    ),
) -> None:
    if config.exists():
        raise typer.BadParameter(f"{config} already exists")
    write_default_typegen_config(config)
    typer.echo(f"Wrote {config}")


def _resolve_config(
    config: Path | None,
    db: Path | None,
    json_path: Path | None,
    url: str | None,
    email: str | None,
    password: str | None,
    env: bool,
    env_file: Path,
) -> TypegenConfig:
    typegen_config = load_typegen_config(config) if config else TypegenConfig()

    if db or json_path or url:
        source = SourceConfig(
            db=db, json_path=json_path, url=url, email=email, password=password
        )
    elif env:
        source = settings_source(Settings(_env_file=env_file))
    else:
        source = typegen_config.source

    return typegen_config.model_copy(update={"source": source})


def _load_collections(typegen_config: TypegenConfig) -> list[CollectionRecord]:
    try:
        return normalize_collections(load_schema(typegen_config.source))
    except (SchemaSourceError, ValidationError, ValueError) as exc:
        logger.error("schema loading failed: %s", exc)
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)


_CONFIG_OPTION = typer.Option(None, "--config", "-c", help="Path to typegen.yaml")
_DB_OPTION = typer.Option(None, "--db", "-d", help="Path to the pocketbase SQLite database")
_JSON_OPTION = typer.Option(
    None, "--json", "-j", help="Path to JSON schema exported from pocketbase admin UI"
)
_URL_OPTION = typer.Option(
    None,
    "--url",
    "-u",
    help="URL to your hosted pocketbase instance. Requires --email and --password.",
)
_EMAIL_OPTION = typer.Option(None, "--email", "-e", help="Email for an admin pocketbase user")
_PASSWORD_OPTION = typer.Option(
    None, "--password", "-p", help="Password for an admin pocketbase user"
)
_ENV_OPTION = typer.Option(
    False,
    "--env",
    help="Read PB_TYPEGEN_URL, PB_TYPEGEN_EMAIL and PB_TYPEGEN_PASSWORD from the environment",
)
_ENV_FILE_OPTION = typer.Option(Path(".env"), "--env-file", help="Path to the .env file")


@app.command()
def generate(
    config: Optional[Path] = _CONFIG_OPTION,
    db: Optional[Path] = _DB_OPTION,
    json_path: Optional[Path] = _JSON_OPTION,
    url: Optional[str] = _URL_OPTION,
    email: Optional[str] = _EMAIL_OPTION,
    password: Optional[str] = _PASSWORD_OPTION,
    env: bool = _ENV_OPTION,
    env_file: Path = _ENV_FILE_OPTION,
    out: Optional[Path] = typer.Option(
        None, "--out", "-o", help="Path to save the typescript output file"
    ),
    sdk: Optional[bool] = typer.Option(
        None,
        "--sdk/--no-sdk",
        help="Include the typed pocketbase SDK surface and its imports",
    ),
    format_with_prettier: bool = typer.Option(
        False,
        "--format",
        help="Format the generated file with prettier",
    ),
) -> None:
    try:
        typegen_config = _resolve_config(
            config, db, json_path, url, email, password, env, env_file
        )
    except (OSError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)

    updates = {}
    if out is not None:
        updates["out"] = out
    if sdk is not None:
        updates["sdk"] = sdk
    typegen_config = typegen_config.model_copy(update=updates)

    collections = _load_collections(typegen_config)
    definitions = render_definitions(collections, typegen_config.generate_options())
    write_typescript_file(typegen_config.out, definitions, format_with_prettier)
    typer.echo(f"Created typescript definitions at {typegen_config.out}")


@app.command()
def inspect(
    config: Optional[Path] = _CONFIG_OPTION,
    db: Optional[Path] = _DB_OPTION,
    json_path: Optional[Path] = _JSON_OPTION,
    url: Optional[str] = _URL_OPTION,
    email: Optional[str] = _EMAIL_OPTION,
    password: Optional[str] = _PASSWORD_OPTION,
    env: bool = _ENV_OPTION,
    env_file: Path = _ENV_FILE_OPTION,
) -> None:
    try:
        typegen_config = _resolve_config(
            config, db, json_path, url, email, password, env, env_file
        )
    except (OSError, ValueError) as exc:
        typer.echo(str(exc), err=True)
        raise typer.Exit(1)

    collections = _load_collections(typegen_config)
    typer.echo(f"Found {len(collections)} collections.")

    for collection in collections:
        typer.echo(
            f"Collection {collection.name} ({collection.type}) has "
            f"{len(collection.fields)} fields."
        )
        duplicates = [
            name
            for name, count in Counter(field.name for field in collection.fields).items()
            if count > 1
        ]
        for name in duplicates:
            typer.echo(f"[!] Duplicate field name {name} in {collection.name}.")
        for field in collection.fields:
            if field.kind is None:
                typer.echo(
                    f'[!] Unknown field type "{field.type}" in {collection.name}.{field.name}.'
                )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
