import os
import re
from pathlib import Path

import yaml
from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class SourceConfig(BaseModel):
    db: Path | None = None
    json_path: Path | None = Field(default=None, alias="json")
    url: str | None = None
    email: str | None = None
    password: str | None = None

    model_config = {"populate_by_name": True}


class GenerateOptions(BaseModel):
    sdk: bool = True


class TypegenConfig(BaseModel):
    source: SourceConfig = Field(default_factory=SourceConfig)
    out: Path = Path("pocketbase-types.ts")
    sdk: bool = True

    def generate_options(self) -> GenerateOptions:
        return GenerateOptions(sdk=self.sdk)


class Settings(BaseSettings):
    url: str | None = Field(default=None, alias="PB_TYPEGEN_URL")
    email: str | None = Field(default=None, alias="PB_TYPEGEN_EMAIL")
    password: str | None = Field(default=None, alias="PB_TYPEGEN_PASSWORD")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    def has_credentials(self) -> bool:
        return bool(self.url and self.email and self.password)


_ENV_PATTERN = re.compile(r"^\$\{([A-Z0-9_]+)\}$")


def _expand_env_value(value: str, settings: Settings) -> str:
    match = _ENV_PATTERN.match(value)
    if not match:
        return value
    env_name = match.group(1)
    from_settings = {
        "PB_TYPEGEN_URL": settings.url,
        "PB_TYPEGEN_EMAIL": settings.email,
        "PB_TYPEGEN_PASSWORD": settings.password,
    }.get(env_name)
    if from_settings:
        return from_settings
    return os.getenv(env_name, value)


def load_typegen_config(path: Path, settings: Settings | None = None) -> TypegenConfig:
    settings = settings or Settings()
    payload = yaml.safe_load(path.read_text()) or {}
    if not isinstance(payload, dict):
        raise ValueError("typegen.yaml must be a mapping at the top level")

    source = payload.get("source") or {}
    if not isinstance(source, dict):
        raise ValueError("typegen.yaml 'source' must be a mapping")
    payload["source"] = {
        key: _expand_env_value(value, settings) if isinstance(value, str) else value
        for key, value in source.items()
    }

    return TypegenConfig.model_validate(payload)


def default_typegen_config() -> TypegenConfig:
    return TypegenConfig(
        source=SourceConfig(
            url="${PB_TYPEGEN_URL}",
            email="${PB_TYPEGEN_EMAIL}",
            password="${PB_TYPEGEN_PASSWORD}",
        ),
        out=Path("pocketbase-types.ts"),
        sdk=True,
    )


def write_default_typegen_config(path: Path) -> None:
    payload = default_typegen_config().model_dump(mode="json", by_alias=True, exclude_none=True)
    path.write_text(
        yaml.safe_dump(payload, sort_keys=False),
    )
