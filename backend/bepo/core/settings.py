import json
import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator


class ServerConfig(BaseModel):
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=8000, ge=1, le=65535)


class SecurityConfig(BaseModel):
    cors_origins: list[str] = Field(default_factory=list)


class DataConfig(BaseModel):
    data_dir: Path = Field(default=Path("backend/data"))

    @field_validator("data_dir", mode="before")
    def _expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()


class DatabaseConfig(BaseModel):
    # None means "SQLite file inside data_dir"
    url: Optional[str] = None

    @field_validator("url", mode="before")
    def _normalize_driver(cls, v: Optional[str]) -> Optional[str]:
        if not v:
            return None
        if v.startswith("postgres://"):
            v = v.replace("postgres://", "postgresql://", 1)
        if v.startswith("postgresql://"):
            v = v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v


class Settings(BaseModel):
    server: ServerConfig = Field(default_factory=ServerConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    data: DataConfig = Field(default_factory=DataConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)

    model_config = ConfigDict(arbitrary_types_allowed=True)

    @property
    def database_url(self) -> str:
        if self.database.url:
            return self.database.url
        return f"sqlite+aiosqlite:///{self.data.data_dir / 'bepo.db'}"


DEFAULT_CONFIG_PATH = Path(os.environ.get("CONFIG_PATH", "config/config.json"))


def _load_file_config(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        with path.open("r", encoding="utf-8") as fh:
            return json.load(fh)
    except json.JSONDecodeError as exc:
        raise RuntimeError(f"Invalid JSON configuration at {path}") from exc


def _load_env() -> dict[str, Any]:
    env_config: dict[str, Any] = {}

    host = os.environ.get("SERVER_HOST")
    if host:
        env_config.setdefault("server", {})["host"] = host

    port = os.environ.get("SERVER_PORT")
    if port:
        env_config.setdefault("server", {})["port"] = int(port)

    cors_origins = os.environ.get("CORS_ORIGINS")
    if cors_origins:
        env_config.setdefault("security", {})["cors_origins"] = [
            origin.strip() for origin in cors_origins.split(",") if origin.strip()
        ]

    data_dir = os.environ.get("DATA_DIR")
    if data_dir:
        env_config.setdefault("data", {})["data_dir"] = data_dir

    database_url = os.environ.get("DATABASE_URL")
    if database_url:
        env_config.setdefault("database", {})["url"] = database_url

    return env_config


def merge_settings(env_config: dict[str, Any], file_config: dict[str, Any]) -> dict[str, Any]:
    merged: dict[str, Any] = {}
    for section in ("server", "security", "data", "database"):
        merged[section] = {**(file_config.get(section) or {}), **env_config.get(section, {})}
    return merged


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    env_config = _load_env()
    file_config = _load_file_config(Path(os.environ.get("CONFIG_PATH", DEFAULT_CONFIG_PATH)))
    merged = merge_settings(env_config=env_config, file_config=file_config)
    try:
        return Settings.model_validate(merged)
    except ValidationError as exc:
        raise RuntimeError(f"Configuration error: {exc}") from exc


__all__ = ["Settings", "get_settings"]
