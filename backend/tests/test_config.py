import json
from pathlib import Path

import pytest

from bepo.core import settings as settings_module
from bepo.core.settings import DatabaseConfig, get_settings


@pytest.fixture(autouse=True)
def _fresh_settings(monkeypatch):
    for var in ("SERVER_HOST", "SERVER_PORT", "CORS_ORIGINS", "DATA_DIR", "DATABASE_URL"):
        monkeypatch.delenv(var, raising=False)
    settings_module.get_settings.cache_clear()
    yield
    settings_module.get_settings.cache_clear()


def test_env_overrides_file(tmp_path, monkeypatch):
    config_path = tmp_path / "config.json"
    config_path.write_text(
        json.dumps(
            {
                "server": {"host": "127.0.0.1", "port": 9000},
                "security": {"cors_origins": ["https://file.example"]},
                "data": {"data_dir": str(tmp_path / "from-file")},
            }
        )
    )
    monkeypatch.setenv("CONFIG_PATH", str(config_path))
    monkeypatch.setenv("SERVER_PORT", "8100")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")

    settings = get_settings()
    assert settings.server.host == "127.0.0.1"
    assert settings.server.port == 8100
    assert settings.security.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.data.data_dir == tmp_path / "from-file"


def test_default_database_is_sqlite_in_data_dir(tmp_path, monkeypatch):
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "absent.json"))
    monkeypatch.setenv("DATA_DIR", str(tmp_path))

    settings = get_settings()
    assert settings.database.url is None
    assert settings.database_url == f"sqlite+aiosqlite:///{Path(tmp_path) / 'bepo.db'}"


@pytest.mark.parametrize(
    "raw,expected",
    [
        ("postgres://u:p@db/bepo", "postgresql+asyncpg://u:p@db/bepo"),
        ("postgresql://u:p@db/bepo?sslmode=require", "postgresql+asyncpg://u:p@db/bepo?sslmode=require"),
        ("postgresql+asyncpg://u:p@db/bepo", "postgresql+asyncpg://u:p@db/bepo"),
        ("", None),
    ],
)
def test_database_url_driver_rewrite(raw, expected):
    assert DatabaseConfig(url=raw).url == expected


def test_invalid_json_raises(tmp_path, monkeypatch):
    config_path = tmp_path / "config.json"
    config_path.write_text("{not json")
    monkeypatch.setenv("CONFIG_PATH", str(config_path))

    with pytest.raises(RuntimeError):
        get_settings()


def test_invalid_values_raise(tmp_path, monkeypatch):
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "absent.json"))
    monkeypatch.setenv("SERVER_PORT", "70000")

    with pytest.raises(RuntimeError):
        get_settings()
