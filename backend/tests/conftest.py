import sys
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from bepo.core import settings as settings_module


@pytest.fixture()
def client(tmp_path, monkeypatch):
    monkeypatch.setenv("CONFIG_PATH", str(tmp_path / "config.json"))
    monkeypatch.setenv("DATA_DIR", str(tmp_path))
    monkeypatch.setenv("DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'bepo-test.db'}")
    settings_module.get_settings.cache_clear()

    from bepo.main import app

    # Context manager runs startup (tables) and keeps a single event loop
    with TestClient(app) as test_client:
        yield test_client
    settings_module.get_settings.cache_clear()
