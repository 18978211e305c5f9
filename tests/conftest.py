from __future__ import annotations

import sys
from pathlib import Path

import pytest

# Make the catalog package importable during local test runs
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from catalog.core import config as core_config  # noqa: E402
from catalog.db import models  # noqa: E402
from catalog.db import session as db_session  # noqa: E402


def _reset_caches() -> None:
    core_config.get_settings.cache_clear()
    db_session.get_engine.cache_clear()
    db_session._get_sessionmaker.cache_clear()  # type: ignore[attr-defined]


@pytest.fixture()
def temp_db(tmp_path, monkeypatch):
    """Point DATABASE_URL at a throwaway SQLite file with a fresh schema."""
    db_file = tmp_path / "test.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    monkeypatch.setenv("SEED_DEMO_DATA", "0")
    _reset_caches()

    engine = db_session.get_engine()
    models.Base.metadata.drop_all(bind=engine)
    models.Base.metadata.create_all(bind=engine)

    yield db_file

    try:
        models.Base.metadata.drop_all(bind=engine)
    except Exception:
        pass
    try:
        engine.dispose()
    except Exception:
        pass
    _reset_caches()


@pytest.fixture()
def empty_db(tmp_path, monkeypatch):
    """A configured database URL whose schema was never created."""
    db_file = tmp_path / "empty.db"
    monkeypatch.setenv("DATABASE_URL", f"sqlite:///{db_file}")
    _reset_caches()
    yield db_file
    try:
        db_session.get_engine().dispose()
    except Exception:
        pass
    _reset_caches()


@pytest.fixture()
def unconfigured_db(monkeypatch):
    monkeypatch.setenv("DATABASE_URL", "")
    _reset_caches()
    yield
    _reset_caches()
