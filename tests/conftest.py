from collections.abc import Iterator
from datetime import datetime
from pathlib import Path

import pytest
from fastapi.testclient import TestClient

from src.adapters.clock import FixedClock
from src.adapters.sqlite.migrator import SQLiteMigrator
from src.api.deps import get_clock, get_rules, get_settings
from src.api.main import app

PROJECT_ROOT = Path(__file__).parent.parent
MIGRATIONS_DIR = str(PROJECT_ROOT / "migrations")
RULES_PATH = PROJECT_ROOT / "rules.yaml"

NOW = datetime(2025, 1, 15, 12, 0, 0)


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock(NOW)


@pytest.fixture
def db_path(tmp_path: Path) -> str:
    """
    Path of a freshly migrated SQLite database.
    """
    path = str(tmp_path / "distributor.db")
    SQLiteMigrator(path, MIGRATIONS_DIR).run_migrations()
    return path


@pytest.fixture
def client(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch, clock: FixedClock
) -> Iterator[TestClient]:
    """
    API client over a temporary data directory.

    The lifespan handler runs the real migrations; the clock is frozen at NOW.
    """
    monkeypatch.setenv("DISTRIBUTOR_DATA_DIR", str(tmp_path / "data"))
    monkeypatch.setenv("DISTRIBUTOR_RULES_PATH", str(RULES_PATH))
    monkeypatch.setenv("DISTRIBUTOR_MIGRATIONS_DIR", MIGRATIONS_DIR)
    get_settings.cache_clear()
    get_rules.cache_clear()
    app.dependency_overrides[get_clock] = lambda: clock

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()
    get_settings.cache_clear()
    get_rules.cache_clear()


@pytest.fixture
def distributor_id(client: TestClient) -> str:
    response = client.post(
        "/api/v1/distributors",
        json={"name": "Acme Distribution", "tax_id": "ACME-001", "city": "Lisbon"},
    )
    assert response.status_code == 201, response.text
    return str(response.json()["id"])
