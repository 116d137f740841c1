"""Service test fixtures: per-test SQLite file + FastAPI test client.

Invariants:
    - Every test gets a fresh SQLite database file under tmp_path
    - The app is built by create_app() with explicit Settings (no env leakage)
    - The engine is disposed after each test

Design Decisions:
    - SQLite file over :memory:: pooled connections must see the same database
    - ASGITransport does not run the lifespan, so the fixture disposes the engine itself
"""

import pytest
from httpx import ASGITransport, AsyncClient

from sql_gateway.config import Settings
from sql_gateway.core.domain_types import Statement
from sql_gateway.main import create_app

API_KEY = "test-secret"


@pytest.fixture
def settings(tmp_path):
    return Settings(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'gateway.db'}",
        api_key=API_KEY,
        _env_file=None,
    )


@pytest.fixture
async def app(settings):
    app = create_app(settings)
    yield app
    await app.state.gateway.database.dispose()


@pytest.fixture
def database(app):
    return app.state.gateway.database


@pytest.fixture
async def client(app):
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c


@pytest.fixture
def auth():
    return {"X-API-Key": API_KEY}


@pytest.fixture
async def users_table(database):
    """Create `users` with two rows (ids 1 and 2)."""
    await database.execute(Statement(
        "CREATE TABLE users ("
        "id INTEGER PRIMARY KEY AUTOINCREMENT, "
        "name TEXT NOT NULL, email TEXT UNIQUE, active INTEGER)",
    ))
    await database.execute(Statement(
        "INSERT INTO users (name, email, active) VALUES (?, ?, ?)",
        ("Ada", "ada@example.com", 1),
    ))
    await database.execute(Statement(
        "INSERT INTO users (name, email, active) VALUES (?, ?, ?)",
        ("Grace", "grace@example.com", 0),
    ))
    return "users"
