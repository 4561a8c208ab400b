"""
Shared fixtures: an isolated SQLite database per test, settings pointing at
it, an application built from those settings and clients for it.
"""
import pytest
import pytest_asyncio
from fastapi.testclient import TestClient

from trip_planner.config.settings import (
    Settings,
    DatabaseSettings,
    SecuritySettings,
    FlightLookupSettings,
)
from trip_planner.core.db import create_engine, create_sessionmaker, create_schema
from trip_planner.main import create_app

APP_PASSWORD = "secret"
AUTH_HEADERS = {"X-App-Password": APP_PASSWORD}


@pytest.fixture
def database_url(tmp_path):
    return f"sqlite+aiosqlite:///{tmp_path / 'trips.db'}"


@pytest.fixture
def settings(database_url):
    return Settings(
        environment="testing",
        log_format="text",
        database=DatabaseSettings(url=database_url, auto_create_schema=True),
        security=SecuritySettings(app_password=APP_PASSWORD, allowed_origin=""),
        flight_lookup=FlightLookupSettings(access_key=None),
    )


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app, headers=AUTH_HEADERS) as test_client:
        yield test_client


@pytest.fixture
def anon_client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def trip(client):
    """A three-day Kyoto trip created through the API."""
    r = client.post("/api/trips", json={
        "title": "Kyoto",
        "destination": "Kyoto",
        "startDate": "2026-04-10",
        "endDate": "2026-04-12",
        "currency": "JPY",
    })
    assert r.status_code == 200, r.text
    return r.json()


@pytest_asyncio.fixture
async def db_session(database_url):
    engine = create_engine(DatabaseSettings(url=database_url))
    await create_schema(engine)
    sessionmaker = create_sessionmaker(engine)
    async with sessionmaker() as session:
        yield session
    await engine.dispose()
