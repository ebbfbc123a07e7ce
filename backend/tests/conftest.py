"""
Campus Portal Backend: Test Configuration (conftest.py)
========================================================

What:  Shared pytest fixtures for the test suite.
How:   pytest auto-discovers conftest.py and makes fixtures available to all tests.

Fixtures:
    ├── test_settings:   Settings built without config.env
    ├── stub_router:     Factory for routers that answer with their own name
    ├── client_factory:  Factory for HTTPX AsyncClients bound to an app
    └── mock_db_session: Mock async database session (no real DB needed)
"""

import os

# Must happen before any portal import: the settings singleton and the
# engine are built at import time.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///./test.db"
os.environ["LOG_LEVEL"] = "WARNING"
for _name in ("PORT", "HOST", "BASE_PATH", "CORS_ORIGINS"):
    os.environ.pop(_name, None)

from unittest.mock import AsyncMock, MagicMock

import pytest
from fastapi import APIRouter, Request
from httpx import AsyncClient, ASGITransport

from portal.config import Settings


@pytest.fixture
def test_settings() -> Settings:
    """Default settings, ignoring any config.env in the working directory."""
    return Settings(_env_file=None)


@pytest.fixture
def stub_router():
    """
    Build a router standing in for an external route group.

    Usage:
        router = stub_router("student")            # GET /whoami → {"stub": "student"}
        router = stub_router("common", "/c-whoami")
    """

    def _make(name: str, path: str = "/whoami") -> APIRouter:
        router = APIRouter()

        @router.get(path)
        async def whoami(request: Request):
            return {"stub": name, "path": request.url.path}

        return router

    return _make


@pytest.fixture
def client_factory():
    """
    Build an AsyncClient that talks to an app through ASGITransport.

    ASGITransport does not run the lifespan, so no database connect is
    attempted by endpoint tests.

    Usage:
        async with client_factory(app) as client:
            response = await client.get("/")
    """

    def _make(app, raise_app_exceptions: bool = True) -> AsyncClient:
        transport = ASGITransport(app=app, raise_app_exceptions=raise_app_exceptions)
        return AsyncClient(transport=transport, base_url="http://test")

    return _make


@pytest.fixture
def mock_db_session():
    """A MagicMock that simulates AsyncSession behavior."""
    session = AsyncMock()
    session.execute = AsyncMock()
    session.commit = AsyncMock()
    session.rollback = AsyncMock()
    session.close = AsyncMock()
    session.add = MagicMock()
    return session
