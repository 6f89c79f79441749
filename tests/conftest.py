"""
Pytest configuration and fixtures.
Ensures each test uses its own SQLite database and a fixed "today".
"""

import asyncio
import os
from datetime import date
from typing import Optional

import pytest

# Set test configuration BEFORE importing the application.
# The default engine is never used by tests; each test gets a database under tmp_path.
os.environ["DATABASE_URL"] = "sqlite+aiosqlite://"
os.environ["ADMIN_UIDS"] = '["admin-1"]'
os.environ["COLLISION_CHECK_MINUTES"] = "0"
os.environ["SEED_INVENTORY"] = "true"
os.environ["DEBUG"] = "false"

# A Wednesday after the booking floor; the next game night is 2026-03-10
TODAY = date(2026, 3, 4)


def auth(uid: str) -> dict:
    """Authorization header for a test identity."""
    return {"Authorization": f"Bearer {uid}"}


def _sqlite_url(path) -> str:
    return f"sqlite+aiosqlite:///{path}"


@pytest.fixture
def frozen_today(monkeypatch):
    """Pin the service's notion of today."""
    from gamenight.core import dates

    monkeypatch.setattr(dates, "today", lambda timezone=None: TODAY)
    return TODAY


@pytest.fixture
def client(frozen_today, tmp_path, monkeypatch):
    """Create a test client on a fresh database with seeded inventory."""
    from fastapi import Header, HTTPException
    from fastapi.testclient import TestClient

    from gamenight import main
    from gamenight.api.deps import get_identity
    from gamenight.core.database import build_engine, build_session_factory
    from gamenight.schemas import Identity

    async def fake_identity(authorization: Optional[str] = Header(default=None)) -> Identity:
        # The bearer token doubles as the uid
        if not authorization:
            raise HTTPException(status_code=401, detail="Sign in required")
        uid = authorization.split()[-1]
        return Identity(
            uid=uid,
            email=f"{uid}@example.com",
            display_name=uid.replace("-", " ").title(),
        )

    engine = build_engine(_sqlite_url(tmp_path / "api.db"))
    monkeypatch.setattr(main, "engine", engine)
    monkeypatch.setattr(main, "AsyncSessionLocal", build_session_factory(engine))

    main.app.dependency_overrides[get_identity] = fake_identity
    with TestClient(main.app) as test_client:
        yield test_client
    main.app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    """Headers of the bootstrap admin."""
    headers = auth("admin-1")
    client.get("/members/me", headers=headers)
    return headers


@pytest.fixture
def approve(client, admin_headers):
    """Return a helper that signs a uid in and has the admin approve them."""

    def _approve(uid: str) -> dict:
        headers = auth(uid)
        client.get("/members/me", headers=headers)
        response = client.patch(f"/members/{uid}", json={"role": "member"}, headers=admin_headers)
        assert response.status_code == 200
        return headers

    return _approve


@pytest.fixture
def member_headers(approve):
    """Headers of an approved member named "Member 1"."""
    return approve("member-1")


@pytest.fixture
def store(tmp_path):
    """A document store on its own SQLite database."""
    from gamenight.core.database import build_engine, build_session_factory, init_db
    from gamenight.services.document_store import DocumentStore

    engine = build_engine(_sqlite_url(tmp_path / "store.db"))
    asyncio.run(init_db(engine))
    return DocumentStore(build_session_factory(engine))


@pytest.fixture
def fail_commits(monkeypatch):
    """Return a switch that makes every session commit fail from then on."""
    from sqlalchemy.exc import OperationalError
    from sqlalchemy.ext.asyncio import AsyncSession

    async def failing_commit(self):
        raise OperationalError("COMMIT", {}, Exception("database is locked"))

    def _enable():
        monkeypatch.setattr(AsyncSession, "commit", failing_commit)

    return _enable
