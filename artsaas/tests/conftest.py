# artsaas/tests/conftest.py
"""
Fixtures and helpers for end-to-end tests with FastAPI + pytest-asyncio.
Each test gets its own in-memory Mongo database (mongomock), installed
before the app lifespan starts and dropped when it ends.
"""
import sys
import uuid
from pathlib import Path

import mongomock
import pytest_asyncio
from httpx import AsyncClient, ASGITransport
from asgi_lifespan import LifespanManager

# ---- make absolute 'artsaas.*' imports work without an install ----
ROOT_DIR = Path(__file__).resolve().parents[1]   # .../artsaas
sys.path.insert(0, str(ROOT_DIR.parent))

from artsaas.main import app  # noqa: E402
from artsaas.db import mongo  # noqa: E402
from artsaas.core.security import create_jwt  # noqa: E402

PASSWORD = "Secreta123!"


@pytest_asyncio.fixture
async def async_client():
    mongo.use_database(mongomock.MongoClient(), f"artsaas_test_{uuid.uuid4().hex[:8]}")
    async with LifespanManager(app):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://testserver") as client:
            yield client


# -------- Helpers --------
async def _register(client: AsyncClient, *, role: str = "guest"):
    email = f"test_{uuid.uuid4().hex[:8]}@example.com"
    payload = {
        "email": email, "password": PASSWORD,
        "first_name": "Ada", "last_name": "Test", "role": role,
    }
    r = await client.post("/auth/register", json=payload)
    assert r.status_code in (200, 201), r.text
    return r.json()


async def _login(client: AsyncClient, email: str):
    r = await client.post("/auth/login", json={"email": email, "password": PASSWORD})
    assert r.status_code == 200, r.text
    token = r.json()["access_token"]
    return {"Authorization": f"Bearer {token}"}


async def _auth(client: AsyncClient, role: str):
    user = await _register(client, role=role)
    headers = await _login(client, user["email"])
    return {"id": user["_id"], "email": user["email"], "headers": headers}


@pytest_asyncio.fixture
async def guest_auth(async_client: AsyncClient):
    return await _auth(async_client, "guest")


@pytest_asyncio.fixture
async def artist_auth(async_client: AsyncClient):
    return await _auth(async_client, "artist")


@pytest_asyncio.fixture
async def volunteer_auth(async_client: AsyncClient):
    return await _auth(async_client, "volunteer")


@pytest_asyncio.fixture
async def admin_headers():
    # admins are provisioned out of band, a signed token is enough here
    token = create_jwt({"sub": "admin-1", "role": "admin"})
    return {"Authorization": f"Bearer {token}"}
