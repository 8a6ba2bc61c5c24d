"""
Shared fixtures: an in-memory Supabase, two users, and an HTTP client whose
bearer tokens are real HS256 JWTs.
"""

import time
from typing import Any, Dict

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.core.database import get_db
from app.core.security import JwtIdentityProvider, get_identity_provider
from app.main import app
from app.models.user import AuthenticatedUser
from app.services.db_client import SupabaseDBClient
from supabase_fake import FakeSupabaseClient

JWT_SECRET = "test-secret-with-enough-length-for-hs256"
ALICE_ID = "11111111-1111-1111-1111-111111111111"
BOB_ID = "22222222-2222-2222-2222-222222222222"


def make_token(user_id: str, email: str = None, secret: str = JWT_SECRET, **claims: Any) -> str:
    payload: Dict[str, Any] = {
        "sub": user_id,
        "aud": "authenticated",
        "role": "authenticated",
        "exp": int(time.time()) + 3600,
    }
    if email:
        payload["email"] = email
    payload.update(claims)
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def fake_supabase() -> FakeSupabaseClient:
    return FakeSupabaseClient()


@pytest.fixture
def db(fake_supabase) -> SupabaseDBClient:
    return SupabaseDBClient(fake_supabase)


@pytest.fixture
def alice() -> AuthenticatedUser:
    return AuthenticatedUser(id=ALICE_ID, email="alice@example.com")


@pytest.fixture
def bob() -> AuthenticatedUser:
    return AuthenticatedUser(id=BOB_ID, email="bob@example.com")


@pytest.fixture
def alice_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(ALICE_ID, 'alice@example.com')}"}


@pytest.fixture
def bob_headers() -> Dict[str, str]:
    return {"Authorization": f"Bearer {make_token(BOB_ID, 'bob@example.com')}"}


@pytest.fixture
def client(db):
    app.dependency_overrides[get_db] = lambda: db
    app.dependency_overrides[get_identity_provider] = lambda: JwtIdentityProvider(JWT_SECRET)
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()
