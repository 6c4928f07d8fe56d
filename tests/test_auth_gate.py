"""
Feature: Bearer token gate on protected endpoints
  As the API
  I want every protected request to carry a valid bearer token
  So that handlers always know who the caller is

Scenario: No Authorization header
  When a protected endpoint is called without a token
  Then the system returns 401 "Access denied. No token provided."

Scenario: Header without Bearer prefix
  When the token is sent without the "Bearer " prefix
  Then the system returns 401 "Access denied. No token provided."

Scenario: Invalid token
  When an expired or tampered token is sent
  Then the system returns 401 "Token is not valid."

Scenario: Valid token
  When a valid token is sent
  Then the caller's identity is passed to the handler

Scenario: Ownership guard
  Given an authenticated user
  When they act on a resource owned by someone else
  Then the system returns 401 "User not authorized"

Scenario: Stored passwords
  When the same password is hashed twice
  Then the stored values differ (salted) and both verify
"""

import hashlib
from datetime import datetime, timedelta, timezone

import jwt as pyjwt
import pytest
from fastapi import HTTPException
from helpers.auth import get_current_user, hash_password, require_owner, verify_password
from helpers.errors import Forbidden, Unauthenticated
from helpers.tokens import issue
from settings import get_settings


@pytest.mark.asyncio
async def test_missing_header_rejected():
    with pytest.raises(Unauthenticated) as exc_info:
        await get_current_user(authorization=None)

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Access denied. No token provided."


@pytest.mark.asyncio
async def test_header_without_bearer_prefix_rejected():
    token = issue("user_abc", "alice")

    with pytest.raises(Unauthenticated) as exc_info:
        await get_current_user(authorization=token)

    assert exc_info.value.detail == "Access denied. No token provided."


@pytest.mark.asyncio
async def test_expired_token_rejected():
    token = issue("user_abc", "alice", issued_at=datetime.now(timezone.utc) - timedelta(hours=2))

    with pytest.raises(Unauthenticated) as exc_info:
        await get_current_user(authorization=f"Bearer {token}")

    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "Token is not valid."


@pytest.mark.asyncio
async def test_valid_token_returns_claim():
    token = issue("user_abc", "alice")

    claim = await get_current_user(authorization=f"Bearer {token}")

    assert claim.user_id == "user_abc"
    assert claim.username == "alice"


def test_protected_endpoint_without_token(client):
    response = client.get("/api/notes")

    assert response.status_code == 401
    assert response.json()["detail"] == "Access denied. No token provided."


def test_protected_endpoint_with_garbage_token(client):
    response = client.get("/api/notes", headers={"Authorization": "Bearer garbage"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token is not valid."


def test_chat_history_requires_token(client):
    assert client.get("/messages").status_code == 401
    assert client.get("/users").status_code == 401


@pytest.mark.asyncio
async def test_require_owner_allows_owner():
    claim = await get_current_user(authorization=f"Bearer {issue('user_abc', 'alice')}")

    require_owner(claim, "user_abc")


@pytest.mark.asyncio
async def test_require_owner_rejects_other_user():
    claim = await get_current_user(authorization=f"Bearer {issue('user_bob', 'bob')}")

    with pytest.raises(Forbidden) as exc_info:
        require_owner(claim, "user_abc")

    assert isinstance(exc_info.value, HTTPException)
    assert exc_info.value.status_code == 401
    assert exc_info.value.detail == "User not authorized"


def test_malformed_identity_in_signed_token_is_401(client):
    now = datetime.now(timezone.utc)
    token = pyjwt.encode(
        {
            "user": {"id": 123, "username": "alice"},
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(hours=1)).timestamp()),
        },
        get_settings().jwt_secret,
        algorithm="HS256",
    )

    response = client.get("/api/notes", headers={"Authorization": f"Bearer {token}"})

    assert response.status_code == 401
    assert response.json()["detail"] == "Token is not valid."


def test_password_hash_is_salted():
    first = hash_password("secret1")
    second = hash_password("secret1")

    assert first != second
    assert "secret1" not in first
    assert verify_password("secret1", first)
    assert verify_password("secret1", second)
    assert not verify_password("secret2", first)


def test_unsalted_legacy_hash_is_not_accepted():
    legacy = hashlib.sha256(b"secret1").hexdigest()

    assert not verify_password("secret1", legacy)
