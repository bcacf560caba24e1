"""Login and protected-route tests.

Learn: Covers the request-level token flow - no token, bad token,
expired token, valid token - plus the login credential checks.
"""

import uuid

import pytest

from devsocial.auth.jwt import create_access_token
from conftest import auth_headers, register_user


# ═══════════════════════════════════════════════════════════
# Login
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_login_success(client):
    await register_user(client, email="login@example.com", password="secret1")
    r = await client.post("/api/auth", json={"email": "login@example.com", "password": "secret1"})
    assert r.status_code == 200
    token = r.json()["token"]

    me = await client.get("/api/auth", headers=auth_headers(token))
    assert me.status_code == 200
    assert me.json()["email"] == "login@example.com"


@pytest.mark.asyncio
async def test_login_wrong_password_matches_unknown_email(client):
    """Same 400 body whether the email or the password was wrong."""
    await register_user(client, email="wrong@example.com", password="secret1")

    wrong_pw = await client.post("/api/auth", json={"email": "wrong@example.com", "password": "nope123"})
    unknown = await client.post("/api/auth", json={"email": "nobody@example.com", "password": "secret1"})

    expected = {"errors": [{"msg": "Invalid Credentials"}]}
    assert wrong_pw.status_code == 400
    assert unknown.status_code == 400
    assert wrong_pw.json() == expected
    assert unknown.json() == expected


@pytest.mark.asyncio
async def test_login_validation(client):
    r = await client.post("/api/auth", json={"email": "bad", "password": ""})
    assert r.status_code == 400
    assert {e["msg"] for e in r.json()["errors"]} == {
        "Please include a valid email",
        "Password is required",
    }


# ═══════════════════════════════════════════════════════════
# Token verification on protected routes
# ═══════════════════════════════════════════════════════════


@pytest.mark.asyncio
async def test_no_token_rejected(client):
    r = await client.get("/api/auth")
    assert r.status_code == 401
    assert r.json() == {"msg": "No token, authorization denied"}


@pytest.mark.asyncio
async def test_no_token_never_reaches_handler(client):
    """A post create without a token must not create anything."""
    r = await client.post("/api/posts", json={"text": "hello"})
    assert r.status_code == 401

    token = await register_user(client)
    posts = await client.get("/api/posts", headers=auth_headers(token))
    assert posts.json() == []


@pytest.mark.asyncio
async def test_tampered_and_expired_tokens_same_message(client, settings):
    token = await register_user(client)
    header, _, signature = token.split(".")
    other = create_access_token(str(uuid.uuid4()), secret="attacker", expires_seconds=60)
    tampered = ".".join([header, other.split(".")[1], signature])

    expired = create_access_token(
        str(uuid.uuid4()), secret=settings.jwt_secret, expires_seconds=-5
    )

    r1 = await client.get("/api/auth", headers=auth_headers(tampered))
    r2 = await client.get("/api/auth", headers=auth_headers(expired))
    assert r1.status_code == r2.status_code == 401
    assert r1.json() == r2.json() == {"msg": "Token is not valid"}


@pytest.mark.asyncio
async def test_valid_token_for_deleted_user_is_404(client, settings):
    """The verifier trusts the signature; the handler finds no user."""
    token = create_access_token(
        str(uuid.uuid4()), secret=settings.jwt_secret, expires_seconds=60
    )
    r = await client.get("/api/auth", headers=auth_headers(token))
    assert r.status_code == 404
    assert r.json() == {"msg": "User not found"}
