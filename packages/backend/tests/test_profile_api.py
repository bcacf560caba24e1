"""Profile and experience API tests."""

import uuid

import pytest

from conftest import auth_headers

PROFILE = {
    "status": "Developer",
    "skills": "python, fastapi , sql",
    "company": "Acme",
    "twitter": "https://twitter.com/ana",
}


@pytest.mark.asyncio
async def test_no_profile_yet(client, token):
    r = await client.get("/api/profile/me", headers=auth_headers(token))
    assert r.status_code == 400
    assert r.json() == {"errors": [{"msg": "There is no profile for this user"}]}


@pytest.mark.asyncio
async def test_create_and_update_profile(client, token):
    r = await client.post("/api/profile", json=PROFILE, headers=auth_headers(token))
    assert r.status_code == 200
    profile = r.json()
    assert profile["skills"] == ["python", "fastapi", "sql"]
    assert profile["social"] == {"twitter": "https://twitter.com/ana"}
    assert profile["user"]["name"] == "Ana"

    r = await client.post(
        "/api/profile",
        json={"status": "Senior Developer", "skills": ["go"]},
        headers=auth_headers(token),
    )
    assert r.status_code == 200
    assert r.json()["id"] == profile["id"]
    assert r.json()["status"] == "Senior Developer"
    assert r.json()["skills"] == ["go"]


@pytest.mark.asyncio
async def test_profile_validation(client, token):
    r = await client.post("/api/profile", json={"skills": ""}, headers=auth_headers(token))
    assert r.status_code == 400
    assert {e["msg"] for e in r.json()["errors"]} == {"Status is required", "Skills is required"}


@pytest.mark.asyncio
async def test_public_profile_reads(client, token):
    created = (await client.post("/api/profile", json=PROFILE, headers=auth_headers(token))).json()

    everyone = await client.get("/api/profile")
    assert everyone.status_code == 200
    assert [p["id"] for p in everyone.json()] == [created["id"]]

    one = await client.get(f"/api/profile/user/{created['user_id']}")
    assert one.status_code == 200

    for missing in (str(uuid.uuid4()), "garbage"):
        r = await client.get(f"/api/profile/user/{missing}")
        assert r.status_code == 404
        assert r.json() == {"msg": "Profile not found"}


@pytest.mark.asyncio
async def test_experience_lifecycle(client, token):
    await client.post("/api/profile", json=PROFILE, headers=auth_headers(token))

    bad = await client.put("/api/profile/experience", json={}, headers=auth_headers(token))
    assert bad.status_code == 400
    assert {e["msg"] for e in bad.json()["errors"]} == {
        "Title is required",
        "Company is required",
        "From date is required",
    }

    r = await client.put(
        "/api/profile/experience",
        json={"title": "Engineer", "company": "Acme", "from_date": "2020-01-01"},
        headers=auth_headers(token),
    )
    assert r.status_code == 200
    experience = r.json()["experience"]
    assert experience[0]["title"] == "Engineer"

    missing = await client.delete(
        f"/api/profile/experience/{uuid.uuid4()}", headers=auth_headers(token)
    )
    assert missing.status_code == 404
    assert missing.json() == {"msg": "Experience not found"}

    r = await client.delete(
        f"/api/profile/experience/{experience[0]['id']}", headers=auth_headers(token)
    )
    assert r.status_code == 200
    assert r.json()["experience"] == []


@pytest.mark.asyncio
async def test_experience_is_scoped_to_own_profile(client, token, other_token):
    await client.post("/api/profile", json=PROFILE, headers=auth_headers(token))
    await client.post("/api/profile", json=PROFILE, headers=auth_headers(other_token))
    exp = (
        await client.put(
            "/api/profile/experience",
            json={"title": "Engineer", "company": "Acme", "from_date": "2020-01-01"},
            headers=auth_headers(token),
        )
    ).json()["experience"][0]

    r = await client.delete(
        f"/api/profile/experience/{exp['id']}", headers=auth_headers(other_token)
    )
    assert r.status_code == 404


@pytest.mark.asyncio
async def test_delete_account(client, token, other_token):
    await client.post("/api/profile", json=PROFILE, headers=auth_headers(token))
    post = (
        await client.post("/api/posts", json={"text": "bye"}, headers=auth_headers(token))
    ).json()
    other_post = (
        await client.post("/api/posts", json={"text": "hi"}, headers=auth_headers(other_token))
    ).json()
    await client.put(f"/api/posts/like/{other_post['id']}", headers=auth_headers(token))

    r = await client.delete("/api/profile", headers=auth_headers(token))
    assert r.status_code == 200
    assert r.json() == {"msg": "User deleted"}

    me = await client.get("/api/auth", headers=auth_headers(token))
    assert me.status_code == 404

    posts = (await client.get("/api/posts", headers=auth_headers(other_token))).json()
    assert [p["id"] for p in posts] == [other_post["id"]]
    assert post["id"] not in [p["id"] for p in posts]
    assert posts[0]["likes"] == []


@pytest.mark.asyncio
async def test_deleted_account_token_cannot_write(client, token, other_token):
    """A token that outlives its account gets 400, never an orphan row."""
    other_post = (
        await client.post("/api/posts", json={"text": "hi"}, headers=auth_headers(other_token))
    ).json()
    r = await client.delete("/api/profile", headers=auth_headers(token))
    assert r.status_code == 200

    r = await client.put(f"/api/posts/like/{other_post['id']}", headers=auth_headers(token))
    assert r.status_code == 400
    assert r.json() == {"errors": [{"msg": "User not found"}]}

    r = await client.put(f"/api/posts/unlike/{other_post['id']}", headers=auth_headers(token))
    assert r.status_code == 400

    r = await client.post("/api/profile", json=PROFILE, headers=auth_headers(token))
    assert r.status_code == 400
    assert r.json() == {"errors": [{"msg": "User not found"}]}

    assert (await client.get("/api/profile")).json() == []
    post = (
        await client.get(f"/api/posts/{other_post['id']}", headers=auth_headers(other_token))
    ).json()
    assert post["likes"] == []
