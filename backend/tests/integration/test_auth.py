import pytest


@pytest.mark.asyncio
async def test_register_login_verify(client):
    reg = await client.post("/api/register", json={"email": "A@Example.com", "password": "secret123"})
    assert reg.status_code == 201, reg.text
    body = reg.json()
    assert body["user"]["email"] == "a@example.com"
    assert body["user"]["userId"]

    login = await client.post("/api/login", json={"email": "a@example.com", "password": "secret123"})
    assert login.status_code == 200
    assert login.json()["user"] == {"email": "a@example.com"}

    verify = await client.post("/api/verify", json={"token": login.json()["token"]})
    assert verify.status_code == 200
    assert verify.json() == {"valid": True, "user": {"email": "a@example.com"}}


@pytest.mark.asyncio
async def test_register_errors(client, registered):
    dup = await client.post("/api/register", json={"email": "player@example.com", "password": "secret123"})
    assert dup.status_code == 409
    assert dup.json() == {"error": "User already exists"}

    short = await client.post("/api/register", json={"email": "b@example.com", "password": "123"})
    assert short.status_code == 400
    assert "at least 6" in short.json()["error"]

    missing = await client.post("/api/register", json={"email": "b@example.com"})
    assert missing.status_code == 400
    assert missing.json() == {"error": "Email and password are required"}


@pytest.mark.asyncio
async def test_login_with_wrong_password(client, registered):
    resp = await client.post("/api/login", json={"email": "player@example.com", "password": "nope-nope"})
    assert resp.status_code == 401
    assert resp.json() == {"error": "Invalid email or password"}


@pytest.mark.asyncio
async def test_verify_rejects_garbage(client):
    resp = await client.post("/api/verify", json={"token": "garbage"})
    assert resp.status_code == 401
    assert resp.json() == {"valid": False, "error": "Invalid or expired token"}

    missing = await client.post("/api/verify", json={})
    assert missing.status_code == 400
