"""Users Route — verifies creation, validation and error mapping over HTTP.

Invariants:
    - 201 with id, username, email, created_at, never the password
    - Malformed JSON / missing fields → 400 VALIDATION_ERROR
    - Duplicate username or email → 409 CONFLICT
    - UnavailableError → 503 with Retry-After; InternalError → 500 without detail
    - Neither the submitted password nor its hash appears in any response body
"""

import pytest
from sqlalchemy import func, select

from social.api.dependencies import get_storage
from social.core.errors import InternalError, UnavailableError
from social.core.passwords import verify_password
from social.models.user import User

PASSWORD = "s3cret-Passw0rd"
VALID_BODY = {"username": "alice", "email": "alice@example.com", "password": PASSWORD}


def assert_no_password(res, password=PASSWORD):
    assert password not in res.text
    body = res.json()
    assert "password" not in body


async def test_create_user_returns_201(client):
    res = await client.post("/v1/users", json=VALID_BODY)
    assert res.status_code == 201
    data = res.json()
    assert data["id"] > 0
    assert data["username"] == "alice"
    assert data["email"] == "alice@example.com"
    assert data["created_at"]
    assert set(data) == {"id", "username", "email", "created_at"}
    assert_no_password(res)


async def test_create_user_stores_hash_not_plaintext(client, test_db):
    res = await client.post("/v1/users", json=VALID_BODY)
    assert res.status_code == 201

    stored = (await test_db.execute(
        select(User).where(User.username == "alice"),
    )).scalar_one()
    assert stored.password != PASSWORD
    assert verify_password(PASSWORD, stored.password)
    assert stored.password not in res.text


async def test_duplicate_username_returns_409(client, test_db):
    await client.post("/v1/users", json=VALID_BODY)
    res = await client.post(
        "/v1/users",
        json={**VALID_BODY, "email": "other@example.com"},
    )
    assert res.status_code == 409
    error = res.json()["error"]
    assert error["code"] == "CONFLICT"
    assert error["context"]["field"] == "username"
    assert "UNIQUE" not in res.text
    assert_no_password(res)

    count = (await test_db.execute(
        select(func.count()).select_from(User).where(User.username == "alice"),
    )).scalar_one()
    assert count == 1


async def test_duplicate_email_returns_409(client):
    await client.post("/v1/users", json=VALID_BODY)
    res = await client.post(
        "/v1/users",
        json={**VALID_BODY, "username": "alice2"},
    )
    assert res.status_code == 409
    assert res.json()["error"]["context"]["field"] == "email"


async def test_malformed_json_returns_400(client):
    res = await client.post(
        "/v1/users",
        content=b'{"username": "alice", "password": ',
        headers={"Content-Type": "application/json"},
    )
    assert res.status_code == 400
    assert res.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.parametrize("missing", ["username", "email", "password"])
async def test_missing_field_returns_400(client, missing):
    body = {k: v for k, v in VALID_BODY.items() if k != missing}
    res = await client.post("/v1/users", json=body)
    assert res.status_code == 400
    fields = [d["field"] for d in res.json()["error"]["details"]]
    assert f"body.{missing}" in fields
    if missing != "password":
        assert PASSWORD not in res.text


@pytest.mark.parametrize("body", [
    {**VALID_BODY, "username": "   "},
    {**VALID_BODY, "email": "not-an-email"},
    {**VALID_BODY, "password": "q7"},
])
async def test_invalid_field_returns_400_without_echoing_values(client, body):
    res = await client.post("/v1/users", json=body)
    assert res.status_code == 400
    assert body["password"] not in res.text


class FailingUsers:
    def __init__(self, exc):
        self.exc = exc

    async def create(self, user):
        raise self.exc


class FailingStorage:
    def __init__(self, exc):
        self.users = FailingUsers(exc)


async def test_unavailable_store_returns_503(client, app):
    app.dependency_overrides[get_storage] = lambda: FailingStorage(
        UnavailableError("create_user", retry_after_seconds=2),
    )
    res = await client.post("/v1/users", json=VALID_BODY)
    assert res.status_code == 503
    assert res.headers["retry-after"] == "2"
    assert res.json()["error"]["code"] == "SERVICE_UNAVAILABLE"
    assert_no_password(res)


async def test_internal_store_error_returns_500_without_detail(client, app):
    app.dependency_overrides[get_storage] = lambda: FailingStorage(
        InternalError("create_user"),
    )
    res = await client.post("/v1/users", json=VALID_BODY)
    assert res.status_code == 500
    error = res.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert error["message"] == "An unexpected error occurred"
    assert_no_password(res)
