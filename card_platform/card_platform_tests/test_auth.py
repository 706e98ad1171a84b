from datetime import datetime, timedelta, timezone

import jwt
import pytest

from card_service.auth import TokenIssuer
from card_service.models import User
from .conftest import TEST_SECRET


def test_register_returns_user_without_password(client):
    response = client.post("/register", json={"username": "alice", "password": "secret1"})
    assert response.status_code == 200
    body = response.json()
    assert body["message"] == "User registered"
    assert body["user"]["username"] == "alice"
    assert isinstance(body["user"]["id"], int)
    assert "password" not in body["user"]


def test_register_stores_hash_not_password(client, app):
    client.post("/register", json={"username": "alice", "password": "secret1"})

    db = app.state.session_factory()
    try:
        user = db.query(User).filter(User.username == "alice").first()
        assert user is not None
        assert user.password != "secret1"
        assert user.password.startswith("$2b$10$")
    finally:
        db.close()


def test_register_duplicate_username_fails(client, register_user):
    register_user("alice", "secret1")

    response = client.post("/register", json={"username": "alice", "password": "other"})
    assert response.status_code == 500
    assert response.json()["error"]


def test_register_missing_fields(client):
    response = client.post("/register", json={"username": "bob"})
    assert response.status_code == 422
    assert "password" in response.json()["error"]


def test_login_flow(client):
    register = client.post("/register", json={"username": "alice", "password": "secret1"})
    assert register.status_code == 200
    assert register.json()["user"]["username"] == "alice"

    bad_login = client.post("/login", json={"username": "alice", "password": "wrong"})
    assert bad_login.status_code == 400
    assert bad_login.json() == {"error": "Invalid password"}

    login = client.post("/login", json={"username": "alice", "password": "secret1"})
    assert login.status_code == 200
    assert login.json()["message"] == "Login successful"
    assert isinstance(login.json()["token"], str)
    assert login.json()["token"]


def test_login_unknown_user(client):
    response = client.post("/login", json={"username": "nobody", "password": "secret1"})
    assert response.status_code == 400
    assert response.json() == {"error": "User not found"}


def test_login_token_claims(client, register_user):
    user = register_user("alice", "secret1")

    before = datetime.now(timezone.utc).replace(microsecond=0)
    token = client.post("/login", json={"username": "alice", "password": "secret1"}).json()["token"]
    after = datetime.now(timezone.utc)

    claims = jwt.decode(token, TEST_SECRET, algorithms=["HS256"])
    assert claims["id"] == user["id"]
    assert claims["username"] == "alice"
    assert claims["exp"] - claims["iat"] == 3600
    assert before.timestamp() <= claims["iat"] <= after.timestamp()


def test_login_token_rejected_with_other_secret(client, register_user):
    register_user("alice", "secret1")
    token = client.post("/login", json={"username": "alice", "password": "secret1"}).json()["token"]

    with pytest.raises(jwt.InvalidSignatureError):
        jwt.decode(token, "another-card-service-secret-98765", algorithms=["HS256"])


def test_me_returns_token_identity(client, register_user):
    user = register_user("alice", "secret1")
    token = client.post("/login", json={"username": "alice", "password": "secret1"}).json()["token"]

    response = client.get("/me", headers={"Authorization": f"Bearer {token}"})
    assert response.status_code == 200
    assert response.json() == {"id": user["id"], "username": "alice"}


def test_me_requires_bearer_token(client):
    response = client.get("/me")
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}

    response = client.get("/me", headers={"Authorization": "Basic abc"})
    assert response.status_code == 401
    assert response.json() == {"error": "Not authenticated"}


def test_me_rejects_forged_and_expired_tokens(client):
    forged = TokenIssuer("another-card-service-secret-98765").issue(1, "alice")
    response = client.get("/me", headers={"Authorization": f"Bearer {forged}"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}

    issued_at = datetime.now(timezone.utc) - timedelta(hours=2)
    expired = TokenIssuer(TEST_SECRET).issue(1, "alice", now=issued_at)
    response = client.get("/me", headers={"Authorization": f"Bearer {expired}"})
    assert response.status_code == 401
    assert response.json() == {"error": "Invalid token"}

    response = client.get("/me", headers={"Authorization": "Bearer not-a-token"})
    assert response.status_code == 401


def test_register_and_login_with_long_password(client):
    password = "x" * 80

    register = client.post("/register", json={"username": "longpw", "password": password})
    assert register.status_code == 200
    assert register.json()["user"]["username"] == "longpw"

    login = client.post("/login", json={"username": "longpw", "password": password})
    assert login.status_code == 200
    assert login.json()["token"]


def test_error_bodies_documented(app):
    schema = app.openapi()
    login_responses = schema["paths"]["/login"]["post"]["responses"]
    assert login_responses["400"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
    assert "500" in schema["paths"]["/register"]["post"]["responses"]
    assert "401" in schema["paths"]["/me"]["get"]["responses"]
