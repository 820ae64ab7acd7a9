from datetime import timedelta

from bson import ObjectId
from fastapi.testclient import TestClient

from config import Settings
from database import create_document
from main import create_app
from schemas import User
from security import create_access_token, decode_access_token, hash_password


def _register(client, email="user1@example.com", password="secret1"):
    return client.post("/api/users", json={"name": "user1", "email": email, "password": password})


# --- POST /api/users ---

def test_register_user(client, db, settings):
    resp = _register(client)
    assert resp.status_code == 200
    body = resp.json()
    assert body["email"] == "user1@example.com"
    assert "password" not in body
    identity = decode_access_token(settings, resp.headers["x-auth-token"])
    assert identity.id == body["id"]
    assert identity.is_admin is False
    stored = db["user"].find_one({"_id": ObjectId(body["id"])})
    assert stored["password"] != "secret1"


def test_register_duplicate_email(client):
    _register(client)
    resp = _register(client)
    assert resp.status_code == 400


def test_register_invalid_email(client):
    resp = _register(client, email="not-an-email")
    assert resp.status_code == 400


def test_register_short_password(client):
    resp = _register(client, password="1234")
    assert resp.status_code == 400


# --- GET /api/users/me ---

def test_me_requires_token(client):
    assert client.get("/api/users/me").status_code == 401


def test_me(client):
    token = _register(client).headers["x-auth-token"]
    resp = client.get("/api/users/me", headers={"x-auth-token": token})
    assert resp.status_code == 200
    assert resp.json()["name"] == "user1"
    assert "password" not in resp.json()


def test_me_for_deleted_user(client, make_token):
    resp = client.get("/api/users/me", headers={"x-auth-token": make_token()})
    assert resp.status_code == 404


# --- POST /api/auth ---

def test_login(client, settings):
    user_id = _register(client).json()["id"]
    resp = client.post("/api/auth", json={"email": "user1@example.com", "password": "secret1"})
    assert resp.status_code == 200
    identity = decode_access_token(settings, resp.text)
    assert identity.id == user_id
    assert identity.name == "user1"


def test_login_wrong_password(client):
    _register(client)
    resp = client.post("/api/auth", json={"email": "user1@example.com", "password": "wrong-password"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid email or password."


def test_login_unknown_email(client):
    resp = client.post("/api/auth", json={"email": "nobody@example.com", "password": "secret1"})
    assert resp.status_code == 400
    assert resp.json()["detail"] == "Invalid email or password."


def test_login_missing_password(client):
    resp = client.post("/api/auth", json={"email": "user1@example.com"})
    assert resp.status_code == 400


def test_admin_token_from_login(client, db, settings):
    create_document(db, "user", User(
        name="admin", email="admin@example.com", password=hash_password("admin123"), is_admin=True,
    ))
    resp = client.post("/api/auth", json={"email": "admin@example.com", "password": "admin123"})
    assert resp.status_code == 200
    assert decode_access_token(settings, resp.text).is_admin is True


def test_expired_token_is_rejected(client, settings):
    token = create_access_token(settings, {"_id": ObjectId(), "name": "x"}, expires_delta=timedelta(minutes=-1))
    resp = client.post("/api/genres", json={"name": "genre1"}, headers={"x-auth-token": token})
    assert resp.status_code == 401


def test_token_signed_with_other_secret_is_rejected(client):
    other = Settings(secret_key="another-secret")
    token = create_access_token(other, {"_id": ObjectId(), "name": "x"})
    resp = client.post("/api/genres", json={"name": "genre1"}, headers={"x-auth-token": token})
    assert resp.status_code == 401


# --- bootstrap admin ---

def test_bootstrap_admin_created_on_startup(db):
    settings = Settings(secret_key="test-secret", admin_email="root@example.com", admin_password="rootpass")
    with TestClient(create_app(settings, db=db)) as c:
        resp = c.post("/api/auth", json={"email": "root@example.com", "password": "rootpass"})
        assert resp.status_code == 200
        assert decode_access_token(settings, resp.text).is_admin is True
    assert db["user"].count_documents({"email": "root@example.com"}) == 1
