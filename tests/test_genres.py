from bson import ObjectId

from database import create_document
from schemas import Genre


# --- GET /api/genres ---

def test_list_genres_sorted_by_name(client, db):
    create_document(db, "genre", Genre(name="Thriller"))
    create_document(db, "genre", Genre(name="Action"))
    resp = client.get("/api/genres")
    assert resp.status_code == 200
    assert [g["name"] for g in resp.json()] == ["Action", "Thriller"]


def test_list_genres_is_repeatable(client, genre):
    first = client.get("/api/genres").json()
    second = client.get("/api/genres").json()
    assert first == second


# --- GET /api/genres/{id} ---

def test_get_genre(client, genre):
    resp = client.get(f"/api/genres/{genre['_id']}")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Comedy"
    assert resp.json()["id"] == str(genre["_id"])


def test_get_genre_malformed_id(client):
    resp = client.get("/api/genres/1")
    assert resp.status_code == 404


def test_get_genre_unknown_id(client):
    resp = client.get(f"/api/genres/{ObjectId()}")
    assert resp.status_code == 404


# --- POST /api/genres ---

def test_create_genre_requires_token(client):
    resp = client.post("/api/genres", json={"name": "genre1"})
    assert resp.status_code == 401


def test_create_genre_rejects_bad_token(client):
    resp = client.post("/api/genres", json={"name": "genre1"}, headers={"x-auth-token": "a"})
    assert resp.status_code == 401


def test_create_genre_name_too_short(client, user_headers):
    resp = client.post("/api/genres", json={"name": "1234"}, headers=user_headers)
    assert resp.status_code == 400
    assert '"name"' in resp.json()["detail"]


def test_create_genre_name_too_long(client, user_headers):
    resp = client.post("/api/genres", json={"name": "a" * 51}, headers=user_headers)
    assert resp.status_code == 400


def test_create_genre(client, db, user_headers):
    resp = client.post("/api/genres", json={"name": "genre1"}, headers=user_headers)
    assert resp.status_code == 200
    body = resp.json()
    assert body["name"] == "genre1"
    assert db["genre"].find_one({"_id": ObjectId(body["id"])}) is not None


def test_create_genre_duplicate_name(client, genre, user_headers):
    resp = client.post("/api/genres", json={"name": "Comedy"}, headers=user_headers)
    assert resp.status_code == 400


# --- PUT /api/genres/{id} ---

def test_update_genre_requires_token(client, genre):
    resp = client.put(f"/api/genres/{genre['_id']}", json={"name": "updated"})
    assert resp.status_code == 401


def test_update_genre_malformed_id(client, user_headers):
    resp = client.put("/api/genres/1", json={"name": "updated"}, headers=user_headers)
    assert resp.status_code == 404


def test_update_genre_unknown_id(client, user_headers):
    resp = client.put(f"/api/genres/{ObjectId()}", json={"name": "updated"}, headers=user_headers)
    assert resp.status_code == 404


def test_update_genre_invalid_body(client, genre, user_headers):
    resp = client.put(f"/api/genres/{genre['_id']}", json={"name": "1234"}, headers=user_headers)
    assert resp.status_code == 400


def test_update_genre(client, db, genre, user_headers):
    resp = client.put(f"/api/genres/{genre['_id']}", json={"name": "updated"}, headers=user_headers)
    assert resp.status_code == 200
    assert resp.json()["name"] == "updated"
    assert db["genre"].find_one({"_id": genre["_id"]})["name"] == "updated"


# --- DELETE /api/genres/{id} ---

def test_delete_genre_requires_token(client, genre):
    resp = client.delete(f"/api/genres/{genre['_id']}")
    assert resp.status_code == 401


def test_delete_genre_requires_admin(client, genre, user_headers):
    resp = client.delete(f"/api/genres/{genre['_id']}", headers=user_headers)
    assert resp.status_code == 403


def test_delete_genre_malformed_id(client, admin_headers):
    resp = client.delete("/api/genres/1", headers=admin_headers)
    assert resp.status_code == 404


def test_delete_genre_unknown_id(client, admin_headers):
    resp = client.delete(f"/api/genres/{ObjectId()}", headers=admin_headers)
    assert resp.status_code == 404


def test_delete_genre(client, db, genre, admin_headers):
    resp = client.delete(f"/api/genres/{genre['_id']}", headers=admin_headers)
    assert resp.status_code == 200
    assert resp.json()["id"] == str(genre["_id"])
    assert resp.json()["name"] == "Comedy"
    assert db["genre"].find_one({"_id": genre["_id"]}) is None
