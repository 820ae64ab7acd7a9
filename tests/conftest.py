"""Shared fixtures: an app wired to an in-memory MongoDB and token helpers."""

import mongomock
import pytest
from bson import ObjectId
from fastapi.testclient import TestClient

from config import Settings
from database import create_document, get_document_by_id
from main import create_app
from schemas import Customer, Genre, GenreSnapshot, Movie
from security import create_access_token


@pytest.fixture
def settings():
    return Settings(secret_key="test-secret", database_name="vidly_test")


@pytest.fixture
def db():
    return mongomock.MongoClient()["vidly_test"]


@pytest.fixture
def client(settings, db):
    app = create_app(settings, db=db)
    with TestClient(app) as c:
        yield c


@pytest.fixture
def make_token(settings):
    def _make(is_admin=False, user_id=None, name="tester"):
        user = {"_id": user_id or ObjectId(), "name": name, "isAdmin": is_admin}
        return create_access_token(settings, user)
    return _make


@pytest.fixture
def user_headers(make_token):
    return {"x-auth-token": make_token()}


@pytest.fixture
def admin_headers(make_token):
    return {"x-auth-token": make_token(is_admin=True)}


@pytest.fixture
def genre(db):
    new_id = create_document(db, "genre", Genre(name="Comedy"))
    return get_document_by_id(db, "genre", new_id)


@pytest.fixture
def customer(db):
    new_id = create_document(db, "customer", Customer(name="customer1", phone="12345"))
    return get_document_by_id(db, "customer", new_id)


@pytest.fixture
def movie(db, genre):
    new_id = create_document(
        db,
        "movie",
        Movie(title="movie1", genre=GenreSnapshot.model_validate(genre), number_in_stock=10, daily_rental_rate=2),
    )
    return get_document_by_id(db, "movie", new_id)
