# tests/test_api/conftest.py
import pytest
from fastapi.testclient import TestClient

from api.main import create_app

@pytest.fixture
def client(database):
    """API client bound to the test database"""
    with TestClient(create_app(database)) as test_client:
        yield test_client

@pytest.fixture
def book(client):
    response = client.post("/books", json={"title": "Dune", "author": "Frank Herbert"})
    assert response.status_code == 201
    return response.json()

@pytest.fixture
def user(client):
    response = client.post("/users", json={"name": "Reader", "email": "reader@example.com"})
    assert response.status_code == 201
    return response.json()
