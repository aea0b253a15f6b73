# tests/conftest.py
import pytest
from fastapi.testclient import TestClient

from product_api.config import Settings
from product_api.main import create_app

API_KEY = "test-key"
AUTH = {"x-api-key": API_KEY}


@pytest.fixture
def app():
    # fresh store per test: nothing leaks between tests
    return create_app(Settings(api_key=API_KEY))


@pytest.fixture
def client(app):
    return TestClient(app)


@pytest.fixture
def authed(app):
    c = TestClient(app)
    c.headers.update(AUTH)
    return c
