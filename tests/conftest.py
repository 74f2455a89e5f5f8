"""
Shared fixtures: an in-memory SQLite store, a TestClient over the app and an
API client that talks to the app through that TestClient.
"""
import os

os.environ['SQL_DATABASE_URL'] = 'sqlite://'

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402

from userdir.client.api_client import UserApiClient  # noqa: E402
from userdir.db.base import engine  # noqa: E402
from userdir.main import app  # noqa: E402
from userdir.models import Base  # noqa: E402


@pytest.fixture(autouse=True)
def db_tables():
    Base.metadata.drop_all(bind=engine)
    Base.metadata.create_all(bind=engine)
    yield
    app.dependency_overrides.clear()


@pytest.fixture
def client():
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def api(client) -> UserApiClient:
    return UserApiClient(base_url='http://testserver/api', client=client)


@pytest.fixture
def user_payload() -> dict:
    return {
        'fullName': 'Ann Lee',
        'email': 'ann@example.com',
        'phone': '+1 555 0100',
        'birthDate': '1990-04-12',
        'role': 'admin',
        'position': 'Engineer',
        'isActive': True,
    }


@pytest.fixture
def create_user(client, user_payload):
    def _create(**overrides):
        response = client.post('/api/users', json={**user_payload, **overrides})
        assert response.status_code == 201, response.text
        return response.json()
    return _create
