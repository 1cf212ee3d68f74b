"""
Pytest fixtures for chatdesk backend tests.

Provides an app bound to a fresh in-memory database per test, a test client,
and helpers for registering users and building auth headers.
"""

import pytest
from chatdesk import create_app
from chatdesk.extensions import db
from chatdesk.services import auth_service


@pytest.fixture(scope='function')
def app():
    """Create application for testing."""
    app = create_app({
        'TESTING': True,
        'SQLALCHEMY_DATABASE_URI': 'sqlite:///:memory:',
        'SQLALCHEMY_TRACK_MODIFICATIONS': False,
        'BCRYPT_ROUNDS': 4,
        'CORS_ALLOWED_ORIGINS': ['http://localhost:3000'],
    })

    with app.app_context():
        db.create_all()
        yield app
        db.session.remove()
        db.drop_all()


@pytest.fixture(scope='function')
def client(app):
    """Create test client."""
    return app.test_client()


@pytest.fixture(scope='function')
def alice(app):
    """Registered user alice / secret1."""
    return auth_service.register("alice", "secret1")


@pytest.fixture(scope='function')
def bob(app):
    """Registered user bob / hunter2."""
    return auth_service.register("bob", "hunter2")


@pytest.fixture(scope='function')
def alice_headers(alice):
    return auth_headers(alice.token)


@pytest.fixture(scope='function')
def bob_headers(bob):
    return auth_headers(bob.token)


def register_user(client, username: str, password: str) -> str:
    """Helper to register through the API and return the token."""
    response = client.post('/api/register', json={
        'username': username,
        'password': password,
    })
    assert response.status_code == 200, response.get_json()
    return response.get_json()['token']


def auth_headers(token: str) -> dict:
    """Helper to create Authorization headers (raw token, no scheme)."""
    return {'Authorization': token}
