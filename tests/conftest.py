"""Shared fixtures for all tests."""

from unittest.mock import MagicMock, patch

import mongomock
import pytest

from lexaid.app import create_app
from lexaid.config.database import db_instance

TEST_CONFIG = {
    'TESTING': True,
    'SECRET_KEY': 'test-secret',
    'GOOGLE_API_KEY': 'test-google-key',
    'GEMINI_MODEL': 'gemini-test',
    'FLUTTERWAVE_PUBLIC_KEY': 'FLWPUBK_TEST',
    'FLUTTERWAVE_SECRET_KEY': None,
    'MONGODB_DB_NAME': 'lexaid_test',
}


@pytest.fixture()
def app():
    """App wired to a fresh in-memory MongoDB"""
    _app = create_app(TEST_CONFIG, mongo_client=mongomock.MongoClient())
    yield _app
    db_instance.close()


@pytest.fixture()
def db(app):
    return db_instance.get_db()


@pytest.fixture()
def client(app):
    return app.test_client()


def register(client, email='ada@example.com', password='secret123', display_name='Ada Obi'):
    resp = client.post('/api/auth/register', json={
        'email': email,
        'password': password,
        'display_name': display_name,
    })
    assert resp.status_code == 201, resp.get_json()
    return resp.get_json()['user']


@pytest.fixture()
def user(client):
    """Registered and signed-in user"""
    return register(client)


@pytest.fixture()
def fake_genai():
    """Stand-in for google.generativeai in both agents.

    ``fake_genai.model.generate_content`` is the call to script.
    """
    fake = MagicMock()
    fake.model = fake.GenerativeModel.return_value
    with patch('lexaid.agents.drafting_agent.genai', fake), \
            patch('lexaid.agents.citation_agent.genai', fake):
        yield fake


def model_reply(text):
    reply = MagicMock()
    reply.text = text
    return reply
