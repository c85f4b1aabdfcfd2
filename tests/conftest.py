import pytest

from fake_firestore import FakeFirestore
from app import create_app

TOKENS = {
    "owner-token": "owner-1",
    "collab-token": "collab-1",
}


@pytest.fixture
def fake_db():
    return FakeFirestore()


@pytest.fixture
def app(fake_db):
    app = create_app(fake_db)
    app.config.update(TESTING=True)
    return app


@pytest.fixture
def client(app):
    return app.test_client()


@pytest.fixture
def firebase_auth(monkeypatch):
    """Replace Firebase ID-token verification with a lookup in TOKENS."""

    def verify_id_token(id_token):
        if id_token not in TOKENS:
            raise ValueError("Invalid ID token")
        return {"uid": TOKENS[id_token]}

    monkeypatch.setattr("user_auth.utils.auth.verify_id_token", verify_id_token)
    return TOKENS


def bearer(token):
    return {"Authorization": f"Bearer {token}"}
