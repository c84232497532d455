import json
from base64 import b64decode

import pytest
from fastapi.testclient import TestClient
from itsdangerous import TimestampSigner

from ticketapp.core.config import Settings
from ticketapp.core.db import Database
from ticketapp.core.storage import JsonStore
from ticketapp.main import create_app

SECRET = "test-secret"
COOKIE = "ticketapp_session"


@pytest.fixture
def settings(tmp_path):
    return Settings(STORAGE_DIR=str(tmp_path / "storage"), SECRET_KEY=SECRET, SESSION_COOKIE=COOKIE)


@pytest.fixture
def store(tmp_path):
    return JsonStore(str(tmp_path / "storage"))


@pytest.fixture
def db(store):
    return Database(store)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def other_client(app):
    with TestClient(app) as c:
        yield c


def read_session(client) -> dict:
    """Decode the signed session cookie the way SessionMiddleware writes it."""
    raw = client.cookies.get(COOKIE)
    if not raw:
        return {}
    data = TimestampSigner(SECRET).unsign(raw.encode("utf-8"))
    return json.loads(b64decode(data))


def signup(client, name="Ann", email="ann@x.com", **kwargs):
    return client.post("/auth/signup", data={"name": name, "email": email}, **kwargs)


def create_ticket(client, title="Bug", description="", priority="low", **kwargs):
    return client.post(
        "/tickets/create",
        data={"title": title, "description": description, "priority": priority},
        **kwargs,
    )
