import pytest
from fastapi.testclient import TestClient

from todoapp.app import TodoApp
from todoapp.auth.security import BcryptHasher, SerializerTokenSigner
from todoapp.core.config import Settings
from web.main import create_app

SECRET = "test-secret-key"


class FakeClock:
    """Controllable time source for token expiry tests"""

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


def make_settings(**storage) -> Settings:
    settings = Settings()
    settings.auth.secret_key = SECRET
    settings.auth.bcrypt_rounds = 4
    settings.storage.backend = storage.get("backend", "memory")
    settings.storage.data_dir = storage.get("data_dir", "data")
    return settings


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def todo_app(clock):
    app = TodoApp(
        settings=make_settings(),
        hasher=BcryptHasher(rounds=4),
        signer=SerializerTokenSigner(SECRET, max_age_seconds=24 * 3600, clock=clock),
    )
    return app.initialize()


@pytest.fixture
def client(todo_app):
    return TestClient(create_app(todo_app))


def register(client, email="a@b.com", password="pw", name="A"):
    res = client.post("/register", json={"email": email, "password": password, "name": name})
    assert res.status_code == 201, res.text
    return res.json()


def auth_header(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def register_user(client):
    """Register through the API and return the JSON body"""
    return lambda **kwargs: register(client, **kwargs)
