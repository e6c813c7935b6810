import pytest
from fastapi.testclient import TestClient

from main import create_app
from shared.config.settings import Settings

TEST_SECRET = "test-secret-key"


def make_settings(tmp_path, **overrides) -> Settings:
    values = dict(
        database_url=f"sqlite+aiosqlite:///{tmp_path / 'inventory.db'}",
        jwt_secret_key=TEST_SECRET,
        rate_limit_enabled=False,
        metrics_enabled=False,
    )
    values.update(overrides)
    return Settings(**values)


def bearer(token: str) -> dict:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture
def settings(tmp_path):
    return make_settings(tmp_path)


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as c:
        yield c


@pytest.fixture
def register(client):
    def _register(username: str = "alice", password: str = "pw1") -> str:
        resp = client.post("/auth/register", json={"username": username, "password": password})
        assert resp.status_code == 201, resp.text
        return resp.json()["token"]
    return _register


@pytest.fixture
def auth(register):
    """Headers for a freshly registered 'alice'."""
    return bearer(register())


@pytest.fixture
def create_product(client):
    def _create(headers: dict, **fields) -> dict:
        resp = client.post("/products", json=fields, headers=headers)
        assert resp.status_code == 201, resp.text
        return resp.json()
    return _create
