from __future__ import annotations

import pytest
from fastapi.testclient import TestClient

from ministore.app import create_app
from ministore.auth import ADMINISTRATOR, NonceService, Requester
from ministore.config import NONCE_ACTION, Settings
from ministore.form_config import FormConfigurationManager
from ministore.repo_sqlite import SQLiteStorage


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture
def settings(tmp_path, monkeypatch):
    monkeypatch.setenv("STORAGE_BACKEND", "sqlite")
    monkeypatch.setenv("SQLITE_PATH", str(tmp_path / "ministore.db"))
    monkeypatch.setenv("JSON_PATH", str(tmp_path / "options.json"))
    monkeypatch.setenv("AUTH_MODE", "none")
    monkeypatch.setenv("SECRET_KEY", "test-secret")
    return Settings()


@pytest.fixture
def app(settings):
    return create_app(settings)


@pytest.fixture
def client(app):
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def nonces():
    return NonceService("test-secret", lifetime=86400)


@pytest.fixture
def store(tmp_path):
    return SQLiteStorage(tmp_path / "manager.db").options


@pytest.fixture
def manager(store, nonces):
    return FormConfigurationManager(store, nonces)


@pytest.fixture
def admin(nonces):
    return Requester(ADMINISTRATOR, nonces.issue_token(NONCE_ACTION, ADMINISTRATOR))
