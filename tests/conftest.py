"""
Shared fixtures: an in-memory stand-in for the Vault HTTP API and a Flask
test client wired to it.
"""

import pytest
from hvac.exceptions import Forbidden
from unittest.mock import MagicMock

import vault_store
from app import create_app
from config import Config, VaultConfig, reset_config
from generate_keys import generate

TEST_TOKEN = "s.test-token"


class FakeVaultBackend:
    """Holds entries by path and counts client sessions."""

    def __init__(self, token=TEST_TOKEN):
        self.token = token
        self.entries = {}
        self.clients = []
        self.fail_with = None

    def client_factory(self, url=None, token=None, timeout=None, **kwargs):
        client = FakeVaultClient(self, url, token, timeout)
        self.clients.append(client)
        return client


class FakeVaultClient:
    def __init__(self, backend, url, token, timeout):
        self.backend = backend
        self.url = url
        self.token = token
        self.timeout = timeout
        self.adapter = MagicMock()

    def _check(self):
        if self.backend.fail_with is not None:
            raise self.backend.fail_with
        if self.token != self.backend.token:
            raise Forbidden("permission denied")

    def write_data(self, path, *, data=None, wrap_ttl=None):
        self._check()
        self.backend.entries[path] = dict(data)

    def read(self, path, wrap_ttl=None):
        self._check()
        entry = self.backend.entries.get(path)
        if entry is None:
            return None
        return {"request_id": "fake", "data": entry}


@pytest.fixture(autouse=True)
def clean_config():
    reset_config()
    yield
    reset_config()


@pytest.fixture
def vault_config():
    return VaultConfig(address="http://vault.test:8200", token=TEST_TOKEN, timeout=5)


@pytest.fixture
def config(vault_config):
    return Config(vault=vault_config)


@pytest.fixture
def fake_vault(monkeypatch):
    backend = FakeVaultBackend()
    monkeypatch.setattr(vault_store.hvac, "Client", backend.client_factory)
    return backend


@pytest.fixture
def store(vault_config, fake_vault):
    return vault_store.VaultStore(vault_config)


@pytest.fixture
def client(config, store):
    app = create_app(config, store)
    app.config["TESTING"] = True
    return app.test_client()


@pytest.fixture(scope="session")
def key_pair():
    return generate()
