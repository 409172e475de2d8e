"""
Vault-backed storage for generated key pairs.

Key pairs are written with the raw logical API inside a KV v2 style
envelope, {"data": {"public_key": ..., "private_key": ...}}, so the entry can
be read back from the same path. A new client session is opened for every
call and closed when the call returns.
"""

import logging
from contextlib import contextmanager
from urllib.parse import urlparse

import hvac
import requests
from hvac.exceptions import VaultError

from config import VaultConfig
from errors import ClientInitError, StoreReadError, StoreWriteError
from generate_keys import KeyPair

logger = logging.getLogger(__name__)

BACKEND_ERRORS = (VaultError, requests.exceptions.RequestException)


class VaultStore:
    def __init__(self, config: VaultConfig):
        self.config = config

    @contextmanager
    def session(self):
        """Yield an authenticated hvac client scoped to one call."""
        try:
            # urlparse and .port raise ValueError for bad IPv6 hosts or ports
            parsed = urlparse(self.config.address or "")
            parsed.port
            if parsed.scheme not in ("http", "https") or not parsed.hostname:
                raise ValueError(f"unusable Vault address {self.config.address!r}")

            client = hvac.Client(
                url=self.config.address,
                token=self.config.token,
                timeout=self.config.timeout,
            )
        except (ValueError, TypeError, VaultError) as exc:
            raise ClientInitError("Failed to initialize Vault client") from exc

        try:
            yield client
        finally:
            client.adapter.close()

    def write(self, path: str, key_pair: KeyPair) -> None:
        with self.session() as client:
            try:
                client.write_data(path, data={"data": key_pair.to_dict()})
            except BACKEND_ERRORS as exc:
                logger.warning("Vault write to %s failed: %s", path, exc.__class__.__name__)
                raise StoreWriteError("Failed to store keys in Vault") from exc
        logger.info("Stored key pair at %s", path)

    def read(self, path: str) -> KeyPair:
        with self.session() as client:
            try:
                secret = client.read(path)
            except BACKEND_ERRORS as exc:
                logger.warning("Vault read from %s failed: %s", path, exc.__class__.__name__)
                raise StoreReadError("Failed to read from Vault") from exc

        # hvac returns None when nothing is stored at the path
        if secret is None:
            logger.info("No entry at %s", path)
            raise StoreReadError("Failed to read from Vault")

        envelope = secret.get("data") if isinstance(secret, dict) else None
        data = envelope.get("data") if isinstance(envelope, dict) else None
        if not isinstance(data, dict):
            logger.warning("Unexpected entry shape at %s", path)
            raise StoreReadError("Invalid Vault data structure")

        return KeyPair.from_dict(data)
