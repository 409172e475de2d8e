"""
Process configuration, loaded once from environment variables.

Usage:
    from config import get_config
    cfg = get_config()
    cfg.vault.address   # "http://127.0.0.1:8200" or $VAULT_ADDR
    cfg.port            # 54625 or $KEYSTORE_PORT
"""

import os
from dataclasses import dataclass, field
from typing import Optional

DEFAULT_VAULT_ADDR = "http://127.0.0.1:8200"
DEFAULT_PORT = 54625
DEFAULT_KEY_SIZE = 2048
MIN_KEY_SIZE = 2048


@dataclass(frozen=True)
class VaultConfig:
    """Secret store connection parameters."""

    address: str = DEFAULT_VAULT_ADDR
    token: str = ""
    timeout: int = 30  # seconds, per request to the store


@dataclass(frozen=True)
class Config:
    vault: VaultConfig = field(default_factory=VaultConfig)

    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    key_size: int = DEFAULT_KEY_SIZE
    log_level: str = "INFO"

    @property
    def listen_url(self) -> str:
        return f"http://{self.host}:{self.port}"


_config: Optional[Config] = None


def _int_env(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def load_config() -> Config:
    """Build a Config from the environment. Raises ValueError on bad values."""
    timeout = _int_env("VAULT_TIMEOUT", 30)
    if timeout <= 0:
        raise ValueError(f"VAULT_TIMEOUT must be positive, got {timeout}")

    key_size = _int_env("KEYSTORE_KEY_SIZE", DEFAULT_KEY_SIZE)
    if key_size < MIN_KEY_SIZE:
        raise ValueError(f"KEYSTORE_KEY_SIZE must be at least {MIN_KEY_SIZE}, got {key_size}")

    vault = VaultConfig(
        address=os.environ.get("VAULT_ADDR", DEFAULT_VAULT_ADDR),
        token=os.environ.get("VAULT_TOKEN", ""),
        timeout=timeout,
    )

    return Config(
        vault=vault,
        host=os.environ.get("KEYSTORE_HOST", "0.0.0.0"),
        port=_int_env("KEYSTORE_PORT", DEFAULT_PORT),
        key_size=key_size,
        log_level=os.environ.get("KEYSTORE_LOG_LEVEL", "INFO").upper(),
    )


def get_config() -> Config:
    """Get or create the singleton config."""
    global _config
    if _config is None:
        _config = load_config()
    return _config


def reset_config() -> None:
    """Reset the singleton config (for testing)."""
    global _config
    _config = None
