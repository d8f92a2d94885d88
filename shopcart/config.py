"""
Cart configuration.

Values come from the environment (a local .env file is loaded first when
present). Upstash uses the standard REST_URL / REST_TOKEN variable names.
"""
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_INVENTORY_API_URL = "http://localhost:3333"
DEFAULT_STORAGE_KEY = "@RocketShoes:cart"
DEFAULT_LANGUAGE = "pt"

STORAGE_BACKENDS = ("memory", "redis")

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off", ""}


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_timeout(raw: str) -> float:
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"INVENTORY_TIMEOUT must be a number, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError("INVENTORY_TIMEOUT must be positive")
    return timeout


@dataclass(frozen=True)
class Settings:
    """Runtime settings for the cart and its collaborators."""
    inventory_api_url: str = DEFAULT_INVENTORY_API_URL
    inventory_timeout: float = 10.0
    storage_key: str = DEFAULT_STORAGE_KEY
    storage_backend: str = "memory"
    redis_url: str = ""
    redis_token: str = ""
    language: str = DEFAULT_LANGUAGE
    serialize_operations: bool = False

    def __post_init__(self):
        if self.storage_backend not in STORAGE_BACKENDS:
            raise ValueError(
                f"CART_STORAGE_BACKEND must be one of {', '.join(STORAGE_BACKENDS)}, "
                f"got {self.storage_backend!r}"
            )
        if not self.storage_key:
            raise ValueError("CART_STORAGE_KEY must not be empty")
        if self.storage_backend == "redis" and (not self.redis_url or not self.redis_token):
            raise ValueError(
                "UPSTASH_REDIS_REST_URL and UPSTASH_REDIS_REST_TOKEN must be set for the redis backend"
            )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        """
        Build settings from environment variables.

        Args:
            environ: Mapping to read instead of os.environ (tests pass a dict;
                .env loading is skipped in that case)
        """
        if environ is None:
            load_dotenv()
            environ = os.environ

        return cls(
            inventory_api_url=environ.get("INVENTORY_API_URL", DEFAULT_INVENTORY_API_URL).rstrip("/"),
            inventory_timeout=_parse_timeout(environ.get("INVENTORY_TIMEOUT", "10")),
            storage_key=environ.get("CART_STORAGE_KEY", DEFAULT_STORAGE_KEY),
            storage_backend=environ.get("CART_STORAGE_BACKEND", "memory").strip().lower(),
            redis_url=environ.get("UPSTASH_REDIS_REST_URL", ""),
            redis_token=environ.get("UPSTASH_REDIS_REST_TOKEN", ""),
            language=environ.get("CART_LANGUAGE", DEFAULT_LANGUAGE),
            serialize_operations=_parse_bool(
                "CART_SERIALIZE_OPERATIONS", environ.get("CART_SERIALIZE_OPERATIONS", "")
            ),
        )
