"""Application configuration read from environment variables.

``main.py`` loads a ``.env`` file first, so values set in the real environment
win over the file and both win over the defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional, Tuple

STORE_BACKENDS = ("firestore", "memory")
LOG_FORMATS = ("text", "json")
DEFAULT_CORS_ORIGINS = ("http://localhost:5173", "http://127.0.0.1:5173")

_TRUE_VALUES = ("true", "1", "yes")


def parse_bool(value: Optional[str]) -> bool:
    return (value or "").strip().lower() in _TRUE_VALUES


def _parse_number(env: Mapping[str, str], name: str, default: str, kind: type):
    raw = env.get(name, default)
    try:
        return kind(raw)
    except ValueError:
        raise ValueError(f"{name} must be a number, got {raw!r}") from None


@dataclass(frozen=True)
class Config:
    store: str = "firestore"
    # Firestore project; the emulator is picked up from FIRESTORE_EMULATOR_HOST by the client.
    gcp_project: Optional[str] = None
    firestore_database: str = "(default)"
    recipes_collection: str = "recipes"
    # Seconds allowed for each store call.
    store_timeout: float = 10.0
    port: int = 8080
    cors_origins: Tuple[str, ...] = field(default=DEFAULT_CORS_ORIGINS)
    log_level: str = "INFO"
    log_format: str = "text"
    log_request_bodies: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a configuration from ``environ`` (defaults to ``os.environ``)."""

        env = os.environ if environ is None else environ

        store = env.get("RECIPE_STORE", "firestore").strip().lower()
        if store not in STORE_BACKENDS:
            raise ValueError(f"RECIPE_STORE must be one of {', '.join(STORE_BACKENDS)}, got {store!r}")

        log_format = env.get("LOG_FORMAT", "text").strip().lower()
        if log_format not in LOG_FORMATS:
            raise ValueError(f"LOG_FORMAT must be one of {', '.join(LOG_FORMATS)}, got {log_format!r}")

        store_timeout = _parse_number(env, "STORE_TIMEOUT", "10", float)
        if store_timeout <= 0:
            raise ValueError("STORE_TIMEOUT must be positive")

        origins_raw = env.get("CORS_ORIGINS")
        if origins_raw is None:
            cors_origins = DEFAULT_CORS_ORIGINS
        else:
            cors_origins = tuple(origin.strip() for origin in origins_raw.split(",") if origin.strip())

        return cls(
            store=store,
            gcp_project=env.get("GCP_PROJECT") or None,
            firestore_database=env.get("FIRESTORE_DATABASE", "(default)"),
            recipes_collection=env.get("RECIPES_COLLECTION", "recipes"),
            store_timeout=store_timeout,
            port=_parse_number(env, "PORT", "8080", int),
            cors_origins=cors_origins,
            log_level=env.get("LOG_LEVEL", "INFO").strip().upper(),
            log_format=log_format,
            log_request_bodies=parse_bool(env.get("LOG_REQUEST_BODIES")),
        )


__all__ = ["Config", "parse_bool"]
