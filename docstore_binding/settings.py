from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Mapping

from dotenv import load_dotenv

URL_PROPERTY = "ravendb.url"
DATABASE_PROPERTY = "ravendb.database"
CERTIFICATE_PROPERTY = "ravendb.certificate"
TIMEOUT_PROPERTY = "ravendb.timeout"

DEFAULT_URL = "http://localhost:8080"
DEFAULT_DATABASE = "ycsb"
DEFAULT_TIMEOUT = 30.0

# property name -> environment variable used when the property is missing
_ENV_FALLBACK = {
    URL_PROPERTY: "RAVENDB_URL",
    DATABASE_PROPERTY: "RAVENDB_DATABASE",
    CERTIFICATE_PROPERTY: "RAVENDB_CERTIFICATE",
    TIMEOUT_PROPERTY: "RAVENDB_TIMEOUT",
}


@dataclass(frozen=True)
class BindingSettings:
    # Store nodes; requests go to the first one
    urls: tuple[str, ...]
    database: str

    # Client certificate (PEM) for secured clusters
    certificate: str | None

    # Per-request timeout in seconds
    timeout: float


def _lookup(properties: Mapping[str, str], name: str) -> str | None:
    raw = properties.get(name)
    if raw is None:
        raw = os.getenv(_ENV_FALLBACK[name])
    if raw is None or not raw.strip():
        return None
    return raw.strip()


def _parse_urls(raw: str | None) -> tuple[str, ...]:
    if raw is None:
        return (DEFAULT_URL,)
    urls = tuple(u.strip() for u in raw.split(",") if u.strip())
    return urls or (DEFAULT_URL,)


def _parse_timeout(raw: str | None) -> float:
    if raw is None:
        return DEFAULT_TIMEOUT
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"{TIMEOUT_PROPERTY} must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"{TIMEOUT_PROPERTY} must be positive, got {raw!r}")
    return timeout


def load_settings(properties: Mapping[str, str] | None = None, *, env_file: str | None = None) -> BindingSettings:
    """
    Build settings from the harness's property map, falling back to the
    environment. Properties win; `env_file` (if any) never overrides variables
    that are already set.
    """
    if env_file is not None:
        load_dotenv(env_file)
    props = properties or {}

    return BindingSettings(
        urls=_parse_urls(_lookup(props, URL_PROPERTY)),
        database=_lookup(props, DATABASE_PROPERTY) or DEFAULT_DATABASE,
        certificate=_lookup(props, CERTIFICATE_PROPERTY),
        timeout=_parse_timeout(_lookup(props, TIMEOUT_PROPERTY)),
    )
