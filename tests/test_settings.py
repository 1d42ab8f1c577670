from __future__ import annotations

import os

import pytest

from docstore_binding.settings import DEFAULT_DATABASE, DEFAULT_TIMEOUT, DEFAULT_URL, load_settings

ENV_VARS = ("RAVENDB_URL", "RAVENDB_DATABASE", "RAVENDB_CERTIFICATE", "RAVENDB_TIMEOUT")


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults():
    s = load_settings()
    assert s.urls == (DEFAULT_URL,)
    assert s.database == DEFAULT_DATABASE
    assert s.certificate is None
    assert s.timeout == DEFAULT_TIMEOUT


def test_properties():
    s = load_settings(
        {
            "ravendb.url": "http://a:8080, http://b:8080,,",
            "ravendb.database": "bench",
            "ravendb.certificate": "/certs/client.pem",
            "ravendb.timeout": "2.5",
        }
    )
    assert s.urls == ("http://a:8080", "http://b:8080")
    assert s.database == "bench"
    assert s.certificate == "/certs/client.pem"
    assert s.timeout == 2.5


def test_environment_fallback_and_precedence(monkeypatch):
    monkeypatch.setenv("RAVENDB_URL", "http://env:8080")
    monkeypatch.setenv("RAVENDB_DATABASE", "envdb")

    s = load_settings({"ravendb.database": "propdb"})
    assert s.urls == ("http://env:8080",)
    assert s.database == "propdb"


def test_blank_url_falls_back_to_default():
    assert load_settings({"ravendb.url": " , "}).urls == (DEFAULT_URL,)


@pytest.mark.parametrize("raw", ["soon", "0", "-3"])
def test_invalid_timeout(raw):
    with pytest.raises(ValueError):
        load_settings({"ravendb.timeout": raw})


def test_env_file(tmp_path, monkeypatch):
    env_file = tmp_path / "local.env"
    env_file.write_text("RAVENDB_DATABASE=fromfile\nRAVENDB_URL=http://file:8080\n", encoding="utf-8")
    monkeypatch.setenv("RAVENDB_URL", "http://already-set:8080")

    try:
        s = load_settings(env_file=str(env_file))
        assert s.database == "fromfile"
        assert s.urls == ("http://already-set:8080",)
    finally:
        os.environ.pop("RAVENDB_DATABASE", None)
