from __future__ import annotations

import os

import pytest

from docstore import ConfigurationError, Settings, get_settings


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    # load_dotenv writes straight into os.environ; give each test a private copy.
    monkeypatch.setattr(os, "environ", os.environ.copy())
    monkeypatch.delenv("DOCSTORE_CACHE_CAPACITY", raising=False)
    monkeypatch.delenv("DOCSTORE_DEBUG", raising=False)


def test_defaults():
    s = get_settings()
    assert s == Settings(cache_capacity=1000, debug=False)


def test_reads_environment(monkeypatch):
    monkeypatch.setenv("DOCSTORE_CACHE_CAPACITY", " 25 ")
    monkeypatch.setenv("DOCSTORE_DEBUG", "Yes")
    s = get_settings()
    assert s.cache_capacity == 25
    assert s.debug is True


def test_rejects_bad_capacity(monkeypatch):
    monkeypatch.setenv("DOCSTORE_CACHE_CAPACITY", "lots")
    with pytest.raises(ConfigurationError):
        get_settings()

    with pytest.raises(ConfigurationError):
        Settings(cache_capacity=0)


def test_env_file_is_loaded(tmp_path, monkeypatch):
    env_file = tmp_path / "local.env"
    env_file.write_text("DOCSTORE_CACHE_CAPACITY=7\nDOCSTORE_DEBUG=on\n")
    monkeypatch.setenv("DOCSTORE_DEBUG", "off")

    s = get_settings(env_file)
    assert s.cache_capacity == 7
    # Existing environment wins over the file.
    assert s.debug is False
