import os
from unittest.mock import patch

import pytest

from catalog.config import Config, config
from catalog.errors import ConfigError
from catalog.store import InMemoryStore, JsonFileStore, create_store


def test_config_defaults():
    """Test default values when the environment is empty"""
    with patch.dict(os.environ, {}, clear=True):
        defaults = Config()
    
    assert defaults.PORT == 3001
    assert defaults.STORE_BACKEND == "memory"
    assert defaults.DATA_FILE == "database.json"
    assert defaults.DEFAULT_PAGE_SIZE == 10
    assert defaults.MAX_PAGE_SIZE == 100
    assert defaults.CORS_ORIGINS == ["*"]
    assert defaults.DEBUG == False
    assert defaults.LOG_LEVEL == "INFO"
    assert defaults.has_sentry is False


def test_config_environment():
    """Test that environment variables are loaded"""
    env = {
        "STORE_BACKEND": "FILE",
        "DATA_FILE": "/tmp/catalog.json",
        "CORS_ORIGINS": "http://a.test, http://b.test",
        "SENTRY_DSN": "https://key@sentry.example/1",
        "DEBUG": "true"
    }
    with patch.dict(os.environ, env, clear=True):
        loaded = Config()
    
    assert loaded.STORE_BACKEND == "file"
    assert loaded.DATA_FILE == "/tmp/catalog.json"
    assert loaded.CORS_ORIGINS == ["http://a.test", "http://b.test"]
    assert loaded.has_sentry is True
    assert loaded.DEBUG == True


def test_create_store_memory():
    with patch.object(config, "STORE_BACKEND", "memory"), \
         patch.object(config, "MEMORY_FILLER_ROWS", 5):
        store = create_store()
    
    assert isinstance(store, InMemoryStore)
    assert store.next_id == 16


def test_create_store_file(tmp_path):
    path = str(tmp_path / "db.json")
    with patch.object(config, "STORE_BACKEND", "file"), \
         patch.object(config, "DATA_FILE", path):
        store = create_store()
    
    assert isinstance(store, JsonFileStore)
    assert store.path == path


def test_create_store_unknown_backend():
    with patch.object(config, "STORE_BACKEND", "postgres"):
        with pytest.raises(ConfigError):
            create_store()
