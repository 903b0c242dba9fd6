import pytest
from unittest.mock import AsyncMock, patch

from fastapi.testclient import TestClient

from catalog.config import config
from catalog.main import create_app
from catalog.sentry import capture_store_io_error, initialize_sentry
from catalog.store.memory_store import InMemoryStore


def test_lifespan_initializes_and_closes_store():
    store = InMemoryStore()
    store.initialize = AsyncMock()
    store.close = AsyncMock()
    
    with patch("catalog.main.initialize_sentry") as mock_sentry:
        with TestClient(create_app(store)):
            store.initialize.assert_awaited_once()
            mock_sentry.assert_called_once()
    
    store.close.assert_awaited_once()


def test_sentry_skipped_without_dsn():
    with patch.object(config, "SENTRY_DSN", ""), \
         patch("catalog.sentry.sentry_sdk.init") as mock_init:
        initialize_sentry()
    
    mock_init.assert_not_called()


def test_sentry_initialized_with_dsn():
    with patch.object(config, "SENTRY_DSN", "https://key@sentry.example/1"), \
         patch("catalog.sentry.sentry_sdk.init") as mock_init:
        initialize_sentry()
    
    mock_init.assert_called_once()
    assert mock_init.call_args.kwargs["dsn"] == "https://key@sentry.example/1"


def test_store_io_capture_is_noop_without_dsn():
    with patch.object(config, "SENTRY_DSN", ""), \
         patch("catalog.sentry.sentry_sdk.capture_message") as mock_capture:
        capture_store_io_error("write", "/tmp/db.json", "disk full")
    
    mock_capture.assert_not_called()


def test_store_io_capture_with_dsn():
    with patch.object(config, "SENTRY_DSN", "https://key@sentry.example/1"), \
         patch("catalog.sentry.sentry_sdk.capture_message") as mock_capture:
        capture_store_io_error("write", "/tmp/db.json", "disk full")
    
    mock_capture.assert_called_once_with("Store write failed for /tmp/db.json", "error")
