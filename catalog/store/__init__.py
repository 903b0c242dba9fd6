"""
Record store backends.
"""
from catalog.config import config
from catalog.errors import ConfigError
from catalog.store.base import BaseStore
from catalog.store.file_store import JsonFileStore
from catalog.store.memory_store import InMemoryStore


def create_store() -> BaseStore:
    """Build the store selected by STORE_BACKEND."""
    if config.STORE_BACKEND == "memory":
        return InMemoryStore(seed=True, filler_rows=config.MEMORY_FILLER_ROWS)
    if config.STORE_BACKEND == "file":
        return JsonFileStore(config.DATA_FILE)
    raise ConfigError(f"Unknown STORE_BACKEND: {config.STORE_BACKEND!r}")


__all__ = [
    'BaseStore',
    'InMemoryStore',
    'JsonFileStore',
    'create_store'
]
