"""Document store backends for saved snippets."""

from .base import SERVER_TIMESTAMP, DocumentStore, StoreError, StoredDocument
from .config import BACKEND_MEMORY, BACKEND_REDIS, StoreConfig
from .memory import InMemoryDocumentStore
from .redis_store import RedisDocumentStore


def create_store(config: StoreConfig) -> DocumentStore:
    """Instantiate the backend named by ``config.backend``."""

    if config.backend == BACKEND_MEMORY:
        return InMemoryDocumentStore()
    if config.backend == BACKEND_REDIS:
        return RedisDocumentStore.from_config(config)
    raise ValueError(f"Unknown store backend: {config.backend!r}")


__all__ = [
    "SERVER_TIMESTAMP",
    "BACKEND_MEMORY",
    "BACKEND_REDIS",
    "DocumentStore",
    "InMemoryDocumentStore",
    "RedisDocumentStore",
    "StoreConfig",
    "StoreError",
    "StoredDocument",
    "create_store",
]
