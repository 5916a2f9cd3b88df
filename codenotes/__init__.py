"""Date-stamped code notes persisted to a document store."""

from .snippet import Snippet
from .store import DocumentStore, InMemoryDocumentStore, RedisDocumentStore, StoreConfig
from .widget import Outcome, Presenter, SnippetSession

__all__ = [
    "DocumentStore",
    "InMemoryDocumentStore",
    "Outcome",
    "Presenter",
    "RedisDocumentStore",
    "Snippet",
    "SnippetSession",
    "StoreConfig",
]
