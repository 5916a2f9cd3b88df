"""Document store contract shared by every backend."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, List, Mapping, Protocol, Sequence


class _ServerTimestamp:
    """Sentinel asking the store to stamp a field with its own clock."""

    _instance: "_ServerTimestamp | None" = None

    def __new__(cls) -> "_ServerTimestamp":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return "SERVER_TIMESTAMP"


SERVER_TIMESTAMP = _ServerTimestamp()


class StoreError(Exception):
    """A store request failed. ``message`` is what the backend reported."""

    def __init__(self, message: str, *, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


@dataclass(frozen=True, slots=True)
class StoredDocument:
    id: str
    data: dict[str, Any] = field(default_factory=dict)


class DocumentStore(Protocol):
    """Minimal document database: add, ordered query and delete over a collection."""

    async def add(self, collection: str, document: Mapping[str, Any]) -> str: ...

    async def query(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> List[StoredDocument]: ...

    async def delete(self, collection: str, doc_id: str) -> None: ...

    async def close(self) -> None: ...


def resolve_server_timestamps(document: Mapping[str, Any], now: datetime) -> dict[str, Any]:
    """Replace every ``SERVER_TIMESTAMP`` directive with ``now``."""
    return {
        key: (now if value is SERVER_TIMESTAMP else value)
        for key, value in document.items()
    }


def order_documents(
    documents: Sequence[StoredDocument],
    *,
    order_by: str | None,
    descending: bool,
    limit: int | None,
) -> List[StoredDocument]:
    """Apply ordering and limit the way a document database does.

    Documents that lack the ``order_by`` field are left out of the result.
    """
    if limit is not None and limit < 0:
        raise StoreError(f"limit must be non-negative, got {limit}", code="invalid-argument")

    results = list(documents)
    if order_by is not None:
        results = [doc for doc in results if doc.data.get(order_by) is not None]
        try:
            results.sort(key=lambda doc: doc.data[order_by], reverse=descending)
        except TypeError as exc:
            raise StoreError(
                f"Cannot order by {order_by!r}: mixed value types",
                code="invalid-argument",
            ) from exc
    elif descending:
        results.reverse()

    if limit is not None:
        results = results[:limit]
    return results


__all__ = [
    "SERVER_TIMESTAMP",
    "DocumentStore",
    "StoreError",
    "StoredDocument",
    "order_documents",
    "resolve_server_timestamps",
]
