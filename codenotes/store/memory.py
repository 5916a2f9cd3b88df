"""Process-local document store."""

from __future__ import annotations

import copy
import uuid
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping

from .base import StoredDocument, order_documents, resolve_server_timestamps


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class InMemoryDocumentStore:
    """Keep documents in insertion order per collection.

    ``clock`` supplies the server time used to resolve ``SERVER_TIMESTAMP``;
    ``id_factory`` mints document ids.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = lambda: uuid.uuid4().hex,
    ) -> None:
        self._clock = clock
        self._id_factory = id_factory
        self._collections: Dict[str, Dict[str, dict[str, Any]]] = {}

    async def add(self, collection: str, document: Mapping[str, Any]) -> str:
        doc_id = self._id_factory()
        data = resolve_server_timestamps(document, self._clock())
        self._collections.setdefault(collection, {})[doc_id] = copy.deepcopy(data)
        return doc_id

    async def query(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> List[StoredDocument]:
        documents = [
            StoredDocument(id=doc_id, data=copy.deepcopy(data))
            for doc_id, data in self._collections.get(collection, {}).items()
        ]
        return order_documents(documents, order_by=order_by, descending=descending, limit=limit)

    async def delete(self, collection: str, doc_id: str) -> None:
        self._collections.get(collection, {}).pop(doc_id, None)

    async def close(self) -> None:
        return None

    def count(self, collection: str) -> int:
        return len(self._collections.get(collection, {}))


__all__ = ["InMemoryDocumentStore"]
