"""Redis-backed document store."""

from __future__ import annotations

import json
import logging
import uuid
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Any, Iterator, List, Mapping

import redis
import redis.asyncio as aioredis

from .base import StoreError, StoredDocument, order_documents, resolve_server_timestamps
from .config import StoreConfig

logger = logging.getLogger("codenotes")

_TIMESTAMP_TAG = "$timestamp"
DEFAULT_REDIS_URL = "redis://127.0.0.1:6379/0"


@contextmanager
def _translate_errors() -> Iterator[None]:
    try:
        yield
    except redis.RedisError as exc:
        raise StoreError(str(exc) or exc.__class__.__name__, code=_error_code(exc)) from exc


def _error_code(exc: redis.RedisError) -> str:
    if isinstance(exc, redis.AuthenticationError):
        return "permission-denied"
    if isinstance(exc, (redis.ConnectionError, redis.TimeoutError)):
        return "unavailable"
    return "internal"


def _encode_value(value: Any) -> Any:
    if isinstance(value, datetime):
        return {_TIMESTAMP_TAG: value.astimezone(timezone.utc).isoformat()}
    return value


def _decode_value(value: Any) -> Any:
    if isinstance(value, dict) and set(value) == {_TIMESTAMP_TAG}:
        try:
            return datetime.fromisoformat(value[_TIMESTAMP_TAG]).astimezone(timezone.utc)
        except (TypeError, ValueError):
            return None
    return value


class RedisDocumentStore:
    """Store documents as JSON strings with a per-collection sorted-set index.

    Documents live under ``<namespace>:<collection>:doc:<id>``; the index
    ``<namespace>:<collection>:index`` is scored by creation time.
    """

    def __init__(self, redis_client: aioredis.Redis, *, namespace: str = "codenotes") -> None:
        self.redis = redis_client
        self.namespace = namespace

    @classmethod
    def from_config(cls, config: StoreConfig) -> "RedisDocumentStore":
        client = aioredis.Redis.from_url(config.url or DEFAULT_REDIS_URL, **config.client_kwargs())
        return cls(client, namespace=config.namespace)

    async def add(self, collection: str, document: Mapping[str, Any]) -> str:
        doc_id = uuid.uuid4().hex
        with _translate_errors():
            now = await self._server_time()
            data = resolve_server_timestamps(document, now)
            payload = json.dumps(
                {key: _encode_value(value) for key, value in data.items()},
                separators=(",", ":"),
            )
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.set(self._document_key(collection, doc_id), payload)
                pipe.zadd(self._index_key(collection), {doc_id: now.timestamp()})
                await pipe.execute()
        return doc_id

    async def query(
        self,
        collection: str,
        *,
        order_by: str | None = None,
        descending: bool = False,
        limit: int | None = None,
    ) -> List[StoredDocument]:
        if limit is not None and limit < 0:
            raise StoreError(f"limit must be non-negative, got {limit}", code="invalid-argument")
        if limit == 0:
            return []

        # Without an explicit ordering the index order is used and the limit
        # can be pushed down to Redis.
        end = limit - 1 if order_by is None and limit is not None else -1
        index_key = self._index_key(collection)
        with _translate_errors():
            if descending:
                raw_ids = await self.redis.zrevrange(index_key, 0, end)
            else:
                raw_ids = await self.redis.zrange(index_key, 0, end)
            ids = [_as_text(raw_id) for raw_id in raw_ids]
            if not ids:
                return []
            raws = await self.redis.mget([self._document_key(collection, doc_id) for doc_id in ids])

        documents: List[StoredDocument] = []
        for doc_id, raw in zip(ids, raws):
            data = self._decode_document(raw)
            if data is None:
                logger.debug("Skipping index entry %s without a readable document", doc_id)
                continue
            documents.append(StoredDocument(id=doc_id, data=data))

        if order_by is None:
            return documents
        return order_documents(documents, order_by=order_by, descending=descending, limit=limit)

    async def delete(self, collection: str, doc_id: str) -> None:
        with _translate_errors():
            async with self.redis.pipeline(transaction=True) as pipe:
                pipe.delete(self._document_key(collection, doc_id))
                pipe.zrem(self._index_key(collection), doc_id)
                await pipe.execute()

    async def close(self) -> None:
        await self.redis.aclose()

    async def _server_time(self) -> datetime:
        seconds, microseconds = await self.redis.time()
        return datetime.fromtimestamp(int(seconds) + int(microseconds) / 1_000_000, tz=timezone.utc)

    def _index_key(self, collection: str) -> str:
        return f"{self.namespace}:{collection}:index"

    def _document_key(self, collection: str, doc_id: str) -> str:
        return f"{self.namespace}:{collection}:doc:{doc_id}"

    @staticmethod
    def _decode_document(raw: Any) -> dict[str, Any] | None:
        if raw is None:
            return None
        try:
            data = json.loads(_as_text(raw))
        except (TypeError, json.JSONDecodeError):
            return None
        if not isinstance(data, dict):
            return None
        return {key: _decode_value(value) for key, value in data.items()}


def _as_text(value: Any) -> str:
    return value.decode("utf-8") if isinstance(value, bytes) else str(value)


__all__ = ["RedisDocumentStore", "DEFAULT_REDIS_URL"]
