"""Service-layer helpers shared by the JSON API and the CLI."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass

from fastapi import HTTPException

from ..store import StoreConfig
from ..store.config import BACKEND_REDIS
from ..store.redis_store import DEFAULT_REDIS_URL
from ..widget import (
    ConfirmationAborted,
    ConnectivityError,
    Outcome,
    SnippetSession,
    StoreOperationError,
    ValidationError,
)
from ..widget.session import DEFAULT_COLLECTION
from .model import (
    SnippetCreateRequest,
    SnippetCreateResponse,
    SnippetListResponse,
    StatusBody,
    StatusResponse,
)
from .state import WidgetState

logger = logging.getLogger("codenotes")


@dataclass(slots=True)
class ApiSettings:
    """Runtime configuration for the widget server and CLI."""

    redis_url: str
    store_backend: str
    store_namespace: str
    collection: str
    socket_timeout: float | None
    log_level: str
    host: str
    port: int

    @classmethod
    def from_env(cls) -> "ApiSettings":
        def _int_env(name: str, default: int) -> int:
            raw = os.getenv(name)
            if not raw:
                return default
            try:
                return int(raw)
            except ValueError:
                logger.warning("Invalid integer for %s: %s", name, raw)
                return default

        def _optional_float(name: str) -> float | None:
            raw = os.getenv(name)
            if not raw:
                return None
            try:
                return float(raw)
            except ValueError:
                logger.warning("Invalid number for %s: %s", name, raw)
                return None

        return cls(
            redis_url=os.getenv("REDIS_URL", DEFAULT_REDIS_URL),
            store_backend=os.getenv("CODENOTES_STORE_BACKEND", BACKEND_REDIS),
            store_namespace=os.getenv("CODENOTES_NAMESPACE", "codenotes"),
            collection=os.getenv("CODENOTES_COLLECTION", DEFAULT_COLLECTION),
            socket_timeout=_optional_float("CODENOTES_SOCKET_TIMEOUT"),
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            host=os.getenv("CODENOTES_HOST", "127.0.0.1"),
            port=_int_env("CODENOTES_PORT", 8000),
        )

    def store_config(self) -> StoreConfig:
        return StoreConfig(
            backend=self.store_backend,
            url=self.redis_url,
            namespace=self.store_namespace,
            socket_timeout=self.socket_timeout,
        )


def raise_for_outcome(outcome: Outcome) -> None:
    """Translate a failed session outcome into an HTTP error."""
    error = outcome.error
    if error is None:
        return
    if isinstance(error, ValidationError):
        raise HTTPException(status_code=422, detail=f"{error.title}: {error.message}")
    if isinstance(error, ConfirmationAborted):
        raise HTTPException(status_code=400, detail="Deletion requires confirm=true")
    if isinstance(error, ConnectivityError):
        raise HTTPException(status_code=503, detail=error.message)
    if isinstance(error, StoreOperationError):
        raise HTTPException(status_code=502, detail=error.message)
    raise HTTPException(status_code=500, detail=error.message)


async def list_snippets_service(session: SnippetSession) -> SnippetListResponse:
    outcome = await session.refresh()
    raise_for_outcome(outcome)
    return SnippetListResponse.from_view(outcome.value)


async def create_snippet_service(
    payload: SnippetCreateRequest,
    session: SnippetSession,
    state: WidgetState,
) -> SnippetCreateResponse:
    if state.saving:
        raise HTTPException(status_code=409, detail="A save is already in progress")
    outcome = await session.create(payload.date, payload.code)
    raise_for_outcome(outcome)
    return SnippetCreateResponse(id=outcome.value)


async def delete_snippet_service(
    snippet_id: str,
    confirm: bool,
    session: SnippetSession,
) -> None:
    outcome = await session.delete(snippet_id, confirmed=confirm)
    raise_for_outcome(outcome)


def status_service(session: SnippetSession, state: WidgetState) -> StatusResponse:
    status = state.status
    return StatusResponse(
        connection=session.connection.value,
        connected=session.connected,
        submit_enabled=state.submit_enabled,
        status=StatusBody.from_status(status) if status is not None else None,
    )


__all__ = [
    "ApiSettings",
    "create_snippet_service",
    "delete_snippet_service",
    "list_snippets_service",
    "raise_for_outcome",
    "status_service",
]
