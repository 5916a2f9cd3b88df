"""FastAPI application factory for the code notes widget."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from ..exception_handler import ErrorHandler, configure_logging
from ..store import DocumentStore, create_store
from ..widget import SnippetSession
from .route import router
from .service import ApiSettings
from .state import WidgetState


def create_app(
    settings: ApiSettings | None = None,
    *,
    store: DocumentStore | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    The store is probed once during startup; the page shows the outcome.
    """

    settings = settings or ApiSettings.from_env()
    error_handler = ErrorHandler(configure_logging(settings.log_level))

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        snippet_store = store or create_store(settings.store_config())
        widget = WidgetState()
        session = SnippetSession(
            snippet_store,
            widget,
            collection=settings.collection,
            error_handler=error_handler,
        )
        app.state.widget = widget
        app.state.session = session
        await session.probe()
        try:
            yield
        finally:
            await snippet_store.close()

    app = FastAPI(
        title="Code Notes",
        version="0.1.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.error_handler = error_handler
    app.include_router(router)

    return app


__all__ = ["create_app"]
