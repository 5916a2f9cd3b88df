"""Declarative view values handed to a presenter."""

from __future__ import annotations

import html
from dataclasses import dataclass, replace
from enum import Enum
from typing import Iterable, Tuple

from ..snippet import Snippet
from ..store import StoredDocument

LOADING_MESSAGE = "Loading saved items..."
EMPTY_MESSAGE = "No items saved yet. Save your first code snippet!"

DEFAULT_AUTO_HIDE = 5.0


class StatusKind(str, Enum):
    SUCCESS = "success"
    ERROR = "error"
    INFO = "info"


class ConnectionState(str, Enum):
    UNKNOWN = "unknown"
    TESTING = "testing"
    CONNECTED = "connected"
    FAILED = "failed"

    @property
    def label(self) -> str:
        return _CONNECTION_LABELS[self]


_CONNECTION_LABELS = {
    ConnectionState.UNKNOWN: "Not connected",
    ConnectionState.TESTING: "Testing store connection...",
    ConnectionState.CONNECTED: "Connected to store",
    ConnectionState.FAILED: "Store Connection Failed",
}


@dataclass(frozen=True, slots=True)
class StatusMessage:
    kind: StatusKind
    title: str
    message: str
    auto_hide: float = DEFAULT_AUTO_HIDE


class ListState(str, Enum):
    LOADING = "loading"
    EMPTY = "empty"
    ERROR = "error"
    ITEMS = "items"


@dataclass(frozen=True, slots=True)
class RenderedSnippet:
    """One list entry. ``code_html`` is already HTML-escaped."""

    id: str
    date: str
    code_html: str
    time: str


@dataclass(frozen=True, slots=True)
class ListView:
    state: ListState
    items: Tuple[RenderedSnippet, ...] = ()
    message: str = ""

    @classmethod
    def loading(cls) -> "ListView":
        return cls(ListState.LOADING, message=LOADING_MESSAGE)

    @classmethod
    def empty(cls) -> "ListView":
        return cls(ListState.EMPTY, message=EMPTY_MESSAGE)

    @classmethod
    def error(cls, message: str) -> "ListView":
        return cls(ListState.ERROR, message=f"Error loading data: {message}")

    @classmethod
    def of(cls, items: Iterable[RenderedSnippet]) -> "ListView":
        entries = tuple(items)
        if not entries:
            return cls.empty()
        return cls(ListState.ITEMS, items=entries)

    def without(self, snippet_id: str) -> "ListView":
        """Drop one entry; placeholders are returned unchanged."""
        if self.state is not ListState.ITEMS:
            return self
        remaining = tuple(item for item in self.items if item.id != snippet_id)
        if not remaining:
            return ListView.empty()
        return replace(self, items=remaining)


def escape_html(text: str) -> str:
    return html.escape(text, quote=False)


def render_snippet(snippet: Snippet) -> RenderedSnippet:
    return RenderedSnippet(
        id=snippet.id,
        date=snippet.display_date,
        code_html=escape_html(snippet.code),
        time=snippet.display_time,
    )


def render_documents(documents: Iterable[StoredDocument]) -> ListView:
    return ListView.of(
        render_snippet(Snippet.from_document(document.id, document.data))
        for document in documents
    )


__all__ = [
    "EMPTY_MESSAGE",
    "LOADING_MESSAGE",
    "ConnectionState",
    "ListState",
    "ListView",
    "RenderedSnippet",
    "StatusKind",
    "StatusMessage",
    "escape_html",
    "render_documents",
    "render_snippet",
]
