"""Pydantic models for the JSON API surface."""

from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field

from ..widget import ListView, RenderedSnippet, StatusMessage


class SnippetCreateRequest(BaseModel):
    date: str = Field("", description="Calendar date (YYYY-MM-DD) the snippet belongs to")
    code: str = Field("", description="Snippet text; surrounding whitespace is trimmed")


class SnippetCreateResponse(BaseModel):
    id: str


class SnippetItem(BaseModel):
    id: str
    date: str
    code_html: str = Field(..., description="HTML-escaped snippet text")
    time: str

    @classmethod
    def from_rendered(cls, item: RenderedSnippet) -> "SnippetItem":
        return cls(id=item.id, date=item.date, code_html=item.code_html, time=item.time)


class SnippetListResponse(BaseModel):
    state: str
    message: str = ""
    items: List[SnippetItem] = Field(default_factory=list)

    @classmethod
    def from_view(cls, view: ListView) -> "SnippetListResponse":
        return cls(
            state=view.state.value,
            message=view.message,
            items=[SnippetItem.from_rendered(item) for item in view.items],
        )


class StatusBody(BaseModel):
    kind: str
    title: str
    message: str

    @classmethod
    def from_status(cls, status: StatusMessage) -> "StatusBody":
        return cls(kind=status.kind.value, title=status.title, message=status.message)


class StatusResponse(BaseModel):
    connection: str
    connected: bool
    submit_enabled: bool
    status: StatusBody | None = None


__all__ = [
    "SnippetCreateRequest",
    "SnippetCreateResponse",
    "SnippetItem",
    "SnippetListResponse",
    "StatusBody",
    "StatusResponse",
]
