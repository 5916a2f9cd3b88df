"""Snippet store client: session operations and the view values they produce."""

from .errors import (
    ConfirmationAborted,
    ConnectivityError,
    InputField,
    SnippetClientError,
    StoreOperationError,
    ValidationError,
)
from .presenter import Presenter
from .session import Outcome, SnippetSession
from .view import (
    ConnectionState,
    ListState,
    ListView,
    RenderedSnippet,
    StatusKind,
    StatusMessage,
)

__all__ = [
    "ConfirmationAborted",
    "ConnectionState",
    "ConnectivityError",
    "InputField",
    "ListState",
    "ListView",
    "Outcome",
    "Presenter",
    "RenderedSnippet",
    "SnippetClientError",
    "SnippetSession",
    "StatusKind",
    "StatusMessage",
    "StoreOperationError",
    "ValidationError",
]
