"""Failure values produced by the snippet session operations."""

from __future__ import annotations

from enum import Enum


class InputField(str, Enum):
    DATE = "date"
    CODE = "code"


class SnippetClientError(Exception):
    """Base error with the title/message pair shown in the status banner."""

    title = "Error"

    def __init__(self, message: str, *, title: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        if title is not None:
            self.title = title


class ConnectivityError(SnippetClientError):
    title = "Not Connected"


class ValidationError(SnippetClientError):
    def __init__(self, field: InputField, message: str, *, title: str) -> None:
        super().__init__(message, title=title)
        self.field = field


class StoreOperationError(SnippetClientError):
    def __init__(self, operation: str, message: str, *, title: str) -> None:
        super().__init__(message, title=title)
        self.operation = operation


class ConfirmationAborted(SnippetClientError):
    """The user declined a destructive confirmation. Nothing happened."""

    title = "Cancelled"

    def __init__(self, message: str = "Deletion was not confirmed.") -> None:
        super().__init__(message)


__all__ = [
    "ConfirmationAborted",
    "ConnectivityError",
    "InputField",
    "SnippetClientError",
    "StoreOperationError",
    "ValidationError",
]
