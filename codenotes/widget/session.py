"""The snippet session: probe, create, list and delete against a document store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Callable, Generic, TypeVar

from ..exception_handler import ErrorHandler
from ..snippet import snippet_document
from ..snippet.model import FIELD_TIMESTAMP
from ..store import DocumentStore, StoreError
from .errors import (
    ConfirmationAborted,
    ConnectivityError,
    InputField,
    SnippetClientError,
    StoreOperationError,
    ValidationError,
)
from .presenter import Presenter
from .view import (
    DEFAULT_AUTO_HIDE,
    ConnectionState,
    ListView,
    StatusKind,
    StatusMessage,
    render_documents,
)

logger = logging.getLogger("codenotes")

T = TypeVar("T")

DEFAULT_COLLECTION = "savedCodes"
DELETE_PROMPT = "Are you sure you want to delete this item?"
PROBE_SUCCESS_AUTO_HIDE = 3.0


@dataclass(frozen=True, slots=True)
class Outcome(Generic[T]):
    """Result of one session operation: a value or the error that was reported."""

    value: T | None = None
    error: SnippetClientError | None = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def aborted(self) -> bool:
        return isinstance(self.error, ConfirmationAborted)


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class SnippetSession:
    """Holds the connection state and the last rendered list for one widget.

    The connection state is written only by :meth:`probe` and gates
    :meth:`create`, :meth:`refresh` and :meth:`delete`.
    """

    def __init__(
        self,
        store: DocumentStore,
        presenter: Presenter,
        *,
        collection: str = DEFAULT_COLLECTION,
        error_handler: ErrorHandler | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self.store = store
        self.presenter = presenter
        self.collection = collection
        self.error_handler = error_handler or ErrorHandler()
        self._clock = clock
        self._connection = ConnectionState.UNKNOWN
        self._view: ListView | None = None

    @property
    def connection(self) -> ConnectionState:
        return self._connection

    @property
    def connected(self) -> bool:
        return self._connection is ConnectionState.CONNECTED

    @property
    def view(self) -> ListView | None:
        return self._view

    async def probe(self) -> Outcome[None]:
        """Check the store is reachable, then enable saving and load the list."""
        self._set_connection(ConnectionState.TESTING)
        try:
            await self.store.query(self.collection, limit=1)
        except StoreError as exc:
            self._set_connection(ConnectionState.FAILED)
            self.error_handler.collect_store_error(exc, "probe", collection=self.collection)
            error = ConnectivityError(exc.message, title="Store Connection Error")
            self._report(StatusKind.ERROR, error.title, error.message)
            return Outcome(error=error)

        self._set_connection(ConnectionState.CONNECTED)
        self.presenter.set_submit_enabled(True)
        self._report(
            StatusKind.SUCCESS,
            "Store Connected",
            "Successfully connected to the snippet store.",
            auto_hide=PROBE_SUCCESS_AUTO_HIDE,
        )
        await self.refresh()
        return Outcome()

    async def create(self, date: str | None, code: str | None) -> Outcome[str]:
        """Validate and save a new snippet. Returns the id assigned by the store."""
        if not self.connected:
            return self._reject(
                ConnectivityError("Cannot save: the snippet store is not connected.")
            )

        date = date or ""
        code = (code or "").strip()
        if not date:
            return self._reject(
                ValidationError(InputField.DATE, "Please select a date.", title="Missing Date")
            )
        if not code:
            return self._reject(
                ValidationError(InputField.CODE, "Please enter some code.", title="Missing Code")
            )

        self.presenter.set_submit_enabled(False, saving=True)
        try:
            doc_id = await self.store.add(
                self.collection, snippet_document(date, code, now=self._clock())
            )
        except StoreError as exc:
            self.error_handler.collect_store_error(exc, "create", collection=self.collection)
            error = StoreOperationError("create", f"Error: {exc.message}", title="Save Failed")
            self._report(StatusKind.ERROR, error.title, error.message)
            return Outcome(error=error)
        else:
            logger.info("Document written with ID: %s", doc_id)
            self._report(
                StatusKind.SUCCESS,
                "Saved Successfully!",
                f"Snippet saved with ID: {doc_id}",
            )
            self.presenter.clear_code()
        finally:
            self.presenter.set_submit_enabled(True)

        await self.refresh()
        return Outcome(value=doc_id)

    async def refresh(self) -> Outcome[ListView]:
        """Fetch every snippet, newest first, and render the list."""
        if not self.connected:
            return Outcome(error=ConnectivityError("The snippet store is not connected."))

        self._render(ListView.loading())
        try:
            documents = await self.store.query(
                self.collection, order_by=FIELD_TIMESTAMP, descending=True
            )
        except StoreError as exc:
            self.error_handler.collect_store_error(exc, "list", collection=self.collection)
            view = ListView.error(exc.message)
            self._render(view)
            return Outcome(
                error=StoreOperationError("list", view.message, title="Load Failed")
            )

        view = render_documents(documents)
        self._render(view)
        return Outcome(value=view)

    async def delete(self, snippet_id: str, *, confirmed: bool | None = None) -> Outcome[str]:
        """Delete one snippet after confirmation.

        ``confirmed=None`` asks the presenter; ``True``/``False`` is the caller's answer.
        """
        if confirmed is None:
            confirmed = self.presenter.confirm(DELETE_PROMPT)
        if not confirmed:
            return Outcome(error=ConfirmationAborted())

        if not self.connected:
            return self._reject(
                ConnectivityError("Cannot delete: the snippet store is not connected.")
            )

        try:
            await self.store.delete(self.collection, snippet_id)
        except StoreError as exc:
            self.error_handler.collect_store_error(
                exc, "delete", collection=self.collection, snippet_id=snippet_id
            )
            error = StoreOperationError("delete", f"Error: {exc.message}", title="Delete Failed")
            self._report(StatusKind.ERROR, error.title, error.message)
            return Outcome(error=error)

        self._report(StatusKind.SUCCESS, "Item Deleted", "The item has been deleted successfully.")
        if self._view is not None:
            remaining = self._view.without(snippet_id)
            if remaining != self._view:
                self._render(remaining)
        return Outcome(value=snippet_id)

    def clear(self) -> None:
        """Clear the code input; the date is kept."""
        self.presenter.clear_code()
        self.presenter.focus(InputField.CODE)
        self._report(
            StatusKind.INFO,
            "Fields Cleared",
            "Code field has been cleared. Date remains unchanged.",
        )

    def _reject(self, error: SnippetClientError) -> Outcome:
        self._report(StatusKind.ERROR, error.title, error.message)
        if isinstance(error, ValidationError):
            self.presenter.focus(error.field)
        return Outcome(error=error)

    def _report(
        self, kind: StatusKind, title: str, message: str, *, auto_hide: float = DEFAULT_AUTO_HIDE
    ) -> None:
        self.presenter.show_status(StatusMessage(kind, title, message, auto_hide))

    def _render(self, view: ListView) -> None:
        self._view = view
        self.presenter.render_list(view)

    def _set_connection(self, state: ConnectionState) -> None:
        self._connection = state
        self.presenter.set_connection_state(state)


__all__ = ["DEFAULT_COLLECTION", "DELETE_PROMPT", "Outcome", "SnippetSession"]
