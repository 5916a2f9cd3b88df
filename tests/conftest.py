from __future__ import annotations

import itertools
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio

from codenotes.store import InMemoryDocumentStore, StoreError
from codenotes.widget import SnippetSession


class RecordingPresenter:
    def __init__(self) -> None:
        self.statuses = []
        self.views = []
        self.connection_states = []
        self.submit_calls = []
        self.focused = []
        self.prompts = []
        self.cleared = 0
        self.confirm_answer = True

    @property
    def last_status(self):
        return self.statuses[-1] if self.statuses else None

    @property
    def last_view(self):
        return self.views[-1] if self.views else None

    def show_status(self, status):
        self.statuses.append(status)

    def render_list(self, view):
        self.views.append(view)

    def set_connection_state(self, state):
        self.connection_states.append(state)

    def set_submit_enabled(self, enabled, *, saving=False):
        self.submit_calls.append((enabled, saving))

    def clear_code(self):
        self.cleared += 1

    def focus(self, field):
        self.focused.append(field)

    def confirm(self, prompt):
        self.prompts.append(prompt)
        return self.confirm_answer


class ScriptedStore(InMemoryDocumentStore):
    """In-memory store that records calls and can be told to fail."""

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self.calls = []
        self.failures = {}

    def fail(self, operation, message):
        self.failures[operation] = StoreError(message)

    def _check(self, operation):
        error = self.failures.get(operation)
        if error is not None:
            raise error

    async def add(self, collection, document):
        self.calls.append(("add", collection, dict(document)))
        self._check("add")
        return await super().add(collection, document)

    async def query(self, collection, *, order_by=None, descending=False, limit=None):
        self.calls.append(("query", collection, order_by, descending, limit))
        self._check("query")
        return await super().query(
            collection, order_by=order_by, descending=descending, limit=limit
        )

    async def delete(self, collection, doc_id):
        self.calls.append(("delete", collection, doc_id))
        self._check("delete")
        await super().delete(collection, doc_id)


BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def stepping_clock(start=BASE_TIME, step=timedelta(seconds=1)):
    counter = itertools.count()
    return lambda: start + step * next(counter)


@pytest.fixture
def presenter():
    return RecordingPresenter()


@pytest.fixture
def store():
    return ScriptedStore(clock=stepping_clock())


@pytest.fixture
def session(store, presenter):
    return SnippetSession(store, presenter, clock=lambda: BASE_TIME)


@pytest_asyncio.fixture
async def connected_session(session, store, presenter):
    outcome = await session.probe()
    assert outcome.ok
    store.calls.clear()
    presenter.statuses.clear()
    presenter.views.clear()
    presenter.submit_calls.clear()
    return session


@pytest.fixture
def make_store():
    def _make(**kwargs):
        kwargs.setdefault("clock", stepping_clock())
        return ScriptedStore(**kwargs)

    return _make
