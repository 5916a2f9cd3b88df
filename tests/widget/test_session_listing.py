import pytest

from codenotes.widget import ConnectivityError, ListState, StoreOperationError
from codenotes.widget.view import EMPTY_MESSAGE, LOADING_MESSAGE


@pytest.mark.asyncio
async def test_refresh_orders_newest_first(connected_session):
    first = await connected_session.create("2024-01-01", "first")
    second = await connected_session.create("2024-01-02", "second")
    third = await connected_session.create("2024-01-03", "third")

    outcome = await connected_session.refresh()

    assert [item.id for item in outcome.value.items] == [third.value, second.value, first.value]


@pytest.mark.asyncio
async def test_refresh_escapes_code_but_keeps_it_round_trippable(connected_session):
    await connected_session.create("2024-01-01", "if a < b && c > d: print('<x>')")

    outcome = await connected_session.refresh()

    (item,) = outcome.value.items
    assert item.code_html == "if a &lt; b &amp;&amp; c &gt; d: print('&lt;x&gt;')"
    assert item.date == "2024-01-01"


@pytest.mark.asyncio
async def test_refresh_twice_renders_identical_views(connected_session):
    await connected_session.create("2024-01-01", "a = 1")
    await connected_session.create("2024-01-02", "b = 2")

    first = await connected_session.refresh()
    second = await connected_session.refresh()

    assert first.value == second.value


@pytest.mark.asyncio
async def test_refresh_shows_loading_then_empty_placeholder(connected_session, presenter):
    outcome = await connected_session.refresh()

    assert [view.state for view in presenter.views] == [ListState.LOADING, ListState.EMPTY]
    assert outcome.value.message == EMPTY_MESSAGE
    assert EMPTY_MESSAGE != LOADING_MESSAGE


@pytest.mark.asyncio
async def test_refresh_failure_renders_error_placeholder(connected_session, store, presenter):
    store.fail("query", "deadline exceeded")

    outcome = await connected_session.refresh()

    assert isinstance(outcome.error, StoreOperationError)
    view = presenter.last_view
    assert view.state is ListState.ERROR
    assert view.message == "Error loading data: deadline exceeded"
    assert connected_session.view == view


@pytest.mark.asyncio
async def test_refresh_is_a_no_op_when_not_connected(session, store, presenter):
    outcome = await session.refresh()

    assert isinstance(outcome.error, ConnectivityError)
    assert presenter.views == []
    assert store.calls == []
