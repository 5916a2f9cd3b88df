import pytest

from codenotes.widget import ConnectionState, ConnectivityError, ListState, StatusKind


@pytest.mark.asyncio
async def test_probe_success_enables_saving_and_loads_list(session, store, presenter):
    outcome = await session.probe()

    assert outcome.ok
    assert session.connected
    assert presenter.connection_states == [ConnectionState.TESTING, ConnectionState.CONNECTED]
    assert presenter.submit_calls == [(True, False)]

    status = presenter.statuses[0]
    assert status.kind is StatusKind.SUCCESS
    assert status.title == "Store Connected"
    assert status.auto_hide == 3.0

    assert store.calls[0] == ("query", "savedCodes", None, False, 1)
    assert store.calls[1] == ("query", "savedCodes", "timestamp", True, None)
    assert [view.state for view in presenter.views] == [ListState.LOADING, ListState.EMPTY]


@pytest.mark.asyncio
async def test_probe_failure_keeps_submit_disabled_and_never_lists(session, store, presenter):
    store.fail("query", "permission-denied")

    outcome = await session.probe()

    assert not outcome.ok
    assert isinstance(outcome.error, ConnectivityError)
    assert not session.connected
    assert session.connection is ConnectionState.FAILED
    assert presenter.connection_states[-1] is ConnectionState.FAILED

    status = presenter.last_status
    assert status.kind is StatusKind.ERROR
    assert status.title == "Store Connection Error"
    assert status.message == "permission-denied"

    assert presenter.submit_calls == []
    assert presenter.views == []
    assert len(store.calls) == 1
    assert session.error_handler.get_error_summary()["operations"] == {"probe": 1}
