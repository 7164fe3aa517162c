"""Tests for the observable state holder."""
import asyncio
import pytest
from repo_browser.application.state_store import StateStore
from repo_browser.domain.models import PaginationState, Repository


LOADING = PaginationState(is_loading=True)
LOADED = PaginationState(repositories=(Repository(1, "repo1"),), has_more=True)


def test_subscribe_receives_current_value_first():
    """Test that a new listener is called with the current state."""
    store = StateStore(LOADING)
    seen = []

    store.subscribe(seen.append)

    assert seen == [LOADING]


def test_equal_values_are_not_emitted():
    """Test that setting the same state twice notifies once."""
    store = StateStore()
    seen = []
    store.subscribe(seen.append)

    store.set(LOADING)
    store.set(PaginationState(is_loading=True))

    assert seen == [PaginationState(), LOADING]


def test_unsubscribe_stops_notifications():
    """Test removing a listener."""
    store = StateStore()
    seen = []
    unsubscribe = store.subscribe(seen.append)

    unsubscribe()
    unsubscribe()
    store.set(LOADING)

    assert seen == [PaginationState()]


def test_failing_listener_does_not_block_others():
    """Test that one raising listener does not hide updates from the rest."""
    store = StateStore()
    seen = []

    def broken(state):
        if state.is_loading:
            raise RuntimeError("boom")

    store.subscribe(broken)
    store.subscribe(seen.append)
    store.set(LOADING)

    assert store.value == LOADING
    assert seen == [PaginationState(), LOADING]


@pytest.mark.asyncio
async def test_updates_yields_changes_in_order():
    """Test iterating over state changes."""
    store = StateStore()
    updates = store.updates()

    assert await updates.__anext__() == PaginationState()

    store.set(LOADING)
    store.set(LOADED)

    assert await updates.__anext__() == LOADING
    assert await updates.__anext__() == LOADED

    await updates.aclose()


@pytest.mark.asyncio
async def test_updates_waits_for_next_change():
    """Test that the iterator suspends until something is set."""
    store = StateStore()
    updates = store.updates()
    await updates.__anext__()

    pending = asyncio.ensure_future(updates.__anext__())
    await asyncio.sleep(0)
    assert not pending.done()

    store.set(LOADED)

    assert await asyncio.wait_for(pending, timeout=1) == LOADED
    await updates.aclose()
