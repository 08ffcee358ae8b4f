"""Query Runner: tests for the auto-triggered read lifecycle.

Invariants:
    - mount() shows loading before the first await
    - mount() outside an event loop raises and leaves the query idle
    - Dependency change triggers exactly one new fetch; unchanged deps trigger none
    - Latest generation wins regardless of completion order
    - Sequential refetches perform one fetch each
    - dispose() cancels the pending fetch and freezes state

Design Decisions:
    - Events gate the fetchers instead of wall-clock sleeps where ordering matters
"""

import asyncio

import pytest

from schooldesk.core.domain_types import LifecycleStatus
from schooldesk.core.errors import QueryDisposedError
from schooldesk.services.query_runner import Query


# -- Helpers -------------------------------------------------------------------

def _counting(value):
    """Fetcher returning `value`, with the number of calls kept on .calls."""
    async def fetch():
        fetch.calls += 1
        return value
    fetch.calls = 0
    return fetch


def _gated(gate: asyncio.Event, value):
    async def fetch():
        await gate.wait()
        return value
    return fetch


def _exactly_one_holds(state) -> bool:
    holds = [
        state.loading,
        not state.loading and state.error is None and state.settled,
        not state.loading and state.error is not None,
    ]
    return holds.count(True) == 1


# ==============================================================================
# Mount & settle
# ==============================================================================


async def test_mount_is_loading_then_settles_with_data():
    async def fetch():
        await asyncio.sleep(0.01)
        return [{"id": "1"}, {"id": "2"}]

    query = Query(fetch)
    query.mount()
    assert query.state.as_dict() == {"data": None, "loading": True, "error": None}

    await query.wait()
    assert query.state.as_dict() == {
        "data": [{"id": "1"}, {"id": "2"}], "loading": False, "error": None,
    }


async def test_unmounted_query_is_idle():
    query = Query(_counting([]))
    assert query.state.status is LifecycleStatus.IDLE
    assert query.state.loading is False


async def test_mount_is_idempotent():
    fetch = _counting([])
    query = Query(fetch)
    first = query.mount()
    assert query.mount() is first
    await query.wait()
    assert fetch.calls == 1


def test_mount_without_event_loop_leaves_query_idle():
    fetch = _counting(["a"])
    query = Query(fetch)
    published = []
    query.subscribe(published.append)

    with pytest.raises(RuntimeError):
        query.mount()

    assert query.state.status is LifecycleStatus.IDLE
    assert query.loading is False
    assert published == []
    assert fetch.calls == 0

    async def remount():
        query.mount()
        return await query.wait()

    state = asyncio.run(remount())
    assert state.data == ["a"]
    assert fetch.calls == 1


async def test_failure_is_captured_in_state():
    async def fetch():
        raise ValueError("timeout")

    query = Query(fetch)
    query.mount()
    state = await query.wait()
    assert state.error == "timeout"
    assert state.loading is False
    assert state.data is None


async def test_failure_keeps_previous_data():
    outcomes = iter([["a"], ValueError("gone")])

    async def fetch():
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    query = Query(fetch)
    query.mount()
    await query.wait()
    state = await query.refetch()
    assert state.error == "gone"
    assert state.data == ["a"]


async def test_every_published_state_is_exhaustive():
    seen = []
    outcomes = iter([[1], RuntimeError("boom"), [2]])

    async def fetch():
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    query = Query(fetch)
    query.subscribe(seen.append)
    query.mount()
    await query.wait()
    await query.refetch()
    await query.refetch()

    assert len(seen) == 6
    assert all(_exactly_one_holds(s) for s in seen)
    assert seen[-1].data == [2]


async def test_listener_errors_do_not_break_the_query():
    def broken(state):
        raise RuntimeError("listener bug")

    query = Query(_counting("ok"))
    query.subscribe(broken)
    query.mount()
    state = await query.wait()
    assert state.status is LifecycleStatus.SUCCESS


async def test_unsubscribe_stops_notifications():
    seen = []
    query = Query(_counting("ok"))
    unsubscribe = query.subscribe(seen.append)
    unsubscribe()
    query.mount()
    await query.wait()
    assert seen == []


# ==============================================================================
# Dependencies
# ==============================================================================


async def test_dependency_change_triggers_exactly_one_fetch():
    page_one, page_two = _counting("page 1"), _counting("page 2")
    query = Query(page_one, (1,))
    query.mount()
    await query.wait()

    query.update(page_two, (2,))
    await query.wait()

    assert page_one.calls == 1
    assert page_two.calls == 1
    assert query.data == "page 2"


async def test_unchanged_dependencies_do_not_refetch():
    first, second = _counting("first"), _counting("second")
    query = Query(first, ({"status": "active"},))
    query.mount()
    await query.wait()

    assert query.update(second, ({"status": "active"},)) is None
    await query.wait()

    assert second.calls == 0
    assert query.data == "first"


async def test_latest_dependency_wins_over_late_result():
    slow_gate = asyncio.Event()
    query = Query(_gated(slow_gate, "page 1"), (1,))
    first = query.mount()

    query.update(_counting("page 2"), (2,))
    state = await query.wait()
    slow_gate.set()
    await asyncio.wait({first})

    assert first.cancelled()
    assert state.data == "page 2"
    assert query.data == "page 2"


async def test_superseded_result_is_discarded_even_if_cancel_is_ignored():
    gate = asyncio.Event()

    async def stubborn():
        try:
            await gate.wait()
        except asyncio.CancelledError:
            pass
        return "stale"

    query = Query(stubborn, (1,))
    first = query.mount()
    await asyncio.sleep(0)

    query.update(_counting("fresh"), (2,))
    await query.wait()
    await first

    assert query.data == "fresh"
    assert query.loading is False


async def test_update_before_mount_only_records_deps():
    initial, replaced = _counting("initial"), _counting("replaced")
    query = Query(initial, ("a",))

    assert query.update(replaced, ("b",)) is None
    assert query.deps == ("b",)
    assert query.state.status is LifecycleStatus.IDLE

    query.mount()
    await query.wait()
    assert initial.calls == 0
    assert query.data == "replaced"


# ==============================================================================
# Refetch & dispose
# ==============================================================================


async def test_sequential_refetches_fetch_once_each():
    calls = 0

    async def fetch():
        nonlocal calls
        calls += 1
        return calls

    query = Query(fetch)
    for _ in range(3):
        await query.refetch()

    assert calls == 3
    assert query.data == 3


async def test_refetch_clears_previous_error():
    outcomes = iter([RuntimeError("down"), "up"])

    async def fetch():
        outcome = next(outcomes)
        if isinstance(outcome, Exception):
            raise outcome
        return outcome

    query = Query(fetch)
    query.mount()
    await query.wait()
    assert query.error == "down"

    state = await query.refetch()
    assert state.error is None
    assert state.data == "up"


async def test_dispose_cancels_pending_fetch_and_freezes_state():
    gate = asyncio.Event()
    query = Query(_gated(gate, "late"))
    task = query.mount()

    query.dispose()
    gate.set()
    await asyncio.wait({task})

    assert task.cancelled()
    assert query.disposed
    assert query.state.loading is True
    assert query.data is None


async def test_use_after_dispose_raises():
    query = Query(_counting("x"))
    query.dispose()

    with pytest.raises(QueryDisposedError):
        query.mount()
    with pytest.raises(QueryDisposedError):
        await query.refetch()
    with pytest.raises(QueryDisposedError):
        query.update(_counting("y"), (1,))
