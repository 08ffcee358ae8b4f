"""View Contract: how views consume queries and mutations.

Invariants:
    - render_state() calls exactly one of loading / error / success
    - Idle (never started) renders the loading branch
    - render_query() hands the error branch a retry callable bound to query.refetch
    - mutate_then_refetch() refetches only after the mutation succeeded
    - combine_states(): loading if any loading; otherwise first error wins; data is a tuple
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, TypeVar

from schooldesk.core.domain_types import LifecycleStatus
from schooldesk.core.lifecycle_state import QueryState
from schooldesk.services.mutation_runner import Mutation
from schooldesk.services.query_runner import Query

R = TypeVar("R")
T = TypeVar("T")

Retry = Callable[[], Awaitable[QueryState]]


def render_state(
    state: QueryState,
    *,
    loading: Callable[[], R],
    error: Callable[[str, Retry | None], R],
    success: Callable[[Any], R],
    retry: Retry | None = None,
) -> R:
    """Pick the branch for a bare state; retry is None unless given."""
    status = state.status
    if status in (LifecycleStatus.LOADING, LifecycleStatus.IDLE):
        return loading()
    if status is LifecycleStatus.ERROR:
        return error(state.error, retry)
    return success(state.data)


def render_query(
    query: Query,
    *,
    loading: Callable[[], R],
    error: Callable[[str, Retry], R],
    success: Callable[[Any], R],
) -> R:
    return render_state(
        query.state,
        loading=loading, error=error, success=success, retry=query.refetch,
    )


async def mutate_then_refetch(mutation: Mutation, params: Any, *queries: Query) -> Any:
    """Run the mutation, then refresh the affected queries. No invalidation is automatic."""
    result = await mutation.mutate(params)
    if queries:
        await asyncio.gather(*(q.refetch() for q in queries))
    return result


def combine_states(*states: QueryState) -> QueryState[tuple]:
    loading = any(s.loading for s in states)
    error = next((s.error for s in states if s.error is not None), None)
    settled = all(s.settled for s in states)
    return QueryState(
        data=tuple(s.data for s in states),
        loading=loading,
        error=None if loading else error,
        settled=settled or error is not None,
    )
