"""Lifecycle State: immutable query/mutation snapshots and their transitions.

Invariants:
    - Exactly one holds: loading; settled success (error None); settled failure (error set)
    - begin() clears error and keeps data; fail() keeps the last successful data
    - Snapshots are frozen: every transition returns a new object
    - Dependency lists compare shallow and positional (identity, then equality)

Design Decisions:
    - Pure functions over methods on the runners: transitions testable without a loop
    - QueryState and MutationState share one shape; separate names keep call sites explicit
"""

from collections.abc import Sequence
from dataclasses import dataclass, replace
from typing import Any, Generic, TypeVar

from schooldesk.core.domain_types import LifecycleStatus

T = TypeVar("T")


@dataclass(frozen=True)
class QueryState(Generic[T]):
    """Snapshot of a read operation: {data, loading, error}."""

    data: T | None = None
    loading: bool = False
    error: str | None = None
    # False until the first settle; distinguishes idle from a settled None
    settled: bool = False

    @property
    def status(self) -> LifecycleStatus:
        if self.loading:
            return LifecycleStatus.LOADING
        if self.error is not None:
            return LifecycleStatus.ERROR
        if self.settled:
            return LifecycleStatus.SUCCESS
        return LifecycleStatus.IDLE

    def as_dict(self) -> dict[str, Any]:
        return {"data": self.data, "loading": self.loading, "error": self.error}


@dataclass(frozen=True)
class MutationState(QueryState[T]):
    """Snapshot of a write operation. Idle until first invoked."""


def begin(state: QueryState[T]) -> QueryState[T]:
    return replace(state, loading=True, error=None)


def succeed(state: QueryState[T], data: T) -> QueryState[T]:
    return replace(state, data=data, loading=False, error=None, settled=True)


def fail(state: QueryState[T], message: str) -> QueryState[T]:
    return replace(state, loading=False, error=message, settled=True)


def dependencies_changed(previous: Sequence[Any], current: Sequence[Any]) -> bool:
    """True when the lists differ in length or at any position."""
    if len(previous) != len(current):
        return True
    for old, new in zip(previous, current):
        if old is new:
            continue
        try:
            if old == new:
                continue
        except Exception:
            # Uncomparable values (e.g. arrays with ambiguous truth) count as changed
            return True
        return True
    return False
