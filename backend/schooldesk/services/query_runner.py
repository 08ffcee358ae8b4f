"""Query Runner: auto-triggered read lifecycle bound to a dependency list.

Invariants:
    - mount() moves state to loading synchronously, before the first await
    - update() starts a run only when deps changed (shallow, positional) and the query is mounted
    - Every run takes a new generation; only the current generation may commit
    - Starting a run cancels the superseded pending run
    - dispose() cancels the pending run; state never changes afterwards
    - Fetch failures are captured into state, never raised out of a run
    - No cache: every instance performs its own calls

Design Decisions:
    - asyncio.Task per run, owned by the Query: cancellation is the abort signal
      handed to the fetcher (CancelledError at its await point)
    - Generation check kept in addition to cancellation: a fetcher that
      swallows CancelledError still cannot overwrite newer state
    - update(fetcher, deps) mirrors a re-render: the fetcher passed with
      unchanged deps is ignored and the memoized one is kept
"""

import asyncio
import logging
from collections.abc import Awaitable, Callable, Sequence
from typing import Any, Generic, TypeVar

from schooldesk.core.error_info import Ok
from schooldesk.core.errors import QueryDisposedError
from schooldesk.core.lifecycle_state import (
    QueryState, begin, dependencies_changed, fail, succeed,
)
from schooldesk.services.request_executor import execute

logger = logging.getLogger(__name__)

T = TypeVar("T")

Fetcher = Callable[[], Awaitable[T]]
Listener = Callable[[QueryState], None]


class Query(Generic[T]):
    """One read resource as seen by one view."""

    def __init__(
        self, fetcher: Fetcher, deps: Sequence[Any] = (), *, name: str = "query",
    ):
        self.name = name
        self._fetcher = fetcher
        self._deps = tuple(deps)
        self._state: QueryState[T] = QueryState()
        self._generation = 0
        self._current: asyncio.Task | None = None
        self._listeners: list[Listener] = []
        self._mounted = False
        self._disposed = False

    # ─── Read-only view ───────────────────────────────────────────

    @property
    def state(self) -> QueryState[T]:
        return self._state

    @property
    def data(self) -> T | None:
        return self._state.data

    @property
    def loading(self) -> bool:
        return self._state.loading

    @property
    def error(self) -> str | None:
        return self._state.error

    @property
    def deps(self) -> tuple:
        return self._deps

    @property
    def disposed(self) -> bool:
        return self._disposed

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with every new state. Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ─── Lifecycle ────────────────────────────────────────────────

    def mount(self) -> asyncio.Task:
        """Start the first run. Idempotent while mounted.

        Needs a running event loop; without one RuntimeError propagates
        and the query stays idle and unmounted.
        """
        self._ensure_live()
        if self._mounted and self._current is not None:
            return self._current
        task = self._start()
        self._mounted = True
        return task

    def update(self, fetcher: Fetcher, deps: Sequence[Any]) -> asyncio.Task | None:
        """Re-render with a fetcher and deps; re-runs only if deps changed."""
        self._ensure_live()
        deps = tuple(deps)
        if not dependencies_changed(self._deps, deps):
            return None
        self._fetcher = fetcher
        self._deps = deps
        if not self._mounted:
            return None
        return self._start()

    async def refetch(self) -> QueryState[T]:
        """Force a new run with the current fetcher and wait for it to settle."""
        self._ensure_live()
        self._start()
        return await self.wait()

    async def wait(self) -> QueryState[T]:
        """Wait until no run is pending (following supersessions)."""
        while self._current is not None and not self._current.done():
            await asyncio.wait({self._current})
        return self._state

    def dispose(self) -> None:
        """Unmount: cancel the pending run and freeze state."""
        if self._disposed:
            return
        self._disposed = True
        self._generation += 1
        if self._current is not None and not self._current.done():
            self._current.cancel()
        self._listeners.clear()
        logger.debug(f"Query '{self.name}' disposed", extra={"query": self.name})

    # ─── Internals ────────────────────────────────────────────────

    def _ensure_live(self) -> None:
        if self._disposed:
            raise QueryDisposedError(self.name)

    def _start(self) -> asyncio.Task:
        loop = asyncio.get_running_loop()
        if self._current is not None and not self._current.done():
            self._current.cancel()
        self._generation += 1
        generation = self._generation
        self._commit(begin(self._state))
        self._current = loop.create_task(
            self._run(generation, self._fetcher),
            name=f"{self.name}#{generation}",
        )
        return self._current

    async def _run(self, generation: int, fetcher: Fetcher) -> None:
        result = await execute(fetcher)
        if generation != self._generation:
            logger.debug(
                f"Query '{self.name}' discarded stale result",
                extra={"query": self.name, "generation": generation},
            )
            return
        if isinstance(result, Ok):
            self._commit(succeed(self._state, result.value))
            return
        logger.warning(
            f"Query '{self.name}' failed: {result.error.message}",
            extra={"query": self.name, "generation": generation},
        )
        self._commit(fail(self._state, result.error.message))

    def _commit(self, state: QueryState[T]) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(
                    f"Listener on query '{self.name}' raised: {e}",
                    exc_info=True, extra={"query": self.name},
                )
