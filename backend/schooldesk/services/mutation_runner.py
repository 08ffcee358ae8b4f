"""Mutation Runner: on-demand write lifecycle that records and re-raises failures.

Invariants:
    - Never runs on its own; one mutation_fn call per mutate(), no retry
    - mutate() sets loading=True, error=None before calling, then settles
    - Failure is stored in state AND the original exception is re-raised
    - mutate_async() is a pass-through to mutate()
    - Overlapping calls: each returns/raises to its own caller, only the latest commits
    - After dispose() calls still run and return/raise, but state is frozen
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Generic, TypeVar

from schooldesk.core.error_info import Ok
from schooldesk.core.lifecycle_state import MutationState, begin, fail, succeed
from schooldesk.services.request_executor import execute

logger = logging.getLogger(__name__)

P = TypeVar("P")
T = TypeVar("T")

Listener = Callable[[MutationState], None]


class Mutation(Generic[P, T]):
    """One write action as seen by one view."""

    def __init__(
        self, mutation_fn: Callable[[P], Awaitable[T]], *, name: str = "mutation",
    ):
        self.name = name
        self._mutation_fn = mutation_fn
        self._state: MutationState[T] = MutationState()
        self._generation = 0
        self._listeners: list[Listener] = []
        self._disposed = False

    @property
    def state(self) -> MutationState[T]:
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

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def mutate(self, params: P) -> T:
        self._generation += 1
        generation = self._generation
        self._commit(generation, begin(self._state))

        result = await execute(lambda: self._mutation_fn(params))

        if isinstance(result, Ok):
            self._commit(generation, succeed(self._state, result.value))
            return result.value

        logger.warning(
            f"Mutation '{self.name}' failed: {result.error.message}",
            extra={"mutation": self.name, "generation": generation},
        )
        self._commit(generation, fail(self._state, result.error.message))
        raise result.exception

    async def mutate_async(self, params: P) -> T:
        return await self.mutate(params)

    def dispose(self) -> None:
        self._disposed = True
        self._listeners.clear()

    def _commit(self, generation: int, state: MutationState[T]) -> None:
        if self._disposed or generation != self._generation:
            logger.debug(
                f"Mutation '{self.name}' skipped stale commit",
                extra={"mutation": self.name, "generation": generation},
            )
            return
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                logger.error(
                    f"Listener on mutation '{self.name}' raised: {e}",
                    exc_info=True, extra={"mutation": self.name},
                )
