"""Dashboard: view model composing the students, courses and payments queries.

Invariants:
    - Owns its three queries; mount/refetch/dispose fan out to all of them
    - state is loading while any query loads; the first error wins afterwards
    - stats are computed from whatever has loaded (missing lists count as empty)
"""

import asyncio
from collections.abc import Callable
from datetime import datetime, timezone

from schooldesk.core.lifecycle_state import QueryState
from schooldesk.core.ledger_stats import DashboardStats, compute_dashboard_stats
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.courses import use_courses
from schooldesk.services.payments import use_payments
from schooldesk.services.query_runner import Query
from schooldesk.services.students import use_students
from schooldesk.services.view_contract import combine_states


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Dashboard:

    def __init__(
        self, client: ApiClient, *, clock: Callable[[], datetime] = _utcnow,
    ):
        self.students = use_students(client)
        self.courses = use_courses(client)
        self.payments = use_payments(client)
        self._clock = clock

    @property
    def queries(self) -> tuple[Query, Query, Query]:
        return (self.students, self.courses, self.payments)

    @property
    def state(self) -> QueryState[tuple]:
        return combine_states(*(q.state for q in self.queries))

    @property
    def loading(self) -> bool:
        return self.state.loading

    @property
    def error(self) -> str | None:
        return self.state.error

    @property
    def stats(self) -> DashboardStats:
        return compute_dashboard_stats(
            self.students.data, self.courses.data, self.payments.data,
            self._clock(),
        )

    def mount(self) -> None:
        for query in self.queries:
            query.mount()

    async def wait(self) -> QueryState[tuple]:
        await asyncio.gather(*(q.wait() for q in self.queries))
        return self.state

    async def refetch(self) -> QueryState[tuple]:
        await asyncio.gather(*(q.refetch() for q in self.queries))
        return self.state

    def dispose(self) -> None:
        for query in self.queries:
            query.dispose()
