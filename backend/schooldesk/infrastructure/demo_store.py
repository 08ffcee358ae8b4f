"""Demo Store: in-process record collections behind the demo API.

Invariants:
    - Records are dicts with string ids and camelCase keys
    - Reads return copies; callers never mutate stored records
    - New ids continue after the highest numeric id in the collection
    - Unknown ids raise ResourceNotFoundError (mapped to 404 by the API)
    - Nothing survives a restart; every store starts from a seed

Design Decisions:
    - Singleton demo_store initialized on startup via lifespan, get_store() as
      FastAPI dependency (overridden per test with a fresh store)
"""

import copy
import logging
from collections.abc import Callable
from datetime import datetime, timezone

from schooldesk.core.demo_seed import build_seed
from schooldesk.core.domain_types import Collection, RecordId
from schooldesk.core.errors import ResourceNotFoundError

logger = logging.getLogger(__name__)

# Searched by the "search" list filter, per collection
_SEARCH_FIELDS = {
    Collection.STUDENTS: ("name", "lastName", "email"),
    Collection.COURSES: ("name", "code", "description"),
    Collection.ENROLLMENTS: ("notes",),
    Collection.PAYMENTS: ("description", "reference"),
    Collection.CASH: ("description", "reference", "category"),
    Collection.PURCHASES: ("title", "description", "supplier"),
    Collection.REPORTS: ("title", "description", "notes"),
}


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class DemoStore:
    """Record collections with list/get/create/update/delete."""

    def __init__(
        self,
        seed: dict[Collection, list[dict]] | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ):
        self._clock = clock
        seed = seed if seed is not None else build_seed(clock())
        self._records: dict[Collection, list[dict]] = {
            collection: copy.deepcopy(seed.get(collection, []))
            for collection in Collection
        }
        self._next_ids = {
            collection: self._highest_id(records) + 1
            for collection, records in self._records.items()
        }

    @staticmethod
    def _highest_id(records: list[dict]) -> int:
        ids = [int(r["id"]) for r in records if str(r.get("id", "")).isdigit()]
        return max(ids, default=0)

    def now(self) -> str:
        return self._clock().isoformat()

    # ─── Reads ────────────────────────────────────────────────────

    def list_records(
        self,
        collection: Collection,
        *,
        status: str | None = None,
        search: str | None = None,
        where: dict | None = None,
    ) -> list[dict]:
        records = self._records[collection]
        if status:
            records = [r for r in records if r.get("status") == status]
        if where:
            records = [
                r for r in records
                if all(r.get(k) == v for k, v in where.items())
            ]
        if search:
            needle = search.lower()
            fields = _SEARCH_FIELDS[collection]
            records = [
                r for r in records
                if any(needle in str(r.get(f) or "").lower() for f in fields)
            ]
        return copy.deepcopy(records)

    def get(self, collection: Collection, record_id: RecordId) -> dict:
        return copy.deepcopy(self._find(collection, record_id))

    # ─── Writes ───────────────────────────────────────────────────

    def create(self, collection: Collection, payload: dict) -> dict:
        record_id = RecordId(str(self._next_ids[collection]))
        self._next_ids[collection] += 1
        at = self.now()
        record = {**payload, "id": record_id, "createdAt": at, "updatedAt": at}
        self._records[collection].append(record)
        logger.info(f"Created {collection.label} {record_id}")
        return copy.deepcopy(record)

    def update(self, collection: Collection, record_id: RecordId, changes: dict) -> dict:
        record = self._find(collection, record_id)
        changes = {k: v for k, v in changes.items() if k not in ("id", "createdAt")}
        record.update(changes)
        record["updatedAt"] = self.now()
        return copy.deepcopy(record)

    def delete(self, collection: Collection, record_id: RecordId) -> dict:
        record = self._find(collection, record_id)
        self._records[collection].remove(record)
        logger.info(f"Deleted {collection.label} {record_id}")
        return record

    def _find(self, collection: Collection, record_id: RecordId) -> dict:
        for record in self._records[collection]:
            if record.get("id") == record_id:
                return record
        raise ResourceNotFoundError(collection.label, record_id)


# Singleton (initialized on startup)
demo_store: DemoStore | None = None


def init_store(**kwargs) -> DemoStore:
    global demo_store
    demo_store = DemoStore(**kwargs)
    return demo_store


def get_store() -> DemoStore:
    """FastAPI dependency for the demo store."""
    if not demo_store:
        raise RuntimeError("Demo store not initialized")
    return demo_store
