"""Demo Cash Routes: cash entries, their stats, confirm and cancel.

Invariants:
    - New entries start pending, owned by the demo user, dated now unless given
    - Stats bounded by startDate/endDate (inclusive, compared by day)
    - daily/monthly/yearly stats are the same summary over a fixed day range
    - Stats exclude cancelled entries and report pending amounts separately
    - confirm/cancel set the status as-is (no transition rules)
"""

from fastapi import APIRouter, Depends, Path, Query

from schooldesk.api.routes.demo_crud import add_crud_routes
from schooldesk.core.domain_types import CashEntryStatus, Collection
from schooldesk.core.endpoints import collection_path
from schooldesk.core.envelope import build_envelope
from schooldesk.core.ledger_stats import (
    compute_cash_stats, compute_category_stats, month_bounds, within_days,
    year_bounds,
)
from schooldesk.infrastructure.demo_store import DemoStore, get_store
from schooldesk.schemas.records import CashEntryCreate, CashEntryUpdate

DEMO_USER_ID = "demo-user"

router = APIRouter(prefix="/api" + collection_path(Collection.CASH), tags=["cash"])


def _new_entry(record: dict, store: DemoStore) -> dict:
    record["status"] = CashEntryStatus.PENDING.value
    record["userId"] = DEMO_USER_ID
    record.setdefault("transactionDate", store.now())
    return record


def _entries_between(store: DemoStore, start: str | None, end: str | None) -> list[dict]:
    return [
        e for e in store.list_records(Collection.CASH)
        if within_days(e.get("transactionDate"), start, end)
    ]


def _stats_envelope(store: DemoStore, start: str | None, end: str | None) -> dict:
    return build_envelope(
        "Cash statistics retrieved successfully",
        compute_cash_stats(_entries_between(store, start, end)),
    )


@router.get("/stats")
async def cash_stats(
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    store: DemoStore = Depends(get_store),
):
    return _stats_envelope(store, start_date, end_date)


@router.get("/stats/daily/{day}")
async def daily_stats(day: str, store: DemoStore = Depends(get_store)):
    return _stats_envelope(store, day, day)


@router.get("/stats/monthly/{year}/{month}")
async def monthly_stats(
    year: int,
    month: int = Path(..., ge=1, le=12),
    store: DemoStore = Depends(get_store),
):
    return _stats_envelope(store, *month_bounds(year, month))


@router.get("/stats/yearly/{year}")
async def yearly_stats(year: int, store: DemoStore = Depends(get_store)):
    return _stats_envelope(store, *year_bounds(year))


@router.get("/stats/categories")
async def category_stats(
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    store: DemoStore = Depends(get_store),
):
    return build_envelope(
        "Category statistics retrieved successfully",
        compute_category_stats(_entries_between(store, start_date, end_date)),
    )


add_crud_routes(
    router, Collection.CASH, CashEntryCreate, CashEntryUpdate, prepare=_new_entry,
)


@router.patch("/{entry_id}/confirm")
async def confirm_entry(entry_id: str, store: DemoStore = Depends(get_store)):
    entry = store.update(
        Collection.CASH, entry_id, {"status": CashEntryStatus.CONFIRMED.value},
    )
    return build_envelope("Cash entry confirmed successfully", entry)


@router.patch("/{entry_id}/cancel")
async def cancel_entry(entry_id: str, store: DemoStore = Depends(get_store)):
    entry = store.update(
        Collection.CASH, entry_id, {"status": CashEntryStatus.CANCELLED.value},
    )
    return build_envelope("Cash entry cancelled successfully", entry)
