"""Demo Purchase Routes: purchases, stats and approve/reject/complete/cancel actions.

Invariants:
    - New purchases start pending, requested by the demo user
    - /stats optionally bounded by startDate/endDate on purchaseDate (inclusive, by day)
    - reject stores rejectionReason when given
    - complete stamps actualDeliveryDate
    - Actions set the status as-is (no transition rules)
"""

from fastapi import APIRouter, Body, Depends, Query

from schooldesk.api.routes.demo_crud import add_crud_routes
from schooldesk.core.domain_types import Collection, PurchaseStatus
from schooldesk.core.endpoints import collection_path
from schooldesk.core.envelope import build_envelope
from schooldesk.core.ledger_stats import compute_purchase_stats, within_days
from schooldesk.infrastructure.demo_store import DemoStore, get_store
from schooldesk.schemas.records import (
    PurchaseCreate, PurchaseRejection, PurchaseUpdate,
)

DEMO_USER_ID = "demo-user"

router = APIRouter(
    prefix="/api" + collection_path(Collection.PURCHASES), tags=["purchases"],
)


def _new_purchase(record: dict, store: DemoStore) -> dict:
    record["status"] = PurchaseStatus.PENDING.value
    record["requestedBy"] = DEMO_USER_ID
    record.setdefault("purchaseDate", store.now())
    return record


def _set_status(
    store: DemoStore, purchase_id: str, status: PurchaseStatus, **fields,
) -> dict:
    return store.update(
        Collection.PURCHASES, purchase_id, {"status": status.value, **fields},
    )


@router.get("/stats")
async def purchase_stats(
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    store: DemoStore = Depends(get_store),
):
    purchases = [
        p for p in store.list_records(Collection.PURCHASES)
        if within_days(p.get("purchaseDate"), start_date, end_date)
    ]
    return build_envelope(
        "Purchase statistics retrieved successfully",
        compute_purchase_stats(purchases),
    )


add_crud_routes(
    router, Collection.PURCHASES, PurchaseCreate, PurchaseUpdate,
    prepare=_new_purchase, filters=("category", "supplier"),
)


@router.post("/{purchase_id}/approve")
async def approve_purchase(purchase_id: str, store: DemoStore = Depends(get_store)):
    purchase = _set_status(
        store, purchase_id, PurchaseStatus.APPROVED, approvedBy=DEMO_USER_ID,
    )
    return build_envelope("Purchase approved successfully", purchase)


@router.post("/{purchase_id}/reject")
async def reject_purchase(
    purchase_id: str,
    body: PurchaseRejection | None = Body(None),
    store: DemoStore = Depends(get_store),
):
    fields = {}
    if body is not None and body.reason:
        fields["rejectionReason"] = body.reason
    purchase = _set_status(store, purchase_id, PurchaseStatus.REJECTED, **fields)
    return build_envelope("Purchase rejected successfully", purchase)


@router.post("/{purchase_id}/complete")
async def complete_purchase(purchase_id: str, store: DemoStore = Depends(get_store)):
    purchase = _set_status(
        store, purchase_id, PurchaseStatus.COMPLETED,
        actualDeliveryDate=store.now(),
    )
    return build_envelope("Purchase completed successfully", purchase)


@router.post("/{purchase_id}/cancel")
async def cancel_purchase(purchase_id: str, store: DemoStore = Depends(get_store)):
    purchase = _set_status(store, purchase_id, PurchaseStatus.CANCELLED)
    return build_envelope("Purchase cancelled successfully", purchase)
