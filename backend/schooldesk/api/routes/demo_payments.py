"""Demo Payment Routes: payments plus status changes and per-student listing.

Invariants:
    - New payments start pending
    - POST /{id}/status applies the requested status as-is (no transition rules)
    - Completing a payment stamps paidAt when missing
    - /recent lists newest first, optionally narrowed by status and method
"""

from fastapi import APIRouter, Depends, Query

from schooldesk.api.routes.demo_crud import add_crud_routes, most_recent
from schooldesk.core.domain_types import Collection, PaymentStatus
from schooldesk.core.endpoints import collection_path
from schooldesk.core.envelope import build_envelope
from schooldesk.core.ledger_stats import compute_payment_stats
from schooldesk.infrastructure.demo_store import DemoStore, get_store
from schooldesk.schemas.records import (
    PaymentCreate, PaymentStatusChange, PaymentUpdate,
)

router = APIRouter(
    prefix="/api" + collection_path(Collection.PAYMENTS), tags=["payments"],
)


def _new_payment(record: dict, store: DemoStore) -> dict:
    record["status"] = PaymentStatus.PENDING.value
    record.setdefault("dueDate", store.now())
    return record


@router.get("/stats")
async def payment_stats(store: DemoStore = Depends(get_store)):
    return build_envelope(
        "Payment statistics retrieved successfully",
        compute_payment_stats(store.list_records(Collection.PAYMENTS)),
    )


@router.get("/recent")
async def recent_payments(
    limit: int = Query(10, ge=1, le=100),
    status_filter: str | None = Query(None, alias="status"),
    method: str | None = Query(None),
    store: DemoStore = Depends(get_store),
):
    where = {"method": method} if method else None
    payments = store.list_records(
        Collection.PAYMENTS, status=status_filter, where=where,
    )
    payments = most_recent(payments, limit)
    return build_envelope(
        "Recent payments retrieved successfully", payments, count=len(payments),
    )


@router.get("/student/{student_id}")
async def list_payments_by_student(
    student_id: str, store: DemoStore = Depends(get_store),
):
    payments = store.list_records(
        Collection.PAYMENTS, where={"studentId": student_id},
    )
    return build_envelope(
        "Student payments retrieved successfully", payments, count=len(payments),
    )


add_crud_routes(
    router, Collection.PAYMENTS, PaymentCreate, PaymentUpdate,
    prepare=_new_payment, filters=("studentId", "method"),
)


@router.post("/{payment_id}/status")
async def update_payment_status(
    payment_id: str, body: PaymentStatusChange,
    store: DemoStore = Depends(get_store),
):
    changes = {"status": body.status.value}
    if body.notes is not None:
        changes["notes"] = body.notes
    if body.status is PaymentStatus.COMPLETED:
        current = store.get(Collection.PAYMENTS, payment_id)
        if not current.get("paidAt"):
            changes["paidAt"] = store.now()
    payment = store.update(Collection.PAYMENTS, payment_id, changes)
    return build_envelope("Payment status updated successfully", payment)
