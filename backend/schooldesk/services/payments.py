"""Payment Hooks: queries and mutations over /demo/payments.

Invariants:
    - Status change posts {status, notes?} to /{id}/status
    - complete/fail/refund are status changes with a fixed status
    - Stats amounts are coerced to float on read
    - use_payments_by_student depends on the student id only
"""

from schooldesk.core.domain_types import Collection, PaymentStatus
from schooldesk.core.endpoints import (
    action_path, collection_path, payments_by_student_path, record_path,
    scoped_path, stats_path,
)
from schooldesk.core.ledger_stats import to_amount
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.mutation_runner import Mutation
from schooldesk.services.query_runner import Query
from schooldesk.services.resource_hooks import (
    Fetcher, get_fetcher, record_data, record_id, write_mutation,
)

PAYMENTS = collection_path(Collection.PAYMENTS)

_STATS_COUNTS = ("total", "pending", "completed", "failed", "refunded")
_STATS_AMOUNTS = ("totalAmount", "completedAmount", "pendingAmount", "averageAmount")


def _coerce_stats(stats: dict) -> dict:
    coerced = {field: int(to_amount(stats.get(field))) for field in _STATS_COUNTS}
    coerced.update(
        {field: to_amount(stats.get(field)) for field in _STATS_AMOUNTS},
    )
    return coerced


def payments_fetcher(client: ApiClient, params: dict | None = None) -> Fetcher:
    return get_fetcher(client, PAYMENTS, params=params, default=[])


def payment_fetcher(client: ApiClient, payment_id: str) -> Fetcher:
    return get_fetcher(client, record_path(Collection.PAYMENTS, payment_id))


def student_payments_fetcher(client: ApiClient, student_id: str) -> Fetcher:
    return get_fetcher(client, payments_by_student_path(student_id), default=[])


def payment_stats_fetcher(client: ApiClient) -> Fetcher:
    return get_fetcher(
        client, stats_path(Collection.PAYMENTS), transform=_coerce_stats,
    )


def recent_payments_fetcher(client: ApiClient, params: dict | None = None) -> Fetcher:
    """params: limit, status, method."""
    return get_fetcher(
        client, scoped_path(Collection.PAYMENTS, "recent"), params=params, default=[],
    )


def use_payments(client: ApiClient, params: dict | None = None) -> Query[list[dict]]:
    return Query(payments_fetcher(client, params), (params,), name="payments")


def use_payment(client: ApiClient, payment_id: str) -> Query[dict]:
    return Query(payment_fetcher(client, payment_id), (payment_id,), name="payment")


def use_payments_by_student(client: ApiClient, student_id: str) -> Query[list[dict]]:
    return Query(
        student_payments_fetcher(client, student_id), (student_id,),
        name="payments_by_student",
    )


def use_payment_stats(client: ApiClient) -> Query[dict]:
    return Query(payment_stats_fetcher(client), (), name="payment_stats")


def use_recent_payments(client: ApiClient, params: dict | None = None) -> Query[list[dict]]:
    return Query(
        recent_payments_fetcher(client, params), (params,), name="recent_payments",
    )


def use_create_payment(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "post", lambda _: PAYMENTS,
        body_for=lambda payload: payload, name="create_payment",
    )


def use_update_payment(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "put", lambda p: record_path(Collection.PAYMENTS, record_id(p)),
        body_for=record_data, name="update_payment",
    )


def use_delete_payment(client: ApiClient) -> Mutation[str, None]:
    return write_mutation(
        client, "delete", lambda p: record_path(Collection.PAYMENTS, record_id(p)),
        name="delete_payment",
    )


def _status_body(params: dict) -> dict:
    body = {"status": params["status"]}
    if params.get("notes"):
        body["notes"] = params["notes"]
    return body


def use_update_payment_status(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "post",
        lambda p: action_path(Collection.PAYMENTS, record_id(p), "status"),
        body_for=_status_body, name="update_payment_status",
    )


def _settle(client: ApiClient, status: PaymentStatus) -> Mutation[dict, dict]:
    """Status change to `status`; params are an id or {"id", "notes"?}."""
    def body_for(params) -> dict:
        notes = params.get("notes") if isinstance(params, dict) else None
        return _status_body({"status": status.value, "notes": notes})

    return write_mutation(
        client, "post",
        lambda p: action_path(Collection.PAYMENTS, record_id(p), "status"),
        body_for=body_for, name=f"{status.value}_payment",
    )


def use_complete_payment(client: ApiClient) -> Mutation[dict, dict]:
    return _settle(client, PaymentStatus.COMPLETED)


def use_fail_payment(client: ApiClient) -> Mutation[dict, dict]:
    return _settle(client, PaymentStatus.FAILED)


def use_refund_payment(client: ApiClient) -> Mutation[dict, dict]:
    return _settle(client, PaymentStatus.REFUNDED)
