"""Purchase Hooks: queries and mutations over /demo/purchases.

Invariants:
    - Stats depend on (start_date, end_date); counts come back as int, amounts as float
    - Actions take an id; reject also takes {"id", "reason"}
"""

from schooldesk.core.domain_types import Collection
from schooldesk.core.endpoints import (
    action_path, collection_path, record_path, stats_path,
)
from schooldesk.core.ledger_stats import to_amount
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.mutation_runner import Mutation
from schooldesk.services.query_runner import Query
from schooldesk.services.resource_hooks import (
    Fetcher, get_fetcher, record_data, record_id, write_mutation,
)

PURCHASES = collection_path(Collection.PURCHASES)

_STATS_COUNTS = (
    "totalPurchases", "pendingPurchases", "approvedPurchases",
    "completedPurchases", "rejectedPurchases",
)
_STATS_AMOUNTS = ("totalAmount", "approvedAmount", "averageAmount")


def _coerce_stats(stats: dict) -> dict:
    coerced = {**stats}
    coerced.update(
        {field: int(to_amount(stats.get(field))) for field in _STATS_COUNTS},
    )
    coerced.update(
        {field: to_amount(stats.get(field)) for field in _STATS_AMOUNTS},
    )
    return coerced


def purchases_fetcher(client: ApiClient, params: dict | None = None) -> Fetcher:
    return get_fetcher(client, PURCHASES, params=params, envelope=True)


def purchase_fetcher(client: ApiClient, purchase_id: str) -> Fetcher:
    return get_fetcher(client, record_path(Collection.PURCHASES, purchase_id))


def purchase_stats_fetcher(
    client: ApiClient, start_date: str | None = None, end_date: str | None = None,
) -> Fetcher:
    return get_fetcher(
        client, stats_path(Collection.PURCHASES),
        params={"startDate": start_date, "endDate": end_date},
        transform=_coerce_stats,
    )


def use_purchases(client: ApiClient, params: dict | None = None) -> Query[dict]:
    return Query(purchases_fetcher(client, params), (params,), name="purchases")


def use_purchase(client: ApiClient, purchase_id: str) -> Query[dict]:
    return Query(purchase_fetcher(client, purchase_id), (purchase_id,), name="purchase")


def use_purchase_stats(
    client: ApiClient, start_date: str | None = None, end_date: str | None = None,
) -> Query[dict]:
    return Query(
        purchase_stats_fetcher(client, start_date, end_date), (start_date, end_date),
        name="purchase_stats",
    )


def use_create_purchase(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "post", lambda _: PURCHASES,
        body_for=lambda payload: payload, name="create_purchase",
    )


def use_update_purchase(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "put", lambda p: record_path(Collection.PURCHASES, record_id(p)),
        body_for=record_data, name="update_purchase",
    )


def use_delete_purchase(client: ApiClient) -> Mutation[str, None]:
    return write_mutation(
        client, "delete", lambda p: record_path(Collection.PURCHASES, record_id(p)),
        name="delete_purchase",
    )


def _action(client: ApiClient, action: str, **kwargs) -> Mutation[str, dict]:
    return write_mutation(
        client, "post",
        lambda p: action_path(Collection.PURCHASES, record_id(p), action),
        name=f"{action}_purchase", **kwargs,
    )


def use_approve_purchase(client: ApiClient) -> Mutation[str, dict]:
    return _action(client, "approve")


def use_reject_purchase(client: ApiClient) -> Mutation[dict, dict]:
    return _action(
        client, "reject",
        body_for=lambda p: {"reason": p.get("reason")} if isinstance(p, dict) else {},
    )


def use_complete_purchase(client: ApiClient) -> Mutation[str, dict]:
    return _action(client, "complete")


def use_cancel_purchase(client: ApiClient) -> Mutation[str, dict]:
    return _action(client, "cancel")
