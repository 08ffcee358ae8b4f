"""Cash Entry Hooks: queries and mutations over /demo/cash.

Invariants:
    - Entry amounts and every stats figure are coerced to float on read
    - Stats depend on (start_date, end_date); None dates are not sent
    - daily/monthly/yearly stats share the summary shape of use_cash_stats
    - Category stats map "<type>_<category>" to a confirmed float total
"""

from schooldesk.core.domain_types import Collection
from schooldesk.core.endpoints import (
    action_path, collection_path, record_path, scoped_path, stats_path,
)
from schooldesk.core.ledger_stats import to_amount
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.mutation_runner import Mutation
from schooldesk.services.query_runner import Query
from schooldesk.services.resource_hooks import (
    Fetcher, get_fetcher, record_data, record_id, write_mutation,
)

CASH = collection_path(Collection.CASH)

_STATS_FIELDS = (
    "totalIncome", "totalExpenses", "netBalance",
    "pendingIncome", "pendingExpenses",
)


def _coerce_entries(envelope: dict) -> dict:
    entries = envelope.get("data") or []
    return {
        **envelope,
        "data": [{**e, "amount": to_amount(e.get("amount"))} for e in entries],
    }


def _coerce_stats(stats: dict) -> dict:
    coerced = {field: to_amount(stats.get(field)) for field in _STATS_FIELDS}
    coerced["entriesCount"] = int(to_amount(stats.get("entriesCount")))
    return coerced


def cash_entries_fetcher(client: ApiClient, params: dict | None = None) -> Fetcher:
    return get_fetcher(
        client, CASH, params=params, envelope=True, transform=_coerce_entries,
    )


def cash_entry_fetcher(client: ApiClient, entry_id: str) -> Fetcher:
    return get_fetcher(client, record_path(Collection.CASH, entry_id))


def cash_stats_fetcher(
    client: ApiClient, start_date: str | None = None, end_date: str | None = None,
) -> Fetcher:
    return get_fetcher(
        client, stats_path(Collection.CASH),
        params={"startDate": start_date, "endDate": end_date},
        transform=_coerce_stats,
    )


def _period_stats_fetcher(client: ApiClient, *segments) -> Fetcher:
    return get_fetcher(
        client, scoped_path(Collection.CASH, "stats", *segments),
        transform=_coerce_stats,
    )


def daily_stats_fetcher(client: ApiClient, day: str) -> Fetcher:
    """day: YYYY-MM-DD."""
    return _period_stats_fetcher(client, "daily", day)


def monthly_stats_fetcher(client: ApiClient, year: int, month: int) -> Fetcher:
    return _period_stats_fetcher(client, "monthly", year, month)


def yearly_stats_fetcher(client: ApiClient, year: int) -> Fetcher:
    return _period_stats_fetcher(client, "yearly", year)


def category_stats_fetcher(
    client: ApiClient, start_date: str | None = None, end_date: str | None = None,
) -> Fetcher:
    return get_fetcher(
        client, scoped_path(Collection.CASH, "stats", "categories"),
        params={"startDate": start_date, "endDate": end_date},
        default={},
        transform=lambda totals: {k: to_amount(v) for k, v in totals.items()},
    )


def use_cash_entries(client: ApiClient, params: dict | None = None) -> Query[dict]:
    return Query(cash_entries_fetcher(client, params), (params,), name="cash_entries")


def use_cash_entry(client: ApiClient, entry_id: str) -> Query[dict]:
    return Query(cash_entry_fetcher(client, entry_id), (entry_id,), name="cash_entry")


def use_cash_stats(
    client: ApiClient, start_date: str | None = None, end_date: str | None = None,
) -> Query[dict]:
    return Query(
        cash_stats_fetcher(client, start_date, end_date), (start_date, end_date),
        name="cash_stats",
    )


def use_daily_stats(client: ApiClient, day: str) -> Query[dict]:
    return Query(daily_stats_fetcher(client, day), (day,), name="cash_daily_stats")


def use_monthly_stats(client: ApiClient, year: int, month: int) -> Query[dict]:
    return Query(
        monthly_stats_fetcher(client, year, month), (year, month),
        name="cash_monthly_stats",
    )


def use_yearly_stats(client: ApiClient, year: int) -> Query[dict]:
    return Query(yearly_stats_fetcher(client, year), (year,), name="cash_yearly_stats")


def use_category_stats(
    client: ApiClient, start_date: str | None = None, end_date: str | None = None,
) -> Query[dict[str, float]]:
    return Query(
        category_stats_fetcher(client, start_date, end_date), (start_date, end_date),
        name="cash_category_stats",
    )


def use_create_cash_entry(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "post", lambda _: CASH,
        body_for=lambda payload: payload, name="create_cash_entry",
    )


def use_update_cash_entry(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "put", lambda p: record_path(Collection.CASH, record_id(p)),
        body_for=record_data, name="update_cash_entry",
    )


def use_delete_cash_entry(client: ApiClient) -> Mutation[str, None]:
    return write_mutation(
        client, "delete", lambda p: record_path(Collection.CASH, record_id(p)),
        name="delete_cash_entry",
    )


def use_confirm_cash_entry(client: ApiClient) -> Mutation[str, dict]:
    return write_mutation(
        client, "patch",
        lambda p: action_path(Collection.CASH, record_id(p), "confirm"),
        name="confirm_cash_entry",
    )


def use_cancel_cash_entry(client: ApiClient) -> Mutation[str, dict]:
    return write_mutation(
        client, "patch",
        lambda p: action_path(Collection.CASH, record_id(p), "cancel"),
        name="cancel_cash_entry",
    )
