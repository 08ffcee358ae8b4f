"""Report Hooks: queries and mutations over /demo/reports.

Invariants:
    - use_reports returns the whole envelope (data + pagination)
    - Stats depend on (start_date, end_date); None dates are not sent
    - generate/download take an id; download resolves to
      {downloadUrl, fileName, expiresAt} and counts as one download
"""

from datetime import datetime

from schooldesk.core.domain_types import Collection, ReportStatus
from schooldesk.core.endpoints import (
    action_path, collection_path, record_path, stats_path,
)
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.mutation_runner import Mutation
from schooldesk.services.query_runner import Query
from schooldesk.services.resource_hooks import (
    Fetcher, get_fetcher, record_data, record_id, write_mutation,
)

REPORTS = collection_path(Collection.REPORTS)


def reports_fetcher(client: ApiClient, params: dict | None = None) -> Fetcher:
    return get_fetcher(client, REPORTS, params=params, envelope=True)


def report_fetcher(client: ApiClient, report_id: str) -> Fetcher:
    return get_fetcher(client, record_path(Collection.REPORTS, report_id))


def report_stats_fetcher(
    client: ApiClient, start_date: str | None = None, end_date: str | None = None,
) -> Fetcher:
    return get_fetcher(
        client, stats_path(Collection.REPORTS),
        params={"startDate": start_date, "endDate": end_date},
    )


def use_reports(client: ApiClient, params: dict | None = None) -> Query[dict]:
    return Query(reports_fetcher(client, params), (params,), name="reports")


def use_report(client: ApiClient, report_id: str) -> Query[dict]:
    return Query(report_fetcher(client, report_id), (report_id,), name="report")


def use_report_stats(
    client: ApiClient, start_date: str | None = None, end_date: str | None = None,
) -> Query[dict]:
    return Query(
        report_stats_fetcher(client, start_date, end_date), (start_date, end_date),
        name="report_stats",
    )


def use_create_report(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "post", lambda _: REPORTS,
        body_for=lambda payload: payload, name="create_report",
    )


def use_update_report(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "put", lambda p: record_path(Collection.REPORTS, record_id(p)),
        body_for=record_data, name="update_report",
    )


def use_delete_report(client: ApiClient) -> Mutation[str, None]:
    return write_mutation(
        client, "delete", lambda p: record_path(Collection.REPORTS, record_id(p)),
        name="delete_report",
    )


def use_generate_report(client: ApiClient) -> Mutation[str, dict]:
    return write_mutation(
        client, "post",
        lambda p: action_path(Collection.REPORTS, record_id(p), "generate"),
        name="generate_report",
    )


def use_download_report(client: ApiClient) -> Mutation[str, dict]:
    return write_mutation(
        client, "get",
        lambda p: action_path(Collection.REPORTS, record_id(p), "download"),
        name="download_report",
    )


# ─── Availability ────────────────────────────────────────────────

def can_generate(report: dict) -> bool:
    return report.get("status") == ReportStatus.PENDING


def can_download(report: dict, now: datetime) -> bool:
    if report.get("status") != ReportStatus.COMPLETED or not report.get("downloadUrl"):
        return False
    expires_at = report.get("expiresAt")
    return not expires_at or datetime.fromisoformat(expires_at) > now


def can_delete(report: dict) -> bool:
    return report.get("status") in (
        ReportStatus.PENDING, ReportStatus.FAILED, ReportStatus.EXPIRED,
    )
