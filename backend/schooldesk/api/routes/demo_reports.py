"""Demo Report Routes: report requests, stats, generation and download links.

Invariants:
    - New reports start pending, requested by the demo user, with no downloads
    - Only pending reports can be generated; generation completes immediately
    - A download link is issued only for a completed, unexpired report, and
      every issued link counts as one download
    - /stats optionally bounded by startDate/endDate on createdAt (inclusive, by day)
"""

from datetime import datetime, timedelta

from fastapi import APIRouter, Depends, Query

from schooldesk.api.routes.demo_crud import add_crud_routes
from schooldesk.core.demo_seed import REPORT_TTL_DAYS
from schooldesk.core.domain_types import Collection, ReportStatus
from schooldesk.core.endpoints import action_path, collection_path
from schooldesk.core.envelope import build_envelope
from schooldesk.core.errors import InvalidStateError
from schooldesk.core.ledger_stats import compute_report_stats, within_days
from schooldesk.infrastructure.demo_store import DemoStore, get_store
from schooldesk.schemas.records import ReportCreate, ReportUpdate

DEMO_USER_ID = "demo-user"

router = APIRouter(
    prefix="/api" + collection_path(Collection.REPORTS), tags=["reports"],
)


def _new_report(record: dict, store: DemoStore) -> dict:
    record["status"] = ReportStatus.PENDING.value
    record["requestedBy"] = DEMO_USER_ID
    record["downloadCount"] = 0
    return record


def _is_expired(report: dict, now: str) -> bool:
    expires_at = report.get("expiresAt")
    return bool(expires_at) and (
        datetime.fromisoformat(expires_at) <= datetime.fromisoformat(now)
    )


@router.get("/stats")
async def report_stats(
    start_date: str | None = Query(None, alias="startDate"),
    end_date: str | None = Query(None, alias="endDate"),
    store: DemoStore = Depends(get_store),
):
    reports = [
        r for r in store.list_records(Collection.REPORTS)
        if within_days(r.get("createdAt"), start_date, end_date)
    ]
    return build_envelope(
        "Report statistics retrieved successfully", compute_report_stats(reports),
    )


add_crud_routes(
    router, Collection.REPORTS, ReportCreate, ReportUpdate,
    prepare=_new_report, filters=("type", "format"),
)


@router.post("/{report_id}/generate")
async def generate_report(report_id: str, store: DemoStore = Depends(get_store)):
    report = store.get(Collection.REPORTS, report_id)
    if report.get("status") != ReportStatus.PENDING:
        raise InvalidStateError(
            Collection.REPORTS.label, report_id, "generated", report.get("status"),
        )
    now = store.now()
    expires_at = datetime.fromisoformat(now) + timedelta(days=REPORT_TTL_DAYS)
    report = store.update(Collection.REPORTS, report_id, {
        "status": ReportStatus.COMPLETED.value,
        "filePath": f"reports/{report_id}.{report.get('format')}",
        "downloadUrl": "/api" + action_path(Collection.REPORTS, report_id, "download"),
        "generatedAt": now,
        "expiresAt": expires_at.isoformat(),
    })
    return build_envelope("Report generated successfully", report)


@router.get("/{report_id}/download")
async def download_report(report_id: str, store: DemoStore = Depends(get_store)):
    report = store.get(Collection.REPORTS, report_id)
    now = store.now()
    if report.get("status") != ReportStatus.COMPLETED or not report.get("downloadUrl"):
        raise InvalidStateError(
            Collection.REPORTS.label, report_id, "downloaded", report.get("status"),
        )
    if _is_expired(report, now):
        raise InvalidStateError(
            Collection.REPORTS.label, report_id, "downloaded",
            ReportStatus.EXPIRED.value,
        )
    store.update(Collection.REPORTS, report_id, {
        "downloadCount": int(report.get("downloadCount") or 0) + 1,
    })
    return build_envelope("Report download link issued successfully", {
        "downloadUrl": report["downloadUrl"],
        "fileName": report["filePath"].rsplit("/", 1)[-1],
        "expiresAt": report["expiresAt"],
    })
