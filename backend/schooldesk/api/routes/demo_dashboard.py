"""Demo Dashboard Route: totals plus recent students and payments."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from schooldesk.api.routes.demo_crud import most_recent
from schooldesk.core.domain_types import Collection
from schooldesk.core.endpoints import DEMO_DASHBOARD
from schooldesk.core.envelope import build_envelope
from schooldesk.core.ledger_stats import compute_dashboard_stats
from schooldesk.infrastructure.demo_store import DemoStore, get_store

router = APIRouter(prefix="/api", tags=["dashboard"])

RECENT_LIMIT = 5


@router.get(DEMO_DASHBOARD)
async def dashboard(store: DemoStore = Depends(get_store)):
    students = store.list_records(Collection.STUDENTS)
    courses = store.list_records(Collection.COURSES)
    payments = store.list_records(Collection.PAYMENTS)
    stats = compute_dashboard_stats(
        students, courses, payments, datetime.now(timezone.utc),
    )
    return build_envelope("Dashboard data retrieved successfully", {
        "totalStudents": stats.total_students,
        "totalCourses": stats.total_courses,
        "totalPayments": stats.total_payments,
        "monthlyRevenue": stats.monthly_revenue,
        "recentStudents": most_recent(students, RECENT_LIMIT),
        "recentPayments": most_recent(payments, RECENT_LIMIT),
    })
