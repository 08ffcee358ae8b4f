"""Resource Hooks: end-to-end tests of queries/mutations against the demo API.

Invariants:
    - List queries unwrap envelope data; record queries surface 404 messages
    - Mutations return the unwrapped record and refresh nothing by themselves
    - Dependency changes re-fetch with the new params

Design Decisions:
    - api_client runs the real FastAPI app in-process: covers hooks, transport,
      routes and store together
"""

import pytest

from schooldesk.core.domain_types import Collection
from schooldesk.core.errors import TransportError
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.cash_entries import (
    use_cancel_cash_entry, use_cash_entries, use_cash_stats, use_category_stats,
    use_confirm_cash_entry, use_create_cash_entry, use_daily_stats,
    use_monthly_stats, use_yearly_stats,
)
from schooldesk.services.courses import use_course, use_courses, use_delete_course
from schooldesk.services.dashboard import Dashboard
from schooldesk.services.enrollments import (
    enrollments_fetcher, use_approve_enrollment, use_cancel_enrollment,
    use_complete_enrollment, use_enrollments, use_enrollments_by_course,
    use_enrollments_by_student, use_enrollments_paginated,
)
from schooldesk.services.payments import (
    use_complete_payment, use_create_payment, use_fail_payment,
    use_payment_stats, use_payments_by_student, use_recent_payments,
    use_refund_payment, use_update_payment_status,
)
from schooldesk.services.purchases import (
    use_approve_purchase, use_purchase_stats, use_purchases,
    use_reject_purchase,
)
from schooldesk.services.reports import (
    can_delete, can_download, can_generate, use_create_report,
    use_delete_report, use_download_report, use_generate_report, use_report,
    use_report_stats, use_reports, use_update_report,
)
from schooldesk.services.students import (
    recent_students_fetcher, students_page_fetcher, use_create_student,
    use_delete_student, use_recent_students, use_student, use_student_stats,
    use_students, use_students_by_course, use_students_paginated,
    use_update_student,
)
from schooldesk.services.view_contract import mutate_then_refetch

from tests.services.demo_api import FIXED_NOW, failing_transport


async def _settled(query):
    query.mount()
    return await query.wait()


# ==============================================================================
# Students
# ==============================================================================


async def test_students_list_unwraps_envelope(api_client):
    state = await _settled(use_students(api_client))
    assert state.error is None
    assert [s["id"] for s in state.data] == ["1", "2", "3"]


async def test_unknown_student_surfaces_server_message(api_client):
    state = await _settled(use_student(api_client, "99"))
    assert state.error == "Student '99' not found"
    assert state.data is None


async def test_paginated_students_follow_param_changes(api_client):
    query = use_students_paginated(api_client, {"page": 1, "limit": 2})
    state = await _settled(query)
    assert len(state.data["data"]) == 2
    assert state.data["pagination"]["totalPages"] == 2

    params = {"page": 2, "limit": 2}
    query.update(students_page_fetcher(api_client, params), (params,))
    state = await query.wait()
    assert [s["id"] for s in state.data["data"]] == ["3"]


async def test_create_student_then_refetch_list(api_client):
    students = use_students(api_client)
    await _settled(students)

    created = await mutate_then_refetch(
        use_create_student(api_client),
        {"name": "Ana", "lastName": "Ruiz", "email": "ana@email.com"},
        students,
    )

    assert created["id"] == "4"
    assert created["status"] == "active"
    assert len(students.data) == 4


async def test_create_student_without_refetch_leaves_list_stale(api_client):
    students = use_students(api_client)
    await _settled(students)

    await use_create_student(api_client).mutate(
        {"name": "Ana", "lastName": "Ruiz", "email": "ana@email.com"},
    )
    assert len(students.data) == 3


async def test_invalid_student_rejected_with_message(api_client):
    create = use_create_student(api_client)
    with pytest.raises(TransportError) as exc_info:
        await create.mutate({"name": "Ana", "lastName": "Ruiz", "email": "nope"})

    assert exc_info.value.status_code == 400
    assert create.error == "Invalid request data"


async def test_update_student(api_client):
    updated = await use_update_student(api_client).mutate(
        {"id": "1", "data": {"phone": "555-0100"}},
    )
    assert updated["phone"] == "555-0100"
    assert updated["name"] == "Juan"


async def test_delete_student_is_soft_by_default(api_client, store):
    deactivated = await use_delete_student(api_client).mutate({"id": "2"})
    assert deactivated["status"] == "inactive"

    await use_delete_student(api_client).mutate({"id": "3", "soft": False})
    state = await _settled(use_student(api_client, "3"))
    assert state.error == "Student '3' not found"


async def test_delete_student_by_plain_id_is_soft(api_client, store):
    deactivated = await use_delete_student(api_client).mutate("1")
    assert deactivated["status"] == "inactive"
    assert store.get(Collection.STUDENTS, "1")["status"] == "inactive"


async def test_students_by_course(api_client):
    state = await _settled(use_students_by_course(api_client, "2"))
    assert [s["id"] for s in state.data] == ["2"]

    empty = await _settled(use_students_by_course(api_client, "9"))
    assert empty.data == []


async def test_recent_students_follow_limit(api_client):
    query = use_recent_students(api_client, limit=1)
    state = await _settled(query)
    assert [s["id"] for s in state.data] == ["3"]

    query.update(recent_students_fetcher(api_client, 3), (3,))
    state = await query.wait()
    assert [s["id"] for s in state.data] == ["3", "2", "1"]


async def test_student_stats(api_client):
    await use_delete_student(api_client).mutate("1")
    state = await _settled(use_student_stats(api_client))
    assert state.data == {"total": 2, "active": 1, "inactive": 1, "suspended": 0}


# ==============================================================================
# Courses & enrollments
# ==============================================================================


async def test_delete_course(api_client):
    assert await use_delete_course(api_client).mutate("3") is None
    courses = await _settled(use_courses(api_client))
    assert len(courses.data) == 2
    gone = await _settled(use_course(api_client, "3"))
    assert gone.error == "Course '3' not found"


async def test_enrollments_filtered_by_status(api_client):
    query = use_enrollments(api_client, {"status": "active"})
    state = await _settled(query)
    assert [e["id"] for e in state.data] == ["1"]

    params = {"status": "completed"}
    query.update(enrollments_fetcher(api_client, params), (params,))
    state = await query.wait()
    assert [e["id"] for e in state.data] == ["3"]


async def test_enrollments_paginated_returns_envelope(api_client):
    state = await _settled(use_enrollments_paginated(
        api_client, {"page": 1, "limit": 2, "sortBy": "id", "sortOrder": "DESC"},
    ))
    assert [e["id"] for e in state.data["data"]] == ["3", "2"]
    assert state.data["pagination"]["total"] == 3


async def test_enrollments_by_student_and_course(api_client):
    by_student = await _settled(use_enrollments_by_student(api_client, "1"))
    assert [e["courseId"] for e in by_student.data] == ["1"]

    by_course = await _settled(use_enrollments_by_course(api_client, "3"))
    assert [e["studentId"] for e in by_course.data] == ["3"]


async def test_enrollment_approve_complete_cancel(api_client):
    approved = await use_approve_enrollment(api_client).mutate("2")
    assert approved["status"] == "active"
    assert approved["enrolledAt"] == FIXED_NOW.isoformat()

    completed = await use_complete_enrollment(api_client).mutate(
        {"id": "2", "data": {"finalGrade": 4.8, "notes": "Excelente"}},
    )
    assert completed["status"] == "completed"
    assert completed["finalGrade"] == 4.8
    assert completed["completedAt"] == FIXED_NOW.isoformat()

    cancelled = await use_cancel_enrollment(api_client).mutate(
        {"id": "1", "data": {"notes": "Retiro voluntario"}},
    )
    assert cancelled["status"] == "cancelled"
    assert cancelled["notes"] == "Retiro voluntario"


# ==============================================================================
# Payments
# ==============================================================================


async def test_payment_status_change_stamps_paid_at(api_client):
    payment = await use_update_payment_status(api_client).mutate(
        {"id": "2", "status": "completed", "notes": "Paid at desk"},
    )
    assert payment["status"] == "completed"
    assert payment["notes"] == "Paid at desk"
    assert payment["paidAt"] == FIXED_NOW.isoformat()


async def test_payments_by_student(api_client):
    await use_create_payment(api_client).mutate({"studentId": "2", "amount": 120})
    state = await _settled(use_payments_by_student(api_client, "2"))
    assert [p["id"] for p in state.data] == ["2", "4"]
    assert state.data[1]["status"] == "pending"


async def test_payment_stats_are_numeric(api_client):
    state = await _settled(use_payment_stats(api_client))
    assert state.data["total"] == 3
    assert state.data["completed"] == 2
    assert state.data["pendingAmount"] == 300000.0
    assert isinstance(state.data["averageAmount"], float)


async def test_recent_payments_filtered_by_method(api_client):
    state = await _settled(use_recent_payments(api_client, {"method": "card"}))
    assert [p["id"] for p in state.data] == ["2"]

    state = await _settled(use_recent_payments(api_client, {"limit": 2}))
    assert [p["id"] for p in state.data] == ["3", "2"]


async def test_complete_fail_refund_payment(api_client):
    completed = await use_complete_payment(api_client).mutate(
        {"id": "2", "notes": "Pagado en caja"},
    )
    assert completed["status"] == "completed"
    assert completed["paidAt"] == FIXED_NOW.isoformat()
    assert completed["notes"] == "Pagado en caja"

    refunded = await use_refund_payment(api_client).mutate({"id": "1"})
    assert refunded["status"] == "refunded"

    failed = await use_fail_payment(api_client).mutate("3")
    assert failed["status"] == "failed"

    stats = await _settled(use_payment_stats(api_client))
    assert (stats.data["failed"], stats.data["refunded"]) == (1, 1)


# ==============================================================================
# Cash
# ==============================================================================


async def test_cash_entries_amounts_are_floats(api_client):
    state = await _settled(use_cash_entries(api_client))
    amounts = [e["amount"] for e in state.data["data"]]
    assert amounts == [500000.0, 2000000.0]
    assert all(isinstance(a, float) for a in amounts)


async def test_cash_entry_lifecycle_moves_stats(api_client):
    stats = use_cash_stats(api_client)
    initial = await _settled(stats)
    assert initial.data["netBalance"] == -1500000.0
    assert initial.data["entriesCount"] == 2

    entry = await use_create_cash_entry(api_client).mutate({
        "type": "income", "category": "tuition_payment",
        "amount": 1000, "description": "Matrícula",
    })
    assert entry["status"] == "pending"
    state = await stats.refetch()
    assert state.data["pendingIncome"] == 1000.0

    await use_confirm_cash_entry(api_client).mutate(entry["id"])
    state = await stats.refetch()
    assert state.data["totalIncome"] == 501000.0
    assert state.data["pendingIncome"] == 0.0

    await use_cancel_cash_entry(api_client).mutate(entry["id"])
    state = await stats.refetch()
    assert state.data["totalIncome"] == 500000.0


async def test_cash_stats_date_range(api_client):
    outside = await _settled(use_cash_stats(api_client, "2024-04-01", None))
    assert outside.data["entriesCount"] == 0

    inside = await _settled(use_cash_stats(api_client, "2024-03-01", "2024-03-31"))
    assert inside.data["entriesCount"] == 2


async def test_cash_period_stats(api_client):
    daily = await _settled(use_daily_stats(api_client, "2024-03-15"))
    assert daily.data["entriesCount"] == 2
    assert daily.data["netBalance"] == -1500000.0

    other_day = await _settled(use_daily_stats(api_client, "2024-03-16"))
    assert other_day.data["entriesCount"] == 0

    monthly = await _settled(use_monthly_stats(api_client, 2024, 3))
    assert monthly.data["totalExpenses"] == 2000000.0

    yearly = await _settled(use_yearly_stats(api_client, 2024))
    assert yearly.data["totalIncome"] == 500000.0


async def test_category_stats_count_confirmed_entries(api_client):
    await use_create_cash_entry(api_client).mutate({
        "type": "expense", "category": "supplies",
        "amount": 1000, "description": "Marcadores",
    })
    state = await _settled(use_category_stats(api_client))
    assert state.data == {
        "income_tuition_payment": 500000.0,
        "expense_salaries": 2000000.0,
    }

    outside = await _settled(use_category_stats(api_client, "2024-04-01"))
    assert outside.data == {}


# ==============================================================================
# Purchases
# ==============================================================================


async def test_purchase_actions(api_client):
    approved = await use_approve_purchase(api_client).mutate("1")
    assert approved["status"] == "approved"
    assert approved["approvedBy"] == "demo-user"

    rejected = await use_reject_purchase(api_client).mutate(
        {"id": "2", "reason": "Over budget"},
    )
    assert rejected["status"] == "rejected"
    assert rejected["rejectionReason"] == "Over budget"

    stats = await _settled(use_purchase_stats(api_client))
    assert stats.data["approvedAmount"] == 180000
    assert stats.data["byStatus"]["rejected"] == 1
    assert stats.data["approvedPurchases"] == 1
    assert stats.data["rejectedPurchases"] == 1
    assert stats.data["pendingPurchases"] == 0
    assert stats.data["completedPurchases"] == 0
    assert stats.data["averageAmount"] == 690000.0


async def test_purchase_stats_date_range(api_client):
    inside = await _settled(use_purchase_stats(api_client, "2024-03-15", "2024-03-15"))
    assert inside.data["totalPurchases"] == 2
    assert isinstance(inside.data["totalAmount"], float)

    outside = await _settled(use_purchase_stats(api_client, "2024-03-16", None))
    assert outside.data["totalPurchases"] == 0
    assert outside.data["averageAmount"] == 0.0


async def test_purchases_list_returns_envelope(api_client):
    state = await _settled(use_purchases(api_client, {"status": "pending"}))
    assert state.data["count"] == 1
    assert state.data["data"][0]["title"] == "Resmas de papel"


# ==============================================================================
# Reports
# ==============================================================================


async def test_reports_list_returns_envelope(api_client):
    state = await _settled(use_reports(api_client, {"type": "cash_flow"}))
    assert state.data["count"] == 1
    assert state.data["data"][0]["title"] == "Flujo de caja"


async def test_report_stats(api_client):
    state = await _settled(use_report_stats(api_client))
    assert state.data["totalReports"] == 2
    assert state.data["totalDownloads"] == 2

    outside = await _settled(use_report_stats(api_client, None, "2024-03-14"))
    assert outside.data["totalReports"] == 0


async def test_create_update_delete_report(api_client):
    created = await use_create_report(api_client).mutate({
        "title": "Matrículas", "description": "Primer semestre",
        "type": "enrollment_report", "format": "csv",
    })
    assert created["id"] == "3"
    assert created["status"] == "pending"
    assert created["downloadCount"] == 0

    updated = await use_update_report(api_client).mutate(
        {"id": "3", "data": {"notes": "Incluir retirados"}},
    )
    assert updated["notes"] == "Incluir retirados"

    assert await use_delete_report(api_client).mutate("3") is None
    gone = await _settled(use_report(api_client, "3"))
    assert gone.error == "Report '3' not found"


async def test_generate_then_download_report(api_client):
    download = use_download_report(api_client)
    with pytest.raises(TransportError) as exc_info:
        await download.mutate("1")
    assert exc_info.value.status_code == 409
    assert download.error == "Report '1' cannot be downloaded while pending"

    report = await use_generate_report(api_client).mutate("1")
    assert report["status"] == "completed"
    assert can_download(report, FIXED_NOW)
    assert not can_generate(report)

    link = await download.mutate("1")
    assert link["downloadUrl"] == "/api/demo/reports/1/download"
    assert link["fileName"] == "1.pdf"
    assert download.error is None

    stats = await _settled(use_report_stats(api_client))
    assert stats.data["totalDownloads"] == 3


def test_report_availability():
    pending = {"status": "pending"}
    expired = {
        "status": "completed", "downloadUrl": "/x",
        "expiresAt": "2024-03-01T00:00:00+00:00",
    }
    assert can_generate(pending) and can_delete(pending)
    assert not can_download(pending, FIXED_NOW)
    assert not can_download(expired, FIXED_NOW)
    assert not can_delete({"status": "completed"})
    assert can_delete({"status": "failed"})


# ==============================================================================
# Dashboard
# ==============================================================================


async def test_dashboard_composes_three_queries(api_client):
    dashboard = Dashboard(api_client, clock=lambda: FIXED_NOW)
    assert dashboard.loading is False

    dashboard.mount()
    assert dashboard.loading is True

    state = await dashboard.wait()
    assert state.error is None
    stats = dashboard.stats
    assert stats.total_students == 3
    assert stats.total_courses == 3
    assert stats.monthly_revenue == 950000
    dashboard.dispose()
    assert all(q.disposed for q in dashboard.queries)


async def test_dashboard_error_surfaces_first_failure():
    client = ApiClient("http://test/api", transport=failing_transport("/api/demo/courses"))
    async with client:
        dashboard = Dashboard(client, clock=lambda: FIXED_NOW)
        dashboard.mount()
        state = await dashboard.wait()

    assert state.error == "Service unavailable"
    assert state.data == ([], None, [])
    assert dashboard.stats.total_students == 0
