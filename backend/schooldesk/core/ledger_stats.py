"""Ledger Stats: summaries over student, payment, cash-entry, purchase and report records.

Invariants:
    - Amounts coerced with to_amount(): numbers and numeric strings count, anything else is 0
    - Cancelled cash entries are excluded from every total
    - Category totals count confirmed entries only
    - Averages are 0 over an empty set
    - monthly_revenue counts completed payments whose paidAt falls in the reference month
    - All functions are pure (reference time passed in, never read from the clock)
"""

import calendar
from collections.abc import Iterable
from dataclasses import dataclass, asdict
from datetime import datetime
import math

from schooldesk.core.domain_types import (
    CashEntryStatus, CashEntryType, CourseStatus, PaymentStatus,
    PurchaseStatus, ReportStatus, StudentStatus,
)


def to_amount(value) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        amount = float(value)
    except (TypeError, ValueError):
        return 0.0
    return 0.0 if math.isnan(amount) else amount


def _average(total: float, count: int) -> float:
    return total / count if count else 0.0


def _parse_timestamp(value) -> datetime | None:
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


# ─── Dashboard ───────────────────────────────────────────────────

@dataclass(frozen=True)
class DashboardStats:
    total_students: int = 0
    active_students: int = 0
    total_courses: int = 0
    active_courses: int = 0
    total_payments: int = 0
    completed_payments: int = 0
    pending_payments: int = 0
    total_revenue: float = 0.0
    monthly_revenue: float = 0.0

    def to_dict(self) -> dict:
        return asdict(self)


def compute_dashboard_stats(
    students: Iterable[dict] | None,
    courses: Iterable[dict] | None,
    payments: Iterable[dict] | None,
    now: datetime,
) -> DashboardStats:
    """Totals over whatever has loaded so far (None counts as empty)."""
    students = list(students or [])
    courses = list(courses or [])
    payments = list(payments or [])

    completed = [p for p in payments if p.get("status") == PaymentStatus.COMPLETED]
    this_month = []
    for p in completed:
        paid_at = _parse_timestamp(p.get("paidAt"))
        if paid_at and paid_at.year == now.year and paid_at.month == now.month:
            this_month.append(p)

    return DashboardStats(
        total_students=len(students),
        active_students=sum(
            1 for s in students if s.get("status") == StudentStatus.ACTIVE
        ),
        total_courses=len(courses),
        active_courses=sum(
            1 for c in courses if c.get("status") == CourseStatus.ACTIVE
        ),
        total_payments=len(payments),
        completed_payments=len(completed),
        pending_payments=sum(
            1 for p in payments if p.get("status") == PaymentStatus.PENDING
        ),
        total_revenue=sum(to_amount(p.get("amount")) for p in completed),
        monthly_revenue=sum(to_amount(p.get("amount")) for p in this_month),
    )


# ─── Cash ────────────────────────────────────────────────────────

def compute_cash_stats(entries: Iterable[dict]) -> dict:
    """Income/expense totals; pending entries reported separately."""
    total_income = total_expenses = 0.0
    pending_income = pending_expenses = 0.0
    count = 0
    for entry in entries:
        status = entry.get("status")
        if status == CashEntryStatus.CANCELLED:
            continue
        count += 1
        amount = to_amount(entry.get("amount"))
        is_income = entry.get("type") == CashEntryType.INCOME
        if status == CashEntryStatus.PENDING:
            if is_income:
                pending_income += amount
            else:
                pending_expenses += amount
            continue
        if is_income:
            total_income += amount
        else:
            total_expenses += amount
    return {
        "totalIncome": total_income,
        "totalExpenses": total_expenses,
        "netBalance": total_income - total_expenses,
        "pendingIncome": pending_income,
        "pendingExpenses": pending_expenses,
        "entriesCount": count,
    }


# ─── Purchases ───────────────────────────────────────────────────

def compute_purchase_stats(purchases: Iterable[dict]) -> dict:
    """Count and amount per status plus overall totals."""
    by_status = {status.value: 0 for status in PurchaseStatus}
    total_amount = 0.0
    approved_amount = 0.0
    count = 0
    for purchase in purchases:
        count += 1
        amount = to_amount(purchase.get("amount"))
        total_amount += amount
        status = purchase.get("status")
        if status in by_status:
            by_status[status] += 1
        if status in (PurchaseStatus.APPROVED, PurchaseStatus.COMPLETED):
            approved_amount += amount
    return {
        "totalPurchases": count,
        "totalAmount": total_amount,
        "approvedAmount": approved_amount,
        "pendingPurchases": by_status[PurchaseStatus.PENDING.value],
        "approvedPurchases": by_status[PurchaseStatus.APPROVED.value],
        "completedPurchases": by_status[PurchaseStatus.COMPLETED.value],
        "rejectedPurchases": by_status[PurchaseStatus.REJECTED.value],
        "averageAmount": _average(total_amount, count),
        "byStatus": by_status,
    }


# ─── Payments ────────────────────────────────────────────────────

def compute_payment_stats(payments: Iterable[dict]) -> dict:
    counts = {status: 0 for status in PaymentStatus}
    total_amount = completed_amount = pending_amount = 0.0
    total = 0
    for payment in payments:
        total += 1
        amount = to_amount(payment.get("amount"))
        total_amount += amount
        status = payment.get("status")
        if status in counts:
            counts[PaymentStatus(status)] += 1
        if status == PaymentStatus.COMPLETED:
            completed_amount += amount
        elif status == PaymentStatus.PENDING:
            pending_amount += amount
    return {
        "total": total,
        "pending": counts[PaymentStatus.PENDING],
        "completed": counts[PaymentStatus.COMPLETED],
        "failed": counts[PaymentStatus.FAILED],
        "refunded": counts[PaymentStatus.REFUNDED],
        "totalAmount": total_amount,
        "completedAmount": completed_amount,
        "pendingAmount": pending_amount,
        "averageAmount": _average(total_amount, total),
    }


# ─── Students ────────────────────────────────────────────────────

def compute_student_stats(students: Iterable[dict]) -> dict:
    """Counts of active, inactive and suspended students.

    total is the sum of those three, so pending students are not counted.
    """
    statuses = [s.get("status") for s in students]
    active = statuses.count(StudentStatus.ACTIVE)
    inactive = statuses.count(StudentStatus.INACTIVE)
    suspended = statuses.count(StudentStatus.SUSPENDED)
    return {
        "total": active + inactive + suspended,
        "active": active,
        "inactive": inactive,
        "suspended": suspended,
    }


# ─── Cash periods ────────────────────────────────────────────────

def month_bounds(year: int, month: int) -> tuple[str, str]:
    """First and last day of a month as YYYY-MM-DD."""
    last_day = calendar.monthrange(year, month)[1]
    return f"{year:04d}-{month:02d}-01", f"{year:04d}-{month:02d}-{last_day:02d}"


def year_bounds(year: int) -> tuple[str, str]:
    return f"{year:04d}-01-01", f"{year:04d}-12-31"


def within_days(day: str | None, start: str | None, end: str | None) -> bool:
    """Inclusive day-range check on ISO dates/timestamps (open ends allowed)."""
    day = (day or "")[:10]
    if start and day < start[:10]:
        return False
    if end and day > end[:10]:
        return False
    return True


def compute_category_stats(entries: Iterable[dict]) -> dict[str, float]:
    """Confirmed amounts keyed by "<type>_<category>"."""
    totals: dict[str, float] = {}
    for entry in entries:
        if entry.get("status") != CashEntryStatus.CONFIRMED:
            continue
        key = f"{entry.get('type')}_{entry.get('category')}"
        totals[key] = totals.get(key, 0.0) + to_amount(entry.get("amount"))
    return totals


# ─── Reports ─────────────────────────────────────────────────────

def compute_report_stats(reports: Iterable[dict]) -> dict:
    reports = list(reports)
    by_type: dict[str, int] = {}
    by_format: dict[str, int] = {}
    for report in reports:
        by_type[report.get("type")] = by_type.get(report.get("type"), 0) + 1
        by_format[report.get("format")] = by_format.get(report.get("format"), 0) + 1
    statuses = [r.get("status") for r in reports]
    return {
        "totalReports": len(reports),
        "pendingReports": statuses.count(ReportStatus.PENDING),
        "completedReports": statuses.count(ReportStatus.COMPLETED),
        "failedReports": statuses.count(ReportStatus.FAILED),
        "totalDownloads": sum(int(r.get("downloadCount") or 0) for r in reports),
        "reportsByType": by_type,
        "reportsByFormat": by_format,
    }
