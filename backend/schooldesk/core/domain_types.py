"""Domain Types: enums and identity types shared across core, services and api.

Invariants:
    - Record ids are strings on the wire (demo backend mints them from a counter)
    - Lifecycle status of a query/mutation is derived, never stored
    - All valid record states encoded as str Enums, no raw string matching in core

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

RecordId = NewType("RecordId", str)


# ─── Constants ───────────────────────────────────────────────────

DEFAULT_ERROR_MESSAGE = "An error occurred"
DEFAULT_PAGE_SIZE = 10


# ─── Enums ───────────────────────────────────────────────────────

class LifecycleStatus(str, Enum):
    """Derived status of a QueryState/MutationState."""
    IDLE = "idle"
    LOADING = "loading"
    SUCCESS = "success"
    ERROR = "error"


class Collection(str, Enum):
    """Demo record collections. Value is the URL segment under /demo."""
    STUDENTS = "students"
    COURSES = "courses"
    ENROLLMENTS = "enrollments"
    PAYMENTS = "payments"
    CASH = "cash"
    PURCHASES = "purchases"
    REPORTS = "reports"

    @property
    def label(self) -> str:
        return _COLLECTION_LABELS[self]


_COLLECTION_LABELS = {
    Collection.STUDENTS: "Student",
    Collection.COURSES: "Course",
    Collection.ENROLLMENTS: "Enrollment",
    Collection.PAYMENTS: "Payment",
    Collection.CASH: "Cash entry",
    Collection.PURCHASES: "Purchase",
    Collection.REPORTS: "Report",
}


class StudentStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    SUSPENDED = "suspended"
    PENDING = "pending"


class CourseStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
    DRAFT = "draft"


class EnrollmentStatus(str, Enum):
    PENDING = "pending"
    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class PaymentStatus(str, Enum):
    PENDING = "pending"
    COMPLETED = "completed"
    FAILED = "failed"
    REFUNDED = "refunded"
    CANCELLED = "cancelled"


class PaymentMethod(str, Enum):
    CASH = "cash"
    CARD = "card"
    TRANSFER = "transfer"
    CHECK = "check"


class CashEntryType(str, Enum):
    INCOME = "income"
    EXPENSE = "expense"


class CashEntryStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    CANCELLED = "cancelled"


class PurchaseStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class ReportType(str, Enum):
    FINANCIAL = "financial"
    STUDENT_ANALYSIS = "student_analysis"
    PAYMENT_SUMMARY = "payment_summary"
    ENROLLMENT_REPORT = "enrollment_report"
    COURSE_PERFORMANCE = "course_performance"
    CASH_FLOW = "cash_flow"
    PURCHASE_ANALYSIS = "purchase_analysis"
    CUSTOM = "custom"


class ReportStatus(str, Enum):
    PENDING = "pending"
    GENERATING = "generating"
    COMPLETED = "completed"
    FAILED = "failed"
    EXPIRED = "expired"


class ReportFormat(str, Enum):
    PDF = "pdf"
    EXCEL = "excel"
    CSV = "csv"
    JSON = "json"
