"""Record Schemas: Pydantic request bodies for the demo API.

Invariants:
    - Bodies accept camelCase (wire) or snake_case keys; records are stored camelCase
    - Create bodies fill status defaults; update bodies only carry fields that were sent
    - Amounts and prices are positive / non-negative; names and titles non-blank
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from schooldesk.core.domain_types import (
    CashEntryType, CourseStatus, EnrollmentStatus, PaymentMethod,
    PaymentStatus, ReportFormat, ReportType, StudentStatus,
)

_EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RecordBody(BaseModel):
    """Base for request bodies: camelCase aliases, wire-form dump."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)

    def to_changes(self) -> dict:
        return self.model_dump(mode="json", by_alias=True, exclude_unset=True)


def _strip_required(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


# --- Students -----------------------------------------------------------------

class StudentCreate(RecordBody):
    name: str = Field(min_length=1, max_length=100)
    last_name: str = Field(min_length=1, max_length=100)
    email: str = Field(pattern=_EMAIL_PATTERN, max_length=255)
    phone: str | None = Field(None, max_length=30)
    address: str | None = Field(None, max_length=255)
    date_of_birth: str | None = None
    status: StudentStatus = StudentStatus.ACTIVE
    course_id: str | None = None

    @field_validator("name", "last_name")
    @classmethod
    def strip_names(cls, v: str) -> str:
        return _strip_required(v)


class StudentUpdate(RecordBody):
    name: str | None = Field(None, min_length=1, max_length=100)
    last_name: str | None = Field(None, min_length=1, max_length=100)
    email: str | None = Field(None, pattern=_EMAIL_PATTERN, max_length=255)
    phone: str | None = Field(None, max_length=30)
    address: str | None = Field(None, max_length=255)
    date_of_birth: str | None = None
    status: StudentStatus | None = None
    course_id: str | None = None


# --- Courses ------------------------------------------------------------------

class CourseCreate(RecordBody):
    name: str = Field(min_length=1, max_length=150)
    code: str = Field(min_length=1, max_length=30)
    price: float = Field(ge=0)
    description: str | None = None
    duration: int | None = Field(None, ge=0)
    status: CourseStatus = CourseStatus.ACTIVE
    category: str | None = None
    max_students: int | None = Field(None, ge=1)
    start_date: str | None = None
    end_date: str | None = None

    @field_validator("name", "code")
    @classmethod
    def strip_required(cls, v: str) -> str:
        return _strip_required(v)


class CourseUpdate(RecordBody):
    name: str | None = Field(None, min_length=1, max_length=150)
    code: str | None = Field(None, min_length=1, max_length=30)
    price: float | None = Field(None, ge=0)
    description: str | None = None
    duration: int | None = Field(None, ge=0)
    status: CourseStatus | None = None
    category: str | None = None
    max_students: int | None = Field(None, ge=1)
    start_date: str | None = None
    end_date: str | None = None


# --- Enrollments --------------------------------------------------------------

class EnrollmentCreate(RecordBody):
    student_id: str = Field(min_length=1)
    course_id: str = Field(min_length=1)
    status: EnrollmentStatus = EnrollmentStatus.PENDING
    enrolled_at: str | None = None
    notes: str | None = Field(None, max_length=2000)


class EnrollmentUpdate(RecordBody):
    status: EnrollmentStatus | None = None
    completed_at: str | None = None
    final_grade: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=2000)


class EnrollmentCompletion(RecordBody):
    final_grade: float | None = Field(None, ge=0)
    notes: str | None = Field(None, max_length=2000)


class EnrollmentCancellation(RecordBody):
    notes: str | None = Field(None, max_length=2000)


# --- Payments -----------------------------------------------------------------

class PaymentCreate(RecordBody):
    student_id: str = Field(min_length=1)
    amount: float = Field(gt=0)
    method: PaymentMethod = PaymentMethod.CASH
    description: str | None = Field(None, max_length=500)
    due_date: str | None = None
    reference: str | None = Field(None, max_length=100)


class PaymentUpdate(RecordBody):
    amount: float | None = Field(None, gt=0)
    method: PaymentMethod | None = None
    description: str | None = Field(None, max_length=500)
    due_date: str | None = None
    reference: str | None = Field(None, max_length=100)


class PaymentStatusChange(RecordBody):
    status: PaymentStatus
    notes: str | None = Field(None, max_length=500)


# --- Cash entries -------------------------------------------------------------

class CashEntryCreate(RecordBody):
    type: CashEntryType
    category: str = Field(min_length=1, max_length=50)
    amount: float = Field(gt=0)
    description: str = Field(min_length=1, max_length=500)
    reference: str | None = Field(None, max_length=100)
    notes: str | None = None
    transaction_date: str | None = None


class CashEntryUpdate(RecordBody):
    type: CashEntryType | None = None
    category: str | None = Field(None, min_length=1, max_length=50)
    amount: float | None = Field(None, gt=0)
    description: str | None = Field(None, min_length=1, max_length=500)
    reference: str | None = Field(None, max_length=100)
    notes: str | None = None
    transaction_date: str | None = None


# --- Purchases ----------------------------------------------------------------

class PurchaseCreate(RecordBody):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    category: str = Field(min_length=1, max_length=50)
    amount: float = Field(gt=0)
    supplier: str | None = Field(None, max_length=100)
    invoice_number: str | None = Field(None, max_length=100)
    payment_method: PaymentMethod = PaymentMethod.CASH
    purchase_date: str | None = None
    expected_delivery_date: str | None = None
    notes: str | None = None


class PurchaseUpdate(RecordBody):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    category: str | None = Field(None, min_length=1, max_length=50)
    amount: float | None = Field(None, gt=0)
    supplier: str | None = Field(None, max_length=100)
    invoice_number: str | None = Field(None, max_length=100)
    payment_method: PaymentMethod | None = None
    purchase_date: str | None = None
    expected_delivery_date: str | None = None
    notes: str | None = None


class PurchaseRejection(RecordBody):
    reason: str | None = Field(None, max_length=1000)


# --- Reports ------------------------------------------------------------------

class ReportCreate(RecordBody):
    title: str = Field(min_length=1, max_length=255)
    description: str = Field(min_length=1)
    type: ReportType
    format: ReportFormat = ReportFormat.PDF
    parameters: dict | None = None
    filters: dict | None = None
    start_date: str | None = None
    end_date: str | None = None
    notes: str | None = None

    @field_validator("title")
    @classmethod
    def strip_title(cls, v: str) -> str:
        return _strip_required(v)


class ReportUpdate(RecordBody):
    title: str | None = Field(None, min_length=1, max_length=255)
    description: str | None = Field(None, min_length=1)
    type: ReportType | None = None
    format: ReportFormat | None = None
    parameters: dict | None = None
    filters: dict | None = None
    start_date: str | None = None
    end_date: str | None = None
    notes: str | None = None
