"""Demo Academic Routes: students, courses and enrollments under /api/demo.

Invariants:
    - Student DELETE is soft by default (status -> inactive); ?soft=false removes it
    - Course and enrollment DELETE always remove the record
    - New enrollments get enrolledAt = now when not given
    - approve/complete/cancel set the enrollment status as-is (no transition rules)
    - /recent lists newest first, at most `limit` records
"""

from fastapi import APIRouter, Body, Depends, Query

from schooldesk.api.routes.demo_crud import add_crud_routes, most_recent
from schooldesk.core.domain_types import Collection, EnrollmentStatus, StudentStatus
from schooldesk.core.endpoints import collection_path
from schooldesk.core.envelope import build_envelope
from schooldesk.core.ledger_stats import compute_student_stats
from schooldesk.infrastructure.demo_store import DemoStore, get_store
from schooldesk.schemas.records import (
    CourseCreate, CourseUpdate, EnrollmentCancellation, EnrollmentCompletion,
    EnrollmentCreate, EnrollmentUpdate, StudentCreate, StudentUpdate,
)

students_router = APIRouter(
    prefix="/api" + collection_path(Collection.STUDENTS), tags=["students"],
)
courses_router = APIRouter(
    prefix="/api" + collection_path(Collection.COURSES), tags=["courses"],
)
enrollments_router = APIRouter(
    prefix="/api" + collection_path(Collection.ENROLLMENTS), tags=["enrollments"],
)


def _listed(message: str, records: list[dict]) -> dict:
    return build_envelope(message, records, count=len(records))


# ─── Students ────────────────────────────────────────────────────

@students_router.get("/stats")
async def student_stats(store: DemoStore = Depends(get_store)):
    return build_envelope(
        "Student statistics retrieved successfully",
        compute_student_stats(store.list_records(Collection.STUDENTS)),
    )


@students_router.get("/recent")
async def recent_students(
    limit: int = Query(5, ge=1, le=100), store: DemoStore = Depends(get_store),
):
    students = most_recent(store.list_records(Collection.STUDENTS), limit)
    return _listed("Recent students retrieved successfully", students)


@students_router.get("/course/{course_id}")
async def students_by_course(course_id: str, store: DemoStore = Depends(get_store)):
    students = store.list_records(
        Collection.STUDENTS, where={"courseId": course_id},
    )
    return _listed("Course students retrieved successfully", students)


add_crud_routes(
    students_router, Collection.STUDENTS, StudentCreate, StudentUpdate,
    soft_delete_status=StudentStatus.INACTIVE.value, filters=("courseId",),
)
add_crud_routes(courses_router, Collection.COURSES, CourseCreate, CourseUpdate)


# ─── Enrollments ─────────────────────────────────────────────────

def _stamp_enrollment(record: dict, store: DemoStore) -> dict:
    record.setdefault("enrolledAt", store.now())
    return record


@enrollments_router.get("/student/{student_id}")
async def enrollments_by_student(
    student_id: str, store: DemoStore = Depends(get_store),
):
    enrollments = store.list_records(
        Collection.ENROLLMENTS, where={"studentId": student_id},
    )
    return _listed("Student enrollments retrieved successfully", enrollments)


@enrollments_router.get("/course/{course_id}")
async def enrollments_by_course(
    course_id: str, store: DemoStore = Depends(get_store),
):
    enrollments = store.list_records(
        Collection.ENROLLMENTS, where={"courseId": course_id},
    )
    return _listed("Course enrollments retrieved successfully", enrollments)


add_crud_routes(
    enrollments_router, Collection.ENROLLMENTS, EnrollmentCreate, EnrollmentUpdate,
    prepare=_stamp_enrollment, filters=("studentId", "courseId"),
)


@enrollments_router.post("/{enrollment_id}/approve")
async def approve_enrollment(
    enrollment_id: str, store: DemoStore = Depends(get_store),
):
    enrollment = store.update(Collection.ENROLLMENTS, enrollment_id, {
        "status": EnrollmentStatus.ACTIVE.value, "enrolledAt": store.now(),
    })
    return build_envelope("Enrollment approved successfully", enrollment)


@enrollments_router.post("/{enrollment_id}/complete")
async def complete_enrollment(
    enrollment_id: str,
    body: EnrollmentCompletion | None = Body(None),
    store: DemoStore = Depends(get_store),
):
    changes = body.to_record() if body is not None else {}
    changes.update(
        status=EnrollmentStatus.COMPLETED.value, completedAt=store.now(),
    )
    enrollment = store.update(Collection.ENROLLMENTS, enrollment_id, changes)
    return build_envelope("Enrollment completed successfully", enrollment)


@enrollments_router.post("/{enrollment_id}/cancel")
async def cancel_enrollment(
    enrollment_id: str,
    body: EnrollmentCancellation | None = Body(None),
    store: DemoStore = Depends(get_store),
):
    changes = body.to_record() if body is not None else {}
    changes["status"] = EnrollmentStatus.CANCELLED.value
    enrollment = store.update(Collection.ENROLLMENTS, enrollment_id, changes)
    return build_envelope("Enrollment cancelled successfully", enrollment)
