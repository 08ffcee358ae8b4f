"""Enrollment Hooks: queries and mutations over /demo/enrollments.

Invariants:
    - use_enrollments_paginated returns the whole envelope (data + pagination)
    - Per-student and per-course lists default to []
    - approve takes an id; complete and cancel take an id or {"id", "data"}
"""

from schooldesk.core.domain_types import Collection
from schooldesk.core.endpoints import (
    action_path, collection_path, record_path, scoped_path,
)
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.mutation_runner import Mutation
from schooldesk.services.query_runner import Query
from schooldesk.services.resource_hooks import (
    Fetcher, get_fetcher, record_data, record_id, write_mutation,
)

ENROLLMENTS = collection_path(Collection.ENROLLMENTS)


def enrollments_fetcher(client: ApiClient, params: dict | None = None) -> Fetcher:
    return get_fetcher(client, ENROLLMENTS, params=params, default=[])


def enrollments_page_fetcher(client: ApiClient, params: dict | None) -> Fetcher:
    return get_fetcher(client, ENROLLMENTS, params=params, envelope=True)


def enrollments_by_student_fetcher(client: ApiClient, student_id: str) -> Fetcher:
    return get_fetcher(
        client, scoped_path(Collection.ENROLLMENTS, "student", student_id),
        default=[],
    )


def enrollments_by_course_fetcher(client: ApiClient, course_id: str) -> Fetcher:
    return get_fetcher(
        client, scoped_path(Collection.ENROLLMENTS, "course", course_id),
        default=[],
    )


def enrollment_fetcher(client: ApiClient, enrollment_id: str) -> Fetcher:
    return get_fetcher(client, record_path(Collection.ENROLLMENTS, enrollment_id))


def use_enrollments(client: ApiClient, params: dict | None = None) -> Query[list[dict]]:
    return Query(enrollments_fetcher(client, params), (params,), name="enrollments")


def use_enrollments_paginated(
    client: ApiClient, params: dict | None = None,
) -> Query[dict]:
    return Query(
        enrollments_page_fetcher(client, params), (params,),
        name="enrollments_paginated",
    )


def use_enrollments_by_student(client: ApiClient, student_id: str) -> Query[list[dict]]:
    return Query(
        enrollments_by_student_fetcher(client, student_id), (student_id,),
        name="enrollments_by_student",
    )


def use_enrollments_by_course(client: ApiClient, course_id: str) -> Query[list[dict]]:
    return Query(
        enrollments_by_course_fetcher(client, course_id), (course_id,),
        name="enrollments_by_course",
    )


def use_enrollment(client: ApiClient, enrollment_id: str) -> Query[dict]:
    return Query(
        enrollment_fetcher(client, enrollment_id), (enrollment_id,),
        name="enrollment",
    )


def use_create_enrollment(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "post", lambda _: ENROLLMENTS,
        body_for=lambda payload: payload, name="create_enrollment",
    )


def use_update_enrollment(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "put", lambda p: record_path(Collection.ENROLLMENTS, record_id(p)),
        body_for=record_data, name="update_enrollment",
    )


def use_delete_enrollment(client: ApiClient) -> Mutation[str, None]:
    return write_mutation(
        client, "delete", lambda p: record_path(Collection.ENROLLMENTS, record_id(p)),
        name="delete_enrollment",
    )


def _action(client: ApiClient, action: str, **kwargs) -> Mutation:
    return write_mutation(
        client, "post",
        lambda p: action_path(Collection.ENROLLMENTS, record_id(p), action),
        name=f"{action}_enrollment", **kwargs,
    )


def use_approve_enrollment(client: ApiClient) -> Mutation[str, dict]:
    return _action(client, "approve")


def use_complete_enrollment(client: ApiClient) -> Mutation[dict, dict]:
    """{"id", "data": {"finalGrade"?, "notes"?}}"""
    return _action(client, "complete", body_for=record_data)


def use_cancel_enrollment(client: ApiClient) -> Mutation[dict, dict]:
    return _action(client, "cancel", body_for=record_data)
