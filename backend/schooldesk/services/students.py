"""Student Hooks: queries and mutations over /demo/students.

Invariants:
    - List fetchers default to [] when the envelope carries no data
    - use_students_paginated returns the whole envelope (data + pagination)
    - use_recent_students depends on limit; use_students_by_course on the course id
    - Delete takes an id or {"id", "soft"}; soft unless {"soft": False} is passed
"""

from schooldesk.core.domain_types import Collection
from schooldesk.core.endpoints import (
    collection_path, record_path, scoped_path, stats_path,
)
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.mutation_runner import Mutation
from schooldesk.services.query_runner import Query
from schooldesk.services.resource_hooks import (
    Fetcher, get_fetcher, record_data, record_id, write_mutation,
)

STUDENTS = collection_path(Collection.STUDENTS)


def students_fetcher(client: ApiClient) -> Fetcher:
    return get_fetcher(client, STUDENTS, default=[])


def students_page_fetcher(client: ApiClient, params: dict | None) -> Fetcher:
    return get_fetcher(client, STUDENTS, params=params, envelope=True)


def student_fetcher(client: ApiClient, student_id: str) -> Fetcher:
    return get_fetcher(client, record_path(Collection.STUDENTS, student_id))


def students_by_course_fetcher(client: ApiClient, course_id: str) -> Fetcher:
    return get_fetcher(
        client, scoped_path(Collection.STUDENTS, "course", course_id), default=[],
    )


def recent_students_fetcher(client: ApiClient, limit: int = 5) -> Fetcher:
    return get_fetcher(
        client, scoped_path(Collection.STUDENTS, "recent"),
        params={"limit": limit}, default=[],
    )


def student_stats_fetcher(client: ApiClient) -> Fetcher:
    return get_fetcher(client, stats_path(Collection.STUDENTS))


def use_students(client: ApiClient) -> Query[list[dict]]:
    return Query(students_fetcher(client), (), name="students")


def use_students_paginated(client: ApiClient, params: dict | None = None) -> Query[dict]:
    return Query(
        students_page_fetcher(client, params), (params,), name="students_paginated",
    )


def use_student(client: ApiClient, student_id: str) -> Query[dict]:
    return Query(student_fetcher(client, student_id), (student_id,), name="student")


def use_students_by_course(client: ApiClient, course_id: str) -> Query[list[dict]]:
    return Query(
        students_by_course_fetcher(client, course_id), (course_id,),
        name="students_by_course",
    )


def use_recent_students(client: ApiClient, limit: int = 5) -> Query[list[dict]]:
    return Query(
        recent_students_fetcher(client, limit), (limit,), name="recent_students",
    )


def use_student_stats(client: ApiClient) -> Query[dict]:
    return Query(student_stats_fetcher(client), (), name="student_stats")


def use_create_student(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "post", lambda _: STUDENTS,
        body_for=lambda payload: payload, name="create_student",
    )


def use_update_student(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "put", lambda p: record_path(Collection.STUDENTS, record_id(p)),
        body_for=record_data, name="update_student",
    )


def use_delete_student(client: ApiClient) -> Mutation[dict, dict | None]:
    return write_mutation(
        client, "delete", lambda p: record_path(Collection.STUDENTS, record_id(p)),
        params_for=lambda p: {
            "soft": p.get("soft", True) if isinstance(p, dict) else True,
        },
        name="delete_student",
    )
