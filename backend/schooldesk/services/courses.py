"""Course Hooks: queries and mutations over /demo/courses."""

from schooldesk.core.domain_types import Collection
from schooldesk.core.endpoints import collection_path, record_path
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.mutation_runner import Mutation
from schooldesk.services.query_runner import Query
from schooldesk.services.resource_hooks import (
    Fetcher, get_fetcher, record_data, record_id, write_mutation,
)

COURSES = collection_path(Collection.COURSES)


def courses_fetcher(client: ApiClient) -> Fetcher:
    return get_fetcher(client, COURSES, default=[])


def course_fetcher(client: ApiClient, course_id: str) -> Fetcher:
    return get_fetcher(client, record_path(Collection.COURSES, course_id))


def use_courses(client: ApiClient) -> Query[list[dict]]:
    return Query(courses_fetcher(client), (), name="courses")


def use_course(client: ApiClient, course_id: str) -> Query[dict]:
    return Query(course_fetcher(client, course_id), (course_id,), name="course")


def use_create_course(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "post", lambda _: COURSES,
        body_for=lambda payload: payload, name="create_course",
    )


def use_update_course(client: ApiClient) -> Mutation[dict, dict]:
    return write_mutation(
        client, "put", lambda p: record_path(Collection.COURSES, record_id(p)),
        body_for=record_data, name="update_course",
    )


def use_delete_course(client: ApiClient) -> Mutation[str, None]:
    return write_mutation(
        client, "delete", lambda p: record_path(Collection.COURSES, record_id(p)),
        name="delete_course",
    )
