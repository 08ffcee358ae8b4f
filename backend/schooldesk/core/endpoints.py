"""Endpoints: relative API paths shared by the resource factories and the demo routes.

Invariants:
    - Paths are relative to the API base URL (which already ends in /api)
    - Demo paths bypass authentication on the server side
"""

from schooldesk.core.domain_types import Collection

HEALTH = "/health"
DEMO_PREFIX = "/demo"
DEMO_DASHBOARD = f"{DEMO_PREFIX}/dashboard"


def collection_path(collection: Collection) -> str:
    return f"{DEMO_PREFIX}/{collection.value}"


def record_path(collection: Collection, record_id: str) -> str:
    return f"{collection_path(collection)}/{record_id}"


def action_path(collection: Collection, record_id: str, action: str) -> str:
    """e.g. /demo/purchases/7/approve"""
    return f"{record_path(collection, record_id)}/{action}"


def stats_path(collection: Collection) -> str:
    return f"{collection_path(collection)}/stats"


def scoped_path(collection: Collection, *segments) -> str:
    """e.g. /demo/enrollments/course/2 or /demo/cash/stats/monthly/2024/3"""
    return "/".join([collection_path(collection), *(str(s) for s in segments)])


def payments_by_student_path(student_id: str) -> str:
    return scoped_path(Collection.PAYMENTS, "student", student_id)


def clean_params(params: dict | None) -> dict:
    """Drop None and empty-string values; stringify the rest for the query string."""
    if not params:
        return {}
    return {
        key: str(value).lower() if isinstance(value, bool) else str(value)
        for key, value in params.items()
        if value is not None and value != ""
    }
