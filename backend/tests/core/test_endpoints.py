"""Endpoints & Session Context: tests for path helpers, params and auth headers."""

from schooldesk.core.domain_types import Collection
from schooldesk.core.endpoints import (
    action_path, clean_params, collection_path, payments_by_student_path,
    record_path, scoped_path, stats_path,
)
from schooldesk.core.session_context import SessionContext


def test_paths():
    assert collection_path(Collection.CASH) == "/demo/cash"
    assert record_path(Collection.STUDENTS, "7") == "/demo/students/7"
    assert action_path(Collection.PURCHASES, "2", "approve") == "/demo/purchases/2/approve"
    assert stats_path(Collection.CASH) == "/demo/cash/stats"
    assert payments_by_student_path("3") == "/demo/payments/student/3"
    assert scoped_path(Collection.CASH, "stats", "monthly", 2024, 3) == (
        "/demo/cash/stats/monthly/2024/3"
    )


def test_clean_params_drops_empty_values():
    params = {"status": "active", "search": "", "page": 2, "courseId": None}
    assert clean_params(params) == {"status": "active", "page": "2"}


def test_clean_params_lowercases_booleans():
    assert clean_params({"soft": False}) == {"soft": "false"}


def test_clean_params_none():
    assert clean_params(None) == {}


def test_signed_out_session_has_no_header():
    assert SessionContext().authorization_header() == {}


def test_signed_in_session_sends_bearer():
    session = SessionContext()
    session.sign_in("abc")
    assert session.signed_in
    assert session.authorization_header() == {"Authorization": "Bearer abc"}
    session.sign_out()
    assert not session.signed_in
