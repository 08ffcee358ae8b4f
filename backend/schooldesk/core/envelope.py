"""Envelope: decoded HTTP responses and the {success, message, data} wrapper.

Invariants:
    - ApiResponse.data is the decoded JSON body (None for empty bodies)
    - unwrap_data() only extracts "data"; the envelope shape is not validated
    - build_envelope() omits pagination/count when not given
    - paginate() clamps page/limit to >= 1 and reports totalPages >= 1
"""

from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Any
import math

from schooldesk.core.domain_types import DEFAULT_PAGE_SIZE


@dataclass(frozen=True)
class ApiResponse:
    """Decoded response handed back by the transport."""
    status_code: int
    data: Any = None
    headers: Mapping[str, str] = field(default_factory=dict)


def unwrap_data(response: ApiResponse, default: Any = None) -> Any:
    """Return envelope["data"], or default when missing/None."""
    body = response.data
    if not isinstance(body, Mapping):
        return default
    value = body.get("data")
    return default if value is None else value


def build_envelope(
    message: str,
    data: Any = None,
    *,
    success: bool = True,
    pagination: dict | None = None,
    count: int | None = None,
) -> dict:
    envelope: dict[str, Any] = {"success": success, "message": message, "data": data}
    if pagination is not None:
        envelope["pagination"] = pagination
    if count is not None:
        envelope["count"] = count
    return envelope


def paginate(
    items: Sequence[Any], page: int = 1, limit: int = DEFAULT_PAGE_SIZE,
) -> tuple[list[Any], dict]:
    """Slice items for one page and describe it in envelope form."""
    page = max(page, 1)
    limit = max(limit, 1)
    total = len(items)
    start = (page - 1) * limit
    return list(items[start:start + limit]), {
        "page": page,
        "limit": limit,
        "total": total,
        "totalPages": max(math.ceil(total / limit), 1),
    }
