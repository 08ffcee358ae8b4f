"""Error Info: flat failure description and Result types for awaited operations.

Invariants:
    - describe_error() never raises and never returns an empty message
    - Fallback chain: response.data.message -> own message -> DEFAULT_ERROR_MESSAGE
    - Err keeps the original exception so callers can re-raise it untouched

Design Decisions:
    - Duck-typed rejection shapes (objects or mappings) decoded here, once;
      everything downstream reads ErrorInfo.message only
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Generic, TypeVar, Union

from schooldesk.core.domain_types import DEFAULT_ERROR_MESSAGE

T = TypeVar("T")


@dataclass(frozen=True)
class ErrorInfo:
    message: str


@dataclass(frozen=True)
class Ok(Generic[T]):
    value: T


@dataclass(frozen=True)
class Err:
    error: ErrorInfo
    exception: BaseException


Result = Union[Ok[T], Err]


def _lookup(container: Any, key: str) -> Any:
    if container is None:
        return None
    if isinstance(container, Mapping):
        return container.get(key)
    return getattr(container, key, None)


def server_message(exc: BaseException) -> str | None:
    """Nested server-provided message (exc.response.data.message), if any."""
    data = _lookup(_lookup(exc, "response"), "data")
    message = _lookup(data, "message")
    if isinstance(message, str) and message:
        return message
    return None


def describe_error(exc: BaseException) -> ErrorInfo:
    """Flatten any failure into ErrorInfo using the fallback chain."""
    message = server_message(exc)
    if message:
        return ErrorInfo(message)
    own = getattr(exc, "message", None)
    if not isinstance(own, str) or not own:
        own = str(exc)
    return ErrorInfo(own or DEFAULT_ERROR_MESSAGE)
