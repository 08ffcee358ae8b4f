"""Request Executor: runs one awaited operation and returns a Result.

Invariants:
    - operation() awaited exactly once, never retried
    - Every Exception becomes Err(describe_error(exc), exc); kinds are not distinguished
    - CancelledError (BaseException) passes through uncaught
"""

from collections.abc import Awaitable, Callable
from typing import TypeVar

from schooldesk.core.error_info import Err, Ok, Result, describe_error

T = TypeVar("T")


async def execute(operation: Callable[[], Awaitable[T]]) -> Result[T]:
    try:
        value = await operation()
    except Exception as e:
        return Err(describe_error(e), e)
    return Ok(value)
