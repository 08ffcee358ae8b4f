"""Resource Hooks: builders for envelope-aware fetchers and mutations.

Invariants:
    - Fetchers perform exactly one GET and unwrap envelope["data"] (or return the whole envelope)
    - Query params are cleaned once, when the fetcher is built (None/"" dropped)
    - Mutations perform exactly one request per call and return envelope["data"]

Design Decisions:
    - A fetcher is rebuilt per render, like the closures a view passes on
      every render; Query.update() decides whether it is used
"""

import logging
from collections.abc import Awaitable, Callable
from typing import Any

from schooldesk.core.endpoints import clean_params
from schooldesk.core.envelope import unwrap_data
from schooldesk.infrastructure.http_client import ApiClient
from schooldesk.services.mutation_runner import Mutation

logger = logging.getLogger(__name__)

Fetcher = Callable[[], Awaitable[Any]]


def get_fetcher(
    client: ApiClient,
    path: str,
    *,
    params: dict | None = None,
    default: Any = None,
    envelope: bool = False,
    transform: Callable[[Any], Any] | None = None,
) -> Fetcher:
    query_params = clean_params(params)

    async def fetch():
        response = await client.get(path, params=query_params)
        data = response.data if envelope else unwrap_data(response, default)
        if transform is not None and data is not None:
            data = transform(data)
        logger.debug(f"Fetched {path}", extra={"url": path})
        return data

    return fetch


def write_mutation(
    client: ApiClient,
    method: str,
    path_for: Callable[[Any], str],
    *,
    body_for: Callable[[Any], Any] | None = None,
    params_for: Callable[[Any], dict] | None = None,
    name: str,
) -> Mutation:
    """Mutation issuing one `method` request built from the call's params."""
    send = getattr(client, method)

    async def run(params):
        path = path_for(params)
        kwargs = {}
        if body_for is not None:
            kwargs["body"] = body_for(params)
        if params_for is not None:
            kwargs["params"] = clean_params(params_for(params))
        response = await send(path, **kwargs)
        return unwrap_data(response)

    return Mutation(run, name=name)


# ─── Param accessors ─────────────────────────────────────────────

def record_id(params: Any) -> str:
    """Mutation params are either the id itself or a dict carrying "id"."""
    if isinstance(params, dict):
        return str(params["id"])
    return str(params)


def record_data(params: Any) -> dict:
    """The "data" of a dict param; a bare id carries none."""
    if not isinstance(params, dict):
        return {}
    return params.get("data") or {}
