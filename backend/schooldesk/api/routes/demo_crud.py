"""Demo CRUD Routes: list/get/create/update/delete wiring shared by every collection.

Invariants:
    - Every response is an envelope {success, message, data, pagination?, count?}
    - List paginates only when page or limit is given; count is always the filtered total
    - Create returns 201; unknown ids surface as ResourceNotFoundError (404)
    - soft_delete_status set: DELETE ?soft=true (default) only changes status
    - List filters by exact match on the registered filter keys; sortBy orders
      numbers numerically and everything else as text

Design Decisions:
    - Resource modules register their fixed paths (/stats, /student/{id}) BEFORE
      calling add_crud_routes so they are not captured by /{record_id}
"""

from collections.abc import Callable

from fastapi import APIRouter, Depends, Query, Request, status

from schooldesk.core.domain_types import DEFAULT_PAGE_SIZE, Collection
from schooldesk.core.envelope import build_envelope, paginate
from schooldesk.infrastructure.demo_store import DemoStore, get_store
from schooldesk.schemas.records import RecordBody

Prepare = Callable[[dict, DemoStore], dict]


def _sort_key(value) -> tuple:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return (0, value, "")
    return (1, 0, "" if value is None else str(value))


def sort_records(
    records: list[dict], sort_by: str | None, descending: bool = False,
) -> list[dict]:
    if not sort_by:
        return records
    return sorted(
        records, key=lambda r: _sort_key(r.get(sort_by)), reverse=descending,
    )


def most_recent(records: list[dict], limit: int) -> list[dict]:
    """Newest first by createdAt, later ids first on ties."""
    def key(record: dict) -> tuple:
        record_id = str(record.get("id", ""))
        return (
            record.get("createdAt") or "",
            int(record_id) if record_id.isdigit() else 0,
        )
    return sorted(records, key=key, reverse=True)[:limit]


def list_envelope(
    message: str, records: list[dict], page: int | None, limit: int | None,
) -> dict:
    if page is None and limit is None:
        return build_envelope(message, records, count=len(records))
    items, pagination = paginate(records, page or 1, limit or DEFAULT_PAGE_SIZE)
    return build_envelope(
        message, items, pagination=pagination, count=len(records),
    )


def add_crud_routes(
    router: APIRouter,
    collection: Collection,
    create_model: type[RecordBody],
    update_model: type[RecordBody],
    *,
    prepare: Prepare | None = None,
    soft_delete_status: str | None = None,
    filters: tuple[str, ...] = (),
) -> None:
    label = collection.label

    @router.get("")
    async def list_records(
        request: Request,
        page: int | None = Query(None, ge=1),
        limit: int | None = Query(None, ge=1, le=100),
        status_filter: str | None = Query(None, alias="status"),
        search: str | None = Query(None, max_length=100),
        sort_by: str | None = Query(None, alias="sortBy"),
        sort_order: str = Query("ASC", alias="sortOrder"),
        store: DemoStore = Depends(get_store),
    ):
        where = {
            key: request.query_params[key]
            for key in filters if request.query_params.get(key)
        }
        records = store.list_records(
            collection, status=status_filter, search=search, where=where,
        )
        records = sort_records(records, sort_by, sort_order.upper() == "DESC")
        return list_envelope(
            f"{label} records retrieved successfully", records, page, limit,
        )

    @router.get("/{record_id}")
    async def get_record(record_id: str, store: DemoStore = Depends(get_store)):
        return build_envelope(
            f"{label} retrieved successfully", store.get(collection, record_id),
        )

    @router.post("", status_code=status.HTTP_201_CREATED)
    async def create_record(
        body: create_model, store: DemoStore = Depends(get_store),
    ):
        record = body.to_record()
        if prepare:
            record = prepare(record, store)
        return build_envelope(
            f"{label} created successfully", store.create(collection, record),
        )

    @router.put("/{record_id}")
    async def update_record(
        record_id: str, body: update_model, store: DemoStore = Depends(get_store),
    ):
        return build_envelope(
            f"{label} updated successfully",
            store.update(collection, record_id, body.to_changes()),
        )

    @router.delete("/{record_id}")
    async def delete_record(
        record_id: str,
        soft: bool = Query(True),
        store: DemoStore = Depends(get_store),
    ):
        if soft_delete_status and soft:
            record = store.update(
                collection, record_id, {"status": soft_delete_status},
            )
            return build_envelope(f"{label} deactivated successfully", record)
        store.delete(collection, record_id)
        return build_envelope(f"{label} deleted successfully", None)
