"""Table inventory endpoints."""
import logging
from typing import List

from fastapi import APIRouter, Depends, HTTPException

from gamenight.api.deps import get_store, require_admin, to_http_exception
from gamenight.core.errors import BookingError
from gamenight.schemas import MemberInDB, TableCreate, TableInDB, TableUpdate
from gamenight.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/tables", tags=["inventory"])


@router.get("", response_model=List[TableInDB])
async def list_tables(store: DocumentStore = Depends(get_store)):
    """List all tables."""
    return await store.list("tables")


@router.get("/{table_id}", response_model=TableInDB)
async def get_table(table_id: str, store: DocumentStore = Depends(get_store)):
    """Get a specific table by id."""
    table = await store.get("tables", table_id)

    if not table:
        raise HTTPException(status_code=404, detail="Table not found")

    return table


@router.post("", response_model=TableInDB, status_code=201)
async def create_table(
    table: TableCreate,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """
    Add a table to the inventory.

    Table ids are permanent once bookings reference them.
    """
    if await store.get("tables", table.id):
        raise HTTPException(status_code=400, detail=f"Table {table.id} already exists")

    data = table.model_dump(mode="json", exclude={"id"})
    try:
        created = await store.set("tables", table.id, data)
    except BookingError as e:
        raise to_http_exception(e)

    logger.info(f"{admin.id} created table {table.id}")
    return created


@router.patch("/{table_id}", response_model=TableInDB)
async def update_table(
    table_id: str,
    table_update: TableUpdate,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """Update a table's name or size."""
    update_data = table_update.model_dump(mode="json", exclude_unset=True)
    try:
        table = await store.update("tables", table_id, update_data)
    except BookingError as e:
        raise to_http_exception(e)

    if not table:
        raise HTTPException(status_code=404, detail="Table not found")

    return table


@router.delete("/{table_id}", status_code=204)
async def delete_table(
    table_id: str,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """
    Delete a table.

    Existing bookings keep referencing the table id.
    """
    try:
        deleted = await store.delete("tables", table_id)
    except BookingError as e:
        raise to_http_exception(e)

    if not deleted:
        raise HTTPException(status_code=404, detail="Table not found")

    logger.info(f"{admin.id} deleted table {table_id}")
