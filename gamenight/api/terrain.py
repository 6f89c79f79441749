"""Terrain box inventory endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query

from gamenight.api.deps import get_store, require_admin, to_http_exception
from gamenight.core.errors import BookingError
from gamenight.schemas import (
    MemberInDB,
    TerrainBoxCreate,
    TerrainBoxInDB,
    TerrainBoxUpdate,
    TerrainCategory,
)
from gamenight.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/terrain", tags=["inventory"])


@router.get("", response_model=List[TerrainBoxInDB])
async def list_terrain_boxes(
    category: Optional[TerrainCategory] = Query(default=None),
    include_disabled: bool = Query(default=True),
    store: DocumentStore = Depends(get_store),
):
    """
    List terrain boxes.

    Args:
        category: Only boxes of this category
        include_disabled: Set to false to hide boxes that cannot be newly booked
    """
    boxes = await store.list("terrain_boxes")
    return [
        box for box in boxes
        if (category is None or box.category == category)
        and (include_disabled or not box.disabled)
    ]


@router.get("/{box_id}", response_model=TerrainBoxInDB)
async def get_terrain_box(box_id: str, store: DocumentStore = Depends(get_store)):
    """Get a specific terrain box by id."""
    box = await store.get("terrain_boxes", box_id)

    if not box:
        raise HTTPException(status_code=404, detail="Terrain box not found")

    return box


@router.post("", response_model=TerrainBoxInDB, status_code=201)
async def create_terrain_box(
    box: TerrainBoxCreate,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """Add a terrain box to the inventory."""
    if await store.get("terrain_boxes", box.id):
        raise HTTPException(status_code=400, detail=f"Terrain box {box.id} already exists")

    data = box.model_dump(mode="json", exclude={"id"})
    try:
        created = await store.set("terrain_boxes", box.id, data)
    except BookingError as e:
        raise to_http_exception(e)

    logger.info(f"{admin.id} created terrain box {box.id}")
    return created


@router.patch("/{box_id}", response_model=TerrainBoxInDB)
async def update_terrain_box(
    box_id: str,
    box_update: TerrainBoxUpdate,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """
    Update a terrain box.

    Disabling a box hides it from new bookings; existing bookings stay valid.
    """
    update_data = box_update.model_dump(mode="json", exclude_unset=True)
    try:
        box = await store.update("terrain_boxes", box_id, update_data)
    except BookingError as e:
        raise to_http_exception(e)

    if not box:
        raise HTTPException(status_code=404, detail="Terrain box not found")

    return box


@router.delete("/{box_id}", status_code=204)
async def delete_terrain_box(
    box_id: str,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """Delete a terrain box."""
    try:
        deleted = await store.delete("terrain_boxes", box_id)
    except BookingError as e:
        raise to_http_exception(e)

    if not deleted:
        raise HTTPException(status_code=404, detail="Terrain box not found")

    logger.info(f"{admin.id} deleted terrain box {box_id}")
