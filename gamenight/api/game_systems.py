"""Game system catalog endpoints."""
import logging
from typing import List, Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Response

from gamenight.api.deps import get_current_member, get_store, require_admin, to_http_exception
from gamenight.core.errors import BookingError, MembershipInactive, MissingField
from gamenight.core.ids import game_system_id
from gamenight.schemas import GameSystemCreate, GameSystemInDB, MemberInDB
from gamenight.services.document_store import DocumentStore

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/game-systems", tags=["game-systems"])


@router.get("", response_model=List[GameSystemInDB])
async def list_game_systems(
    q: Optional[str] = Query(default=None, description="Case-insensitive part of the name"),
    store: DocumentStore = Depends(get_store),
):
    """List known game systems by name, optionally filtered for autocompletion."""
    systems = await store.list("game_systems")
    if q and q.strip():
        needle = q.strip().lower()
        systems = [s for s in systems if needle in s.name.lower()]
    return sorted(systems, key=lambda s: s.name.lower())


@router.post("", response_model=GameSystemInDB, status_code=201)
async def add_game_system(
    game_system: GameSystemCreate,
    response: Response,
    store: DocumentStore = Depends(get_store),
    member: MemberInDB = Depends(get_current_member),
):
    """
    Add a game system to the catalog.

    Names are matched by their slug, so adding a known system returns the
    existing entry (200) instead of creating a duplicate.
    """
    name = game_system.name.strip()
    system_id = game_system_id(name)

    try:
        if not member.is_member:
            raise MembershipInactive("Your membership is not active. Please contact an admin.")
        if not system_id:
            raise MissingField("name", "Please enter a game system name.")

        existing = await store.get("game_systems", system_id)
        if existing is not None:
            response.status_code = 200
            return existing

        created = await store.set("game_systems", system_id, {"name": name})
    except BookingError as e:
        raise to_http_exception(e)

    logger.info(f"{member.id} added game system {system_id}")
    return created


@router.delete("/{system_id}", status_code=204)
async def delete_game_system(
    system_id: str,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """Remove a game system. Bookings keep their game name."""
    try:
        deleted = await store.delete("game_systems", system_id)
    except BookingError as e:
        raise to_http_exception(e)

    if not deleted:
        raise HTTPException(status_code=404, detail="Game system not found")

    logger.info(f"{admin.id} deleted game system {system_id}")
