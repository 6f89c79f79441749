"""Member profile endpoints."""
from typing import List

from fastapi import APIRouter, Depends

from gamenight.api.deps import get_current_member, get_store, require_admin, to_http_exception
from gamenight.core import dates
from gamenight.core.errors import BookingError
from gamenight.schemas import MemberInDB, MemberUpdate
from gamenight.services.document_store import DocumentStore
from gamenight.services.member_service import member_service

router = APIRouter(prefix="/members", tags=["members"])


@router.get("/me", response_model=MemberInDB)
async def get_me(member: MemberInDB = Depends(get_current_member)):
    """
    Get the signed-in member's profile.

    A pending profile is created on first sign-in; an admin must approve it
    before the member can book.
    """
    return member


@router.get("", response_model=List[MemberInDB])
async def list_members(
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """List all member profiles (admin only)."""
    return await store.list("members")


@router.patch("/{member_id}", response_model=MemberInDB)
async def update_member(
    member_id: str,
    member_update: MemberUpdate,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """
    Change a member's role or name (admin only).

    Approving a member records today as their payment date if none is set.
    """
    try:
        return await member_service.update(
            store,
            member_id,
            admin,
            dates.today(),
            role=member_update.role,
            name=member_update.name,
        )
    except BookingError as e:
        raise to_http_exception(e)


@router.post("/{member_id}/renew", response_model=MemberInDB)
async def renew_membership(
    member_id: str,
    store: DocumentStore = Depends(get_store),
    member: MemberInDB = Depends(get_current_member),
):
    """Record a membership payment made today."""
    try:
        return await member_service.renew(store, member_id, member, dates.today())
    except BookingError as e:
        raise to_http_exception(e)


@router.delete("/{member_id}", status_code=204)
async def delete_member(
    member_id: str,
    store: DocumentStore = Depends(get_store),
    admin: MemberInDB = Depends(require_admin),
):
    """
    Delete a member profile (admin only).

    Their sign-in account at the auth provider is not removed, and their
    bookings are kept.
    """
    try:
        await member_service.delete(store, member_id, admin)
    except BookingError as e:
        raise to_http_exception(e)
