"""Shared endpoint dependencies."""
from typing import Optional

from fastapi import Depends, Header, HTTPException, Request

from gamenight.core import dates
from gamenight.core.errors import AuthenticationFailed, BookingError, WriteFailed
from gamenight.schemas import Identity, MemberInDB
from gamenight.services.auth_client import auth_client
from gamenight.services.club_context import ClubContext, load_context
from gamenight.services.document_store import DocumentStore
from gamenight.services.member_service import member_service


def to_http_exception(error: BookingError) -> HTTPException:
    """Translate a booking error into the HTTP response shown to the user."""
    headers = {"Retry-After": "1"} if isinstance(error, WriteFailed) else None
    return HTTPException(status_code=error.status_code, detail=error.message, headers=headers)


def get_store(request: Request) -> DocumentStore:
    return request.app.state.store


async def get_identity(authorization: Optional[str] = Header(default=None)) -> Identity:
    """Resolve the bearer token of the request to an identity."""
    if not authorization or not authorization.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="Sign in required")

    try:
        return await auth_client.lookup(authorization[7:].strip())
    except AuthenticationFailed as e:
        raise to_http_exception(e)


async def get_current_member(
    identity: Identity = Depends(get_identity),
    store: DocumentStore = Depends(get_store),
) -> MemberInDB:
    try:
        return await member_service.resolve(store, identity)
    except BookingError as e:
        raise to_http_exception(e)


async def require_admin(member: MemberInDB = Depends(get_current_member)) -> MemberInDB:
    if not member.is_admin:
        raise HTTPException(status_code=403, detail="Admin access required")
    return member


async def get_context(store: DocumentStore = Depends(get_store)) -> ClubContext:
    """Load a fresh snapshot of every collection for this request."""
    return await load_context(store, dates.today())
