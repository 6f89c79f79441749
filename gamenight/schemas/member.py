"""Member and identity schemas."""
from enum import Enum
from pydantic import BaseModel, ConfigDict, computed_field
from typing import Optional
from datetime import datetime, date

from gamenight.core.dates import membership_expiry


class MemberRole(str, Enum):
    """Role assigned by an admin."""

    PENDING = "pending"
    MEMBER = "member"
    ADMIN = "admin"


class Identity(BaseModel):
    """An authenticated identity as reported by the auth provider."""

    uid: str
    email: str = ""
    display_name: str


class MemberInDB(BaseModel):
    """Schema for a member profile from the store."""

    id: str
    email: str
    name: str
    is_member: bool = False
    is_admin: bool = False
    membership_paid_date: Optional[date] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def role(self) -> MemberRole:
        if self.is_admin:
            return MemberRole.ADMIN
        if self.is_member:
            return MemberRole.MEMBER
        return MemberRole.PENDING

    @computed_field
    @property
    def membership_expires(self) -> Optional[date]:
        if self.membership_paid_date is None:
            return None
        return membership_expiry(self.membership_paid_date)


class MemberUpdate(BaseModel):
    """Schema for an admin updating a member."""

    role: Optional[MemberRole] = None
    name: Optional[str] = None
