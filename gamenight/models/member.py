"""Member profile model."""
from sqlalchemy import Column, String, Boolean, Date, DateTime
from sqlalchemy.sql import func
from gamenight.core.database import Base


class Member(Base):
    """Profile of an authenticated user, keyed by the auth provider's uid."""

    __tablename__ = "members"

    id = Column(String, primary_key=True, index=True)
    email = Column(String, nullable=False, default="")
    name = Column(String, nullable=False)
    is_member = Column(Boolean, default=False, nullable=False)
    is_admin = Column(Boolean, default=False, nullable=False)
    membership_paid_date = Column(Date, nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())
