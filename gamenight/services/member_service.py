"""Member profiles and roles."""
import logging
from datetime import date
from typing import Optional

from gamenight.core.config import settings
from gamenight.core.errors import NotFound, NotPermitted
from gamenight.schemas import Identity, MemberInDB, MemberRole

logger = logging.getLogger(__name__)


class MemberService:
    """Service for member profiles."""

    def __init__(self, admin_uids=None):
        self.admin_uids = set(settings.ADMIN_UIDS if admin_uids is None else admin_uids)

    async def resolve(self, store, identity: Identity) -> MemberInDB:
        """
        Return the profile for an identity, creating a pending one on first sign-in.

        Identities listed in ``ADMIN_UIDS`` start out as admins.
        """
        member = await store.get("members", identity.uid)
        if member is not None:
            return member

        is_admin = identity.uid in self.admin_uids
        logger.info(f"Creating {'admin' if is_admin else 'pending'} profile for {identity.uid}")
        return await store.set(
            "members",
            identity.uid,
            {
                "email": identity.email,
                "name": identity.display_name,
                "is_member": is_admin,
                "is_admin": is_admin,
            },
        )

    async def update(
        self,
        store,
        member_id: str,
        actor: MemberInDB,
        today: date,
        role: Optional[MemberRole] = None,
        name: Optional[str] = None,
    ) -> MemberInDB:
        """
        Change a member's role or display name.

        Promoting a member records today as the payment date if none is set;
        demoting to pending clears it. Admins cannot change their own role.
        """
        member = await store.get("members", member_id)
        if member is None:
            raise NotFound(f"Member {member_id} not found")

        fields = {}
        if name is not None:
            fields["name"] = name

        if role is not None:
            if member_id == actor.id:
                raise NotPermitted("Cannot change your own role.")
            fields["is_member"] = role in (MemberRole.MEMBER, MemberRole.ADMIN)
            fields["is_admin"] = role == MemberRole.ADMIN
            if role == MemberRole.PENDING:
                fields["membership_paid_date"] = None
            elif member.membership_paid_date is None:
                fields["membership_paid_date"] = today

        if not fields:
            return member

        logger.info(f"{actor.id} updated member {member_id}: {sorted(fields)}")
        return await store.update("members", member_id, fields)

    async def renew(self, store, member_id: str, actor: MemberInDB, today: date) -> MemberInDB:
        """Record a membership payment made today."""
        if member_id != actor.id and not actor.is_admin:
            raise NotPermitted("You can only renew your own membership")

        member = await store.get("members", member_id)
        if member is None:
            raise NotFound(f"Member {member_id} not found")
        if not member.is_member:
            raise NotPermitted("Only approved members can renew")

        return await store.update("members", member_id, {"membership_paid_date": today})

    async def delete(self, store, member_id: str, actor: MemberInDB):
        """Delete a member profile. The auth account itself is not touched."""
        if member_id == actor.id:
            raise NotPermitted("Cannot delete yourself.")
        if not await store.delete("members", member_id):
            raise NotFound(f"Member {member_id} not found")
        logger.warning(f"{actor.id} deleted member profile {member_id}")


# Singleton instance
member_service = MemberService()
