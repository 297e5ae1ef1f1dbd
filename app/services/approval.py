"""
Approval State Machine

    customer / admin  ──register──▶ approved
    restaurant        ──register──▶ pending

    any ──approve──▶ approved
    any ──reject───▶ rejected

Transitions are unconditional and idempotent. There is no way back to
``pending`` once an identity has left it.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import UserNotFoundError
from app.models import ApprovalStatus, User, UserType

logger = logging.getLogger(__name__)


def initial_approval(usertype: UserType) -> ApprovalStatus:
    """Approval state a new identity starts in."""
    if usertype == UserType.RESTAURANT:
        return ApprovalStatus.PENDING
    return ApprovalStatus.APPROVED


class ApprovalService:
    """Applies admin approve/reject decisions to identities."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def approve(self, user_id: str) -> User:
        return await self._transition(user_id, ApprovalStatus.APPROVED)

    async def reject(self, user_id: str) -> User:
        return await self._transition(user_id, ApprovalStatus.REJECTED)

    async def _transition(self, user_id: str, target: ApprovalStatus) -> User:
        user = await self.db.get(User, user_id)
        if user is None:
            logger.warning(f"Approval change to {target.value} for unknown user {user_id}")
            raise UserNotFoundError()

        previous = user.approval
        user.approval = target
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"User {user_id} approval: {previous.value} -> {target.value}")
        return user
