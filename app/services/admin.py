"""
Administrator Record Store

The admin record is a singleton holding the promoted-restaurant list.
It is provisioned out of band (``scripts/seed_admin.py``); request
handlers only read and update it and fail if it has not been seeded.
"""

import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import AdminRecordMissingError
from app.models import Admin

logger = logging.getLogger(__name__)


class AdminRecordStore:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get(self) -> Optional[Admin]:
        result = await self.db.execute(select(Admin).limit(1))
        return result.scalar_one_or_none()

    async def update_promoted(self, restaurant_ids: list[str]) -> Admin:
        """
        Replace the promoted-restaurant list.

        Raises:
            AdminRecordMissingError: If the singleton was never provisioned
        """
        admin = await self.get()
        if admin is None:
            logger.error("Promote list update failed: admin record not provisioned")
            raise AdminRecordMissingError()

        admin.promoted_restaurants = list(restaurant_ids)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Promoted restaurants updated ({len(restaurant_ids)} entries)")
        return admin

    async def provision(self, promoted: Optional[list[str]] = None) -> Admin:
        """
        Create the singleton if it does not exist yet.

        Idempotent: an existing record is returned untouched.
        """
        admin = await self.get()
        if admin is not None:
            logger.info(f"Admin record already provisioned: {admin.id}")
            return admin

        admin = Admin(promoted_restaurants=list(promoted or []))
        self.db.add(admin)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(f"Admin record provisioned: {admin.id}")
        return admin
