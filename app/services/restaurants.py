"""
Restaurant Directory

One profile per restaurant-owner identity. Profiles are created during
registration and read by the cart when snapshotting restaurant names.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import InvalidPromoteListError
from app.models import Restaurant
from app.services.admin import AdminRecordStore

logger = logging.getLogger(__name__)


class RestaurantDirectory:

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(
        self,
        owner_id: str,
        title: str,
        address: Optional[str] = None,
        main_img: Optional[str] = None,
    ) -> Restaurant:
        """Add a profile with an empty menu. Flushes, does not commit."""
        restaurant = Restaurant(
            owner_id=owner_id,
            title=title,
            address=address,
            main_img=main_img,
            menu=[],
        )
        self.db.add(restaurant)
        await self.db.flush()
        return restaurant

    async def find_by_id(self, restaurant_id: str) -> Optional[Restaurant]:
        return await self.db.get(Restaurant, restaurant_id)

    async def find_by_owner(self, owner_id: str) -> Optional[Restaurant]:
        result = await self.db.execute(
            select(Restaurant).where(Restaurant.owner_id == owner_id)
        )
        return result.scalar_one_or_none()

    async def list_all(self) -> Sequence[Restaurant]:
        result = await self.db.execute(select(Restaurant).order_by(Restaurant.created_at))
        return result.scalars().all()

    async def update_promotion_list(self, promote_list) -> list[str]:
        """
        Store the ids of the restaurants to feature on the home page.

        Args:
            promote_list: Sequence of restaurant ids, as received

        Raises:
            InvalidPromoteListError: If the value is not a list of ids
            AdminRecordMissingError: If the admin record was never seeded
        """
        if not isinstance(promote_list, list) or not all(
            isinstance(r, str) for r in promote_list
        ):
            raise InvalidPromoteListError()

        admin = await AdminRecordStore(self.db).update_promoted(promote_list)
        return admin.promoted_restaurants
