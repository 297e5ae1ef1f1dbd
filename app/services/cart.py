"""
Cart Aggregator

Appends line items to a customer's cart. Each call inserts a new row,
even when an identical item is already in the cart. Price and discount
are taken from the caller as-is; only the restaurant is checked.
"""

import logging
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    InvalidQuantityError,
    MissingFieldsError,
    RestaurantNotFoundError,
)
from app.models import CartItem
from app.services.restaurants import RestaurantDirectory

logger = logging.getLogger(__name__)


class CartAggregator:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.restaurants = RestaurantDirectory(db)

    async def add_item(
        self,
        user_id: Optional[str],
        food_item_id: Optional[str],
        food_item_name: Optional[str],
        restaurant_id: Optional[str],
        food_item_img: Optional[str],
        price: Optional[float],
        discount: Optional[float],
        quantity: Optional[int],
    ) -> CartItem:
        """
        Add one line item, snapshotting the restaurant's current title.

        Raises:
            MissingFieldsError: If user, food item or quantity is absent
            InvalidQuantityError: If quantity is not positive
            RestaurantNotFoundError: If restaurant_id does not resolve
        """
        missing = [
            name for name, value in (
                ("userId", user_id),
                ("foodItemId", food_item_id),
                ("quantity", quantity),
            )
            if not value and value != 0
        ]
        if missing:
            raise MissingFieldsError(missing, "Missing required cart item fields")

        if quantity <= 0:
            raise InvalidQuantityError()

        restaurant = (
            await self.restaurants.find_by_id(restaurant_id) if restaurant_id else None
        )
        if restaurant is None:
            logger.warning(f"Add to cart refused, unknown restaurant {restaurant_id}")
            raise RestaurantNotFoundError()

        item = CartItem(
            user_id=user_id,
            food_item_id=food_item_id,
            food_item_name=food_item_name,
            restaurant_id=restaurant.id,
            restaurant_name=restaurant.title,
            food_item_img=food_item_img,
            price=price,
            discount=discount,
            quantity=quantity,
        )
        self.db.add(item)
        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Cart item #{item.id} added for user {user_id}: "
            f"{food_item_name} x{quantity} from {restaurant.title}"
        )
        return item
