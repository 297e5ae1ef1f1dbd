"""Tests for the cart aggregator."""

import pytest
from sqlalchemy import select

from app.core.exceptions import (
    InvalidQuantityError,
    MissingFieldsError,
    RestaurantNotFoundError,
)
from app.models import CartItem
from app.services import AccountService, CartAggregator, RestaurantDirectory


@pytest.fixture
async def restaurant(session):
    owner = await AccountService(session).register("bob", "b@x.com", "restaurant", "pw456")
    return await RestaurantDirectory(session).find_by_owner(owner.user.id)


def line(restaurant_id, **overrides):
    item = {
        "user_id": "customer-1",
        "food_item_id": "pizza-1",
        "food_item_name": "Pizza Margherita",
        "restaurant_id": restaurant_id,
        "food_item_img": "pizza.png",
        "price": 14.99,
        "discount": 10,
        "quantity": 2,
    }
    item.update(overrides)
    return item


async def test_add_item_snapshots_restaurant(session, restaurant):
    item = await CartAggregator(session).add_item(**line(restaurant.id))

    assert item.restaurant_id == restaurant.id
    assert item.restaurant_name == "bob"
    assert item.price == 14.99
    assert item.discount == 10
    assert item.quantity == 2


async def test_snapshot_survives_rename(session, restaurant):
    await CartAggregator(session).add_item(**line(restaurant.id))

    restaurant.title = "Bob's Bistro"
    await session.commit()

    session.expire_all()
    stored = (await session.execute(select(CartItem))).scalar_one()
    assert stored.restaurant_name == "bob"


async def test_identical_items_are_not_merged(session, restaurant):
    cart = CartAggregator(session)
    await cart.add_item(**line(restaurant.id))
    await cart.add_item(**line(restaurant.id))

    items = (await session.execute(select(CartItem))).scalars().all()
    assert len(items) == 2


async def test_unknown_restaurant(session):
    with pytest.raises(RestaurantNotFoundError) as exc_info:
        await CartAggregator(session).add_item(**line("missing"))
    assert exc_info.value.status_code == 404


async def test_absent_restaurant_id(session):
    with pytest.raises(RestaurantNotFoundError):
        await CartAggregator(session).add_item(**line(None))


@pytest.mark.parametrize("field", ["user_id", "food_item_id", "quantity"])
async def test_missing_required_fields(session, restaurant, field):
    with pytest.raises(MissingFieldsError) as exc_info:
        await CartAggregator(session).add_item(**line(restaurant.id, **{field: None}))
    assert exc_info.value.message == "Missing required cart item fields"


@pytest.mark.parametrize("quantity", [0, -1])
async def test_non_positive_quantity(session, restaurant, quantity):
    with pytest.raises(InvalidQuantityError):
        await CartAggregator(session).add_item(**line(restaurant.id, quantity=quantity))

    assert (await session.execute(select(CartItem))).first() is None
