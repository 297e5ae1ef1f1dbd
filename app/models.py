"""
SQLAlchemy Database Models

Persisted layout for the delivery platform:
- users: registered identities with role and approval state
- restaurants: one profile per restaurant-owner identity
- admin: singleton record holding the promoted-restaurant list
- cart: line items snapshotting restaurant and price at insertion
- orders: finalized purchases (no placement flow yet)
"""

import enum
import uuid

from sqlalchemy import Column, String, Float, Integer, DateTime, Enum, ForeignKey, JSON
from sqlalchemy.sql import func

from app.database import Base


def generate_id() -> str:
    return uuid.uuid4().hex


class UserType(str, enum.Enum):
    """Role of a registered identity."""
    CUSTOMER = "customer"
    RESTAURANT = "restaurant"
    ADMIN = "admin"


class ApprovalStatus(str, enum.Enum):
    """Approval workflow state."""
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class User(Base):
    """
    Registered identity.

    The email column carries a UNIQUE constraint so two concurrent
    registrations for the same address cannot both commit.
    """
    __tablename__ = "users"

    id = Column(String(32), primary_key=True, default=generate_id)
    username = Column(String(100), nullable=False)
    email = Column(String(255), nullable=False, unique=True, index=True)
    usertype = Column(Enum(UserType), nullable=False, index=True)
    password = Column(String(60), nullable=False)  # bcrypt hash, never plaintext
    approval = Column(
        Enum(ApprovalStatus),
        default=ApprovalStatus.PENDING,
        nullable=False,
        index=True
    )

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<User {self.id} - {self.email} - {self.usertype.value} - {self.approval.value}>"


class Restaurant(Base):
    """Restaurant profile, created alongside its owner's identity."""
    __tablename__ = "restaurants"

    id = Column(String(32), primary_key=True, default=generate_id)
    owner_id = Column(
        String(32),
        ForeignKey("users.id"),
        nullable=False,
        unique=True,
        index=True
    )
    title = Column(String(100), nullable=False)
    address = Column(String(255), nullable=True)
    main_img = Column(String(500), nullable=True)
    menu = Column(JSON, nullable=False, default=list)  # ordered food item ids

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Restaurant {self.id} - {self.title}>"


class Admin(Base):
    """Singleton record provisioned out of band by scripts/seed_admin.py."""
    __tablename__ = "admin"

    id = Column(String(32), primary_key=True, default=generate_id)
    promoted_restaurants = Column(JSON, nullable=False, default=list)

    updated_at = Column(DateTime(timezone=True), onupdate=func.now())

    def __repr__(self):
        return f"<Admin {self.id} - {len(self.promoted_restaurants or [])} promoted>"


class CartItem(Base):
    """
    One pending-purchase line.

    restaurant_name is copied from the restaurant title when the line is
    added and is never re-derived.
    """
    __tablename__ = "cart"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    user_id = Column(String(32), nullable=False, index=True)
    food_item_id = Column(String(64), nullable=False)
    food_item_name = Column(String(100), nullable=True)
    food_item_img = Column(String(500), nullable=True)

    restaurant_id = Column(String(32), ForeignKey("restaurants.id"), nullable=False, index=True)
    restaurant_name = Column(String(100), nullable=False)

    price = Column(Float, nullable=True)
    discount = Column(Float, nullable=True)
    quantity = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<CartItem #{self.id} - {self.food_item_name} x{self.quantity} @ {self.restaurant_name}>"


class Order(Base):
    """Finalized order line. Nothing writes to this table yet."""
    __tablename__ = "orders"

    id = Column(Integer, primary_key=True, index=True, autoincrement=True)

    user_id = Column(String(32), nullable=False, index=True)
    restaurant_id = Column(String(32), ForeignKey("restaurants.id"), nullable=False, index=True)
    restaurant_name = Column(String(100), nullable=False)
    food_item_id = Column(String(64), nullable=False)
    food_item_name = Column(String(100), nullable=True)
    price = Column(Float, nullable=True)
    discount = Column(Float, nullable=True)
    quantity = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<Order #{self.id} - {self.user_id}>"
