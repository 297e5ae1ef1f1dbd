"""
Pydantic Schemas for Request/Response Validation

Request bodies accept the camelCase field names used by the web client
(``usertype``, ``restaurantAddress``, ``userId``...) as aliases, and the
snake_case names as well. Presence of required fields is checked by the
service layer so that a missing field yields a 400 with a clear message.
"""

from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.models import ApprovalStatus, UserType


class RequestModel(BaseModel):
    model_config = ConfigDict(populate_by_name=True)


# =============================================================================
# REQUEST SCHEMAS
# =============================================================================

class RegisterRequest(RequestModel):
    """Request schema for registering a new account."""
    username: Optional[str] = Field(None, max_length=100, examples=["alice"])
    email: Optional[str] = Field(None, max_length=255, examples=["alice@example.com"])
    usertype: Optional[str] = Field(None, examples=["customer", "restaurant", "admin"])
    password: Optional[str] = Field(None, examples=["pw123"])
    restaurant_address: Optional[str] = Field(
        None, alias="restaurantAddress", max_length=255, examples=["123 Main St"]
    )
    restaurant_image: Optional[str] = Field(
        None, alias="restaurantImage", max_length=500, examples=["img.png"]
    )


class LoginRequest(RequestModel):
    email: Optional[str] = Field(None, examples=["alice@example.com"])
    password: Optional[str] = Field(None, examples=["pw123"])


class PromoteListRequest(RequestModel):
    # Left untyped so a non-list is reported as "Invalid promote list"
    promote_list: Any = Field(None, alias="promoteList", examples=[["r1", "r2"]])


class UserIdRequest(RequestModel):
    id: Optional[str] = Field(None, examples=["5f0c1e..."])


class AddToCartRequest(RequestModel):
    """Single line item to append to a customer's cart."""
    user_id: Optional[str] = Field(None, alias="userId")
    food_item_id: Optional[str] = Field(None, alias="foodItemId")
    food_item_name: Optional[str] = Field(None, alias="foodItemName", max_length=100)
    restaurant_id: Optional[str] = Field(None, alias="restaurantId")
    food_item_img: Optional[str] = Field(None, alias="foodItemImg", max_length=500)
    price: Optional[float] = Field(None, ge=0, examples=[14.99])
    discount: Optional[float] = Field(None, ge=0, examples=[10])
    quantity: Optional[int] = Field(None, examples=[2])


# =============================================================================
# RESPONSE SCHEMAS
# =============================================================================

class UserResponse(BaseModel):
    """Identity as returned to clients. The password hash is never included."""
    model_config = ConfigDict(from_attributes=True)

    id: str
    username: str
    email: str
    usertype: UserType
    approval: ApprovalStatus


class RestaurantResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    owner_id: str
    title: str
    address: Optional[str]
    main_img: Optional[str]
    menu: List[Any]


class MessageResponse(BaseModel):
    message: str


class UserMessageResponse(BaseModel):
    """Response after register/login."""
    message: str
    user: UserResponse


class ErrorResponse(BaseModel):
    """Standard error response."""
    message: str
    error: str


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    database: str
    timestamp: datetime
