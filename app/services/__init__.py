"""
                        Services Module

Contains the business logic of the platform. Every service wraps a
request-scoped ``AsyncSession``; the ``get_*`` providers below build
them for FastAPI route dependencies.

Services:
    - credentials: identity lookup, creation and secret checks
    - approval: approve/reject state machine
    - restaurants: restaurant profiles and the promoted list
    - admin: administrator singleton record
    - cart: cart line items
    - accounts: registration and login orchestration
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database import get_db
from app.services.accounts import AccountService, RegistrationResult
from app.services.admin import AdminRecordStore
from app.services.approval import ApprovalService, initial_approval
from app.services.cart import CartAggregator
from app.services.credentials import CredentialStore
from app.services.restaurants import RestaurantDirectory


def get_account_service(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)


def get_approval_service(db: AsyncSession = Depends(get_db)) -> ApprovalService:
    return ApprovalService(db)


def get_credential_store(db: AsyncSession = Depends(get_db)) -> CredentialStore:
    return CredentialStore(db)


def get_restaurant_directory(db: AsyncSession = Depends(get_db)) -> RestaurantDirectory:
    return RestaurantDirectory(db)


def get_cart_aggregator(db: AsyncSession = Depends(get_db)) -> CartAggregator:
    return CartAggregator(db)


__all__ = [
    "AccountService",
    "RegistrationResult",
    "AdminRecordStore",
    "ApprovalService",
    "initial_approval",
    "CartAggregator",
    "CredentialStore",
    "RestaurantDirectory",
    "get_account_service",
    "get_approval_service",
    "get_credential_store",
    "get_restaurant_directory",
    "get_cart_aggregator",
]
