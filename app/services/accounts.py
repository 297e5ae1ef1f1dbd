"""
Registration / Login Orchestrator

Registration is a two-step saga: insert the identity, then (for
restaurant owners) insert its restaurant profile. Both writes share one
session transaction; if the profile insert fails the transaction is
rolled back, which removes the identity written in step one.

Login checks the secret and hands back the identity as stored. The
approval state is returned to the caller, which decides what a
``pending`` or ``rejected`` owner may do; login itself is not gated.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import (
    InternalError,
    InvalidCredentialsError,
    InvalidUserTypeError,
    MissingFieldsError,
)
from app.models import Restaurant, User, UserType
from app.services.approval import initial_approval
from app.services.credentials import CredentialStore
from app.services.restaurants import RestaurantDirectory

logger = logging.getLogger(__name__)


@dataclass
class RegistrationResult:
    """
    Outcome of a successful registration.

    Attributes:
        user: The created identity
        restaurant: The profile created for restaurant owners, else None
    """
    user: User
    restaurant: Optional[Restaurant] = None

    @property
    def message(self) -> str:
        if self.restaurant is not None:
            return "Restaurant registered"
        return "User registered"


class AccountService:

    def __init__(self, db: AsyncSession):
        self.db = db
        self.credentials = CredentialStore(db)
        self.restaurants = RestaurantDirectory(db)

    async def register(
        self,
        username: Optional[str],
        email: Optional[str],
        usertype: Optional[str],
        password: Optional[str],
        restaurant_address: Optional[str] = None,
        restaurant_image: Optional[str] = None,
    ) -> RegistrationResult:
        """
        Register a new identity, plus its restaurant profile for owners.

        Args:
            username: Display name (also the restaurant title for owners)
            email: Unique login email
            usertype: "customer", "restaurant" or "admin"
            password: Plaintext secret, hashed before storage
            restaurant_address: Owner only
            restaurant_image: Owner only

        Returns:
            RegistrationResult: Created identity and optional profile

        Raises:
            MissingFieldsError: Required field absent or blank
            InvalidUserTypeError: Unknown role
            DuplicateEmailError: Email already registered
            InternalError: Profile creation failed and the identity was
                rolled back
        """
        email = email.strip() if email else email
        username = username.strip() if username else username

        missing = [
            name for name, value in (
                ("username", username),
                ("email", email),
                ("password", password),
                ("usertype", usertype),
            )
            if not value
        ]
        if missing:
            raise MissingFieldsError(missing)

        try:
            role = UserType(usertype.lower())
        except ValueError:
            valid = [t.value for t in UserType]
            raise InvalidUserTypeError(error=f"usertype must be one of: {valid}")

        user = await self.credentials.create(
            username=username,
            email=email,
            usertype=role,
            password=password,
            approval=initial_approval(role),
        )

        restaurant = None
        if role == UserType.RESTAURANT:
            try:
                restaurant = await self.restaurants.create(
                    owner_id=user.id,
                    title=username,
                    address=restaurant_address,
                    main_img=restaurant_image,
                )
            except Exception as e:
                # Compensate: drop the identity flushed above
                user_email = user.email
                await self.db.rollback()
                logger.exception(f"Restaurant profile creation failed for {user_email}, identity rolled back")
                raise InternalError(error="Restaurant profile could not be created") from e

        try:
            await self.db.commit()
        except Exception:
            await self.db.rollback()
            raise

        logger.info(
            f"Registered {role.value} {user.id} ({user.email}), approval={user.approval.value}"
        )
        return RegistrationResult(user=user, restaurant=restaurant)

    async def login(self, email: Optional[str], password: Optional[str]) -> User:
        """
        Check credentials and return the stored identity.

        Raises:
            MissingFieldsError: Email or password absent
            InvalidCredentialsError: Unknown email or wrong password
                (indistinguishable to the caller)
        """
        email = email.strip() if email else email

        missing = [
            name for name, value in (("email", email), ("password", password))
            if not value
        ]
        if missing:
            raise MissingFieldsError(missing, "Missing email or password")

        user = await self.credentials.find_by_email(email)
        if user is None:
            logger.warning("Login failed: unknown email")
            raise InvalidCredentialsError()

        if not await self.credentials.verify_secret(password, user.password):
            logger.warning(f"Login failed: bad password for user {user.id}")
            raise InvalidCredentialsError()

        logger.info(f"Login successful for user {user.id} (approval={user.approval.value})")
        return user
