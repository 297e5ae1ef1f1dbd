"""
Credential Store

Identity lookup and creation. Plaintext secrets enter ``create`` and
``verify_secret`` only; what gets persisted is the bcrypt hash.
"""

import logging
from typing import Optional, Sequence

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.exceptions import DuplicateEmailError, ValidationError
from app.models import ApprovalStatus, User, UserType
from app.services.security import MAX_PASSWORD_BYTES, hash_password, verify_password

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    return email.strip().lower()


class CredentialStore:
    """
    Reads and writes ``users`` rows.

    ``create`` flushes but does not commit; the caller owns the
    transaction so that follow-up writes can share it.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def find_by_email(self, email: str) -> Optional[User]:
        result = await self.db.execute(
            select(User).where(User.email == normalize_email(email))
        )
        return result.scalar_one_or_none()

    async def find_by_id(self, user_id: str) -> Optional[User]:
        return await self.db.get(User, user_id)

    async def list_all(self) -> Sequence[User]:
        result = await self.db.execute(select(User).order_by(User.created_at))
        return result.scalars().all()

    async def create(
        self,
        username: str,
        email: str,
        usertype: UserType,
        password: str,
        approval: ApprovalStatus,
    ) -> User:
        """
        Hash the secret and insert a new identity.

        Args:
            username: Display name
            email: Login email, stored normalized
            usertype: Role of the new identity
            password: Plaintext secret
            approval: Initial approval state

        Returns:
            User: The flushed (uncommitted) row

        Raises:
            DuplicateEmailError: If the email is already registered, either
                seen by the pre-check or by the UNIQUE constraint when a
                concurrent registration won the race
            ValidationError: If the secret exceeds bcrypt's input limit
        """
        email = normalize_email(email)

        if await self.find_by_email(email) is not None:
            logger.warning(f"Registration refused, email already in use: {email}")
            raise DuplicateEmailError()

        try:
            raw = password.encode("utf-8")
        except UnicodeEncodeError:
            raise ValidationError(
                "Invalid password",
                error="Password must be valid UTF-8 text",
            )

        if len(raw) > MAX_PASSWORD_BYTES:
            raise ValidationError(
                "Password too long",
                error=f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            )

        user = User(
            username=username,
            email=email,
            usertype=usertype,
            password=await hash_password(password),
            approval=approval,
        )
        self.db.add(user)

        try:
            await self.db.flush()
        except IntegrityError:
            await self.db.rollback()
            logger.warning(f"Registration lost uniqueness race for: {email}")
            raise DuplicateEmailError()

        return user

    async def verify_secret(self, password: str, hashed: str) -> bool:
        return await verify_password(password, hashed)
