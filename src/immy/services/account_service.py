"""Account service: registration, login, and profile lookup.

API routes call this service, the service calls the database. Failures
are raised as ImmyError subclasses; routes do not catch them, the app's
exception handlers turn them into failure envelopes.
"""

import structlog
from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from immy.auth.jwt import issue_token
from immy.auth.password import (
    dummy_verify,
    hash_password,
    needs_rehash,
    verify_password,
)
from immy.db.models import Child, User
from immy.errors import DuplicateEmail, InvalidCredentials, Unauthenticated
from immy.schemas.auth import AuthData
from immy.schemas.profile import ChildRead, ProfileData, UserRead

logger = structlog.get_logger()


class AccountService:
    """Business logic for parent accounts."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_user_by_email(self, email: str) -> User | None:
        result = await self.db.execute(
            select(User).where(User.email == email.strip().lower())
        )
        return result.scalars().first()

    async def get_user(self, user_id: int) -> User | None:
        return await self.db.get(User, user_id)

    # ─── Register ───────────────────────────────────────

    async def register(self, name: str, email: str, password: str) -> AuthData:
        """Create an account and sign the new user in.

        The existence check gives the common case a clean error; the
        unique constraint on users.email settles concurrent inserts.
        """
        email = email.strip().lower()
        if await self.get_user_by_email(email):
            raise DuplicateEmail(reason="precheck")

        user = User(name=name, email=email, password_hash=hash_password(password))
        self.db.add(user)
        try:
            await self.db.commit()
        except IntegrityError:
            await self.db.rollback()
            raise DuplicateEmail(reason="unique_constraint")
        await self.db.refresh(user)

        logger.info("auth.registered", user_id=user.id)
        return self._auth_data(user)

    # ─── Login ──────────────────────────────────────────

    async def login(self, email: str, password: str) -> AuthData:
        """Check credentials and issue a token.

        Unknown email and wrong password raise the same error; only
        the logged reason differs.
        """
        user = await self.get_user_by_email(email)
        if not user:
            dummy_verify(password)
            logger.info("auth.login_failed", reason="unknown_email")
            raise InvalidCredentials(reason="unknown_email")

        if not verify_password(password, user.password_hash):
            logger.info("auth.login_failed", reason="bad_password", user_id=user.id)
            raise InvalidCredentials(reason="bad_password")

        if needs_rehash(user.password_hash):
            user.password_hash = hash_password(password)
            await self.db.commit()
            logger.info("auth.password_rehashed", user_id=user.id)

        logger.info("auth.login", user_id=user.id)
        return self._auth_data(user)

    # ─── Profile ────────────────────────────────────────

    async def get_profile(self, user_id: int) -> ProfileData:
        """Return the user and every child they own, lowest id first."""
        user = await self.get_user(user_id)
        if not user:
            # Valid token for an account that no longer exists.
            raise Unauthenticated("User not found", reason="unknown_subject")

        result = await self.db.execute(
            select(Child).where(Child.user_id == user_id).order_by(Child.id)
        )
        children = result.scalars().all()

        return ProfileData(
            user=UserRead.model_validate(user),
            children=[ChildRead.model_validate(c) for c in children],
        )

    @staticmethod
    def _auth_data(user: User) -> AuthData:
        return AuthData(
            id=user.id,
            name=user.name,
            email=user.email,
            token=issue_token(user.id, user.email),
        )
