"""Ownership resolution for child-scoped data.

Every endpoint serving data about a child goes through
OwnershipResolver.resolve() before reading anything, so one account
can never read another account's children.
"""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from immy.auth.dependencies import AuthenticatedSubject
from immy.db.models import Child
from immy.errors import ChildNotAccessible, NoChildrenFound

logger = structlog.get_logger()

# children.id is a 32-bit integer column.
MAX_CHILD_ID = 2**31 - 1


class OwnershipResolver:
    """Resolves a requested child id against the caller's account."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def resolve(
        self, subject: AuthenticatedSubject, child_id: Optional[int] = None
    ) -> Child:
        """Return the child the subject may act on.

        With a positive child_id, that child must exist and belong to
        the subject. A missing child and somebody else's child raise
        the same ChildNotAccessible. Without one (None, zero or
        negative) the subject's lowest-id child is used.
        """
        if child_id is not None and child_id > 0:
            return await self._owned_child(subject.user_id, child_id)
        return await self._first_child(subject.user_id)

    async def _owned_child(self, user_id: int, child_id: int) -> Child:
        child = None
        if child_id <= MAX_CHILD_ID:
            child = await self.db.get(Child, child_id)
        if child is None:
            logger.info("ownership.denied", reason="missing", child_id=child_id)
            raise ChildNotAccessible(reason="missing")
        if child.user_id != user_id:
            logger.warning(
                "ownership.denied",
                reason="not_owner",
                child_id=child_id,
                user_id=user_id,
            )
            raise ChildNotAccessible(reason="not_owner")
        return child

    async def _first_child(self, user_id: int) -> Child:
        result = await self.db.execute(
            select(Child).where(Child.user_id == user_id).order_by(Child.id).limit(1)
        )
        child = result.scalars().first()
        if child is None:
            raise NoChildrenFound(reason="no_children")
        return child
