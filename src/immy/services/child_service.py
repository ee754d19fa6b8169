"""Child records owned by an account."""

from typing import Optional

import structlog
from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from immy.db.models import Child

logger = structlog.get_logger()


class ChildService:
    """Create and list the children of one owner."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create_child(
        self,
        owner_id: int,
        name: str,
        age: Optional[int] = None,
        interests: Optional[str] = None,
    ) -> Child:
        child = Child(user_id=owner_id, name=name.strip(), age=age, interests=interests)
        self.db.add(child)
        await self.db.commit()
        await self.db.refresh(child)
        logger.info("children.created", child_id=child.id, user_id=owner_id)
        return child

    async def list_children(self, owner_id: int) -> list[Child]:
        result = await self.db.execute(
            select(Child).where(Child.user_id == owner_id).order_by(Child.id)
        )
        return list(result.scalars().all())
