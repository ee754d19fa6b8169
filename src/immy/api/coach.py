"""Coach data API.

GET /coach_data?child_id=N serves the feed for child N if the caller
owns it. Without child_id (empty, or 0) the caller's first child is used.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from immy.auth.dependencies import AuthenticatedSubject, get_current_subject
from immy.db.engine import get_db
from immy.errors import ValidationFailed
from immy.schemas.envelope import success
from immy.services.coach_service import build_coach_data
from immy.services.ownership import OwnershipResolver

router = APIRouter()


def _child_id(child_id: Optional[str] = Query(None)) -> Optional[int]:
    """Parse ?child_id. An empty value counts as absent."""
    if child_id is None or not child_id.strip():
        return None
    try:
        return int(child_id.strip())
    except ValueError:
        raise ValidationFailed("Invalid child_id", reason="child_id_not_numeric")


@router.get("/coach_data")
async def get_coach_data(
    subject: AuthenticatedSubject = Depends(get_current_subject),
    child_id: Optional[int] = Depends(_child_id),
    db: AsyncSession = Depends(get_db),
):
    child = await OwnershipResolver(db).resolve(subject, child_id)
    return success("Coach data retrieved successfully", build_coach_data(child))
