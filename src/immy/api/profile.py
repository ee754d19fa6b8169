"""Profile API: the signed-in account and its children."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from immy.auth.dependencies import AuthenticatedSubject, get_current_subject
from immy.db.engine import get_db
from immy.schemas.envelope import success
from immy.services.account_service import AccountService

router = APIRouter()


@router.get("/profile")
async def get_profile(
    subject: AuthenticatedSubject = Depends(get_current_subject),
    db: AsyncSession = Depends(get_db),
):
    profile = await AccountService(db).get_profile(subject.user_id)
    return success("Profile retrieved successfully", profile)
