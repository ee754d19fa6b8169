"""Children API: create and list the caller's children."""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from immy.auth.dependencies import AuthenticatedSubject, get_current_subject
from immy.db.engine import get_db
from immy.schemas.envelope import success
from immy.schemas.profile import ChildCreate, ChildRead
from immy.services.child_service import ChildService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> ChildService:
    return ChildService(db)


@router.post("/children", status_code=201)
async def create_child(
    body: ChildCreate,
    subject: AuthenticatedSubject = Depends(get_current_subject),
    svc: ChildService = Depends(_svc),
):
    """Create a child owned by the caller."""
    child = await svc.create_child(
        owner_id=subject.user_id,
        name=body.name,
        age=body.age,
        interests=body.interests,
    )
    return success("Child created successfully", ChildRead.model_validate(child))


@router.get("/children")
async def list_children(
    subject: AuthenticatedSubject = Depends(get_current_subject),
    svc: ChildService = Depends(_svc),
):
    children = await svc.list_children(subject.user_id)
    return success(
        "Children retrieved successfully",
        [ChildRead.model_validate(c) for c in children],
    )
