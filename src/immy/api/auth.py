"""Auth API: registration and login.

- POST /register → create an account, returns {id, name, email, token}
- POST /login → email/password → {id, name, email, token}

Both are open routes; the token they return is what protected routes
expect in `Authorization: Bearer <token>`.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from immy.db.engine import get_db
from immy.schemas.auth import LoginRequest, RegisterRequest
from immy.schemas.envelope import success
from immy.services.account_service import AccountService

router = APIRouter()


def _svc(db: AsyncSession = Depends(get_db)) -> AccountService:
    return AccountService(db)


@router.post("/register", status_code=201)
async def register(body: RegisterRequest, svc: AccountService = Depends(_svc)):
    """Create a new account and sign it in."""
    data = await svc.register(name=body.name, email=body.email, password=body.password)
    return success("Registration successful", data)


@router.post("/login")
async def login(body: LoginRequest, svc: AccountService = Depends(_svc)):
    """Login with email and password → bearer token."""
    data = await svc.login(email=body.email, password=body.password)
    return success("Login successful", data)
