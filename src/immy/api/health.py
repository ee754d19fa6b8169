"""Health check endpoint.

Verifies the server is running and the database is reachable.
"""

from fastapi import APIRouter
from sqlalchemy import text

from immy import __version__
from immy.db.engine import engine
from immy.schemas.envelope import success

router = APIRouter()


@router.get("/health")
async def health_check():
    """Check server health and database connectivity."""
    checks = {"server": "ok", "version": __version__}

    try:
        async with engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        checks["database"] = "ok"
    except Exception as e:
        checks["database"] = f"error: {type(e).__name__}"

    message = "Service healthy" if checks["database"] == "ok" else "Service degraded"
    return success(message, checks)
