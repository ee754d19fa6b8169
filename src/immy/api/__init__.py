"""API route aggregation.

All routers registered here get mounted in main.py. Open routes
(health, register, login) take no identity; the rest declare
get_current_subject themselves because they need the subject's id.
"""

from fastapi import APIRouter

from immy.api.auth import router as auth_router
from immy.api.children import router as children_router
from immy.api.coach import router as coach_router
from immy.api.health import router as health_router
from immy.api.profile import router as profile_router

api_router = APIRouter()

# Open routes: no auth required
api_router.include_router(health_router, tags=["health"])
api_router.include_router(auth_router, tags=["auth"])

# Protected routes: require a valid bearer token
api_router.include_router(profile_router, tags=["profile"])
api_router.include_router(children_router, tags=["children"])
api_router.include_router(coach_router, tags=["coach"])
