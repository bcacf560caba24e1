"""API route aggregation.

All routers registered here get mounted in main.py under /api.

Learn: Auth is applied at the include_router level using FastAPI's
dependencies parameter for routers that are protected as a whole
(posts). Users, auth and profile mix public and protected routes, so
their handlers declare Depends(get_current_user) themselves.
"""

from fastapi import APIRouter, Depends

from devsocial.api.auth import router as auth_router
from devsocial.api.health import router as health_router
from devsocial.api.posts import router as posts_router
from devsocial.api.profile import router as profile_router
from devsocial.api.users import router as users_router
from devsocial.auth.dependencies import get_current_user

_auth = [Depends(get_current_user)]

api_router = APIRouter(prefix="/api")

# Open (or partly open) routes
api_router.include_router(health_router, tags=["health"])
api_router.include_router(users_router, tags=["users"])
api_router.include_router(auth_router, tags=["auth"])
api_router.include_router(profile_router, tags=["profile"])

# Protected routes - require a valid x-auth-token
api_router.include_router(posts_router, tags=["posts"], dependencies=_auth)
