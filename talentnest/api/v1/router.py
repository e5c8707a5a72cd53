"""API v1 router configuration."""

from fastapi import APIRouter

from talentnest.api.v1.endpoints import (
    admin,
    artisans,
    auth,
    health,
    providers,
    uploads,
    users,
)

api_router = APIRouter()

# Include routers
api_router.include_router(health.router, tags=["Health"])
api_router.include_router(auth.router, prefix="/auth", tags=["Authentication"])
api_router.include_router(users.router, tags=["Users"])
api_router.include_router(providers.router, tags=["Providers"])
api_router.include_router(uploads.router, tags=["Uploads"])
api_router.include_router(artisans.router, tags=["Artisans"])
api_router.include_router(admin.router, tags=["Admin"])
