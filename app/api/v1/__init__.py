"""
API v1 Router
"""

from fastapi import APIRouter

from app.api.v1 import analytics, artworks, auth, curator, galleries, users

router = APIRouter()

# Include all endpoint routers
router.include_router(auth.router)
router.include_router(artworks.router)
router.include_router(curator.router)
router.include_router(galleries.router)
router.include_router(analytics.router)
router.include_router(users.router)

__all__ = ["router"]
