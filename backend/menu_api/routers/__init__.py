"""
Menu API routers. All routes are prefixed with /api.
"""

from fastapi import APIRouter

from .menu import router as menu_router

router = APIRouter(prefix="/api")
router.include_router(menu_router)

__all__ = ["router"]
