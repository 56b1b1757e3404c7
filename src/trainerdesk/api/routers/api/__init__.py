"""JSON API routers mounted under /api."""

from fastapi import APIRouter

from .auth import router as auth_router
from .dashboard import router as dashboard_router
from .trainers import router as trainers_router

router = APIRouter(prefix="/api")

router.include_router(auth_router)
router.include_router(dashboard_router)
router.include_router(trainers_router)

__all__ = ["router", "auth_router", "dashboard_router", "trainers_router"]
