"""API routers."""

from .api import router as api_router
from .health import router as health_router
from .pages import router as pages_router

__all__ = ["api_router", "health_router", "pages_router"]
