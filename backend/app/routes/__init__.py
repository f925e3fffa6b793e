"""API routes."""

from .geocode import router as geocode_router
from .orders import router as orders_router
from .reviews import router as reviews_router
from .threads import router as threads_router
from .version import router as version_router

__all__ = [
    "orders_router",
    "reviews_router",
    "threads_router",
    "version_router",
    "geocode_router",
]
