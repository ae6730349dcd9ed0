"""API routers for subnet-trainer."""

from src.api.routers import binary_router, progress_router, subnetting_router

__all__ = [
    "binary_router",
    "subnetting_router",
    "progress_router",
]
