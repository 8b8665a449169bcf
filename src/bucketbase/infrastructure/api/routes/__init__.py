"""API Routes for BucketBase."""

from .auth_router import router as auth_router
from .collections_router import router as collections_router
from .schema_router import router as schema_router
from .sites_router import router as sites_router

__all__ = [
    "auth_router",
    "collections_router",
    "schema_router",
    "sites_router",
]
