"""
API router aggregation
Combines all route handlers into a single router mounted under /api
Reference: https://fastapi.tiangolo.com/tutorial/bigger-applications/
"""
from fastapi import APIRouter

from artforms.api.v1.routes import artist, artwork, health, user
from artforms.core.config import settings

api_router = APIRouter(prefix=settings.API_PREFIX)

api_router.include_router(artwork.router)
api_router.include_router(artist.router)
api_router.include_router(user.router)
api_router.include_router(health.router)
