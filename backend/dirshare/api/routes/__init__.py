"""API route registration."""

from fastapi import APIRouter

from dirshare.api.routes import cache, files, health

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(files.router, prefix="/files", tags=["files"])
api_router.include_router(cache.router, prefix="/cache", tags=["cache"])
