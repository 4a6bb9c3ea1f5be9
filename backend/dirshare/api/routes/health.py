"""Health check endpoints."""

from fastapi import APIRouter, Depends

from dirshare import __version__
from dirshare.api.deps import get_resolver
from dirshare.schemas.system import HealthResponse
from dirshare.services.path_resolver import PathResolver

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
async def health_check(resolver: PathResolver = Depends(get_resolver)):
    """Lightweight liveness check."""
    return HealthResponse(version=__version__, root_dir_name=resolver.root.name)


@router.get("/ping")
async def ping():
    """Ultra-lightweight ping."""
    return {"status": "ok"}
