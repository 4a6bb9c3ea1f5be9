"""dirshare FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Any

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from dirshare import __version__
from dirshare.api.deps import client_ip
from dirshare.config import Settings, settings as default_settings
from dirshare.errors import FileServerError
from dirshare.services.admission import AdmissionGate, AdmissionMiddleware
from dirshare.services.file_cache import SmallFileCache
from dirshare.services.file_delivery import FileDelivery
from dirshare.services.path_resolver import PathResolver

logger = logging.getLogger(__name__)


def _setup_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=getattr(logging, settings.log_level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    # Keep third-party chatter out of the request log
    for noisy in ("asyncio", "multipart"):
        logging.getLogger(noisy).setLevel(logging.WARNING)


async def _file_server_error_handler(request: Request, exc: FileServerError) -> JSONResponse:
    logger.warning(
        "%s %s -> %d %s [%s]",
        request.method, request.url.path, exc.status_code, exc.detail, client_ip(request),
    )
    return JSONResponse({"detail": exc.detail}, status_code=exc.status_code, headers=exc.headers)


def create_app(settings: Settings | None = None) -> FastAPI:
    """Application factory.

    Every per-process object (resolver, cache, delivery, admission gate) is
    created here and owned by the app through ``app.state``.
    """
    from dirshare.api.routes import api_router
    from dirshare.api.routes.browse import router as browse_router

    settings = settings or default_settings

    @asynccontextmanager
    async def _lifespan(app: FastAPI):
        """Startup / shutdown lifecycle."""
        _setup_logging(settings)
        logger.info(
            "dirshare v%s started, listening on %s:%s, serving %s",
            __version__, settings.host, settings.port, settings.root_dir,
        )
        try:
            yield
        finally:
            logger.info("dirshare shutting down")

    app = FastAPI(
        title=settings.app_name,
        version=__version__,
        debug=settings.debug,
        lifespan=_lifespan,
    )

    app.state.settings = settings
    app.state.resolver = PathResolver(settings.root_dir)
    app.state.delivery = FileDelivery(
        SmallFileCache(settings.cache_capacity),
        threshold_bytes=settings.cache_threshold_bytes,
        chunk_size=settings.chunk_size,
    )
    app.state.gate = AdmissionGate(settings.max_concurrent_requests)

    app.add_middleware(AdmissionMiddleware, gate=app.state.gate)
    app.add_exception_handler(FileServerError, _file_server_error_handler)

    app.include_router(api_router, prefix=settings.api_prefix)
    app.include_router(browse_router)

    return app


app = create_app()


def run(**kwargs: Any) -> None:
    import uvicorn

    uvicorn.run(
        "dirshare.main:app",
        host=default_settings.host,
        port=default_settings.port,
        reload=default_settings.debug,
        log_level=default_settings.log_level.lower(),
        **kwargs,
    )


if __name__ == "__main__":
    run()
