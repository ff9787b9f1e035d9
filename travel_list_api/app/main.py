"""
Main entrypoint for the Travel List API.

This module assembles the FastAPI application: it sets up logging,
adds a request logging middleware, includes the versioned API router
and the web client routes, and connects to MongoDB on startup.  The
``create_app`` function builds the app, which is then instantiated at
module import time as ``app``, e.g.::

    uvicorn travel_list_api.app.main:app --reload
"""

import logging
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request

from .api.v1.router import router as v1_router
from .core.config import settings
from .core.db import TravelRepository
from .core.logging_config import ACCESS_LOGGER, setup_logging
from .web import build_web_router

access_logger = logging.getLogger(ACCESS_LOGGER)


def create_app(repository: Optional[TravelRepository] = None, web_dir: Optional[str] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    repository : Optional[TravelRepository]
        Repository to serve requests with.  When omitted, one is
        connected at startup from ``settings`` and closed at shutdown;
        a connection failure aborts startup.
    web_dir : Optional[str]
        Directory of the compiled web client, ``settings.web_dir`` by
        default.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    setup_logging(settings.log_level, settings.log_file or None, settings.access_log_level or None)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if repository is not None:
            app.state.repository = repository
            yield
            return
        app.state.repository = TravelRepository.connect(
            settings.database_uri,
            settings.database_name,
            settings.travel_collection,
            timeout=settings.database_timeout,
            operation_timeout=settings.operation_timeout,
        )
        try:
            yield
        finally:
            app.state.repository.close()

    app = FastAPI(title=settings.project_name, version=settings.api_version, lifespan=lifespan)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_logger.info(
            "%s %s %s %.1fms", request.method, request.url.path, response.status_code, elapsed_ms
        )
        return response

    app.include_router(v1_router, prefix="/api/v1")
    app.include_router(build_web_router(web_dir or settings.web_dir))

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
