"""
Main entrypoint for the BRF Ellagården API.

This module assembles the FastAPI application, sets up logging, error
handling and CORS, and includes the API routers under ``/api``.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``.  Run it with uvicorn,
e.g.::

    uvicorn ellagarden_api.app.main:app --reload

The data store is owned by the application instance.  Tests pass a
ready-made ``DataStore`` to ``create_app``; otherwise the lifespan
handler opens one over ``settings.data_dir`` at startup and flushes it
at shutdown.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.errors import register_error_handlers
from .core.file_storage import FileStorage
from .core.logging_config import setup_logging
from .core.store import DataStore


logger = logging.getLogger(__name__)


def create_app(
    app_settings: Optional[Settings] = None,
    store: Optional[DataStore] = None,
    files: Optional[FileStorage] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    app_settings : Optional[Settings]
        Settings to use; defaults to the module-level settings read from
        the environment.
    store : Optional[DataStore]
        Pre-built data store.  When omitted, one is opened over
        ``app_settings.data_dir`` when the application starts.
    files : Optional[FileStorage]
        Storage for uploaded documents; defaults to
        ``app_settings.upload_dir``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    app_settings = app_settings or default_settings
    # Initialise logging before anything else so the store can log while loading.
    setup_logging(app_settings.log_level, app_settings.log_file)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        if app.state.store is None:
            app.state.store = DataStore(app_settings.data_path)
        logger.info("%s started (environment: %s)", app_settings.project_name, app_settings.environment)
        yield
        app.state.store.close()

    app = FastAPI(title=app_settings.project_name, version=app_settings.api_version, lifespan=lifespan)
    app.state.settings = app_settings
    app.state.store = store
    app.state.files = files or FileStorage(app_settings.upload_path)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "PUT", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )
    register_error_handlers(app, debug=app_settings.is_development)

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        logger.info("%s %s", request.method, request.url.path)
        return await call_next(request)

    app.include_router(v1_router, prefix="/api")

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
