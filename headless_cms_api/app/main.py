"""
Main entrypoint for the headless CMS API.

This module assembles the FastAPI application, sets up logging,
registers the JSON error handlers and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``, e.g.::

    uvicorn headless_cms_api.app.main:app --reload

Tests call ``create_app`` directly with their own ``Settings``.
"""

import logging
from datetime import datetime
from typing import Callable, Dict, Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .api.router import router as api_router
from .core.config import Settings, settings as default_settings
from .core.db import init_db, utc_now
from .core.errors import register_exception_handlers
from .core.logging_config import setup_logging


logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    clock: Optional[Callable[[], datetime]] = None,
) -> FastAPI:
    """Create and configure a FastAPI application.

    Parameters
    ----------
    settings : Optional[Settings]
        Configuration for this application instance.  Defaults to the
        module level settings read from the environment.
    clock : Optional[Callable[[], datetime]]
        Source of the current UTC time used for timestamps and token
        expiry.  Defaults to ``datetime.now(timezone.utc)``.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file or None, settings.log_file_level)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    app.state.settings = settings
    app.state.clock = clock or utc_now

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origin_list,
        allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
        allow_headers=["Content-Type", "Accept", "Authorization"],
    )
    register_exception_handlers(app)

    # The frontend calls ``/api/...``; plain ``/posts`` is kept for
    # direct use of the API.
    app.include_router(api_router)
    prefix = settings.api_prefix.rstrip("/")
    if prefix:
        app.include_router(api_router, prefix=prefix)

    @app.get("/health", include_in_schema=False)
    async def health() -> Dict[str, str]:
        return {"status": "ok"}

    @app.on_event("startup")
    async def startup_event() -> None:
        if not settings.admin_password:
            logger.warning("ADMIN_PASSWORD is not set; every admin login will be rejected")
        init_db(settings.database_url)

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
