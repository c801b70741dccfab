"""FastAPI application factory for the app maker service."""

from __future__ import annotations

import logging
from pathlib import Path

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from ..exception_handler import install_exception_handlers
from ..mcpserver import ServiceContext, create_server
from .routes import router
from .service import ApiSettings

logger = logging.getLogger("appmaker")


def create_app(settings: ApiSettings | None = None) -> FastAPI:
    """Create and configure the FastAPI application."""

    settings = settings or ApiSettings.from_env()
    services = ServiceContext(settings)

    # setup mcp
    mcp_app = create_server(services).http_app("/")

    app = FastAPI(
        title="App Maker API",
        version="0.1.0",
        lifespan=mcp_app.lifespan,
    )
    app.state.settings = settings
    app.state.store = services.store()
    app.state.preview_frame = services.frame()
    install_exception_handlers(app)
    app.include_router(router)

    # mount mcp
    app.mount("/mcp", mcp_app)

    # static assets go last so they never shadow the API
    if settings.static_dir:
        static_dir = Path(settings.static_dir)
        if static_dir.is_dir():
            app.mount("/", StaticFiles(directory=static_dir, html=True), name="static")
        else:
            logger.warning("Static directory %s does not exist; not serving assets", static_dir)

    return app


__all__ = ["create_app"]
