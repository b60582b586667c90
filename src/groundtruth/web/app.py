"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING

from fastapi import FastAPI

from groundtruth import __version__
from groundtruth.app import DirectoryFactory, build_directory
from groundtruth.config import get_hubspot_config, get_server_config

from .routes import router

if TYPE_CHECKING:
    from collections.abc import AsyncIterator

    from groundtruth.config import HubSpotConfig, ServerConfig

logger = logging.getLogger(__name__)


def create_app(
    *,
    config: HubSpotConfig | None = None,
    server: ServerConfig | None = None,
    directory_factory: DirectoryFactory | None = None,
) -> FastAPI:
    """Build the app, refusing to start when HubSpot credentials are not configured."""

    hubspot_config = config or get_hubspot_config()
    server_config = server or get_server_config()
    factory = directory_factory or build_directory

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        directory = factory(hubspot_config)
        app.state.directory = directory
        logger.info(
            "Ground Truth serving %s records for contacts (production=%s)",
            hubspot_config.custom_object_type,
            server_config.is_production,
        )
        try:
            yield
        finally:
            app.state.directory = None
            await directory.aclose()

    app = FastAPI(title="Ground Truth", version=__version__, lifespan=lifespan)
    app.state.hubspot_config = hubspot_config
    app.state.server_config = server_config
    app.include_router(router)
    return app
