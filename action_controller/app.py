import logging
from typing import Optional

from fastapi import FastAPI

from . import controller
from .core.config import Settings, apply_settings
from .core.configuration import Configuration
from .core.middleware import install_exception_handlers, log_requests


logger = logging.getLogger(__name__)


def create_app(configuration: Optional[Configuration] = None, settings: Optional[Settings] = None) -> FastAPI:
    """Build a FastAPI application bound to its own copy of ``configuration``.

    - Duplicates the given (or process-wide) configuration
    - Applies environment settings on top of it
    - Installs request logging and the configured exception handlers
    """
    configuration = (configuration or controller.configuration).duplicate()
    apply_settings(configuration, settings)

    app = FastAPI(title="Action Controller")
    app.state.configuration = configuration

    @app.middleware("http")
    async def _log_requests(request, call_next):
        return await log_requests(request, call_next)

    install_exception_handlers(app, configuration)
    return app
