import logging
import time
from typing import Callable

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from ..action import status_phrase
from .configuration import Configuration


logger = logging.getLogger(__name__)


async def log_requests(request: Request, call_next: Callable):
    """Log slow or failing requests with the format and status the configuration gives them."""
    start_time = time.time()
    request_id = f"{int(time.time() * 1000)}-{id(request)}"
    configuration: Configuration = request.app.state.configuration

    try:
        response = await call_next(request)
    except Exception as e:
        code = configuration.exception_code(e)
        handling = "handled" if configuration.handle_exceptions else "unhandled"
        logger.error(f"[{request_id}] {request.method} {request.url.path} - {type(e).__name__} ({handling}, {code}) - {time.time() - start_time:.2f}s")
        raise

    process_time = time.time() - start_time
    if process_time > 1.0 or response.status_code >= 400:
        mime_type = response.headers.get("content-type", "").split(";")[0].strip()
        response_format = configuration.format_for(mime_type) or "unknown"
        logger.info(f"[{request_id}] {request.method} {request.url.path} - {response.status_code} [{response_format}] - {process_time:.2f}s")
    return response


def exception_handler(configuration: Configuration) -> Callable:
    """Build a FastAPI exception handler answering with the configured status code."""

    async def handler(request: Request, exc: Exception):
        request_id = f"{int(time.time() * 1000)}-{id(request)}"
        code = configuration.exception_code(exc)
        if code >= 500:
            logger.error(f"[{request_id}] Unhandled exception in {request.method} {request.url.path}: {str(exc)}", exc_info=exc)
        else:
            logger.warning(f"[{request_id}] {type(exc).__name__} in {request.method} {request.url.path} mapped to {code}")

        return JSONResponse(status_code=code, content={"detail": status_phrase(code)})

    return handler


def install_exception_handlers(app: FastAPI, configuration: Configuration) -> None:
    if not configuration.handle_exceptions:
        return

    handler = exception_handler(configuration)
    for kind in configuration.handled_exceptions:
        app.add_exception_handler(kind, handler)
    app.add_exception_handler(Exception, handler)
