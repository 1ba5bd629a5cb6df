"""
Main entrypoint for the Mindfull API.

This module assembles the FastAPI application, sets up logging,
installs the error handlers and includes the API router.  The
``create_app`` function builds and configures the app, which is then
instantiated at module import time as ``app``::

    uvicorn mindfull_api.app.main:app --reload

Every error response shares one shape: ``{"error": {"message": ...}}``.
"""

import logging

from fastapi import Depends, FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, PlainTextResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.router import router as api_router
from .core.config import settings
from .core.db import init_db
from .core.logging_config import setup_logging
from .core.security import require_api_token


logger = logging.getLogger(__name__)


def error_response(status_code: int, message: str, headers=None) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"error": {"message": message}},
        headers=headers,
    )


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    return error_response(exc.status_code, str(exc.detail), getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Report malformed requests with HTTP 400.

    Bodies that are not JSON objects and non-integer ids in the path
    are the only ways to get here.
    """
    errors = exc.errors()
    location = errors[0].get("loc", ()) if errors else ()
    if location and location[0] == "path":
        message = f"Invalid '{location[-1]}' in request path"
    else:
        message = "Request body must be a JSON object"
    return error_response(status.HTTP_400_BAD_REQUEST, message)


async def server_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Last resort for storage and programming errors.

    The error text is only exposed when ``settings.debug`` is on.
    """
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    message = str(exc) if settings.debug else "server error"
    return error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, message)


def create_app() -> FastAPI:
    """Create and configure a FastAPI application.

    Returns
    -------
    FastAPI
        A configured FastAPI application instance.
    """
    # Initialise logging before anything else so that the handlers
    # below can log.
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, server_error_handler)

    app.include_router(api_router, prefix="/api")

    @app.get("/", response_class=PlainTextResponse, dependencies=[Depends(require_api_token)])
    async def hello() -> str:
        return "Hello, world!"

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file and tables on first start.
        init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
