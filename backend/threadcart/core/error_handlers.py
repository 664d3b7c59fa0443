import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from threadcart.core.exceptions import CartError

logger = logging.getLogger(__name__)


def setup_error_handlers(app: FastAPI):
    """Register the JSON error handlers on the application."""

    @app.exception_handler(CartError)
    async def cart_error_handler(request: Request, exc: CartError):
        """Render domain errors with their mapped status code."""
        if exc.status_code >= 500:
            logger.error(
                f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
                extra={"context": exc.context}
            )
        else:
            logger.warning(
                f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}"
            )
        return JSONResponse(status_code=exc.status_code, content=exc.to_response())

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError):
        """Missing or malformed fields are a 400, not FastAPI's default 422."""
        errors = []
        for error in exc.errors():
            errors.append({
                "field": " -> ".join(str(loc) for loc in error["loc"]),
                "message": error["msg"],
            })

        logger.warning(f"Validation error on {request.method} {request.url.path}: {errors}")

        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": "All fields are required", "details": errors}
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.detail},
            headers=getattr(exc, "headers", None)
        )

    @app.exception_handler(Exception)
    async def general_exception_handler(request: Request, exc: Exception):
        """Handle all other exceptions; details stay in the log."""
        logger.exception(
            f"Unhandled exception on {request.method} {request.url.path}: {type(exc).__name__}"
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"}
        )
