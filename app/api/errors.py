"""Exception handlers that turn errors into JSON responses.

Every failure reaches the client as `{"error": ..., "detail"?: ...}`.
"""

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from app.core.exceptions import RelayError, RemoteUploadError
from app.core.logging import get_logger

logger = get_logger(__name__)


async def relay_error_handler(request: Request, exc: RelayError) -> JSONResponse:
    """Render a RelayError with its own status code."""
    # Remote failures are already logged with traceback by the service
    if not isinstance(exc, RemoteUploadError):
        logger.warning(
            "Request rejected",
            path=request.url.path,
            error_type=exc.__class__.__name__,
            error=exc.message,
            status_code=exc.status_code,
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_response())


async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Log and render any unexpected exception as a 500."""
    logger.error("Unhandled error", path=request.url.path, error=str(exc), exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal server error"})


def register_exception_handlers(app: FastAPI) -> None:
    """Attach the relay's exception handlers to an application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(RelayError, relay_error_handler)
    app.add_exception_handler(Exception, unhandled_error_handler)


__all__ = ["register_exception_handlers"]
