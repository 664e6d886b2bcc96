"""
FastAPI exception handlers for structured error responses.

Analysis failures never reach these handlers (the controller renders them
as views); only malformed requests and unexpected bugs do.
"""

from datetime import datetime

import structlog
from fastapi import Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError as PydanticValidationError

logger = structlog.get_logger(__name__)


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError | PydanticValidationError
) -> JSONResponse:
    """
    Handle invalid request bodies and parameters.
    
    Maps to 400 Bad Request (client error).
    
    Args:
        request: FastAPI request
        exc: Validation error raised while parsing the request
    
    Returns:
        JSON error response
    """
    errors = exc.errors()
    logger.warning("Invalid request format", errors=errors)
    
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={
            "error": "invalid_request",
            "message": "Request validation failed",
            "details": [
                {"loc": list(e.get("loc", ())), "msg": e.get("msg", ""), "type": e.get("type", "")}
                for e in errors
            ],
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


async def generic_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle unexpected errors.
    
    Maps to 500 Internal Server Error.
    """
    logger.exception("Unexpected error", error_type=type(exc).__name__)
    
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "internal_error",
            "message": "An unexpected error occurred",
            "timestamp": datetime.utcnow().isoformat(),
        },
    )


# Exception handler mapping for FastAPI app.add_exception_handler()
EXCEPTION_HANDLERS = {
    RequestValidationError: request_validation_error_handler,
    PydanticValidationError: request_validation_error_handler,
    Exception: generic_error_handler,
}
