"""Application-level exceptions, database error mapping and FastAPI exception handlers."""


import logging
from typing import NoReturn

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

class AppException(Exception):
    """Base application exception."""

    def __init__(self, message: str, status_code: int = 500, code: str = "INTERNAL_ERROR"):
        self.message = message
        self.status_code = status_code
        self.code = code
        super().__init__(message)

class NotFoundError(AppException):
    def __init__(self, entity: str, entity_id: str | None = None):
        msg = f"{entity} not found" if not entity_id else f"{entity} with id {entity_id} not found"
        super().__init__(msg, status_code=404, code="NOT_FOUND")
        self.entity = entity
        self.entity_id = entity_id

class ConflictError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=409, code="CONFLICT")

class ValidationError(AppException):
    def __init__(self, message: str):
        super().__init__(message, status_code=422, code="VALIDATION_ERROR")

# ---------------------------------------------------------------------------
# Database error mapping
# ---------------------------------------------------------------------------

# Postgres and SQLite spell the same violations differently
_FOREIGN_KEY_MARKERS = ("violates foreign key constraint", "FOREIGN KEY constraint failed")
_DUPLICATE_MARKERS = ("duplicate key value", "UNIQUE constraint failed")

def handle_database_error(error: BaseException, context: str) -> NoReturn:
    """Re-raise a raw driver/ORM error as ConflictError when it is a constraint violation.

    Anything unrecognised propagates unchanged.
    """
    message = str(error)
    if any(marker in message for marker in _FOREIGN_KEY_MARKERS):
        raise ConflictError(
            f"Cannot perform operation: {context} - referenced by other records"
        ) from error
    if any(marker in message for marker in _DUPLICATE_MARKERS):
        raise ConflictError(f"Duplicate value error in {context}") from error
    raise error

# ---------------------------------------------------------------------------
# FastAPI exception handlers
# ---------------------------------------------------------------------------

def _error_body(code: str, message: str) -> dict:
    return {"error": {"code": code, "message": message}}

def register_exception_handlers(app: FastAPI) -> None:
    """Attach all custom exception handlers to the FastAPI app."""

    @app.exception_handler(AppException)
    async def app_exception_handler(request: Request, exc: AppException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(exc.code, exc.message),
        )

    @app.exception_handler(404)
    async def not_found_handler(request: Request, exc: Exception) -> JSONResponse:
        return JSONResponse(
            status_code=404,
            content=_error_body("NOT_FOUND", "Resource not found"),
        )

    @app.exception_handler(500)
    async def internal_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.error("Unhandled error on %s %s: %r", request.method, request.url.path, exc)
        return JSONResponse(
            status_code=500,
            content=_error_body("INTERNAL_ERROR", "An unexpected error occurred"),
        )
