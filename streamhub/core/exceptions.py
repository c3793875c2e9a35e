# streamhub/core/exceptions.py
"""
Domain exceptions and their HTTP mapping.

Services raise these; `register_exception_handlers` turns them into
JSON responses of the form {"detail": ..., "code": ...}.
"""
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

log = logging.getLogger("streamhub.errors")


class StreamhubError(Exception):
    """Base exception for streamhub"""
    status_code = 500
    code = "STREAMHUB_ERROR"

    def __init__(self, message: str = "Internal server error"):
        self.message = message
        super().__init__(message)

    def to_dict(self):
        return {"detail": self.message, "code": self.code}


class ValidationError(StreamhubError):
    """Missing or malformed input"""
    status_code = 400
    code = "VALIDATION_ERROR"


class ConflictError(ValidationError):
    """Unique value already taken"""
    code = "CONFLICT"


class InvalidCredentials(ValidationError):
    """Unknown username or wrong password (deliberately indistinguishable)"""
    code = "INVALID_CREDENTIALS"

    def __init__(self, message: str = "Invalid username or password"):
        super().__init__(message)


class AuthError(StreamhubError):
    """Missing, invalid, expired or wrong-tier token"""
    status_code = 401
    code = "AUTH_ERROR"

    def __init__(self, message: str = "Not authenticated"):
        super().__init__(message)


class InvalidToken(AuthError):
    code = "INVALID_TOKEN"

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class ForbiddenError(StreamhubError):
    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "Access denied"):
        super().__init__(message)


class NotFoundError(StreamhubError):
    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, message: str = "Not found"):
        super().__init__(message)


class StorageError(StreamhubError):
    """Underlying database or filesystem failure"""
    status_code = 500
    code = "STORAGE_ERROR"


def _format_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = [str(p) for p in err.get("loc", ()) if p not in ("body", "query", "path", "form")]
        field = ".".join(loc) or "request"
        if err.get("type") == "missing":
            parts.append(f"{field} is required")
        else:
            parts.append(f"{field}: {err.get('msg')}")
    return "; ".join(parts) or "Invalid request"


def register_exception_handlers(app: FastAPI):
    """Register exception handlers with the FastAPI app"""

    @app.exception_handler(StreamhubError)
    async def handle_streamhub_error(request: Request, exc: StreamhubError):
        if exc.status_code >= 500:
            log.error(f"❌ {request.method} {request.url.path}: {exc.message}")
        else:
            log.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}")
        headers = {"WWW-Authenticate": "Bearer"} if exc.status_code == 401 else None
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict(), headers=headers)

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        err = ValidationError(_format_validation_errors(exc))
        return JSONResponse(status_code=err.status_code, content=err.to_dict())

    @app.exception_handler(SQLAlchemyError)
    async def handle_database_error(request: Request, exc: SQLAlchemyError):
        log.error(f"❌ Database error on {request.method} {request.url.path}: {exc}", exc_info=exc)
        err = StorageError("Internal server error")
        return JSONResponse(status_code=err.status_code, content=err.to_dict())
