import logging
from fastapi import status
from fastapi.responses import JSONResponse
from fastapi.requests import Request

logger = logging.getLogger(__name__)

# ---------------------------
# CRUD (Database abstraction)
# ---------------------------

class DatabaseError(Exception):
    """Base class for all database-related errors."""
    pass

# ---------------------------
# Service (Business logic)
# ---------------------------

class BusinessError(Exception):
    """Base class for all business logic errors."""
    pass

class NotFoundError(BusinessError):
    """Raised when a requested resource does not exist."""
    pass

class ValidationError(BusinessError):
    """Raised when input is rejected before any state is mutated."""
    pass

class PersistenceError(BusinessError):
    """Raised when the report store is unreachable or a write fails."""
    pass

class AnalyticsError(BusinessError):
    """Raised by the post-save analytics path. Always caught and logged."""
    pass

# ---------------------------
# Auth
# ---------------------------

class AuthError(BusinessError):
    """Authentication failure with a fixed user-facing message."""
    code = "other"
    message = "Authentication failed."

    def __init__(self, message: str = None):
        super().__init__(message or self.message)

class InvalidCredentialError(AuthError):
    code = "invalid-credential"
    message = "Email or password is incorrect."

class EmailInUseError(AuthError):
    code = "email-in-use"
    message = "This email is already in use."

class WeakPasswordError(AuthError):
    code = "weak-password"
    message = "Password must be at least 6 characters long."


# ---------------------------
# FastAPI Exception Handlers
# ---------------------------

AUTH_STATUS_CODES = {
    InvalidCredentialError: status.HTTP_401_UNAUTHORIZED,
    EmailInUseError: status.HTTP_409_CONFLICT,
    WeakPasswordError: status.HTTP_422_UNPROCESSABLE_ENTITY,
}


def register_exception_handlers(app):
    @app.exception_handler(NotFoundError)
    async def not_found_handler(request: Request, exc: NotFoundError):
        return JSONResponse(
            status_code=status.HTTP_404_NOT_FOUND,
            content={"detail": str(exc)},
        )

    @app.exception_handler(ValidationError)
    async def validation_handler(request: Request, exc: ValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"detail": str(exc)},
        )

    @app.exception_handler(AuthError)
    async def auth_handler(request: Request, exc: AuthError):
        return JSONResponse(
            status_code=AUTH_STATUS_CODES.get(type(exc), status.HTTP_400_BAD_REQUEST),
            content={"detail": str(exc), "code": exc.code},
        )

    @app.exception_handler(PersistenceError)
    async def persistence_handler(request: Request, exc: PersistenceError):
        logger.error(f"Persistence error: {exc}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"detail": "Failed to save the report. Check your connection and retry."},
        )
