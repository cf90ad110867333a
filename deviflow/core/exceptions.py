from typing import Optional


class AppError(Exception):
    """
    Base class for errors that map to a structured JSON response.

    Every subclass carries an HTTP status code, a stable machine-readable
    error code and a client-safe message. Handlers registered in main.py
    render them as {"message": ..., "error": ...}.
    """

    status_code: int = 500
    error: str = "INTERNAL_ERROR"
    message: str = "Internal server error"

    def __init__(self, message: Optional[str] = None):
        if message is not None:
            self.message = message
        super().__init__(self.message)


class Unauthenticated(AppError):
    status_code = 401
    error = "AUTHENTICATION_REQUIRED"
    message = "Access token required"


class InvalidCredentials(AppError):
    # Same message for unknown user, inactive user and wrong password
    status_code = 401
    error = "INVALID_CREDENTIALS"
    message = "Invalid credentials"


class InvalidToken(AppError):
    status_code = 403
    error = "INVALID_TOKEN"
    message = "Invalid or expired token"


class TenantMismatch(AppError):
    status_code = 403
    error = "TENANT_MISMATCH"
    message = "Access denied for this tenant"


class ResourceNotFound(AppError):
    # Raised for absent resources and for resources owned by another tenant alike
    status_code = 404
    error = "RESOURCE_NOT_FOUND"
    message = "Resource not found"


class InsufficientRole(AppError):
    status_code = 403
    error = "INSUFFICIENT_ROLE"
    message = "Insufficient permissions"


class ModuleNotEnabled(AppError):
    status_code = 403
    error = "MODULE_ACCESS_DENIED"
    message = "Module not enabled for this tenant"


class TenantNotIndicated(AppError):
    status_code = 400
    error = "TENANT_NOT_INDICATED"
    message = "No tenant indicated by host"


class TenantNotFound(AppError):
    status_code = 404
    error = "TENANT_NOT_FOUND"
    message = "Tenant not found"


class BadRequest(AppError):
    status_code = 400
    error = "BAD_REQUEST"
    message = "Bad request"


class Conflict(AppError):
    status_code = 409
    error = "CONFLICT"
    message = "Resource already exists"
