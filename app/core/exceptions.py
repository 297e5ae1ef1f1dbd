"""
Domain Exceptions

Every core operation surfaces one of these typed failures. The HTTP layer
maps ``status_code`` onto the response and serializes ``message``/``error``
as the ``{message, error}`` body; nothing else leaks to the client.
"""

from typing import Optional


class AppError(Exception):
    """Base class for all failures raised by the service layer."""

    status_code: int = 500
    default_message: str = "Server Error"

    def __init__(self, message: Optional[str] = None, error: Optional[str] = None):
        self.message = message or self.default_message
        self.error = error or self.message
        super().__init__(self.message)

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {"message": self.message, "error": self.error}


# =============================================================================
# 400 - VALIDATION
# =============================================================================

class ValidationError(AppError):
    """Missing or malformed input."""
    status_code = 400
    default_message = "Invalid request"


class MissingFieldsError(ValidationError):
    default_message = "Missing required fields"

    def __init__(self, fields: list[str], message: Optional[str] = None):
        self.fields = fields
        super().__init__(message, error=f"Missing: {', '.join(fields)}")


class InvalidUserTypeError(ValidationError):
    default_message = "Invalid user type"


class InvalidPromoteListError(ValidationError):
    default_message = "Invalid promote list"


class InvalidQuantityError(ValidationError):
    default_message = "Quantity must be greater than zero"


# =============================================================================
# 400 - CONFLICT
# =============================================================================

class ConflictError(AppError):
    """The write would violate a uniqueness rule."""
    status_code = 400
    default_message = "Conflict"


class DuplicateEmailError(ConflictError):
    default_message = "User already exists"


# =============================================================================
# 401 - AUTHENTICATION
# =============================================================================

class AuthenticationError(AppError):
    status_code = 401
    default_message = "Authentication failed"


class InvalidCredentialsError(AuthenticationError):
    # Same message for unknown email and wrong password
    default_message = "Invalid email or password"


# =============================================================================
# 404 - NOT FOUND
# =============================================================================

class NotFoundError(AppError):
    status_code = 404
    default_message = "Not found"


class UserNotFoundError(NotFoundError):
    default_message = "User not found"


class RestaurantNotFoundError(NotFoundError):
    default_message = "Restaurant not found"


class AdminRecordMissingError(NotFoundError):
    default_message = "Admin record not found"


# =============================================================================
# 500 - INTERNAL
# =============================================================================

class InternalError(AppError):
    """Storage or otherwise unexpected failure."""
    status_code = 500
    default_message = "Server Error"
