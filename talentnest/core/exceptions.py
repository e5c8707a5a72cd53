"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    error_code = "internal_error"

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundException(AppException):
    """Resource not found exception."""

    error_code = "not_found"

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class UnauthorizedException(AppException):
    """Missing or invalid credentials, or an authenticated caller with the wrong role."""

    error_code = "unauthorized"

    def __init__(self, message: str = "Unauthorized", status_code: int = 401):
        """Initialize with 401 status code (403 when the role is wrong)."""
        super().__init__(message, status_code=status_code)


class ForbiddenException(AppException):
    """Caller does not own the resource."""

    error_code = "forbidden"

    def __init__(self, message: str = "Forbidden"):
        """Initialize with 403 status code."""
        super().__init__(message, status_code=403)


class BadRequestException(AppException):
    """Bad request exception."""

    error_code = "invalid_input"

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class InvalidInputException(BadRequestException):
    """Malformed or missing required fields."""

    def __init__(self, message: str = "Invalid input"):
        """Initialize with 400 status code."""
        super().__init__(message)


class InvalidActionException(InvalidInputException):
    """Verification action outside the supported set."""

    def __init__(self, action: object):
        """Initialize with the offending action."""
        self.action = action
        super().__init__(f"Invalid action '{action}'. Must be 'approve' or 'reject'")


class UploadRejectedException(AppException):
    """Upload violates the size or content type policy."""

    error_code = "upload_rejected"

    def __init__(self, message: str = "Upload rejected"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class ConflictException(AppException):
    """Conflict exception."""

    error_code = "conflict"

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class RateLimitException(AppException):
    """Rate limit exceeded exception."""

    error_code = "rate_limited"

    def __init__(self, message: str = "Rate limit exceeded"):
        """Initialize with 429 status code."""
        super().__init__(message, status_code=429)


class PersistenceFailureException(AppException):
    """Downstream database or object store error."""

    error_code = "persistence_failure"

    def __init__(self, message: str = "Failed to persist changes"):
        """Initialize with 500 status code."""
        super().__init__(message, status_code=500)
