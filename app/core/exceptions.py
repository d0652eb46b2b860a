"""Custom application exceptions."""


class AppException(Exception):
    """Base application exception."""

    code: str | None = None

    def __init__(self, message: str, status_code: int = 500):
        """Initialize exception with message and status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)

    @property
    def error_code(self) -> str:
        """Machine-readable error kind."""
        return self.code or self.__class__.__name__


class NotFoundException(AppException):
    """Resource not found exception."""

    def __init__(self, message: str = "Resource not found"):
        """Initialize with 404 status code."""
        super().__init__(message, status_code=404)


class BadRequestException(AppException):
    """Bad request exception."""

    def __init__(self, message: str = "Bad request"):
        """Initialize with 400 status code."""
        super().__init__(message, status_code=400)


class InvalidRequestException(BadRequestException):
    """Missing or malformed availability query parameters."""

    code = "InvalidRequest"

    def __init__(self, message: str = "Invalid request"):
        """Initialize with 400 status code."""
        super().__init__(message)


class ConflictException(AppException):
    """Conflict exception."""

    def __init__(self, message: str = "Conflict"):
        """Initialize with 409 status code."""
        super().__init__(message, status_code=409)


class ValidationException(AppException):
    """Validation error exception."""

    def __init__(self, message: str = "Validation error"):
        """Initialize with 422 status code."""
        super().__init__(message, status_code=422)


class UpstreamDataException(AppException):
    """A schedule, appointment or block store failed while computing availability."""

    code = "UpstreamDataError"

    def __init__(self, message: str = "Failed to compute availability"):
        """Initialize with 500 status code."""
        super().__init__(message, status_code=500)
