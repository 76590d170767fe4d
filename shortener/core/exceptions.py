"""
Custom Exceptions

Every failure the service layer can report derives from ShortenerError,
so endpoints can map each kind onto an HTTP status without inspecting
database driver errors.

- ValidationError: user-correctable input problem (400)
- NotFoundError: unknown short code (404)
- StorageError: database failure (500), never shown verbatim to users
"""


class ShortenerError(Exception):
    """Base exception for the shortener service."""
    pass


class ValidationError(ShortenerError):
    """Raised when the submitted URL is missing or malformed."""

    def __init__(self, url: str, reason: str = "Invalid URL format"):
        self.url = url
        self.reason = reason
        super().__init__(f"{reason}: {url!r}")


class NotFoundError(ShortenerError):
    """Raised when no link matches a short code."""

    def __init__(self, code: str):
        self.code = code
        super().__init__(f"Short code '{code}' not found")


class StorageError(ShortenerError):
    """Raised when database operations fail."""

    def __init__(self, message: str, original_error: Exception = None):
        self.original_error = original_error
        super().__init__(f"Database error: {message}")


class CodeConflictError(StorageError):
    """Raised by the store when an insert collides with an existing code."""

    def __init__(self, code: str, original_error: Exception = None):
        self.code = code
        super().__init__(f"short code '{code}' already exists", original_error)


class ExhaustedError(StorageError):
    """Raised when every generated candidate code collided."""

    def __init__(self, attempts: int):
        self.attempts = attempts
        super().__init__(f"no free short code after {attempts} attempts")
