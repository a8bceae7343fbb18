"""
Exception types raised by the service layer.

Views translate these into HTTP responses: ``NotFoundError`` becomes a 404,
``ValidationError`` a 400, ``ConflictError`` a 409, ``AuthenticationError``
a 401 and ``StorageError`` a generic 500.
"""


class BrainshareError(Exception):
    """Base class for all service errors."""

    status_code = 500
    message = "An internal server error occurred"

    def __init__(self, message=None):
        super().__init__(message or self.message)
        if message:
            self.message = message


class ValidationError(BrainshareError):
    status_code = 400
    message = "Invalid request"


class ConflictError(BrainshareError):
    status_code = 409
    message = "Conflict"


class AuthenticationError(BrainshareError):
    status_code = 401
    message = "Invalid username or password"


class NotFoundError(BrainshareError):
    status_code = 404
    message = "Not found"


class ShareLinkNotFound(NotFoundError):
    message = "Share link not found"


class ShareOwnerNotFound(NotFoundError):
    message = "Associated user not found"


class StorageError(BrainshareError):
    """A database call failed. The session has already been rolled back."""

    status_code = 500
