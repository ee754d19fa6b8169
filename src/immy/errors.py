"""Error taxonomy and the failure envelope.

Every service failure is an ImmyError subclass. The HTTP layer turns
them into `{"status": false, "message": ...}` with the class's status
code. `reason` is for logs only and never reaches the client, which is
how merged outcomes (unknown email vs wrong password, missing child vs
someone else's child) stay indistinguishable from the outside.
"""

from typing import Optional


class ImmyError(Exception):
    """Base class for errors that terminate a request."""

    status_code = 400
    default_message = "Request failed"

    def __init__(self, message: Optional[str] = None, *, reason: Optional[str] = None):
        self.message = message or self.default_message
        self.reason = reason
        super().__init__(self.message)


class ValidationFailed(ImmyError):
    """Missing or malformed input."""

    status_code = 422
    default_message = "Missing required fields"


class Unauthenticated(ImmyError):
    """Missing, invalid or expired bearer token."""

    status_code = 401
    default_message = "Invalid or expired token"


class InvalidCredentials(ImmyError):
    """Unknown email or wrong password. One outcome for both."""

    status_code = 401
    default_message = "Invalid email or password"


class DuplicateEmail(ImmyError):
    status_code = 409
    default_message = "Email already registered"


class ChildNotAccessible(ImmyError):
    """The child does not exist or belongs to another account."""

    status_code = 404
    default_message = "Child not found or not authorized"


class NoChildrenFound(ImmyError):
    status_code = 404
    default_message = "No children found for this user"


class StorageError(ImmyError):
    """The database failed. Driver details are logged, not returned."""

    status_code = 503
    default_message = "Service temporarily unavailable"
