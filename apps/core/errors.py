"""
Typed errors raised by KilledIt services.

Services raise these with human-readable messages; the API layer turns them
into ``{"error": message}`` responses carrying ``status_code``. A lookup miss
is not an error: services return ``None`` and the router decides on a 404.
"""
from typing import Optional


class KilledItError(Exception):
    """Base class for all service-level errors."""
    status_code = 500

    def __init__(self, message: str, status_code: Optional[int] = None):
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class Unauthenticated(KilledItError):
    """No session for an operation that needs one."""
    status_code = 401

    def __init__(self, message: str = "Not authenticated", status_code: Optional[int] = None):
        super().__init__(message, status_code)


class Unauthorized(KilledItError):
    """The caller does not own the resource."""
    status_code = 403


class ValidationFailed(KilledItError):
    """Bad input: file type/size, missing required field, unknown reaction."""
    status_code = 400


class RemoteFailure(KilledItError):
    """A backing store or upstream API rejected the call."""
    status_code = 502
