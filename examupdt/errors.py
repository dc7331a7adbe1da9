"""
Error taxonomy shared by repositories, services and routers.
Handlers registered in main.py turn these into {success: false, error} bodies.
"""

from typing import List, Optional, Sequence


class ExamupdtError(Exception):
    """Base class for every error raised by the portal"""

    status_code = 500
    default_message = "Something went wrong"

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class ValidationError(ExamupdtError):
    """A required form field is missing. Raised before any store call."""

    status_code = 400
    default_message = "Please fill in all required fields"

    def __init__(self, message: Optional[str] = None, missing: Sequence[str] = ()):
        self.missing: List[str] = list(missing)
        super().__init__(message)


class AuthError(ExamupdtError):
    status_code = 401
    default_message = "Unauthorized"


class NotFoundError(ExamupdtError):
    status_code = 404
    default_message = "Not found"


class TransientFault(ExamupdtError):
    """Network or store failure with no further classification"""

    status_code = 500
    default_message = "Backing store request failed"


class BulkPartialFailure(ExamupdtError):
    """Some deletions of a bulk delete failed; the rest went through."""

    status_code = 500

    def __init__(self, outcome):
        self.outcome = outcome
        super().__init__(
            f"Deleted {len(outcome.succeeded)} of {outcome.attempted} items, "
            f"{len(outcome.failed)} failed"
        )
