"""Error taxonomy surfaced by spotmap services.

Every error carries a user-facing message and an HTTP-shaped status code so
callers can classify failures without depending on a transport. ``UnknownError``
has no status: it wraps an unclassified upstream failure and forwards its
message verbatim.
"""

BAD_REQUEST = 400
FORBIDDEN = 403
NOT_FOUND = 404


class SpotmapError(Exception):
    """Base class for classified spotmap errors."""

    status_code: int | None = None

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(SpotmapError):
    """Input violates a representation rule (title, floor, rating, label)."""

    status_code = BAD_REQUEST


class ConflictError(SpotmapError):
    """Write conflicts with existing data, e.g. a duplicate Spot title."""

    status_code = BAD_REQUEST


class ConcurrentUpdateError(ConflictError):
    """The Spot changed between read and write; the caller may retry."""


class NotFoundError(SpotmapError):
    """Referenced Spot, Review, Tag or User does not exist."""

    status_code = NOT_FOUND


class ForbiddenError(SpotmapError):
    """The caller may not perform this action on this Spot."""

    status_code = FORBIDDEN


class UnknownError(SpotmapError):
    """Unclassified failure; the original message is passed through."""

    status_code = None


class DuplicateKeyError(Exception):
    """Raised by the store when an insert or update hits a unique constraint."""
