"""
Typed failures raised by the booking services.

Services and the authorization gate raise these; the handlers registered in
``exception_handlers`` turn them into ``{"error": true, "message": ...}``
responses with the matching HTTP status.
"""


class BookingError(Exception):
    """Base class for every expected failure of the API."""

    status_code = 500

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(BookingError):
    """Malformed, missing or out-of-range input."""

    status_code = 400


class NotFoundError(BookingError):
    status_code = 404


class ConflictError(BookingError):
    """Uniqueness violation, e.g. an email that is already registered."""

    status_code = 409


class UnauthorizedError(BookingError):
    """Missing, invalid or expired credentials."""

    status_code = 401


class ForbiddenError(BookingError):
    status_code = 403
