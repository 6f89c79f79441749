"""Booking error taxonomy.

Each error carries the HTTP status the API answers with. Validation errors
are raised before any write reaches the store.
"""


class BookingError(Exception):
    """Base class for errors surfaced to the requesting user."""

    status_code = 400

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class DateClosed(BookingError):
    """The requested date has been cancelled by the club."""

    status_code = 409


class MembershipInactive(BookingError):
    """The requester has no booking privilege."""

    status_code = 403


class MissingField(BookingError):
    """A required booking field is absent."""

    status_code = 422

    def __init__(self, field: str, message: str = None):
        super().__init__(message or f"Missing required field: {field}")
        self.field = field


class WriteFailed(BookingError):
    """The store rejected a write. The caller may retry."""

    status_code = 503


class SlotTaken(BookingError):
    """A table or terrain box is already held on the requested date."""

    status_code = 409

    def __init__(self, resource: str, resource_id: str, holder: str):
        super().__init__(f"{resource} {resource_id} is already booked by {holder}")
        self.resource = resource
        self.resource_id = resource_id
        self.holder = holder


class UnknownResource(BookingError):
    status_code = 404


class ResourceDisabled(BookingError):
    status_code = 409


class NotFound(BookingError):
    status_code = 404


class BookingNotFound(NotFound):
    pass


class InvalidTransition(BookingError):
    """The requested status change is not allowed (cancelled is terminal)."""

    status_code = 409


class NotPermitted(BookingError):
    status_code = 403


class AuthenticationFailed(BookingError):
    status_code = 401


class DateUnavailable(BookingError):
    """The requested date is not open for booking (past, or not a game night)."""

    status_code = 409
