"""Error taxonomy shared by the booking core and the bot layer."""

from __future__ import annotations

from typing import Optional


class BookingError(Exception):
    """Base class for every booking-related failure."""


class ValidationError(BookingError):
    """A field-level problem with a booking draft.

    Validation errors are returned (not raised) by the validator, keyed by
    field name, so the presentation layer can show them next to the field.
    """

    def __init__(self, field: str, message: str, code: Optional[str] = None) -> None:
        super().__init__(message)
        self.field = field
        self.message = message
        self.code = code or field

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ValidationError):
            return NotImplemented
        return (
            type(self) is type(other)
            and self.field == other.field
            and self.code == other.code
            and self.message == other.message
        )

    def __hash__(self) -> int:
        return hash((type(self).__name__, self.field, self.code, self.message))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(field={self.field!r}, message={self.message!r})"


class ConflictError(ValidationError):
    """The draft's slot overlaps an existing booking."""

    def __init__(self, user_name: str, booking_id: Optional[str] = None) -> None:
        super().__init__("conflict", f"Time conflict! Already booked by {user_name}")
        self.user_name = user_name
        self.booking_id = booking_id


class ConnectivityError(BookingError):
    """The remote store could not complete a request."""


class BookingNotFoundError(ConnectivityError):
    """The booking to remove no longer exists in the remote store."""

    def __init__(self, booking_id: str) -> None:
        super().__init__(f"Booking {booking_id} not found")
        self.booking_id = booking_id


class SyncLostError(ConnectivityError):
    """The live feed failed or stopped; the local snapshot is stale."""


class AuthorizationError(BookingError):
    """The deletion password did not match the stored one."""

    def __init__(self, booking_id: str) -> None:
        super().__init__("Wrong password")
        self.booking_id = booking_id


__all__ = [
    "BookingError",
    "ValidationError",
    "ConflictError",
    "ConnectivityError",
    "BookingNotFoundError",
    "SyncLostError",
    "AuthorizationError",
]
