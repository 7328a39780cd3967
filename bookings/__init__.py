"""Equipment booking core: validation, live store, schedules, and user flows."""

from .errors import (
    AuthorizationError,
    BookingError,
    BookingNotFoundError,
    ConflictError,
    ConnectivityError,
    SyncLostError,
    ValidationError,
)
from .models import EQUIPMENT_LIST, Booking, Equipment, FormDraft, NewBooking

__all__ = [
    "AuthorizationError",
    "Booking",
    "BookingError",
    "BookingNotFoundError",
    "ConflictError",
    "ConnectivityError",
    "EQUIPMENT_LIST",
    "Equipment",
    "FormDraft",
    "NewBooking",
    "SyncLostError",
    "ValidationError",
]
