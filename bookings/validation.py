"""Validation of booking drafts against the current snapshot."""

from __future__ import annotations

from typing import Any, Dict, Iterable, Optional

from tracking import t

from bookings.errors import ConflictError, ValidationError
from bookings.models import Booking, FormDraft, get_equipment
from bookings.time_utils import intervals_overlap, is_grid_time, to_minutes

ErrorMap = Dict[str, ValidationError]

FIELD_USER_NAME = "user_name"
FIELD_EQUIPMENT_ID = "equipment_id"
FIELD_DATE = "date"
FIELD_PASSWORD = "password"
FIELD_TIME = "time"
FIELD_CONFLICT = "conflict"

MESSAGES = {
    FIELD_USER_NAME: "Please enter the name for the booking",
    FIELD_EQUIPMENT_ID: "Please select the equipment",
    FIELD_DATE: "Please select a date",
    FIELD_PASSWORD: "Please set a deletion password",
    FIELD_TIME: "End time must be after start time",
    "time_grid": "Please pick start and end times from the list",
}


def first_conflict(
    draft: FormDraft,
    existing_bookings: Iterable[Booking],
) -> Optional[Booking]:
    """Return the first booking (in iteration order) whose slot overlaps the draft."""

    t('bookings.validation.first_conflict')

    for booking in existing_bookings:
        if booking.equipment_id != draft.equipment_id:
            continue
        if booking.date != draft.date:
            continue
        try:
            overlapping = intervals_overlap(
                draft.start_time,
                draft.end_time,
                booking.start_time,
                booking.end_time,
            )
        except ValueError:
            # A malformed stored record cannot block anyone.
            continue
        if overlapping:
            return booking
    return None


def validate(
    draft: FormDraft,
    existing_bookings: Iterable[Booking],
    *,
    logger: Any = None,
) -> ErrorMap:
    """Check ``draft`` and return its field errors; an empty map means valid.

    ``existing_bookings`` is the full snapshot, unfiltered. Only the first
    conflicting booking is reported.
    """

    t('bookings.validation.validate')

    errors: ErrorMap = {}

    if not (draft.user_name or "").strip():
        errors[FIELD_USER_NAME] = ValidationError(FIELD_USER_NAME, MESSAGES[FIELD_USER_NAME])
    if not draft.equipment_id or get_equipment(draft.equipment_id) is None:
        errors[FIELD_EQUIPMENT_ID] = ValidationError(
            FIELD_EQUIPMENT_ID, MESSAGES[FIELD_EQUIPMENT_ID]
        )
    if not draft.date:
        errors[FIELD_DATE] = ValidationError(FIELD_DATE, MESSAGES[FIELD_DATE])
    if not draft.password:
        errors[FIELD_PASSWORD] = ValidationError(FIELD_PASSWORD, MESSAGES[FIELD_PASSWORD])

    if not (is_grid_time(draft.start_time) and is_grid_time(draft.end_time)):
        errors[FIELD_TIME] = ValidationError(FIELD_TIME, MESSAGES["time_grid"], code="time_grid")
        return errors

    if to_minutes(draft.end_time) <= to_minutes(draft.start_time):
        errors[FIELD_TIME] = ValidationError(FIELD_TIME, MESSAGES[FIELD_TIME])

    conflicting = first_conflict(draft, existing_bookings)
    if conflicting is not None:
        errors[FIELD_CONFLICT] = ConflictError(conflicting.user_name, conflicting.id)
        if logger is not None:
            logger.debug(
                "Slot %s %s-%s on %s conflicts with booking %s (%s)",
                draft.equipment_id,
                draft.start_time,
                draft.end_time,
                draft.date,
                conflicting.id,
                conflicting.user_name,
            )

    return errors


def is_valid(errors: ErrorMap) -> bool:
    t('bookings.validation.is_valid')
    return not errors


__all__ = [
    "ErrorMap",
    "FIELD_CONFLICT",
    "FIELD_DATE",
    "FIELD_EQUIPMENT_ID",
    "FIELD_PASSWORD",
    "FIELD_TIME",
    "FIELD_USER_NAME",
    "first_conflict",
    "is_valid",
    "validate",
]
