"""Per-equipment views derived from the booking snapshot."""

from __future__ import annotations

from typing import Iterable, List, Sequence

from tracking import t

from bookings.models import EQUIPMENT_LIST, Booking, Equipment, EquipmentSchedule


def schedule_for(equipment_id: str, date: str, all_bookings: Iterable[Booking]) -> List[Booking]:
    """Bookings for one equipment item on one date, in snapshot order."""

    t('bookings.schedule.schedule_for')

    return [
        booking
        for booking in all_bookings
        if booking.equipment_id == equipment_id and booking.date == date
    ]


def board_for(
    date: str,
    all_bookings: Sequence[Booking],
    catalog: Sequence[Equipment] = EQUIPMENT_LIST,
) -> List[EquipmentSchedule]:
    """One schedule per catalog item for ``date``, in catalog order."""

    t('bookings.schedule.board_for')

    return [
        EquipmentSchedule(
            equipment=equipment,
            date=date,
            bookings=tuple(schedule_for(equipment.id, date, all_bookings)),
        )
        for equipment in catalog
    ]


def count_bookings(all_bookings: Sequence[Booking]) -> int:
    t('bookings.schedule.count_bookings')
    return len(all_bookings)


__all__ = ["schedule_for", "board_for", "count_bookings"]
