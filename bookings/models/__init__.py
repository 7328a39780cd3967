"""Booking records, the equipment catalog, and the form draft."""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Mapping, Optional, Tuple

from infrastructure import constants


@dataclass(frozen=True)
class Equipment:
    """Static catalog entry for a bookable item."""

    id: str
    name: str
    icon: str

    @property
    def label(self) -> str:
        return f"{self.icon} {self.name}"


EQUIPMENT_LIST: Tuple[Equipment, ...] = tuple(
    Equipment(id=equipment_id, name=name, icon=icon)
    for equipment_id, (name, icon) in constants.EQUIPMENT_CATALOG.items()
)


def get_equipment(equipment_id: Optional[str]) -> Optional[Equipment]:
    """Return the catalog entry for ``equipment_id`` or ``None``."""

    for equipment in EQUIPMENT_LIST:
        if equipment.id == equipment_id:
            return equipment
    return None


@dataclass(frozen=True)
class NewBooking:
    """Booking payload before the store has assigned an identifier."""

    user_name: str
    equipment_id: str
    date: str
    start_time: str
    end_time: str
    password: str
    created_at: str = ""

    def to_document(self) -> Dict[str, str]:
        """Return the stored document using the collection's field names."""

        return {
            constants.FIELD_USER_NAME: self.user_name,
            constants.FIELD_EQUIPMENT_ID: self.equipment_id,
            constants.FIELD_DATE: self.date,
            constants.FIELD_START_TIME: self.start_time,
            constants.FIELD_END_TIME: self.end_time,
            constants.FIELD_PASSWORD: self.password,
            constants.FIELD_CREATED_AT: self.created_at,
        }


@dataclass(frozen=True)
class Booking:
    """A stored booking as delivered by the live feed."""

    id: str
    user_name: str
    equipment_id: str
    date: str
    start_time: str
    end_time: str
    password: str
    created_at: str = ""

    @property
    def sort_key(self) -> Tuple[str, str]:
        return (self.date, self.start_time)

    @classmethod
    def from_document(cls, doc_id: str, data: Mapping[str, Any]) -> "Booking":
        """Build a booking from a document id and its stored fields.

        Missing or ``None`` fields become empty strings so that a partially
        written document never breaks the snapshot.
        """

        def _text(key: str) -> str:
            value = data.get(key)
            return "" if value is None else str(value)

        return cls(
            id=str(doc_id),
            user_name=_text(constants.FIELD_USER_NAME),
            equipment_id=_text(constants.FIELD_EQUIPMENT_ID),
            date=_text(constants.FIELD_DATE),
            start_time=_text(constants.FIELD_START_TIME),
            end_time=_text(constants.FIELD_END_TIME),
            password=_text(constants.FIELD_PASSWORD),
            created_at=_text(constants.FIELD_CREATED_AT),
        )

    def to_document(self) -> Dict[str, str]:
        """Return the stored fields, without the identifier."""

        return NewBooking(
            user_name=self.user_name,
            equipment_id=self.equipment_id,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            password=self.password,
            created_at=self.created_at,
        ).to_document()


@dataclass
class FormDraft:
    """User-editable booking input that has not been submitted yet."""

    user_name: str = ""
    equipment_id: str = ""
    date: str = ""
    start_time: str = constants.DEFAULT_START_TIME
    end_time: str = constants.DEFAULT_END_TIME
    password: str = ""

    @classmethod
    def field_names(cls) -> List[str]:
        return [item.name for item in fields(cls)]

    def copy(self) -> "FormDraft":
        return replace(self)

    def to_new_booking(self, created_at: str) -> NewBooking:
        """Normalise the draft into a store payload (the name is trimmed)."""

        return NewBooking(
            user_name=self.user_name.strip(),
            equipment_id=self.equipment_id,
            date=self.date,
            start_time=self.start_time,
            end_time=self.end_time,
            password=self.password,
            created_at=created_at,
        )


@dataclass(frozen=True)
class EquipmentSchedule:
    """Bookings of one equipment item on one date, in snapshot order."""

    equipment: Equipment
    date: str
    bookings: Tuple[Booking, ...] = field(default_factory=tuple)

    @property
    def is_free(self) -> bool:
        return not self.bookings


__all__ = [
    "Booking",
    "NewBooking",
    "Equipment",
    "EquipmentSchedule",
    "EQUIPMENT_LIST",
    "FormDraft",
    "get_equipment",
]
