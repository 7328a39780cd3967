"""Shared dependency container for callback domain handlers."""

from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Callable, Optional

import pytz

from bookings.store import BookingStore
from bookings.time_utils import today_iso
from botapp.handlers.state import SessionRegistry
from botapp.i18n import Translator


@dataclass
class CallbackDependencies:
    logger: Any
    store: BookingStore
    sessions: SessionRegistry
    translator: Translator
    timezone: str
    clock: Optional[Callable[[], datetime]] = None

    def today(self) -> str:
        now = self.clock() if self.clock else datetime.now(pytz.utc)
        return today_iso(self.timezone, now)


__all__ = ["CallbackDependencies"]
