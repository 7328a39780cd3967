"""
Interaction Controller

Owns one user's booking form and drives the two user flows:

* submit: validate the draft against the live snapshot, then create;
* delete: look the booking up, ask for its password, compare, then remove.

The password prompt and the blocking alert are injected, so the same flow
runs behind a chat conversation, a terminal, or a scripted test double.
"""

from __future__ import annotations

import logging
from datetime import datetime
from enum import Enum
from typing import Callable, Dict, Mapping, Optional, Protocol

import pytz

from tracking import t

from bookings.errors import AuthorizationError, BookingError
from bookings.models import Booking, FormDraft
from bookings.notifications import NotificationCenter
from bookings.store import BookingStore
from bookings.time_utils import today_iso
from bookings.validation import ErrorMap, is_valid, validate
from infrastructure import constants

DEFAULT_MESSAGES: Dict[str, str] = {
    "created": "Booking confirmed!",
    "create_failed": "Connection error, please try again",
    "deleted": "Booking deleted, syncing",
    "delete_failed": "Delete failed",
    "wrong_password": "Wrong password!",
    "sync_lost": "Live sync lost; bookings may be out of date. Please restart.",
}


class SecretPrompt(Protocol):
    async def ask(self, booking: Booking) -> Optional[str]:
        """Return the user's answer, or ``None`` if they cancelled."""
        ...


class Alert(Protocol):
    async def alert(self, message: str) -> None:
        """Show ``message``; it stays visible until the user acknowledges it."""
        ...


class DeleteState(Enum):
    IDLE = "idle"
    AWAITING_SECRET = "awaiting_secret"
    COMPARING = "comparing"
    REMOVING = "removing"


class DeleteOutcome(Enum):
    REMOVED = "removed"
    ABSENT = "absent"
    CANCELLED = "cancelled"
    UNAUTHORIZED = "unauthorized"
    FAILED = "failed"
    BUSY = "busy"


def authorize_deletion(booking: Booking, candidate: str) -> None:
    """Raise :class:`AuthorizationError` unless ``candidate`` equals the stored password.

    The password is stored and compared in plaintext, exactly as typed.
    """

    t('bookings.controller.authorize_deletion')
    if candidate != booking.password:
        raise AuthorizationError(booking.id)


class InteractionController:
    """Form state plus the submit and delete flows for one user."""

    def __init__(
        self,
        store: BookingStore,
        notifier: NotificationCenter,
        *,
        prompt: SecretPrompt,
        alert: Alert,
        clock: Optional[Callable[[], datetime]] = None,
        timezone: str = constants.DEFAULT_TIMEZONE,
        messages: Optional[Mapping[str, str]] = None,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        t('bookings.controller.InteractionController.__init__')
        self.store = store
        self.notifier = notifier
        self.prompt = prompt
        self.alert = alert
        self.timezone = timezone
        self.logger = logger or logging.getLogger('InteractionController')
        self._clock = clock or (lambda: datetime.now(pytz.utc))
        self.messages = dict(DEFAULT_MESSAGES)
        if messages:
            self.messages.update(messages)
        self.delete_state = DeleteState.IDLE
        self.submitting = False
        self._errors: ErrorMap = {}
        self._draft = self._default_draft()

    # ------------------------------------------------------------------
    # Form state
    @property
    def draft(self) -> FormDraft:
        """A copy of the current draft; edit it through :meth:`update_field`."""
        return self._draft.copy()

    @property
    def errors(self) -> ErrorMap:
        return dict(self._errors)

    def update_field(self, name: str, value: str) -> None:
        t('bookings.controller.InteractionController.update_field')
        if name not in FormDraft.field_names():
            raise ValueError(f"Unknown booking field {name!r}")
        setattr(self._draft, name, value)

    def reset_draft(self) -> None:
        t('bookings.controller.InteractionController.reset_draft')
        self._draft = self._default_draft()
        self._errors = {}

    def _default_draft(self) -> FormDraft:
        return FormDraft(date=today_iso(self.timezone, self._clock()))

    # ------------------------------------------------------------------
    # Submit flow
    async def submit(self) -> bool:
        """Validate and create the booking; True once the store accepted it."""

        t('bookings.controller.InteractionController.submit')
        if self.submitting:
            self.logger.warning("Submit ignored: the previous submit is still being written")
            return False

        if self.store.sync_error is not None:
            self.logger.warning("Submit refused: %s", self.store.sync_error)
            self.notifier.error(self.messages["sync_lost"])
            return False

        errors = validate(self._draft, self.store.snapshot, logger=self.logger)
        self._errors = errors
        if not is_valid(errors):
            self.logger.info("Draft rejected with errors on: %s", ", ".join(sorted(errors)))
            return False

        payload = self._draft.to_new_booking(created_at=self._clock().isoformat())
        self.submitting = True
        try:
            booking_id = await self.store.create(payload)
        except BookingError as exc:
            self.logger.error("Error adding booking: %s", exc)
            self.notifier.error(self.messages["create_failed"])
            return False
        finally:
            self.submitting = False

        self.logger.info("Booking %s submitted by %s", booking_id, payload.user_name)
        self.reset_draft()
        self.notifier.success(self.messages["created"])
        return True

    # ------------------------------------------------------------------
    # Delete flow
    async def request_delete(self, booking_id: str) -> DeleteOutcome:
        """Run the password-gated delete flow for ``booking_id``."""

        t('bookings.controller.InteractionController.request_delete')
        if self.delete_state is not DeleteState.IDLE:
            self.logger.warning(
                "Delete of %s ignored: another delete is %s",
                booking_id,
                self.delete_state.value,
            )
            return DeleteOutcome.BUSY

        booking = self.store.get(booking_id)
        if booking is None:
            self.logger.debug("Delete of %s skipped: booking already gone", booking_id)
            return DeleteOutcome.ABSENT

        if self.store.sync_error is not None:
            self.notifier.error(self.messages["sync_lost"])
            return DeleteOutcome.FAILED

        try:
            self.delete_state = DeleteState.AWAITING_SECRET
            candidate = await self.prompt.ask(booking)
            if candidate is None:
                self.logger.debug("Delete of %s abandoned at password prompt", booking_id)
                return DeleteOutcome.CANCELLED

            self.delete_state = DeleteState.COMPARING
            try:
                authorize_deletion(booking, candidate)
            except AuthorizationError:
                self.logger.warning("Wrong deletion password for booking %s", booking_id)
                await self.alert.alert(self.messages["wrong_password"])
                return DeleteOutcome.UNAUTHORIZED

            self.delete_state = DeleteState.REMOVING
            try:
                await self.store.remove(booking.id)
            except BookingError as exc:
                self.logger.error("Error deleting booking %s: %s", booking_id, exc)
                self.notifier.error(self.messages["delete_failed"])
                return DeleteOutcome.FAILED

            self.notifier.info(self.messages["deleted"])
            return DeleteOutcome.REMOVED
        finally:
            self.delete_state = DeleteState.IDLE


__all__ = [
    "Alert",
    "DEFAULT_MESSAGES",
    "DeleteOutcome",
    "DeleteState",
    "InteractionController",
    "SecretPrompt",
    "authorize_deletion",
]
