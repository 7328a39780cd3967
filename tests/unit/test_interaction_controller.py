from tracking import t

import asyncio
from datetime import datetime

import pytest
import pytz

from bookings.controller import (
    DEFAULT_MESSAGES,
    DeleteOutcome,
    DeleteState,
    InteractionController,
    authorize_deletion,
)
from bookings.errors import AuthorizationError, ConnectivityError
from bookings.notifications import NotificationCenter, NotificationLevel
from bookings.store import BookingStore, InMemoryBackend
from bookings.validation import FIELD_CONFLICT, FIELD_USER_NAME
from tests.helpers import DummyLogger, RecordingAlert, ScriptedPrompt, booking_document, make_booking

COLLECTION = "bookings"
FIXED_NOW = pytz.utc.localize(datetime(2025, 5, 31, 20, 0))


def _clock():
    return FIXED_NOW


def _build(*answers, seed=(), backend=None):
    backend = backend or InMemoryBackend()
    for booking in seed:
        backend.seed(COLLECTION, booking.id, booking_document(booking))
    store = BookingStore(backend, collection=COLLECTION, timeout=1.0, logger=DummyLogger())
    store.subscribe(lambda snapshot: None)
    prompt = ScriptedPrompt(*answers)
    alert = RecordingAlert()
    notifier = NotificationCenter(duration=60, logger=DummyLogger())
    controller = InteractionController(
        store,
        notifier,
        prompt=prompt,
        alert=alert,
        clock=_clock,
        timezone="Asia/Taipei",
        logger=DummyLogger(),
    )
    return controller, store, backend, prompt, alert, notifier


def _fill(controller, **overrides):
    values = dict(
        user_name=" Bob ",
        equipment_id="projector",
        date="2025-06-01",
        start_time="09:00",
        end_time="10:00",
        password="secret",
    )
    values.update(overrides)
    for name, value in values.items():
        controller.update_field(name, value)


def test_default_draft_uses_today_in_configured_timezone():
    t('tests.unit.test_interaction_controller.test_default_draft_uses_today_in_configured_timezone')
    controller, *_ = _build()
    draft = controller.draft
    assert draft.date == "2025-06-01"
    assert (draft.start_time, draft.end_time) == ("09:00", "10:00")
    assert draft.user_name == ""


def test_update_field_rejects_unknown_names():
    t('tests.unit.test_interaction_controller.test_update_field_rejects_unknown_names')
    controller, *_ = _build()
    with pytest.raises(ValueError):
        controller.update_field("colour", "red")


def test_draft_property_returns_a_copy():
    t('tests.unit.test_interaction_controller.test_draft_property_returns_a_copy')
    controller, *_ = _build()
    draft = controller.draft
    draft.user_name = "Mallory"
    assert controller.draft.user_name == ""


def test_authorize_deletion_compares_exactly():
    t('tests.unit.test_interaction_controller.test_authorize_deletion_compares_exactly')
    booking = make_booking(password="pw")
    authorize_deletion(booking, "pw")
    with pytest.raises(AuthorizationError):
        authorize_deletion(booking, "pw ")
    with pytest.raises(AuthorizationError):
        authorize_deletion(booking, "")


@pytest.mark.asyncio
async def test_submit_creates_booking_and_resets_form():
    t('tests.unit.test_interaction_controller.test_submit_creates_booking_and_resets_form')
    controller, store, backend, _, _, notifier = _build()
    _fill(controller)

    assert await controller.submit() is True

    [booking] = store.snapshot
    assert booking.user_name == "Bob"
    assert booking.password == "secret"
    assert booking.created_at == FIXED_NOW.isoformat()
    assert controller.draft.user_name == ""
    assert controller.errors == {}
    assert notifier.current.level is NotificationLevel.SUCCESS
    assert notifier.current.message == DEFAULT_MESSAGES["created"]


@pytest.mark.asyncio
async def test_submit_with_errors_never_touches_store():
    t('tests.unit.test_interaction_controller.test_submit_with_errors_never_touches_store')
    existing = make_booking("b1", user_name="Alice", start_time="09:30", end_time="10:30")
    controller, store, backend, _, _, notifier = _build(seed=[existing])
    _fill(controller, user_name="")

    assert await controller.submit() is False

    assert backend.add_calls == 0
    assert set(controller.errors) == {FIELD_USER_NAME, FIELD_CONFLICT}
    assert controller.errors[FIELD_CONFLICT].user_name == "Alice"
    assert controller.draft.password == "secret"
    assert notifier.current is None


@pytest.mark.asyncio
async def test_submit_connectivity_failure_keeps_draft_and_shows_error():
    t('tests.unit.test_interaction_controller.test_submit_connectivity_failure_keeps_draft_and_shows_error')
    controller, store, backend, _, _, notifier = _build()
    backend.fail_writes = ConnectivityError("offline")
    _fill(controller)

    assert await controller.submit() is False

    assert store.snapshot == ()
    assert controller.draft.user_name == " Bob "
    assert notifier.current.level is NotificationLevel.ERROR
    assert notifier.current.message == DEFAULT_MESSAGES["create_failed"]


@pytest.mark.asyncio
async def test_submit_refused_after_sync_lost():
    t('tests.unit.test_interaction_controller.test_submit_refused_after_sync_lost')
    controller, store, backend, _, _, notifier = _build()
    backend.emit_error(COLLECTION, RuntimeError("gone"))
    _fill(controller)

    assert await controller.submit() is False
    assert backend.add_calls == 0
    assert notifier.current.message == DEFAULT_MESSAGES["sync_lost"]


@pytest.mark.asyncio
async def test_delete_with_matching_password_removes_booking():
    t('tests.unit.test_interaction_controller.test_delete_with_matching_password_removes_booking')
    controller, store, backend, prompt, alert, notifier = _build("pw", seed=[make_booking("b1", password="pw")])

    outcome = await controller.request_delete("b1")

    assert outcome is DeleteOutcome.REMOVED
    assert store.snapshot == ()
    assert [booking.id for booking in prompt.asked] == ["b1"]
    assert alert.messages == []
    assert notifier.current.level is NotificationLevel.INFO
    assert controller.delete_state is DeleteState.IDLE


@pytest.mark.asyncio
async def test_delete_with_wrong_password_alerts_and_keeps_booking():
    t('tests.unit.test_interaction_controller.test_delete_with_wrong_password_alerts_and_keeps_booking')
    controller, store, backend, prompt, alert, notifier = _build("nope", seed=[make_booking("b1", password="pw")])

    outcome = await controller.request_delete("b1")

    assert outcome is DeleteOutcome.UNAUTHORIZED
    assert [booking.id for booking in store.snapshot] == ["b1"]
    assert backend.delete_calls == 0
    assert alert.messages == [DEFAULT_MESSAGES["wrong_password"]]
    assert controller.delete_state is DeleteState.IDLE


@pytest.mark.asyncio
async def test_cancelled_prompt_does_nothing():
    t('tests.unit.test_interaction_controller.test_cancelled_prompt_does_nothing')
    controller, store, backend, prompt, alert, notifier = _build(None, seed=[make_booking("b1")])

    assert await controller.request_delete("b1") is DeleteOutcome.CANCELLED
    assert backend.delete_calls == 0
    assert alert.messages == []
    assert notifier.current is None


@pytest.mark.asyncio
async def test_delete_of_missing_booking_is_absent_without_prompt():
    t('tests.unit.test_interaction_controller.test_delete_of_missing_booking_is_absent_without_prompt')
    controller, store, backend, prompt, alert, notifier = _build("pw")

    assert await controller.request_delete("ghost") is DeleteOutcome.ABSENT
    assert prompt.asked == []


@pytest.mark.asyncio
async def test_remove_failure_reports_delete_failed():
    t('tests.unit.test_interaction_controller.test_remove_failure_reports_delete_failed')
    controller, store, backend, prompt, alert, notifier = _build("pw", seed=[make_booking("b1", password="pw")])
    backend.fail_writes = ConnectivityError("offline")

    assert await controller.request_delete("b1") is DeleteOutcome.FAILED
    assert notifier.current.message == DEFAULT_MESSAGES["delete_failed"]
    assert controller.delete_state is DeleteState.IDLE


class _BlockingPrompt:
    def __init__(self):
        self.release = asyncio.Event()

    async def ask(self, booking):
        await self.release.wait()
        return None


@pytest.mark.asyncio
async def test_second_delete_while_prompt_open_is_busy():
    t('tests.unit.test_interaction_controller.test_second_delete_while_prompt_open_is_busy')
    controller, store, *_ = _build(seed=[make_booking("b1"), make_booking("b2", start_time="11:00", end_time="12:00")])
    prompt = _BlockingPrompt()
    controller.prompt = prompt

    first = asyncio.ensure_future(controller.request_delete("b1"))
    await asyncio.sleep(0)
    assert controller.delete_state is DeleteState.AWAITING_SECRET

    assert await controller.request_delete("b2") is DeleteOutcome.BUSY

    prompt.release.set()
    assert await first is DeleteOutcome.CANCELLED
    assert controller.delete_state is DeleteState.IDLE


@pytest.mark.asyncio
async def test_second_submit_while_first_is_writing_is_ignored():
    t('tests.unit.test_interaction_controller.test_second_submit_while_first_is_writing_is_ignored')
    controller, store, backend, *_ = _build()
    backend.write_delay = 0.05
    _fill(controller)

    first, second = await asyncio.gather(controller.submit(), controller.submit())

    assert (first, second) == (True, False)
    assert backend.add_calls == 1
    [booking] = store.snapshot
    assert (booking.start_time, booking.end_time) == ("09:00", "10:00")
    assert controller.submitting is False


@pytest.mark.asyncio
async def test_submit_flag_is_cleared_after_failed_write():
    t('tests.unit.test_interaction_controller.test_submit_flag_is_cleared_after_failed_write')
    controller, store, backend, *_ = _build()
    backend.fail_writes = ConnectivityError("offline")
    _fill(controller)

    assert await controller.submit() is False
    assert controller.submitting is False

    backend.fail_writes = None
    assert await controller.submit() is True
    assert len(store.snapshot) == 1
