from tracking import t

import asyncio

import pytest

from bookings.notifications import NotificationCenter, NotificationLevel
from tests.helpers import DummyLogger


@pytest.mark.asyncio
async def test_notification_dismisses_itself_after_duration():
    t('tests.unit.test_notification_center.test_notification_dismisses_itself_after_duration')
    center = NotificationCenter(duration=0.02, logger=DummyLogger())
    seen = []
    center.add_listener(seen.append)

    center.success("saved")
    assert center.current.message == "saved"
    await asyncio.sleep(0.08)

    assert center.current is None
    assert [item.message if item else None for item in seen] == ["saved", None]


@pytest.mark.asyncio
async def test_new_notification_replaces_current_and_restarts_timer():
    t('tests.unit.test_notification_center.test_new_notification_replaces_current_and_restarts_timer')
    center = NotificationCenter(duration=0.05, logger=DummyLogger())

    first = center.error("first")
    await asyncio.sleep(0.03)
    second = center.info("second")
    await asyncio.sleep(0.03)

    # The first timer would have fired by now
    assert center.current == second
    assert center.current.level is NotificationLevel.INFO
    assert first.sequence < second.sequence

    await asyncio.sleep(0.06)
    assert center.current is None


@pytest.mark.asyncio
async def test_stale_dismiss_leaves_newer_notification():
    t('tests.unit.test_notification_center.test_stale_dismiss_leaves_newer_notification')
    center = NotificationCenter(duration=10, logger=DummyLogger())
    old = center.success("old")
    new = center.success("new")

    center.dismiss(old.sequence)
    assert center.current == new

    center.dismiss()
    assert center.current is None


@pytest.mark.asyncio
async def test_removed_listener_is_not_called():
    t('tests.unit.test_notification_center.test_removed_listener_is_not_called')
    center = NotificationCenter(duration=10, logger=DummyLogger())
    seen = []
    remove = center.add_listener(seen.append)
    remove()
    remove()

    center.success("quiet")
    assert seen == []
    center.dismiss()
