"""Board and list views over the live booking snapshot."""

from __future__ import annotations
from tracking import t

from itertools import groupby
from typing import List, Optional, Sequence

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from bookings.models import Booking, EquipmentSchedule, get_equipment
from bookings.notifications import Notification
from bookings.time_utils import format_display_date, shift_date, upcoming_dates
from botapp.i18n import Translator, create_translator
from botapp.ui import constants as cb
from botapp.ui.booking import DATES_PER_ROW, format_short_date
from botapp.ui.text_blocks import MarkdownBlockBuilder


def _delete_button(booking: Booking, tr: Translator) -> InlineKeyboardButton:
    label = tr.t(
        "delete.button",
        start=booking.start_time,
        end=booking.end_time,
        user_name=booking.user_name,
    )
    return InlineKeyboardButton(label, callback_data=f"{cb.PREFIX_DELETE}{booking.id}")


def _status_lines(builder: MarkdownBlockBuilder, tr: Translator, *, loaded: bool, sync_lost: bool) -> None:
    if sync_lost:
        builder.line(tr.t("view.sync_lost")).blank()
    if not loaded:
        builder.line(tr.t("view.loading")).blank()


def create_board_date_keyboard(today: str, translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    """Date picker leading into the board view."""

    t('botapp.ui.board.create_board_date_keyboard')
    tr = translator or create_translator()
    language = tr.get_language()
    buttons = [
        InlineKeyboardButton(format_short_date(day, language), callback_data=f"{cb.PREFIX_BOARD}{day}")
        for day in upcoming_dates(today)
    ]
    keyboard = [buttons[index:index + DATES_PER_ROW] for index in range(0, len(buttons), DATES_PER_ROW)]
    keyboard.append([InlineKeyboardButton(tr.t("nav.back_to_menu"), callback_data=cb.MENU_MAIN)])
    return InlineKeyboardMarkup(keyboard)


def format_board_message(
    date: str,
    board: Sequence[EquipmentSchedule],
    translator: Optional[Translator] = None,
    *,
    loaded: bool = True,
    sync_lost: bool = False,
) -> str:
    """One section per equipment with that day's bookings in time order."""

    t('botapp.ui.board.format_board_message')
    tr = translator or create_translator()
    builder = MarkdownBlockBuilder()
    _status_lines(builder, tr, loaded=loaded, sync_lost=sync_lost)
    builder.heading(tr.t("board.title", date=format_display_date(date, tr.get_language())))

    for schedule in board:
        builder.blank().heading(schedule.equipment.label)
        if schedule.is_free:
            builder.line(tr.t("board.free"))
            continue
        for booking in schedule.bookings:
            builder.bullet(f"{booking.start_time} - {booking.end_time}  {booking.user_name}")

    return builder.build()


def create_board_keyboard(
    date: str,
    board: Sequence[EquipmentSchedule],
    translator: Optional[Translator] = None,
) -> InlineKeyboardMarkup:
    """Delete buttons for every booking shown, then day navigation."""

    t('botapp.ui.board.create_board_keyboard')
    tr = translator or create_translator()
    keyboard: List[List[InlineKeyboardButton]] = []
    for schedule in board:
        for booking in schedule.bookings:
            keyboard.append([_delete_button(booking, tr)])

    keyboard.append([
        InlineKeyboardButton(tr.t("nav.prev_day"), callback_data=f"{cb.PREFIX_BOARD}{shift_date(date, -1)}"),
        InlineKeyboardButton(tr.t("nav.next_day"), callback_data=f"{cb.PREFIX_BOARD}{shift_date(date, 1)}"),
    ])
    keyboard.append([
        InlineKeyboardButton(tr.t("nav.refresh"), callback_data=f"{cb.PREFIX_BOARD}{date}"),
        InlineKeyboardButton(tr.t("nav.back_to_menu"), callback_data=cb.MENU_MAIN),
    ])
    return InlineKeyboardMarkup(keyboard)


def format_bookings_list(
    bookings: Sequence[Booking],
    translator: Optional[Translator] = None,
    *,
    loaded: bool = True,
    sync_lost: bool = False,
) -> str:
    """Every booking grouped by date, in snapshot order."""

    t('botapp.ui.board.format_bookings_list')
    tr = translator or create_translator()
    language = tr.get_language()
    builder = MarkdownBlockBuilder()
    _status_lines(builder, tr, loaded=loaded, sync_lost=sync_lost)
    builder.heading(tr.t("list.title", count=len(bookings)))

    if not bookings:
        builder.blank().line(tr.t("list.empty"))
        return builder.build()

    for date, day_bookings in groupby(bookings, key=lambda booking: booking.date):
        builder.blank().heading(format_display_date(date, language) if date else "-")
        for booking in day_bookings:
            equipment = get_equipment(booking.equipment_id)
            equipment_label = equipment.label if equipment else booking.equipment_id
            builder.bullet(
                f"{booking.start_time} - {booking.end_time}  {equipment_label}  {booking.user_name}"
            )

    return builder.build()


def create_list_keyboard(bookings: Sequence[Booking], translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    t('botapp.ui.board.create_list_keyboard')
    tr = translator or create_translator()
    keyboard = [[_delete_button(booking, tr)] for booking in bookings]
    keyboard.append([InlineKeyboardButton(tr.t("nav.back_to_menu"), callback_data=cb.MENU_MAIN)])
    return InlineKeyboardMarkup(keyboard)


def format_notification(notification: Notification) -> str:
    """Plain-text toast line with a level icon."""

    t('botapp.ui.board.format_notification')
    icon = cb.LEVEL_ICONS.get(notification.level.value, "")
    return f"{icon} {notification.message}".strip()


__all__ = [
    'create_board_date_keyboard',
    'create_board_keyboard',
    'create_list_keyboard',
    'format_board_message',
    'format_bookings_list',
    'format_notification',
]
