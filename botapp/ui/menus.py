"""Menu-related keyboard builders for the Telegram UI."""

from __future__ import annotations
from tracking import t

from typing import Optional

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from botapp.i18n import Translator, create_translator
from botapp.ui import constants as cb
from botapp.ui.text_blocks import MarkdownBlockBuilder


def _translator(translator: Optional[Translator]) -> Translator:
    return translator or create_translator()


def create_main_menu_keyboard(booking_count: int = 0, translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    """Create the main menu keyboard.

    Args:
        booking_count: Number of bookings in the live snapshot, shown on the list button
        translator: Display translator. Defaults to the default language if None.
    """

    t('botapp.ui.menus.create_main_menu_keyboard')
    tr = _translator(translator)

    keyboard = [
        [InlineKeyboardButton(tr.t("menu.new_booking"), callback_data=cb.MENU_NEW_BOOKING)],
        [
            InlineKeyboardButton(tr.t("menu.board"), callback_data=cb.MENU_BOARD),
            InlineKeyboardButton(tr.t("menu.list", count=booking_count), callback_data=cb.MENU_LIST),
        ],
    ]
    return InlineKeyboardMarkup(keyboard)


def format_main_menu_message(translator: Optional[Translator] = None, notice: Optional[str] = None) -> str:
    """Welcome text, optionally preceded by a one-line notice."""

    t('botapp.ui.menus.format_main_menu_message')
    tr = _translator(translator)
    builder = MarkdownBlockBuilder()
    if notice:
        builder.line(notice).blank()
    builder.heading(tr.t("welcome.title")).blank().line(tr.t("welcome.message"))
    return builder.build()


def create_back_to_menu_keyboard(translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    """Create a standard "Back to Menu" inline keyboard."""

    t('botapp.ui.menus.create_back_to_menu_keyboard')
    tr = _translator(translator)
    keyboard = [[InlineKeyboardButton(tr.t("nav.back_to_menu"), callback_data=cb.MENU_MAIN)]]
    return InlineKeyboardMarkup(keyboard)


def create_form_cancel_keyboard(translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    """Single cancel button shown while the form waits for typed input."""

    t('botapp.ui.menus.create_form_cancel_keyboard')
    tr = _translator(translator)
    return InlineKeyboardMarkup([[InlineKeyboardButton(tr.t("form.cancel"), callback_data=cb.FORM_CANCEL)]])


def create_secret_cancel_keyboard(translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    t('botapp.ui.menus.create_secret_cancel_keyboard')
    tr = _translator(translator)
    return InlineKeyboardMarkup([[InlineKeyboardButton(tr.t("nav.cancel"), callback_data=cb.SECRET_CANCEL)]])


def create_alert_keyboard(translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    t('botapp.ui.menus.create_alert_keyboard')
    tr = _translator(translator)
    return InlineKeyboardMarkup([[InlineKeyboardButton(tr.t("alert.ack"), callback_data=cb.ALERT_ACK)]])


__all__ = [
    'create_alert_keyboard',
    'create_back_to_menu_keyboard',
    'create_form_cancel_keyboard',
    'create_main_menu_keyboard',
    'create_secret_cancel_keyboard',
    'format_main_menu_message',
]
