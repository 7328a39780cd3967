"""Keyboards and message formatting for the booking form."""

from __future__ import annotations
from tracking import t

from typing import List, Mapping, Optional, Sequence

from telegram import InlineKeyboardButton, InlineKeyboardMarkup

from bookings.errors import ConflictError, ValidationError
from bookings.models import EQUIPMENT_LIST, Equipment, FormDraft, get_equipment
from bookings.time_utils import TIME_OPTIONS, format_display_date, parse_iso_date, to_minutes, upcoming_dates
from bookings.validation import FIELD_CONFLICT, FIELD_DATE, FIELD_EQUIPMENT_ID, FIELD_PASSWORD, FIELD_TIME, FIELD_USER_NAME
from botapp.i18n import Translator, create_translator
from botapp.ui import constants as cb
from botapp.ui.text_blocks import MarkdownBlockBuilder

TIMES_PER_ROW = 4
DATES_PER_ROW = 2

# Order in which field errors are listed under the summary
ERROR_ORDER = (
    FIELD_USER_NAME,
    FIELD_PASSWORD,
    FIELD_EQUIPMENT_ID,
    FIELD_DATE,
    FIELD_TIME,
    FIELD_CONFLICT,
)

_ZH_SHORT_WEEKDAYS = ["一", "二", "三", "四", "五", "六", "日"]
_EN_SHORT_WEEKDAYS = ["Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun"]


def format_short_date(value: str, language: str) -> str:
    """Compact button label: ``6/1 (日)`` or ``Sun 6/1``."""

    t('botapp.ui.booking.format_short_date')
    day = parse_iso_date(value)
    if language == "en":
        return f"{_EN_SHORT_WEEKDAYS[day.weekday()]} {day.month}/{day.day}"
    return f"{day.month}/{day.day} ({_ZH_SHORT_WEEKDAYS[day.weekday()]})"


def _chunk(buttons: List[InlineKeyboardButton], size: int) -> List[List[InlineKeyboardButton]]:
    return [buttons[index:index + size] for index in range(0, len(buttons), size)]


def _cancel_row(tr: Translator) -> List[InlineKeyboardButton]:
    return [InlineKeyboardButton(tr.t("form.cancel"), callback_data=cb.FORM_CANCEL)]


def create_equipment_keyboard(
    translator: Optional[Translator] = None,
    catalog: Sequence[Equipment] = EQUIPMENT_LIST,
) -> InlineKeyboardMarkup:
    """One button per catalog item, in catalog order."""

    t('botapp.ui.booking.create_equipment_keyboard')
    tr = translator or create_translator()
    keyboard = [
        [InlineKeyboardButton(equipment.label, callback_data=f"{cb.PREFIX_EQUIPMENT}{equipment.id}")]
        for equipment in catalog
    ]
    keyboard.append(_cancel_row(tr))
    return InlineKeyboardMarkup(keyboard)


def create_form_date_keyboard(today: str, translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    """Date choices for the form, starting with ``today``."""

    t('botapp.ui.booking.create_form_date_keyboard')
    tr = translator or create_translator()
    language = tr.get_language()
    buttons = [
        InlineKeyboardButton(format_short_date(day, language), callback_data=f"{cb.PREFIX_FORM_DATE}{day}")
        for day in upcoming_dates(today)
    ]
    keyboard = _chunk(buttons, DATES_PER_ROW)
    keyboard.append(_cancel_row(tr))
    return InlineKeyboardMarkup(keyboard)


def start_time_choices() -> List[str]:
    """Every grid time except the last, which would leave no valid end."""
    t('botapp.ui.booking.start_time_choices')
    return TIME_OPTIONS[:-1]


def end_time_choices(start_time: str) -> List[str]:
    t('botapp.ui.booking.end_time_choices')
    start = to_minutes(start_time)
    return [option for option in TIME_OPTIONS if to_minutes(option) > start]


def _time_keyboard(options: List[str], prefix: str, selected: Optional[str], tr: Translator) -> InlineKeyboardMarkup:
    buttons = [
        InlineKeyboardButton(
            f"✓ {option}" if option == selected else option,
            callback_data=f"{prefix}{option}",
        )
        for option in options
    ]
    keyboard = _chunk(buttons, TIMES_PER_ROW)
    keyboard.append(_cancel_row(tr))
    return InlineKeyboardMarkup(keyboard)


def create_start_time_keyboard(selected: Optional[str] = None, translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    t('botapp.ui.booking.create_start_time_keyboard')
    tr = translator or create_translator()
    return _time_keyboard(start_time_choices(), cb.PREFIX_START, selected, tr)


def create_end_time_keyboard(
    start_time: str,
    selected: Optional[str] = None,
    translator: Optional[Translator] = None,
) -> InlineKeyboardMarkup:
    """End times strictly after ``start_time``."""

    t('botapp.ui.booking.create_end_time_keyboard')
    tr = translator or create_translator()
    return _time_keyboard(end_time_choices(start_time), cb.PREFIX_END, selected, tr)


def create_summary_keyboard(has_errors: bool = False, translator: Optional[Translator] = None) -> InlineKeyboardMarkup:
    """Confirm / change time / start over / cancel.

    The confirm button is hidden while the summary lists errors; the user
    fixes the time or starts over first.
    """

    t('botapp.ui.booking.create_summary_keyboard')
    tr = translator or create_translator()
    keyboard = []
    if not has_errors:
        keyboard.append([InlineKeyboardButton(tr.t("form.confirm"), callback_data=cb.FORM_SUBMIT)])
    keyboard.append([
        InlineKeyboardButton(tr.t("form.retime"), callback_data=cb.FORM_RETIME),
        InlineKeyboardButton(tr.t("form.restart"), callback_data=cb.MENU_NEW_BOOKING),
    ])
    keyboard.append(_cancel_row(tr))
    return InlineKeyboardMarkup(keyboard)


def translate_error(error: ValidationError, translator: Translator) -> str:
    """Display text for a validation error, keyed by its code."""

    t('botapp.ui.booking.translate_error')
    if isinstance(error, ConflictError):
        return translator.t("form.error.conflict", user_name=error.user_name)
    return translator.t(f"form.error.{error.code}")


def format_form_summary(
    draft: FormDraft,
    errors: Optional[Mapping[str, ValidationError]] = None,
    translator: Optional[Translator] = None,
) -> str:
    """MarkdownV2 summary of the draft with any errors listed underneath."""

    t('botapp.ui.booking.format_form_summary')
    tr = translator or create_translator()
    equipment = get_equipment(draft.equipment_id)
    date_text = format_display_date(draft.date, tr.get_language()) if draft.date else "-"

    builder = MarkdownBlockBuilder()
    builder.heading(tr.t("form.summary_title")).blank()
    builder.field(tr.t("form.field.user_name"), draft.user_name.strip() or "-")
    builder.field(tr.t("form.field.password"), "•" * len(draft.password) if draft.password else "-")
    builder.field(tr.t("form.field.equipment"), equipment.label if equipment else "-")
    builder.field(tr.t("form.field.date"), date_text)
    builder.field(tr.t("form.field.time"), f"{draft.start_time} - {draft.end_time}")

    if errors:
        builder.blank()
        for field_name in ERROR_ORDER:
            error = errors.get(field_name)
            if error is not None:
                builder.bullet(f"⚠️ {translate_error(error, tr)}")

    return builder.build()


__all__ = [
    'create_end_time_keyboard',
    'create_equipment_keyboard',
    'create_form_date_keyboard',
    'create_start_time_keyboard',
    'create_summary_keyboard',
    'end_time_choices',
    'format_form_summary',
    'format_short_date',
    'start_time_choices',
    'translate_error',
]
