"""Facade for Telegram UI helpers."""

from __future__ import annotations

from .board import (
    create_board_date_keyboard as _create_board_date_keyboard,
    create_board_keyboard as _create_board_keyboard,
    create_list_keyboard as _create_list_keyboard,
    format_board_message as _format_board_message,
    format_bookings_list as _format_bookings_list,
    format_notification as _format_notification,
)
from .booking import (
    create_end_time_keyboard as _create_end_time_keyboard,
    create_equipment_keyboard as _create_equipment_keyboard,
    create_form_date_keyboard as _create_form_date_keyboard,
    create_start_time_keyboard as _create_start_time_keyboard,
    create_summary_keyboard as _create_summary_keyboard,
    format_form_summary as _format_form_summary,
)
from .menus import (
    create_alert_keyboard as _create_alert_keyboard,
    create_back_to_menu_keyboard as _create_back_to_menu_keyboard,
    create_form_cancel_keyboard as _create_form_cancel_keyboard,
    create_main_menu_keyboard as _create_main_menu_keyboard,
    create_secret_cancel_keyboard as _create_secret_cancel_keyboard,
    format_main_menu_message as _format_main_menu_message,
)


class TelegramUI:
    """Single import point mapping to the modular UI helpers."""

    create_main_menu_keyboard = staticmethod(_create_main_menu_keyboard)
    format_main_menu_message = staticmethod(_format_main_menu_message)
    create_back_to_menu_keyboard = staticmethod(_create_back_to_menu_keyboard)
    create_form_cancel_keyboard = staticmethod(_create_form_cancel_keyboard)
    create_secret_cancel_keyboard = staticmethod(_create_secret_cancel_keyboard)
    create_alert_keyboard = staticmethod(_create_alert_keyboard)

    create_equipment_keyboard = staticmethod(_create_equipment_keyboard)
    create_form_date_keyboard = staticmethod(_create_form_date_keyboard)
    create_start_time_keyboard = staticmethod(_create_start_time_keyboard)
    create_end_time_keyboard = staticmethod(_create_end_time_keyboard)
    create_summary_keyboard = staticmethod(_create_summary_keyboard)
    format_form_summary = staticmethod(_format_form_summary)

    create_board_date_keyboard = staticmethod(_create_board_date_keyboard)
    create_board_keyboard = staticmethod(_create_board_keyboard)
    format_board_message = staticmethod(_format_board_message)
    create_list_keyboard = staticmethod(_create_list_keyboard)
    format_bookings_list = staticmethod(_format_bookings_list)
    format_notification = staticmethod(_format_notification)


__all__ = ['TelegramUI']
