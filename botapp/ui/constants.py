"""Callback data tokens shared by keyboards and the callback router."""

from __future__ import annotations

MENU_MAIN = 'menu_main'
MENU_NEW_BOOKING = 'menu_new'
MENU_BOARD = 'menu_board'
MENU_LIST = 'menu_list'

FORM_CANCEL = 'form_cancel'
FORM_SUBMIT = 'form_submit'
FORM_RETIME = 'form_retime'

SECRET_CANCEL = 'secret_cancel'
ALERT_ACK = 'alert_ack'

# Prefixes carry a payload after the colon
PREFIX_EQUIPMENT = 'equip:'
PREFIX_FORM_DATE = 'fdate:'
PREFIX_START = 'start:'
PREFIX_END = 'end:'
PREFIX_BOARD = 'board:'
PREFIX_DELETE = 'del:'

LEVEL_ICONS = {
    'success': '✅',
    'error': '❌',
    'info': 'ℹ️',
}

__all__ = [
    'ALERT_ACK',
    'FORM_CANCEL',
    'FORM_RETIME',
    'FORM_SUBMIT',
    'LEVEL_ICONS',
    'MENU_BOARD',
    'MENU_LIST',
    'MENU_MAIN',
    'MENU_NEW_BOOKING',
    'PREFIX_BOARD',
    'PREFIX_DELETE',
    'PREFIX_END',
    'PREFIX_EQUIPMENT',
    'PREFIX_FORM_DATE',
    'PREFIX_START',
    'SECRET_CANCEL',
]
