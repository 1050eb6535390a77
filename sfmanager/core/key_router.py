"""Keyboard routing helpers for sfmanager."""

import curses

from ..utils import normalize_key_code
from .actions import AppCommand, Command


def _key(name):
    return getattr(curses, name, None)


def _enter_codes():
    return {10, 13, _key('KEY_ENTER')} - {None}


def build_key_table():
    """Map curses key codes to commands; missing constants are skipped."""
    table = {
        _key('KEY_F1'): AppCommand.HELP,
        _key('KEY_F2'): AppCommand.COPY,
        _key('KEY_F6'): AppCommand.MOVE,
        _key('KEY_F8'): AppCommand.DELETE,
        _key('KEY_DC'): AppCommand.DELETE,
        _key('KEY_F5'): AppCommand.REFRESH,
        _key('KEY_F12'): AppCommand.QUIT,
        17: AppCommand.QUIT,  # Ctrl+Q
        _key('KEY_DOWN'): AppCommand.MOVE_DOWN,
        _key('KEY_UP'): AppCommand.MOVE_UP,
        _key('KEY_HOME'): AppCommand.JUMP_FIRST,
        _key('KEY_END'): AppCommand.JUMP_LAST,
        _key('KEY_RIGHT'): AppCommand.ENTER_DIR,
        _key('KEY_ENTER'): AppCommand.ENTER_DIR,
        10: AppCommand.ENTER_DIR,
        13: AppCommand.ENTER_DIR,
        _key('KEY_LEFT'): AppCommand.LEAVE_DIR,
        _key('KEY_BACKSPACE'): AppCommand.SEARCH_BACKSPACE,
        127: AppCommand.SEARCH_BACKSPACE,
        8: AppCommand.SEARCH_BACKSPACE,
        9: AppCommand.SWITCH_PANEL,
        27: AppCommand.DISMISS,
    }
    table.pop(None, None)
    return table


def map_key(key, popup_open=False):
    """Translate one key from get_wch() into a Command, or None when unbound."""
    key_code = normalize_key_code(key)
    if key_code is None:
        return None
    # get_wch() returns text as str; function keys arrive as int codes.
    if isinstance(key, str) and key.isprintable():
        return Command(AppCommand.SEARCH_CHAR, key)

    command = build_key_table().get(key_code)
    if popup_open and key_code in _enter_codes():
        return Command(AppCommand.DISMISS)
    if command is not None:
        return Command(command)
    return None


def handle_key_event(app, key):
    """Route one key to the app dispatcher."""
    command = map_key(key, popup_open=app.popup.is_open())
    if command is None:
        return False
    app.dispatch(command)
    return True
