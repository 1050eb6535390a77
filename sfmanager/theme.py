"""Theme definitions and lookup helpers for sfmanager."""

from dataclasses import dataclass
import curses
from typing import Optional

from .constants import (
    C_FILE_ARCHIVE,
    C_FILE_AUDIO,
    C_FILE_DIRECTORY,
    C_FILE_IMAGE,
    C_FILE_PLAIN,
    C_FILE_VIDEO,
    C_PANEL_ACTIVE,
    C_PANEL_ERROR,
    C_PANEL_INACTIVE,
    C_POPUP,
    C_POPUP_ERROR,
    C_SELECTED_ACTIVE,
    C_SELECTED_INACTIVE,
    C_STATUS,
    DEFAULT_THEME,
)
from .panel.core import Category

# Test doubles may expose only a subset of color constants.
for _name, _fallback in {
    "COLOR_BLACK": 0,
    "COLOR_RED": 1,
    "COLOR_GREEN": 2,
    "COLOR_YELLOW": 3,
    "COLOR_BLUE": 4,
    "COLOR_MAGENTA": 5,
    "COLOR_CYAN": 6,
    "COLOR_WHITE": 7,
}.items():
    if not hasattr(curses, _name):
        setattr(curses, _name, _fallback)

ROLE_TO_PAIR_ID = {
    "panel_active": C_PANEL_ACTIVE,
    "panel_inactive": C_PANEL_INACTIVE,
    "selected_active": C_SELECTED_ACTIVE,
    "selected_inactive": C_SELECTED_INACTIVE,
    "file_directory": C_FILE_DIRECTORY,
    "file_plain": C_FILE_PLAIN,
    "file_image": C_FILE_IMAGE,
    "file_audio": C_FILE_AUDIO,
    "file_archive": C_FILE_ARCHIVE,
    "file_video": C_FILE_VIDEO,
    "popup": C_POPUP,
    "popup_error": C_POPUP_ERROR,
    "status": C_STATUS,
    "panel_error": C_PANEL_ERROR,
}

# Display category -> semantic role; roles resolve to colors per theme.
CATEGORY_ROLES = {
    Category.DIRECTORY: "file_directory",
    Category.FILE: "file_plain",
    Category.IMAGE: "file_image",
    Category.AUDIO: "file_audio",
    Category.ARCHIVE: "file_archive",
    Category.VIDEO: "file_video",
}


def role_for_category(category):
    return CATEGORY_ROLES.get(category, "file_plain")


@dataclass(frozen=True)
class Theme:
    """Semantic color table: role -> (foreground, background)."""

    key: str
    label: str
    pairs: dict[str, tuple[int, int]]
    bold_roles: frozenset = frozenset()


THEMES = {
    "classic": Theme(
        key="classic",
        label="Classic",
        pairs={
            "panel_active": (curses.COLOR_GREEN, curses.COLOR_BLACK),
            "panel_inactive": (curses.COLOR_WHITE, curses.COLOR_BLACK),
            "selected_active": (curses.COLOR_BLACK, curses.COLOR_GREEN),
            "selected_inactive": (curses.COLOR_BLACK, curses.COLOR_WHITE),
            "file_directory": (curses.COLOR_BLUE, curses.COLOR_BLACK),
            "file_plain": (curses.COLOR_WHITE, curses.COLOR_BLACK),
            "file_image": (curses.COLOR_MAGENTA, curses.COLOR_BLACK),
            "file_audio": (curses.COLOR_CYAN, curses.COLOR_BLACK),
            "file_archive": (curses.COLOR_RED, curses.COLOR_BLACK),
            "file_video": (curses.COLOR_MAGENTA, curses.COLOR_BLACK),
            "popup": (curses.COLOR_WHITE, curses.COLOR_BLACK),
            "popup_error": (curses.COLOR_RED, curses.COLOR_BLACK),
            "status": (curses.COLOR_WHITE, curses.COLOR_BLACK),
            "panel_error": (curses.COLOR_YELLOW, curses.COLOR_BLACK),
        },
        bold_roles=frozenset({"panel_active", "selected_active", "file_directory"}),
    ),
    "mono": Theme(
        key="mono",
        label="Monochrome",
        pairs={role: (curses.COLOR_WHITE, curses.COLOR_BLACK) for role in ROLE_TO_PAIR_ID}
        | {
            "selected_active": (curses.COLOR_BLACK, curses.COLOR_WHITE),
            "selected_inactive": (curses.COLOR_BLACK, curses.COLOR_WHITE),
        },
        bold_roles=frozenset({"panel_active", "file_directory", "popup_error"}),
    ),
}


def get_theme(theme_key: Optional[str]) -> Theme:
    """Resolve theme by key with fallback to default."""
    if not theme_key:
        return THEMES[DEFAULT_THEME]
    return THEMES.get(theme_key, THEMES[DEFAULT_THEME])
