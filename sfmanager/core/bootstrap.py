"""Terminal bootstrap helpers for sfmanager startup."""

import curses

from ..constants import INPUT_TIMEOUT_MS


def configure_terminal(stdscr, timeout_ms=INPUT_TIMEOUT_MS):
    """Apply core curses terminal setup with a bounded input wait."""
    try:
        curses.curs_set(0)
    except curses.error:
        pass
    curses.noecho()
    curses.cbreak()
    stdscr.keypad(True)
    stdscr.nodelay(False)
    stdscr.timeout(timeout_ms)
