"""Main loop helpers for sfmanager."""

import curses

from .key_router import handle_key_event
from .rendering import draw_app


def draw_frame(app, stdscr):
    """Render a full frame before reading input."""
    stdscr.erase()
    draw_app(stdscr, app)
    stdscr.noutrefresh()
    curses.doupdate()


def read_input_key(stdscr):
    """Read one key from curses, returning None on timeout/no input."""
    try:
        return stdscr.get_wch()
    except curses.error:
        return None


def dispatch_input(app, key):
    """Dispatch one input event."""
    if key is None:
        return
    if isinstance(key, int) and key == getattr(curses, 'KEY_RESIZE', None):
        curses.update_lines_cols()
        return
    handle_key_event(app, key)


def run_app_loop(app, stdscr):
    """Poll finished operations, draw, read input, dispatch; clean up on exit."""
    try:
        while app.running:
            app.poll_operations()
            draw_frame(app, stdscr)
            key = read_input_key(stdscr)
            dispatch_input(app, key)
    finally:
        app.cleanup()
