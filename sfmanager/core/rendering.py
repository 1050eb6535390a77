"""Rendering helpers for sfmanager."""

import curses

from ..constants import INFO_BAR_HEIGHT, INFO_HINTS, POPUP_FOOTER, POPUP_MARGIN_X, POPUP_MIN_WIDTH
from ..panel.core import _fit_text_to_cells
from ..theme import role_for_category
from ..utils import draw_box, safe_addstr, theme_attr
from .actions import Side


def panel_scroll_offset(selected, visible_rows, offset=0, total=None):
    """Scroll the previous offset only as far as needed to show the selection."""
    if selected is None or visible_rows <= 0:
        return 0
    if total is not None:
        offset = min(offset, max(0, total - visible_rows))
    if selected < offset:
        return selected
    if selected >= offset + visible_rows:
        return selected - visible_rows + 1
    return offset


def draw_panel(stdscr, panel, x, y, w, h, is_active):
    """Draw one panel: border titled with its path, then the colored listing."""
    if w < 4 or h < 3:
        return
    border_attr = theme_attr('panel_active' if is_active else 'panel_inactive')
    draw_box(stdscr, y, x, h, w, border_attr, double=is_active)
    title = f' {panel.current_directory} '
    safe_addstr(stdscr, y, x + 2, title[: max(0, w - 4)], border_attr)

    inner_w = w - 2
    rows = h - 2
    if panel.error_message and not panel.entries:
        safe_addstr(stdscr, y + 1, x + 1, _fit_text_to_cells(f'[!] {panel.error_message}', inner_w),
                    theme_attr('panel_error'))
        return

    offset = panel_scroll_offset(panel.selected, rows, panel.scroll_offset, len(panel.entries))
    panel.scroll_offset = offset
    for row, entry in enumerate(panel.entries[offset:offset + rows]):
        index = offset + row
        label = entry.name + ('/' if entry.is_dir else '')
        if index == panel.selected:
            attr = theme_attr('selected_active' if is_active else 'selected_inactive')
        else:
            attr = theme_attr(role_for_category(entry.category))
        safe_addstr(stdscr, y + 1 + row, x + 1, _fit_text_to_cells(label, inner_w), attr)


def draw_infobar(stdscr, app, y, w, h):
    """Draw search string and key hints under the panels."""
    attr = theme_attr('status')
    draw_box(stdscr, y, 0, h, w, attr, double=False)
    safe_addstr(stdscr, y, 2, ' Infos ', attr | curses.A_BOLD)
    half = max(1, (w - 2) // 2)
    safe_addstr(stdscr, y + 1, 1, _fit_text_to_cells(f'Search string: {app.search}', half), attr)
    pending = len(app.pending_operations)
    if pending:
        safe_addstr(stdscr, y + 2, 1, _fit_text_to_cells(f'Running operations: {pending}', half), attr)

    rows = max(1, h - 2)
    for i, hint in enumerate(INFO_HINTS):
        row, col = i % rows, i // rows
        safe_addstr(stdscr, y + 1 + row, 1 + half + col * 14, hint, attr)


def _wrap_popup_message(message, inner_w):
    """Word-wrap a popup message into a list of lines."""
    lines = []
    for paragraph in str(message).split('\n'):
        # Lines that fit are kept verbatim; only overlong ones are re-flowed.
        if len(paragraph) <= inner_w:
            lines.append(paragraph.rstrip())
            continue
        words = paragraph.split()
        if not words:
            lines.append('')
            continue
        line = ''
        for word in words:
            while inner_w > 0 and len(word) > inner_w:
                if line:
                    lines.append(line)
                    line = ''
                lines.append(word[:inner_w])
                word = word[inner_w:]
            needs_space = 1 if line else 0
            if len(line) + len(word) + needs_space <= inner_w:
                line = f'{line} {word}' if line else word
            else:
                lines.append(line)
                line = word
        if line:
            lines.append(line)
    return lines or ['']


def draw_popup(stdscr, popup):
    """Draw an open popup centered over the panels."""
    if not popup.is_open():
        return
    max_h, max_w = stdscr.getmaxyx()
    width = max(min(POPUP_MIN_WIDTH, max_w - 2), max_w - 2 * POPUP_MARGIN_X)
    inner_w = max(1, width - 4)
    lines = _wrap_popup_message(popup.body, inner_w)
    height = max(5, min(max_h - 2, len(lines) + 5))
    x = max(0, (max_w - width) // 2)
    y = max(0, (max_h - height) // 2)

    attr = theme_attr('popup')
    body_attr = theme_attr(popup.emphasis) if popup.emphasis else attr

    for row in range(height):
        safe_addstr(stdscr, y + row, x, ' ' * width, attr)
    draw_box(stdscr, y, x, height, width, attr, double=True)
    safe_addstr(stdscr, y, x + 2, f' {popup.title} ', attr | curses.A_BOLD)

    for i, line in enumerate(lines[: height - 5]):
        safe_addstr(stdscr, y + 2 + i, x + 2, line.ljust(inner_w), body_attr)
    safe_addstr(stdscr, y + height - 2, x + 2, POPUP_FOOTER.center(inner_w), attr)


def draw_app(stdscr, app):
    """Lay out both panels side by side with the info bar underneath."""
    h, w = stdscr.getmaxyx()
    info_h = min(INFO_BAR_HEIGHT, max(0, h - 3))
    panel_h = h - info_h
    left_w = w // 2
    draw_panel(stdscr, app.left, 0, 0, left_w, panel_h, app.active_side == Side.LEFT)
    draw_panel(stdscr, app.right, left_w, 0, w - left_w, panel_h, app.active_side == Side.RIGHT)
    if info_h >= 3:
        draw_infobar(stdscr, app, panel_h, w, info_h)
    draw_popup(stdscr, app.popup)
