"""Constants and static tables for sfmanager."""

# Box drawing characters (Unicode).
BOX_TL = "╔"
BOX_TR = "╗"
BOX_BL = "╚"
BOX_BR = "╝"
BOX_H = "═"
BOX_V = "║"

# Single-line box characters.
SB_TL = "┌"
SB_TR = "┐"
SB_BL = "└"
SB_BR = "┘"
SB_H = "─"
SB_V = "│"

# Extension tables used for display classification (lowercase, no dot).
IMAGE_EXTENSIONS = frozenset({
    "jpg", "jpeg", "jpe", "png", "bmp", "svg", "eps", "gif", "ico", "webp",
})

AUDIO_EXTENSIONS = frozenset({
    "mp3", "oga", "opus", "m4a", "flac", "wav", "wma", "aac", "alac",
})

ARCHIVE_EXTENSIONS = frozenset({
    "iso", "tar", "bz2", "gz", "lz", "lz4", "lzma", "lzo", "rz", "xz", "z", "zst", "7z", "s7z",
    "rar", "tgz", "tbz2", "tlz", "txz", "zip", "zipx", "jar",
})

VIDEO_EXTENSIONS = frozenset({
    "webm", "mkv", "flv", "vob", "ogv", "ogg", "gifv", "avi", "mov", "qt", "wmv", "mp4", "m4v",
    "mp2", "mpv",
})

# Static command reference shown by the help popup.
HELP_ROWS = (
    ("F1", "Show this help"),
    ("F2", "Copy selection to the other panel"),
    ("F6", "Move selection to the other panel"),
    ("F8/Del", "Delete selection"),
    ("F5", "Refresh both panels"),
    ("F12", "Terminate sfmanager"),
    ("Arrow down", "Go one entry down"),
    ("Arrow up", "Go one entry up"),
    ("Home", "Go to the first entry"),
    ("End", "Go to the last entry"),
    ("Arrow right", "Go into folder"),
    ("Enter", "Go into folder"),
    ("Arrow left", "Go out of folder"),
    ("Backspace", "Delete last char from search string"),
    ("Tab", "Switch current panel"),
    ("Esc", "Close this help or clear search string"),
)

# Short hints for the info bar under the panels.
INFO_HINTS = ("F1 help", "F2 copy", "F6 move", "F8 delete", "F5 refresh", "F12 quit")

# Theme keys in UI order.
THEME_NAMES = ("classic", "mono")
DEFAULT_THEME = "classic"

# Layout constants
INFO_BAR_HEIGHT = 4          # Rows reserved under the panels
POPUP_MARGIN_X = 10          # Horizontal margin around popups
POPUP_MIN_WIDTH = 30
POPUP_FOOTER = "[Press Enter or Esc]"
INPUT_TIMEOUT_MS = 250       # Bounded input wait so finished operations are noticed

# Color pair IDs.
C_PANEL_ACTIVE = 1
C_PANEL_INACTIVE = 2
C_SELECTED_ACTIVE = 3
C_SELECTED_INACTIVE = 4
C_FILE_DIRECTORY = 5
C_FILE_PLAIN = 6
C_FILE_IMAGE = 7
C_FILE_AUDIO = 8
C_FILE_ARCHIVE = 9
C_FILE_VIDEO = 10
C_POPUP = 11
C_POPUP_ERROR = 12
C_STATUS = 13
C_PANEL_ERROR = 14
