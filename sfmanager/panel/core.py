"""
Core data structures and helpers for panel listings.
"""
import os
import unicodedata
from dataclasses import dataclass
from enum import Enum

from ..constants import (
    ARCHIVE_EXTENSIONS,
    AUDIO_EXTENSIONS,
    IMAGE_EXTENSIONS,
    VIDEO_EXTENSIONS,
)


class EntryKind(str, Enum):
    FILE = "file"
    DIRECTORY = "directory"


class Category(str, Enum):
    """Display classification derived from kind and extension."""

    DIRECTORY = "directory"
    FILE = "file"
    IMAGE = "image"
    AUDIO = "audio"
    ARCHIVE = "archive"
    VIDEO = "video"


_EXTENSION_CATEGORIES = (
    (IMAGE_EXTENSIONS, Category.IMAGE),
    (AUDIO_EXTENSIONS, Category.AUDIO),
    (ARCHIVE_EXTENSIONS, Category.ARCHIVE),
    (VIDEO_EXTENSIONS, Category.VIDEO),
)


def file_extension(name):
    """Return lowercase extension without the dot, or '' when there is none."""
    ext = os.path.splitext(name)[1]
    return ext[1:].lower()


def classify(name, kind):
    """Map an entry name and kind to its display category."""
    if kind == EntryKind.DIRECTORY:
        return Category.DIRECTORY
    ext = file_extension(name)
    if not ext:
        return Category.FILE
    for extensions, category in _EXTENSION_CATEGORIES:
        if ext in extensions:
            return category
    return Category.FILE


@dataclass(frozen=True)
class Entry:
    """Immutable snapshot of one filesystem object in a listing."""

    path: str
    kind: EntryKind
    name: str

    @classmethod
    def from_path(cls, path, is_dir):
        kind = EntryKind.DIRECTORY if is_dir else EntryKind.FILE
        return cls(path=path, kind=kind, name=os.path.basename(path.rstrip(os.sep)) or path)

    @property
    def is_dir(self):
        return self.kind == EntryKind.DIRECTORY

    @property
    def category(self):
        return classify(self.name, self.kind)

    def sort_key(self):
        # Directories first, then raw code-point order of the name.
        return (not self.is_dir, self.name)


def _cell_width(ch):
    """Return terminal cell width for a single character."""
    if not ch:
        return 0
    if unicodedata.combining(ch):
        return 0
    if unicodedata.east_asian_width(ch) in ('W', 'F'):
        return 2
    return 1


def _fit_text_to_cells(text, max_cells):
    """Clip/pad text so rendered width does not exceed max_cells."""
    if max_cells <= 0:
        return ''
    out = []
    used = 0
    for ch in text:
        w = _cell_width(ch)
        if used + w > max_cells:
            break
        out.append(ch)
        used += w
    if used < max_cells:
        out.append(' ' * (max_cells - used))
    return ''.join(out)
