"""
Directory reading for panels.
"""
import logging
import os
from dataclasses import dataclass, field
from typing import Optional

from .core import Entry

LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Listing:
    """Ordered entries of one directory plus the read error, if any."""

    entries: tuple = field(default_factory=tuple)
    error: Optional[str] = None


def _describe_error(exc):
    if isinstance(exc, PermissionError):
        return 'Permission denied'
    if isinstance(exc, FileNotFoundError):
        return 'Directory no longer exists'
    return exc.strerror or str(exc)


def read_directory(path, show_hidden=True):
    """Read the immediate children of path, directories first then by raw name."""
    try:
        with os.scandir(path) as it:
            raw = list(it)
    except OSError as exc:
        LOGGER.debug('cannot list %s: %s', path, exc)
        return Listing(error=_describe_error(exc))

    entries = []
    for dir_entry in raw:
        if not show_hidden and dir_entry.name.startswith('.'):
            continue
        try:
            is_dir = dir_entry.is_dir()
        except OSError:
            is_dir = False
        entries.append(Entry.from_path(os.path.join(path, dir_entry.name), is_dir))

    entries.sort(key=Entry.sort_key)
    return Listing(entries=tuple(entries))


def list_directory(path, show_hidden=True):
    """Return ordered entries of path, or an empty tuple when it cannot be read."""
    return read_directory(path, show_hidden=show_hidden).entries
