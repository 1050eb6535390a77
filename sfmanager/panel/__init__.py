from .core import Category, Entry, EntryKind, classify
from .listing import Listing, list_directory, read_directory
from .panel import Panel

__all__ = [
    'Category', 'Entry', 'EntryKind', 'Listing', 'Panel',
    'classify', 'list_directory', 'read_directory',
]
