"""
Per-side navigation state: current directory, listing, selection and history.
"""
import os

from .listing import read_directory


class Panel:
    """One side's directory view with a selection that always stays valid.

    ``selected`` is ``None`` exactly when ``entries`` is empty, otherwise it
    indexes into ``entries``. ``ascend_history`` holds the selection index
    that was active before each descent, so ascending restores it.
    ``scroll_offset`` is the first listing row on screen; the renderer moves
    it and a directory change resets it.
    """

    def __init__(self, path, show_hidden=True):
        self.current_directory = os.path.abspath(path)
        self.show_hidden = bool(show_hidden)
        self.entries = ()
        self.selected = None
        self.ascend_history = []
        self.scroll_offset = 0
        self.error_message = None
        self._relist()
        self.move_to_start()

    def _relist(self):
        listing = read_directory(self.current_directory, show_hidden=self.show_hidden)
        self.entries = listing.entries
        self.error_message = listing.error

    def _select(self, index):
        if not self.entries:
            self.selected = None
            return
        self.selected = max(0, min(index, len(self.entries) - 1))

    def selected_entry(self):
        """Return the selected Entry, or None when the listing is empty."""
        if self.selected is None:
            return None
        return self.entries[self.selected]

    # --- Directory changes ---

    def descend(self):
        entry = self.selected_entry()
        if entry is None or not entry.is_dir:
            return
        self.ascend_history.append(self.selected)
        self.current_directory = entry.path
        self.scroll_offset = 0
        self._relist()
        self.move_to_start()

    def ascend(self):
        parent = os.path.dirname(self.current_directory)
        if parent == self.current_directory:
            return
        self.current_directory = parent
        self.scroll_offset = 0
        self._relist()
        if self.ascend_history:
            self._select(self.ascend_history.pop())
        else:
            self.move_to_start()

    def refresh(self):
        """Re-list in place; the old index is clamped, not re-derived by name."""
        previous = self.selected
        self._relist()
        self._select(0 if previous is None else previous)

    # --- Cursor movement ---

    def move_next(self):
        if self.selected is not None and self.selected < len(self.entries) - 1:
            self.selected += 1

    def move_previous(self):
        if self.selected is not None and self.selected > 0:
            self.selected -= 1

    def move_to_start(self):
        self._select(0)

    def move_to_end(self):
        self._select(len(self.entries) - 1)

    def search_jump(self, query):
        """Select the first entry whose name contains query; keep selection otherwise."""
        for index, entry in enumerate(self.entries):
            if query in entry.name:
                self.selected = index
                return True
        return False
