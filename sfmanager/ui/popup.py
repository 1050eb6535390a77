"""
Modal popup state.
"""


class Popup:
    """Modal message; while open it blocks every command except dismiss."""

    ERROR = 'popup_error'

    def __init__(self):
        self.title = ''
        self.body = ''
        self.emphasis = None
        self._open = False

    def open(self, title, body, emphasis=None):
        self.title = title
        self.body = body
        self.emphasis = emphasis
        self._open = True

    def close(self):
        self.title = ''
        self.body = ''
        self.emphasis = None
        self._open = False

    def is_open(self):
        return self._open

    @property
    def is_error(self):
        return self._open and self.emphasis == self.ERROR

    def __repr__(self):
        state = 'open' if self._open else 'closed'
        return f'<Popup {state} title={self.title!r}>'
