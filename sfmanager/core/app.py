"""
Main sfmanager application state: two panels, the executor, the popup and the search buffer.
"""
import logging
import os

from ..constants import HELP_ROWS
from ..panel import Panel
from ..ui.popup import Popup
from .actions import AppCommand, Command, OperationKind, Side
from .config import AppConfig
from .file_operations import Operation, OperationExecutor, perform_delete

LOGGER = logging.getLogger(__name__)


def build_help_text():
    """Format the static command reference as aligned rows."""
    key_w = max(len(key) for key, _ in HELP_ROWS)
    return '\n'.join(f'{key.ljust(key_w)}  {text}' for key, text in HELP_ROWS)


def default_start_path():
    """Resolve the home directory both panels start in."""
    return os.path.expanduser('~')


class App:
    """Orchestrates both panels, background operations and popup state.

    Commands arrive through ``dispatch``. Panels never see each other:
    copy/move read the inactive panel's directory here and hand a complete
    ``Operation`` to the executor.
    """

    # Commands still honoured while a popup is open.
    _POPUP_COMMANDS = frozenset({AppCommand.DISMISS, AppCommand.QUIT})

    _DISPATCH = {
        AppCommand.HELP: 'show_help',
        AppCommand.COPY: 'copy_selected',
        AppCommand.MOVE: 'move_selected',
        AppCommand.DELETE: 'delete_selected',
        AppCommand.REFRESH: 'refresh',
        AppCommand.QUIT: 'quit',
        AppCommand.MOVE_UP: 'move_previous',
        AppCommand.MOVE_DOWN: 'move_next',
        AppCommand.JUMP_FIRST: 'move_to_start',
        AppCommand.JUMP_LAST: 'move_to_end',
        AppCommand.ENTER_DIR: 'navigate_into',
        AppCommand.LEAVE_DIR: 'navigate_out',
        AppCommand.SWITCH_PANEL: 'switch_panel',
        AppCommand.SEARCH_BACKSPACE: 'pop_search_char',
        AppCommand.CLEAR_SEARCH: 'clear_search',
        AppCommand.DISMISS: 'dismiss',
    }

    def __init__(self, left_path=None, right_path=None, config=None, executor=None):
        self.config = config or AppConfig()
        start = default_start_path()
        self.left = Panel(left_path or start, show_hidden=self.config.show_hidden)
        self.right = Panel(right_path or start, show_hidden=self.config.show_hidden)
        self.active_side = Side.LEFT
        self.executor = executor or OperationExecutor(self.config.max_operations)
        self.popup = Popup()
        self.search = ''
        self.running = True

    # --- Panel access ---

    def panel(self, side):
        return self.left if Side(side) == Side.LEFT else self.right

    def active_panel(self):
        return self.panel(self.active_side)

    def inactive_panel(self):
        return self.panel(self.active_side.other())

    @property
    def pending_operations(self):
        return self.executor.pending()

    # --- Dispatch ---

    def dispatch(self, command, payload=None):
        """Apply one command; commands blocked by an open popup are ignored.

        Raises ValueError when ``command`` is not an ``AppCommand`` value.
        """
        if isinstance(command, Command):
            command, payload = command.name, command.payload
        command = AppCommand(command)

        if self.popup.is_open() and command not in self._POPUP_COMMANDS:
            LOGGER.debug('popup open, ignoring %s', command.value)
            return

        if command == AppCommand.SEARCH_CHAR:
            self.push_search_char(payload)
            return

        method_name = self._DISPATCH.get(command)
        if method_name is None:
            LOGGER.debug('unhandled command: %s', command)
            return
        getattr(self, method_name)()

    def quit(self):
        self.running = False

    # --- Navigation ---

    def navigate_into(self):
        self.active_panel().descend()
        self.clear_search()

    def navigate_out(self):
        self.active_panel().ascend()
        self.clear_search()

    def move_next(self):
        self.active_panel().move_next()

    def move_previous(self):
        self.active_panel().move_previous()

    def move_to_start(self):
        self.active_panel().move_to_start()

    def move_to_end(self):
        self.active_panel().move_to_end()

    def switch_panel(self):
        self.active_side = self.active_side.other()
        self.clear_search()

    # --- Search ---

    def push_search_char(self, ch):
        if not isinstance(ch, str) or len(ch) != 1:
            return
        self.search += ch
        self.active_panel().search_jump(self.search)

    def pop_search_char(self):
        if not self.search:
            return
        self.search = self.search[:-1]
        if self.search:
            self.active_panel().search_jump(self.search)

    def clear_search(self):
        self.search = ''

    # --- Popup ---

    def show_help(self):
        self.popup.open('Help', build_help_text())

    def show_error(self, message):
        """Open an error popup unless one is already showing."""
        if self.popup.is_error:
            LOGGER.warning('error popup already open, dropping: %s', message)
            return False
        self.popup.open('Error', message, emphasis=Popup.ERROR)
        return True

    def dismiss(self):
        if self.popup.is_open():
            self.popup.close()
        else:
            self.clear_search()

    # --- Filesystem commands ---

    def _submit(self, kind):
        entry = self.active_panel().selected_entry()
        if entry is None:
            return None
        operation = Operation.into_directory(kind, entry.path, self.inactive_panel().current_directory)
        return self.executor.submit(operation)

    def copy_selected(self):
        return self._submit(OperationKind.COPY)

    def move_selected(self):
        return self._submit(OperationKind.MOVE)

    def delete_selected(self):
        panel = self.active_panel()
        entry = panel.selected_entry()
        if entry is None:
            return
        try:
            perform_delete(entry.path, self.config.delete_policy)
        except OSError as exc:
            LOGGER.warning('delete failed for %s: %s', entry.path, exc)
            kind = ' recursively' if entry.is_dir else ''
            self.show_error(f'Failed to remove {entry.path}{kind} [Error: {exc}]')
        panel.refresh()

    def refresh(self):
        self.left.refresh()
        self.right.refresh()

    # --- Per-cycle reconciliation ---

    def poll_operations(self):
        """Reconcile finished operations: first failure opens a popup, then refresh both panels."""
        results = self.executor.poll_finished()
        if not results:
            return results
        failures = [result.reason for _, result in results if result.failed]
        if failures:
            self.show_error(failures[0])
            for reason in failures[1:]:
                LOGGER.warning('dropping additional failure in batch: %s', reason)
        self.refresh()
        return results

    def cleanup(self):
        self.executor.shutdown()
