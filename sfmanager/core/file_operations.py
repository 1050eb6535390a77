"""Filesystem primitives and the background operation executor for sfmanager."""
import collections
import itertools
import logging
import os
import shutil
import threading
import time
from dataclasses import dataclass
from enum import Enum

from send2trash import send2trash

from .actions import OperationKind, OperationResult, OperationStatus

LOGGER = logging.getLogger(__name__)


class DeletePolicy(str, Enum):
    """How the delete command removes an entry."""

    TRASH = "trash"
    PERMANENT = "permanent"


# ----------------------------------------------------------------------
# Primitives
# ----------------------------------------------------------------------

def _is_within(path, root):
    path = os.path.realpath(path)
    root = os.path.realpath(root)
    return path == root or path.startswith(root.rstrip(os.sep) + os.sep)


def copy_tree(source, destination):
    """Recreate source under destination: files are byte-copied, directories recursed."""
    os.makedirs(destination, exist_ok=True)
    with os.scandir(source) as it:
        children = list(it)
    for child in children:
        target = os.path.join(destination, child.name)
        if child.is_dir():
            copy_tree(child.path, target)
        else:
            shutil.copy(child.path, target)


def copy_path(source, destination):
    """Copy a file or a whole directory tree to the exact destination path."""
    if not os.path.lexists(source):
        raise FileNotFoundError(2, 'Source no longer exists', source)
    if os.path.lexists(destination):
        raise FileExistsError(17, 'Destination already exists', destination)
    if os.path.isdir(source):
        if _is_within(destination, source):
            raise OSError(22, 'Cannot copy a directory into itself', destination)
        copy_tree(source, destination)
    else:
        shutil.copy(source, destination)


def remove_path(path):
    """Permanently remove a file or a directory tree."""
    if os.path.isdir(path) and not os.path.islink(path):
        shutil.rmtree(path)
    else:
        os.remove(path)


def move_path(source, destination):
    """Copy source to destination completely, then remove source."""
    copy_path(source, destination)
    remove_path(source)


def perform_delete(path, policy=DeletePolicy.TRASH):
    """Delete path under the given policy; raises OSError on failure."""
    if not os.path.lexists(path):
        raise FileNotFoundError(2, 'No such file or directory', path)
    if DeletePolicy(policy) == DeletePolicy.TRASH:
        send2trash(path)
    else:
        remove_path(path)
    LOGGER.info('deleted %s (policy=%s)', path, DeletePolicy(policy).value)


_WORKERS = {
    OperationKind.COPY: copy_path,
    OperationKind.MOVE: move_path,
}


# ----------------------------------------------------------------------
# Operations and handles
# ----------------------------------------------------------------------

@dataclass(frozen=True)
class Operation:
    """A requested copy or move of ``source`` to the exact ``destination`` path."""

    kind: OperationKind
    source: str
    destination: str

    @classmethod
    def into_directory(cls, kind, source, destination_dir):
        """Build an operation that targets destination_dir / basename(source)."""
        source = os.path.abspath(source)
        name = os.path.basename(source.rstrip(os.sep))
        return cls(OperationKind(kind), source, os.path.join(os.path.abspath(destination_dir), name))

    def describe_failure(self, exc):
        verb = 'copy' if self.kind == OperationKind.COPY else 'move'
        return f'Failed to {verb} {self.source} to {self.destination} [Error: {exc}]'


class OperationHandle:
    """Executor-side bookkeeping for one submitted operation."""

    _ids = itertools.count(1)

    def __init__(self, operation):
        self.id = next(self._ids)
        self.operation = operation
        self.status = OperationStatus.RUNNING
        self.result = None
        self.thread = None
        self._done = threading.Event()

    def done(self):
        return self._done.is_set()

    def wait(self, timeout=None):
        return self._done.wait(timeout)

    def _finish(self, result):
        self.result = result
        self.status = result.status
        self._done.set()

    def __repr__(self):
        op = self.operation
        return f'<OperationHandle #{self.id} {op.kind.value} {op.source!r} -> {op.destination!r} {self.status.value}>'


class OperationExecutor:
    """Runs copy/move operations on worker threads without blocking the caller.

    ``max_operations`` bounds how many workers run at once; ``0`` means no
    bound. Operations over the bound wait in submission order and are
    started from ``poll_finished``.
    """

    JOIN_TIMEOUT = 5.0

    def __init__(self, max_operations=0):
        self.max_operations = max(0, int(max_operations or 0))
        self._running = []
        self._queued = collections.deque()

    def __len__(self):
        return len(self._running) + len(self._queued)

    def has_pending(self):
        return bool(self._running or self._queued)

    def pending(self):
        return list(self._running) + list(self._queued)

    def submit(self, operation):
        handle = OperationHandle(operation)
        if self.max_operations and len(self._running) >= self.max_operations:
            LOGGER.debug('queueing %r (cap=%d)', handle, self.max_operations)
            self._queued.append(handle)
        else:
            self._start(handle)
        return handle

    def _start(self, handle):
        operation = handle.operation
        worker = _WORKERS[operation.kind]

        def _runner():
            try:
                worker(operation.source, operation.destination)
            except (OSError, shutil.Error) as exc:
                handle._finish(OperationResult.failure(operation.describe_failure(exc)))
            except Exception as exc:  # pragma: no cover - unexpected worker crash
                LOGGER.exception('worker crashed for %r', handle)
                handle._finish(OperationResult.failure(operation.describe_failure(exc)))
            else:
                handle._finish(OperationResult.success())

        thread = threading.Thread(target=_runner, name=f'sfmanager-op-{handle.id}')
        handle.thread = thread
        self._running.append(handle)
        LOGGER.info('starting %r', handle)
        thread.start()

    def poll_finished(self):
        """Return (handle, result) for every finished operation, each reported once."""
        finished = [handle for handle in self._running if handle.done()]
        if not finished:
            return []
        self._running = [handle for handle in self._running if handle not in finished]
        for handle in finished:
            if handle.result.failed:
                LOGGER.warning('operation failed: %s', handle.result.reason)
            else:
                LOGGER.info('finished %r', handle)
        while self._queued and (not self.max_operations or len(self._running) < self.max_operations):
            self._start(self._queued.popleft())
        return [(handle, handle.result) for handle in finished]

    def shutdown(self, timeout=None):
        """Wait a bounded time for running workers; queued work is never started."""
        timeout = self.JOIN_TIMEOUT if timeout is None else timeout
        if self._queued:
            LOGGER.warning('dropping %d queued operation(s) at shutdown', len(self._queued))
            self._queued.clear()
        deadline = time.monotonic() + timeout
        for handle in self._running:
            thread = handle.thread
            if thread and thread.is_alive():
                thread.join(timeout=max(0.0, deadline - time.monotonic()))
                if thread.is_alive():
                    LOGGER.warning('operation still running at exit: %r', handle)
