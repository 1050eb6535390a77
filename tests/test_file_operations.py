import errno
import os
import shutil
import threading
import unittest
from unittest import mock

from tests._support import make_repo_tmpdir, snapshot_tree, wait_for_operations, write_tree

from sfmanager.core import file_operations as ops
from sfmanager.core.actions import OperationKind, OperationStatus


class CopyPrimitiveTests(unittest.TestCase):
    def setUp(self):
        self.tmp = make_repo_tmpdir("_tmp_fileops_")
        self.addCleanup(self.tmp.cleanup)
        self.src = os.path.join(self.tmp.name, "a")
        self.dst = os.path.join(self.tmp.name, "b")
        os.makedirs(self.src)
        os.makedirs(self.dst)

    def test_copy_single_file_is_byte_identical(self):
        write_tree(self.src, {"file.bin": bytes(range(256)) * 4})

        ops.copy_path(os.path.join(self.src, "file.bin"), os.path.join(self.dst, "file.bin"))

        with open(os.path.join(self.dst, "file.bin"), "rb") as fh:
            self.assertEqual(fh.read(), bytes(range(256)) * 4)
        self.assertTrue(os.path.exists(os.path.join(self.src, "file.bin")))

    def test_copy_tree_reproduces_files_and_directories(self):
        layout = {
            "tree/top.txt": "top",
            "tree/empty": None,
            "tree/x/y/z/deep.bin": b"\x00\x01deep",
            "tree/x/mid.txt": "mid",
        }
        write_tree(self.src, layout)

        ops.copy_path(os.path.join(self.src, "tree"), os.path.join(self.dst, "tree"))

        self.assertEqual(
            snapshot_tree(os.path.join(self.dst, "tree")),
            snapshot_tree(os.path.join(self.src, "tree")),
        )

    def test_copy_empty_directory(self):
        write_tree(self.src, {"empty": None})

        ops.copy_path(os.path.join(self.src, "empty"), os.path.join(self.dst, "empty"))

        self.assertTrue(os.path.isdir(os.path.join(self.dst, "empty")))
        self.assertEqual(os.listdir(os.path.join(self.dst, "empty")), [])

    def test_copy_refuses_existing_destination(self):
        write_tree(self.src, {"f.txt": "new"})
        write_tree(self.dst, {"f.txt": "old"})

        with self.assertRaises(FileExistsError):
            ops.copy_path(os.path.join(self.src, "f.txt"), os.path.join(self.dst, "f.txt"))
        with open(os.path.join(self.dst, "f.txt"), encoding="utf-8") as fh:
            self.assertEqual(fh.read(), "old")

    def test_copy_refuses_directory_into_itself(self):
        write_tree(self.src, {"loop/f.txt": "x"})
        source = os.path.join(self.src, "loop")

        with self.assertRaises(OSError):
            ops.copy_path(source, os.path.join(source, "loop"))
        self.assertEqual(sorted(os.listdir(source)), ["f.txt"])

    def test_copy_missing_source_raises(self):
        with self.assertRaises(FileNotFoundError):
            ops.copy_path(os.path.join(self.src, "nope"), os.path.join(self.dst, "nope"))

    def test_move_removes_source_after_full_copy(self):
        write_tree(self.src, {"dir/x.txt": "x", "dir/sub/y.txt": "y"})
        expected = snapshot_tree(os.path.join(self.src, "dir"))

        ops.move_path(os.path.join(self.src, "dir"), os.path.join(self.dst, "dir"))

        self.assertFalse(os.path.exists(os.path.join(self.src, "dir")))
        self.assertEqual(snapshot_tree(os.path.join(self.dst, "dir")), expected)

    def test_move_keeps_source_when_copy_fails_partway(self):
        write_tree(self.src, {"dir/a.txt": "a", "dir/b.txt": "b"})
        real_copy = shutil.copy
        calls = []

        def flaky_copy(src, dst, *args, **kwargs):
            calls.append(src)
            if len(calls) == 2:
                raise OSError(errno.ENOSPC, "No space left on device")
            return real_copy(src, dst, *args, **kwargs)

        with mock.patch.object(ops.shutil, "copy", side_effect=flaky_copy):
            with self.assertRaises(OSError):
                ops.move_path(os.path.join(self.src, "dir"), os.path.join(self.dst, "dir"))

        self.assertEqual(sorted(os.listdir(os.path.join(self.src, "dir"))), ["a.txt", "b.txt"])
        # Partial destination is left in place.
        self.assertEqual(len(os.listdir(os.path.join(self.dst, "dir"))), 1)

    def test_remove_path_handles_files_and_trees(self):
        write_tree(self.src, {"f.txt": "", "d/e/f.txt": ""})

        ops.remove_path(os.path.join(self.src, "f.txt"))
        ops.remove_path(os.path.join(self.src, "d"))

        self.assertEqual(os.listdir(self.src), [])


class DeletePolicyTests(unittest.TestCase):
    def setUp(self):
        self.tmp = make_repo_tmpdir("_tmp_delete_")
        self.addCleanup(self.tmp.cleanup)
        write_tree(self.tmp.name, {"f.txt": "x", "d/g.txt": "y"})

    def test_permanent_delete_removes_file_and_tree(self):
        ops.perform_delete(os.path.join(self.tmp.name, "f.txt"), ops.DeletePolicy.PERMANENT)
        ops.perform_delete(os.path.join(self.tmp.name, "d"), "permanent")

        self.assertEqual(os.listdir(self.tmp.name), [])

    def test_trash_policy_uses_send2trash(self):
        target = os.path.join(self.tmp.name, "d")
        with mock.patch.object(ops, "send2trash") as trash_mock:
            ops.perform_delete(target, ops.DeletePolicy.TRASH)

        trash_mock.assert_called_once_with(target)
        self.assertTrue(os.path.exists(target))

    def test_delete_missing_path_raises(self):
        with self.assertRaises(FileNotFoundError):
            ops.perform_delete(os.path.join(self.tmp.name, "missing"), ops.DeletePolicy.PERMANENT)

    def test_trash_failure_propagates_as_oserror(self):
        with mock.patch.object(ops, "send2trash", side_effect=PermissionError(13, "no trash")):
            with self.assertRaises(OSError):
                ops.perform_delete(os.path.join(self.tmp.name, "f.txt"))


class OperationTests(unittest.TestCase):
    def test_into_directory_appends_source_basename(self):
        op = ops.Operation.into_directory("copy", "/a/file.txt", "/b")

        self.assertEqual(op.kind, OperationKind.COPY)
        self.assertEqual(op.source, os.path.abspath("/a/file.txt"))
        self.assertEqual(op.destination, os.path.join(os.path.abspath("/b"), "file.txt"))

    def test_into_directory_strips_trailing_separator(self):
        op = ops.Operation.into_directory(OperationKind.MOVE, "/a/dir" + os.sep, "/b")

        self.assertEqual(os.path.basename(op.destination), "dir")

    def test_failure_message_names_both_paths(self):
        op = ops.Operation(OperationKind.MOVE, "/a/x", "/b/x")

        message = op.describe_failure(OSError(30, "Read-only file system"))

        self.assertTrue(message.startswith("Failed to move /a/x to /b/x [Error: "))
        self.assertIn("Read-only file system", message)


class OperationExecutorTests(unittest.TestCase):
    def setUp(self):
        self.tmp = make_repo_tmpdir("_tmp_executor_")
        self.addCleanup(self.tmp.cleanup)
        self.a = os.path.join(self.tmp.name, "a")
        self.b = os.path.join(self.tmp.name, "b")
        write_tree(self.tmp.name, {"a/file.txt": "payload", "a/dir/x.txt": "x", "b": None})

    def test_copy_file_between_directories(self):
        executor = ops.OperationExecutor()
        handle = executor.submit(ops.Operation.into_directory("copy", os.path.join(self.a, "file.txt"), self.b))

        reported = wait_for_operations(executor)

        self.assertEqual(len(reported), 1)
        self.assertIs(reported[0][0], handle)
        self.assertEqual(reported[0][1].status, OperationStatus.SUCCEEDED)
        self.assertEqual(handle.status, OperationStatus.SUCCEEDED)
        with open(os.path.join(self.b, "file.txt"), encoding="utf-8") as fh:
            self.assertEqual(fh.read(), "payload")
        self.assertTrue(os.path.exists(os.path.join(self.a, "file.txt")))

    def test_move_directory_between_directories(self):
        executor = ops.OperationExecutor()
        executor.submit(ops.Operation.into_directory("move", os.path.join(self.a, "dir"), self.b))

        reported = wait_for_operations(executor)

        self.assertFalse(reported[0][1].failed)
        self.assertTrue(os.path.isfile(os.path.join(self.b, "dir", "x.txt")))
        self.assertFalse(os.path.exists(os.path.join(self.a, "dir")))

    def test_failure_is_reported_with_reason(self):
        executor = ops.OperationExecutor()
        erofs = OSError(errno.EROFS, "Read-only file system")
        with mock.patch.object(ops.shutil, "copy", side_effect=erofs):
            executor.submit(ops.Operation.into_directory("copy", os.path.join(self.a, "file.txt"), self.b))
            reported = wait_for_operations(executor)

        result = reported[0][1]
        self.assertTrue(result.failed)
        self.assertIn("Read-only file system", result.reason)
        self.assertFalse(os.path.exists(os.path.join(self.b, "file.txt")))

    def test_finished_operation_is_reported_exactly_once(self):
        executor = ops.OperationExecutor()
        handle = executor.submit(ops.Operation.into_directory("copy", os.path.join(self.a, "file.txt"), self.b))
        handle.wait(5)

        first = executor.poll_finished()
        second = executor.poll_finished()

        self.assertEqual([h for h, _ in first], [handle])
        self.assertEqual(second, [])
        self.assertFalse(executor.has_pending())

    def test_poll_without_work_is_empty_and_non_blocking(self):
        executor = ops.OperationExecutor()

        self.assertEqual(executor.poll_finished(), [])
        self.assertEqual(len(executor), 0)

    def test_submit_does_not_block_on_running_operation(self):
        gate = threading.Event()
        release = threading.Event()

        def slow_copy(source, destination):
            gate.set()
            release.wait(5)

        executor = ops.OperationExecutor()
        with mock.patch.dict(ops._WORKERS, {OperationKind.COPY: slow_copy}):
            handle = executor.submit(ops.Operation(OperationKind.COPY, "/src", "/dst"))
            self.assertTrue(gate.wait(5))
            self.assertEqual(executor.poll_finished(), [])
            self.assertEqual(handle.status, OperationStatus.RUNNING)
            release.set()
            reported = wait_for_operations(executor)

        self.assertEqual(reported[0][1].status, OperationStatus.SUCCEEDED)

    def test_cap_queues_operations_until_a_slot_frees(self):
        release = threading.Event()
        started = []

        def blocking_copy(source, destination):
            started.append(source)
            release.wait(5)

        executor = ops.OperationExecutor(max_operations=1)
        with mock.patch.dict(ops._WORKERS, {OperationKind.COPY: blocking_copy}):
            first = executor.submit(ops.Operation(OperationKind.COPY, "/one", "/x/one"))
            second = executor.submit(ops.Operation(OperationKind.COPY, "/two", "/x/two"))
            self.assertIsNotNone(first.thread)
            self.assertIsNone(second.thread)
            self.assertEqual(len(executor), 2)
            release.set()
            reported = wait_for_operations(executor)

        self.assertEqual({h.id for h, _ in reported}, {first.id, second.id})
        self.assertEqual(started, ["/one", "/two"])

    def test_shutdown_joins_running_workers(self):
        executor = ops.OperationExecutor()
        handle = executor.submit(ops.Operation.into_directory("copy", os.path.join(self.a, "dir"), self.b))

        executor.shutdown(timeout=5)

        self.assertTrue(handle.done())
        self.assertFalse(handle.thread.is_alive())


if __name__ == "__main__":
    unittest.main()
