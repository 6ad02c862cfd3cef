from __future__ import annotations

import threading
import unittest

from axisplot import RWLock, Shared


class RWLockTests(unittest.TestCase):
    def test_readers_share_the_lock(self) -> None:
        lock = RWLock()
        lock.acquire_read()
        lock.acquire_read()
        self.assertEqual(lock.reader_count, 2)
        lock.release_read()
        lock.release_read()
        self.assertEqual(lock.reader_count, 0)

    def test_writer_waits_for_readers(self) -> None:
        lock = RWLock()
        acquired = threading.Event()

        def writer() -> None:
            with lock.write_locked():
                acquired.set()

        lock.acquire_read()
        t = threading.Thread(target=writer)
        t.start()
        self.assertFalse(acquired.wait(timeout=0.05))
        lock.release_read()
        self.assertTrue(acquired.wait(timeout=2.0))
        t.join(timeout=2.0)
        self.assertFalse(lock.write_held)

    def test_unbalanced_release_raises(self) -> None:
        lock = RWLock()
        with self.assertRaises(RuntimeError):
            lock.release_read()
        with self.assertRaises(RuntimeError):
            lock.release_write()


class SharedTests(unittest.TestCase):
    def test_write_bumps_revision_and_notifies_after_release(self) -> None:
        shared = Shared([1, 2])
        observed: list[tuple[int, list[int]]] = []

        def listener() -> None:
            # Readable from the listener: the write lock is already released.
            with shared.read() as value:
                observed.append((shared.revision, list(value)))

        shared.subscribe(listener)
        with shared.write() as value:
            value.append(3)
        self.assertEqual(observed, [(1, [1, 2, 3])])

    def test_silent_write_and_unsubscribe(self) -> None:
        shared = Shared({"n": 0})
        calls: list[int] = []
        unsubscribe = shared.subscribe(lambda: calls.append(1))
        with shared.write(notify=False) as value:
            value["n"] = 1
        self.assertEqual(calls, [])
        self.assertEqual(shared.revision, 1)
        unsubscribe()
        with shared.write() as value:
            value["n"] = 2
        self.assertEqual(calls, [])

    def test_failing_listener_propagates(self) -> None:
        shared = Shared(0)

        def broken() -> None:
            raise RuntimeError("listener failed")

        shared.subscribe(broken)
        with self.assertLogs("axisplot.sync", level="WARNING"):
            with self.assertRaises(RuntimeError):
                with shared.write():
                    pass

    def test_all_listeners_run_before_failure_propagates(self) -> None:
        shared = Shared(0)
        calls: list[str] = []

        def broken() -> None:
            calls.append("broken")
            raise RuntimeError("first")

        def also_broken() -> None:
            calls.append("also_broken")
            raise ValueError("second")

        shared.subscribe(broken)
        shared.subscribe(also_broken)
        shared.subscribe(lambda: calls.append("watcher"))
        with self.assertLogs("axisplot.sync", level="WARNING") as logs:
            with self.assertRaises(RuntimeError):
                with shared.write():
                    pass
        self.assertEqual(calls, ["broken", "also_broken", "watcher"])
        self.assertEqual(len(logs.records), 2)

    def test_failed_write_does_not_bump_revision(self) -> None:
        shared = Shared(0)
        with self.assertRaises(ValueError):
            with shared.write():
                raise ValueError("abort")
        self.assertEqual(shared.revision, 0)
        with shared.read():
            pass


if __name__ == "__main__":
    unittest.main()
