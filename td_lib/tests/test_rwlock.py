"""
Tests for the reader/writer lock.
"""

import threading
import unittest

from td_lib.utils import RWLock, LockPoisoned


class TestRWLock(unittest.TestCase):
    """Test cases for RWLock."""

    def test_readers_share(self):
        """Test that several readers hold the lock together."""
        lock = RWLock()
        barrier = threading.Barrier(3, timeout=5)
        errors = []

        def reader():
            try:
                with lock.read():
                    # Every reader must be inside at the same time to pass
                    barrier.wait()
            except threading.BrokenBarrierError as e:
                errors.append(e)

        threads = [threading.Thread(target=reader) for _ in range(3)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        self.assertEqual(errors, [])

    def test_writer_excludes_readers(self):
        """Test that a reader waits for the writer to finish."""
        lock = RWLock()
        events = []
        inside = threading.Event()
        release = threading.Event()

        def writer():
            with lock.write():
                inside.set()
                release.wait(5)
                events.append("write")

        def reader():
            with lock.read():
                events.append("read")

        w = threading.Thread(target=writer)
        w.start()
        inside.wait(5)

        r = threading.Thread(target=reader)
        r.start()
        r.join(0.1)
        self.assertTrue(r.is_alive())

        release.set()
        w.join()
        r.join()

        self.assertEqual(events, ["write", "read"])

    def test_waiting_writer_blocks_new_readers(self):
        """Test writer preference."""
        lock = RWLock()
        events = []
        lock.acquire_read()

        def writer():
            with lock.write():
                events.append("write")

        def reader():
            with lock.read():
                events.append("read")

        w = threading.Thread(target=writer)
        w.start()
        while not lock._waiting_writers:
            w.join(0.01)

        r = threading.Thread(target=reader)
        r.start()
        r.join(0.1)
        self.assertEqual(events, [])

        lock.release_read()
        w.join()
        r.join()

        self.assertEqual(events, ["write", "read"])

    def test_failed_writer_poisons(self):
        """Test that an exception under write() poisons the lock and propagates."""
        lock = RWLock()

        with self.assertRaises(KeyError):
            with lock.write():
                raise KeyError("boom")

        self.assertTrue(lock.poisoned)
        with self.assertRaises(LockPoisoned):
            lock.acquire_read()
        with self.assertRaises(LockPoisoned):
            with lock.write():
                pass

    def test_failed_reader_does_not_poison(self):
        """Test that exceptions under read() leave the lock usable."""
        lock = RWLock()

        with self.assertRaises(KeyError):
            with lock.read():
                raise KeyError("boom")

        self.assertFalse(lock.poisoned)
        with lock.write():
            pass

    def test_poison_wakes_waiting_reader(self):
        """Test that a reader blocked behind a failing writer gets LockPoisoned."""
        lock = RWLock()
        inside = threading.Event()
        release = threading.Event()
        outcome = []

        def writer():
            try:
                with lock.write():
                    inside.set()
                    release.wait(5)
                    raise RuntimeError("writer failed")
            except RuntimeError:
                pass

        def reader():
            try:
                with lock.read():
                    outcome.append("read")
            except LockPoisoned:
                outcome.append("poisoned")

        w = threading.Thread(target=writer)
        w.start()
        inside.wait(5)
        r = threading.Thread(target=reader)
        r.start()

        release.set()
        w.join()
        r.join(5)

        self.assertEqual(outcome, ["poisoned"])


if __name__ == '__main__':
    unittest.main()
