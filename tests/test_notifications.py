import threading
import unittest
from typing import Callable, List

from itinerary_planner.core.notifications import (
    DEFAULT_TOAST_DURATION_MS,
    NotificationQueue,
    ToastEntry,
)


class FakeTimer:
    def __init__(self, interval: float, callback: Callable[[], None]):
        self.interval = interval
        self.callback = callback
        self.daemon = False
        self.started = False
        self.cancelled = False

    def start(self) -> None:
        self.started = True

    def cancel(self) -> None:
        self.cancelled = True

    def fire(self) -> None:
        self.callback()


class FakeTimerFactory:
    def __init__(self) -> None:
        self.timers: List[FakeTimer] = []

    def __call__(self, interval: float, callback: Callable[[], None]) -> FakeTimer:
        timer = FakeTimer(interval, callback)
        self.timers.append(timer)
        return timer


class NotificationQueueTests(unittest.TestCase):
    def setUp(self) -> None:
        self.timers = FakeTimerFactory()
        self.queue = NotificationQueue(timer_factory=self.timers)

    def test_enqueue_schedules_one_timer_with_duration(self) -> None:
        entry = self.queue.enqueue("x", "y", 100)

        self.assertEqual(entry.title, "x")
        self.assertEqual(entry.description, "y")
        self.assertEqual(len(self.timers.timers), 1)
        timer = self.timers.timers[0]
        self.assertTrue(timer.started)
        self.assertTrue(timer.daemon)
        self.assertAlmostEqual(timer.interval, 0.1)

    def test_default_duration(self) -> None:
        entry = self.queue.enqueue("Copied")

        self.assertEqual(entry.duration_ms, DEFAULT_TOAST_DURATION_MS)
        self.assertEqual(entry.description, "")
        self.assertAlmostEqual(self.timers.timers[0].interval, 3.0)

    def test_entries_are_listed_in_enqueue_order(self) -> None:
        first = self.queue.enqueue("first")
        second = self.queue.enqueue("second")

        self.assertEqual([entry.id for entry in self.queue.list()], [first.id, second.id])

    def test_ids_are_unique_and_increasing(self) -> None:
        ids = [self.queue.enqueue(f"toast {i}").id for i in range(50)]

        self.assertEqual(ids, sorted(set(ids)))

    def test_timer_fire_removes_only_its_entry(self) -> None:
        first = self.queue.enqueue("first")
        second = self.queue.enqueue("second")
        third = self.queue.enqueue("third")

        self.timers.timers[1].fire()

        self.assertEqual([entry.id for entry in self.queue.list()], [first.id, third.id])
        self.assertNotIn(second, self.queue.list())

    def test_removal_is_idempotent(self) -> None:
        first = self.queue.enqueue("first")
        self.queue.enqueue("second")

        self.timers.timers[0].fire()
        self.timers.timers[0].fire()

        self.assertFalse(self.queue.remove(first.id))
        self.assertEqual([entry.title for entry in self.queue.list()], ["second"])

    def test_list_is_a_snapshot(self) -> None:
        self.queue.enqueue("first")
        snapshot = self.queue.list()
        snapshot.clear()

        self.assertEqual(len(self.queue), 1)

    def test_listeners_receive_changes(self) -> None:
        seen: List[List[ToastEntry]] = []
        self.queue.add_listener(seen.append)

        self.queue.enqueue("first")
        self.timers.timers[0].fire()

        self.assertEqual([len(snapshot) for snapshot in seen], [1, 0])

    def test_negative_duration_is_rejected(self) -> None:
        with self.assertRaises(ValueError):
            self.queue.enqueue("bad", duration_ms=-1)

    def test_close_cancels_pending_timers(self) -> None:
        self.queue.enqueue("first")
        self.queue.enqueue("second")

        self.queue.close()

        self.assertTrue(all(timer.cancelled for timer in self.timers.timers))


class NotificationQueueRealTimerTests(unittest.TestCase):
    def test_entry_expires_after_its_duration(self) -> None:
        queue = NotificationQueue()
        emptied = threading.Event()

        def on_change(entries: List[ToastEntry]) -> None:
            if not entries:
                emptied.set()

        queue.add_listener(on_change)
        entry = queue.enqueue("x", "y", 100)
        self.assertIn(entry, queue.list())

        self.assertTrue(emptied.wait(timeout=5))
        self.assertNotIn(entry, queue.list())


if __name__ == "__main__":
    unittest.main()
