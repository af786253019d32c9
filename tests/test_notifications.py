"""Tests for the notification queue."""

import pytest

from lingualearn.core.notifications import NotificationQueue, Severity, TimerScheduler


class TestPush:
    """Tests for NotificationQueue.push."""

    def test_push_appends_with_default_severity(self, queue):
        notification = queue.push("hello")
        assert queue.queue == (notification,)
        assert notification.severity is Severity.INFO

    def test_ids_strictly_increase_within_same_millisecond(self, scheduler):
        queue = NotificationQueue(scheduler=scheduler, clock=lambda: 1000.0)
        ids = [queue.push(f"m{i}").id for i in range(5)]
        assert ids == sorted(set(ids))
        assert ids[0] == 1_000_000

    def test_ids_follow_wall_clock(self, scheduler):
        times = iter([10.0, 20.0])
        queue = NotificationQueue(scheduler=scheduler, clock=lambda: next(times))
        assert queue.push("a").id == 10_000
        assert queue.push("b").id == 20_000

    def test_severity_from_string(self, queue):
        assert queue.push("oops", "error").severity is Severity.ERROR

    def test_unknown_severity_rejected(self, queue):
        with pytest.raises(ValueError):
            queue.push("oops", "fatal")

    def test_queue_is_read_only_snapshot(self, queue):
        queue.push("a")
        snapshot = queue.queue
        queue.push("b")
        assert len(snapshot) == 1
        assert len(queue) == 2


class TestExpiry:
    """Tests for time-driven removal."""

    def test_removed_after_ttl(self, queue, scheduler):
        queue.push("a")
        scheduler.advance(4.9)
        assert len(queue) == 1
        scheduler.advance(0.1)
        assert len(queue) == 0

    def test_each_notification_has_own_timer(self, queue, scheduler):
        queue.push("a")
        scheduler.advance(3)
        queue.push("b")
        scheduler.advance(2)
        assert [n.message for n in queue.queue] == ["b"]
        scheduler.advance(3)
        assert len(queue) == 0

    def test_expire_after_removal_is_noop(self, queue, scheduler):
        notification = queue.push("a")
        queue._expire(notification.id)
        queue._expire(notification.id)
        scheduler.advance(5)
        assert len(queue) == 0


class TestDismiss:
    """Tests for dismiss and clear."""

    def test_dismiss_cancels_timer(self, queue, scheduler):
        notification = queue.push("a")
        assert queue.dismiss(notification.id) is True
        assert len(queue) == 0
        assert scheduler.pending == []

    def test_dismiss_unknown_returns_false(self, queue):
        assert queue.dismiss(12345) is False

    def test_dismiss_after_expiry_returns_false(self, queue, scheduler):
        notification = queue.push("a")
        scheduler.advance(5)
        assert queue.dismiss(notification.id) is False

    def test_clear_cancels_all(self, queue, scheduler):
        queue.push("a")
        queue.push("b")
        queue.clear()
        assert len(queue) == 0
        assert scheduler.pending == []


class TestListeners:
    """Tests for push listeners."""

    def test_listener_receives_pushes(self, queue):
        seen = []
        queue.add_listener(seen.append)
        notification = queue.push("a", Severity.SUCCESS)
        assert seen == [notification]

    def test_removed_listener_not_called(self, queue):
        seen = []
        queue.add_listener(seen.append)
        queue.remove_listener(seen.append)
        queue.push("a")
        assert seen == []


class TestTimerScheduler:
    """Tests for the threading-based scheduler."""

    def test_timer_is_daemon_and_cancellable(self):
        fired = []
        timer = TimerScheduler().schedule(60, lambda: fired.append(True))
        assert timer.daemon
        timer.cancel()
        timer.join(timeout=1)
        assert fired == []
