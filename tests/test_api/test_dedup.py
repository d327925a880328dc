"""
Tests for the duplicate-submission guard
"""
from app.api.dedup import SWEEP_THRESHOLD, DuplicateSubmissionGuard


class FakeClock:
    def __init__(self):
        self.now = 1000.0

    def __call__(self):
        return self.now


def test_repeat_inside_window_is_duplicate():
    clock = FakeClock()
    guard = DuplicateSubmissionGuard(5.0, clock=clock)

    assert guard.is_duplicate("u-title-body") is False
    clock.now += 4.9
    assert guard.is_duplicate("u-title-body") is True


def test_repeat_after_window_is_allowed():
    clock = FakeClock()
    guard = DuplicateSubmissionGuard(5.0, clock=clock)

    guard.is_duplicate("k")
    clock.now += 5.0
    assert guard.is_duplicate("k") is False


def test_different_keys_are_independent():
    guard = DuplicateSubmissionGuard(5.0, clock=FakeClock())
    assert guard.is_duplicate("a") is False
    assert guard.is_duplicate("b") is False


def test_expired_entries_are_swept():
    clock = FakeClock()
    guard = DuplicateSubmissionGuard(5.0, clock=clock)
    for i in range(SWEEP_THRESHOLD):
        guard.is_duplicate(f"old-{i}")

    clock.now += 10
    guard.is_duplicate("new-1")
    guard.is_duplicate("new-2")

    assert len(guard) == 2
