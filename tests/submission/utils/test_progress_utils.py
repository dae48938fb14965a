"""
Progress Utilities Tests

Tests cover:
1. Percent calculation and clamping
2. Monotonic delivery for any byte sequence
3. No delivery after close
4. Callback errors never break the upload

To run:
    pytest tests/submission/utils/test_progress_utils.py -v
"""

import random
import threading

import pytest

from submission.utils.progress_utils import ProgressTracker, calculate_percent


@pytest.mark.unit
@pytest.mark.parametrize(
    "sent, total, expected",
    [
        (0, 100, 0),
        (50, 100, 50),
        (1, 3, 33),
        (2, 3, 67),
        (100, 100, 100),
        (150, 100, 100),
        (-5, 100, 0),
        (0, 0, 0),
        (10, 0, 100),
    ],
)
def test_calculate_percent(sent, total, expected):
    assert calculate_percent(sent, total) == expected


@pytest.mark.unit
def test_tracker_delivers_non_decreasing_bounded_values(progress_recorder):
    """Any non-decreasing byte sequence yields a non-decreasing percent sequence"""
    rng = random.Random(42)
    total = 10_000
    counts = sorted(rng.randint(0, total) for _ in range(200)) + [total]

    tracker = ProgressTracker(total, on_progress=progress_recorder)
    for count in counts:
        tracker.update(count)

    assert progress_recorder.is_monotonic()
    assert progress_recorder.in_bounds()
    assert progress_recorder.values[-1] == 100


@pytest.mark.unit
def test_tracker_drops_backwards_values(progress_recorder):
    tracker = ProgressTracker(100, on_progress=progress_recorder)

    tracker.update(60)
    tracker.update(40)
    tracker.update(80)

    assert progress_recorder.values == [60, 80]
    assert tracker.last_percent == 80


@pytest.mark.unit
def test_tracker_stops_after_close(progress_recorder):
    tracker = ProgressTracker(100, on_progress=progress_recorder)

    tracker.update(10)
    tracker.close()
    tracker.update(90)

    assert progress_recorder.values == [10]
    assert tracker.is_closed is True


@pytest.mark.unit
def test_tracker_records_events():
    tracker = ProgressTracker(200)

    tracker.update(100)

    assert [e.percent_complete for e in tracker.events] == [50]


@pytest.mark.unit
def test_tracker_set_total():
    tracker = ProgressTracker(100)

    tracker.set_total(400)
    tracker.update(100)

    assert tracker.last_percent == 25


@pytest.mark.unit
def test_callback_error_is_contained():
    """A failing UI callback does not stop progress tracking"""

    def broken(percent):
        raise RuntimeError("widget gone")

    tracker = ProgressTracker(100, on_progress=broken)
    tracker.update(50)
    tracker.update(100)

    assert tracker.last_percent == 100


@pytest.mark.unit
def test_callback_may_close_tracker(progress_recorder):
    """Closing from inside the callback does not deadlock"""
    tracker = ProgressTracker(100)

    def close_at_half(percent):
        progress_recorder(percent)
        if percent >= 50:
            tracker.close()

    tracker.on_progress = close_at_half
    tracker.update(50)
    tracker.update(75)

    assert progress_recorder.values == [50]


@pytest.mark.unit
def test_callback_runs_without_tracker_lock(progress_recorder):
    """Another thread can close the tracker while the callback is running"""
    tracker = ProgressTracker(100)
    closer_finished = []

    def close_from_other_thread(percent):
        progress_recorder(percent)
        closer = threading.Thread(target=tracker.close)
        closer.start()
        closer.join(timeout=2)
        closer_finished.append(not closer.is_alive())

    tracker.on_progress = close_from_other_thread
    tracker.update(30)
    tracker.update(60)

    assert closer_finished == [True]
    assert progress_recorder.values == [30]


@pytest.mark.unit
def test_repeated_percent_is_delivered_once(progress_recorder):
    """Many small chunks inside one percent produce a single event"""
    tracker = ProgressTracker(1_000_000, on_progress=progress_recorder)

    for sent in range(0, 1_000_001, 1000):
        tracker.update(sent)

    assert progress_recorder.values == list(range(0, 101))
    assert len(tracker.events) == 101
