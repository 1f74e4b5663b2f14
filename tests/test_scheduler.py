from __future__ import annotations

import pytest

from unoduel.scheduler import ManualScheduler


def test_advance_fires_only_due_callbacks() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []
    scheduler.call_later(1.0, lambda: fired.append("late"))
    scheduler.call_later(0.5, lambda: fired.append("early"))

    assert scheduler.advance(0.6) == 1
    assert fired == ["early"]
    assert scheduler.pending == 1
    assert scheduler.next_due() == pytest.approx(1.0)

    assert scheduler.advance(0.4) == 1
    assert fired == ["early", "late"]
    assert scheduler.next_due() is None


def test_cancelled_task_never_fires() -> None:
    scheduler = ManualScheduler()
    fired: list[int] = []
    task = scheduler.call_later(0.1, lambda: fired.append(1))
    task.cancel()

    assert scheduler.pending == 0
    assert scheduler.run_pending() == 0
    assert fired == []


def test_callbacks_scheduled_while_firing_run_in_window() -> None:
    scheduler = ManualScheduler()
    fired: list[str] = []

    def first() -> None:
        fired.append("first")
        scheduler.call_later(0.2, lambda: fired.append("second"))

    scheduler.call_later(0.2, first)
    scheduler.advance(1.0)

    assert fired == ["first", "second"]
    assert scheduler.now == pytest.approx(1.0)


def test_equal_due_times_fire_in_schedule_order() -> None:
    scheduler = ManualScheduler()
    fired: list[int] = []
    for value in range(3):
        scheduler.call_later(0.0, lambda value=value: fired.append(value))
    scheduler.run_pending()
    assert fired == [0, 1, 2]


def test_negative_values_are_rejected() -> None:
    scheduler = ManualScheduler()
    with pytest.raises(ValueError):
        scheduler.call_later(-1.0, lambda: None)
    with pytest.raises(ValueError):
        scheduler.advance(-1.0)
