from __future__ import annotations

import pytest

from bricks.game.scheduler import DropScheduler, DropState, DropTiming


def test_auto_drop_interval_speeds_up_per_level():
    timing = DropTiming()
    assert timing.auto_drop_interval(1) == pytest.approx(1.0)
    assert timing.auto_drop_interval(2) == pytest.approx(0.9)
    assert timing.auto_drop_interval(3) == pytest.approx(0.81)
    assert 0 < timing.auto_drop_interval(200) < 1e-6


def test_soft_drop_uses_fixed_interval():
    scheduler = DropScheduler(level=15)
    scheduler.start_soft_drop()
    assert scheduler.state == DropState.SOFT_DROPPING
    assert scheduler.drop_interval == pytest.approx(0.1)
    scheduler.stop_soft_drop()
    assert scheduler.state == DropState.IDLE
    assert scheduler.drop_interval == pytest.approx(0.9 ** 14)


def test_drop_due_is_strict():
    scheduler = DropScheduler()
    scheduler.reset(0.0)
    assert not scheduler.drop_due(0.5)
    assert not scheduler.drop_due(1.0)
    assert scheduler.drop_due(1.01)
    scheduler.mark_drop(1.01)
    assert not scheduler.drop_due(1.5)


def test_move_repeat_needs_direction():
    scheduler = DropScheduler()
    scheduler.reset(0.0)
    assert not scheduler.move_due(5.0)
    scheduler.set_move_direction(-3)
    assert scheduler.move_direction == -1
    assert not scheduler.move_due(0.05)
    assert scheduler.move_due(0.15)


def test_level_is_clamped():
    scheduler = DropScheduler(level=0)
    assert scheduler.level == 1
    assert scheduler.drop_interval == pytest.approx(1.0)


def test_reset_returns_to_idle():
    scheduler = DropScheduler()
    scheduler.start_soft_drop()
    scheduler.set_move_direction(1)
    scheduler.reset(3.0)
    assert scheduler.state == DropState.IDLE
    assert scheduler.move_direction == 0
    assert scheduler.previous_drop == 3.0
