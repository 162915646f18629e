"""Tests for the press/charge state machine."""

import pytest

from hexhop.domain.charge import ChargeMeter
from hexhop.domain.enums import ChargeState


def test_full_cycle():
    meter = ChargeMeter(800.0)
    assert meter.state is ChargeState.IDLE
    assert meter.start(1_000.0)
    assert meter.state is ChargeState.CHARGING
    assert meter.progress(1_400.0) == pytest.approx(0.5)
    assert meter.release(1_250.0) == pytest.approx(250.0)
    assert meter.state is ChargeState.RELEASED
    assert meter.duration_ms == pytest.approx(250.0)


def test_start_while_charging_is_ignored():
    meter = ChargeMeter(800.0)
    meter.start(0.0)
    assert not meter.start(500.0)
    assert meter.release(600.0) == pytest.approx(600.0)


def test_release_without_start_returns_none():
    meter = ChargeMeter(800.0)
    assert meter.release(10.0) is None
    assert meter.state is ChargeState.IDLE


def test_release_never_negative():
    meter = ChargeMeter(800.0)
    meter.start(100.0)
    assert meter.release(50.0) == 0.0


def test_progress_clamps_and_reset():
    meter = ChargeMeter(800.0)
    assert meter.progress(0.0) == 0.0
    meter.start(0.0)
    assert meter.progress(5_000.0) == 1.0
    meter.release(400.0)
    assert meter.progress(9_999.0) == pytest.approx(0.5)
    meter.reset()
    assert meter.state is ChargeState.IDLE
    assert meter.duration_ms is None


def test_restart_after_release():
    meter = ChargeMeter(800.0)
    meter.start(0.0)
    meter.release(100.0)
    assert meter.start(200.0)
    assert meter.duration_ms is None


def test_invalid_full_ms():
    with pytest.raises(ValueError):
        ChargeMeter(0)
