"""Tests for glitch intensity and stress signals."""

import pytest

from fractured.glitch import (
    GLITCH_CEILING,
    calculate_glitch_intensity,
    is_glitch_scene,
    stress_signals,
)
from fractured.models import PlayerStats, Scene


def _stats(sanity=90, corruption=10) -> PlayerStats:
    return PlayerStats(sanity=sanity, corruption=corruption, truth=5, trust=0)


def test_calm_state_is_zero():
    assert calculate_glitch_intensity(_stats(90, 10), 0) == 0


def test_saturates_below_one():
    assert calculate_glitch_intensity(_stats(0, 100), 1) == GLITCH_CEILING == 0.98


def test_scene_base_contributes_forty_percent():
    assert calculate_glitch_intensity(_stats(), 0.5) == pytest.approx(0.2)


def test_moderate_sanity_ramp():
    assert calculate_glitch_intensity(_stats(sanity=45)) == pytest.approx(0.1)


def test_critical_sanity_spike():
    # 40/150 + 0.3 + 10/40
    assert calculate_glitch_intensity(_stats(sanity=20)) == pytest.approx(0.81666667)


def test_corruption_term():
    assert calculate_glitch_intensity(_stats(corruption=70)) == pytest.approx(0.25)
    assert calculate_glitch_intensity(_stats(corruption=40)) == 0


def test_monotonic_in_sanity():
    for corruption in range(0, 101, 10):
        previous = -1.0
        for sanity in range(100, -1, -1):
            value = calculate_glitch_intensity(_stats(sanity, corruption), 0.3)
            assert value >= previous
            previous = value


def test_monotonic_in_corruption():
    for sanity in range(0, 101, 10):
        previous = -1.0
        for corruption in range(0, 101):
            value = calculate_glitch_intensity(_stats(sanity, corruption), 0.3)
            assert value >= previous
            previous = value


def test_range():
    for sanity in range(0, 101, 5):
        for corruption in range(0, 101, 5):
            for base in (0, 0.25, 0.5, 1):
                assert 0 <= calculate_glitch_intensity(_stats(sanity, corruption), base) <= 0.98


def test_glitch_scene_threshold():
    def scene(base):
        return Scene(id="s", speaker="SYSTEM", text="x", glitch_base_intensity=base)

    assert is_glitch_scene(scene(0.8))
    assert not is_glitch_scene(scene(0.5))
    assert not is_glitch_scene(scene(None))
    assert not is_glitch_scene(None)


def test_stress_signals():
    assert stress_signals(_stats(19, 61)).model_dump() == {
        "critical_sanity": True,
        "high_corruption": True,
    }
    calm = stress_signals(_stats(20, 60))
    assert not calm.critical_sanity and not calm.high_corruption
