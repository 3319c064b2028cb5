"""Derived presentation signals.

Glitch intensity is a pure function of the stat vector and the current
scene's base intensity. Presentation reads it; nothing in the core acts
on it except glitch_mode, which uses the scene base intensity alone.
"""

from __future__ import annotations

from pydantic import BaseModel

from fractured.models import PlayerStats, Scene

GLITCH_CEILING = 0.98
GLITCH_MODE_THRESHOLD = 0.5


def calculate_glitch_intensity(stats: PlayerStats, scene_base_intensity: float = 0) -> float:
    """Return how distorted presentation should be, in [0, 0.98]."""
    intensity = scene_base_intensity * 0.4

    # linear ramp below 60 sanity
    if stats.sanity < 60:
        intensity += (60 - stats.sanity) / 150

    # critical spike below 30
    if stats.sanity < 30:
        intensity += 0.3
        intensity += (30 - stats.sanity) / 40

    if stats.corruption > 40:
        intensity += (stats.corruption - 40) / 120

    return min(GLITCH_CEILING, intensity)


def is_glitch_scene(scene: Scene | None) -> bool:
    if scene is None:
        return False
    return (scene.glitch_base_intensity or 0) > GLITCH_MODE_THRESHOLD


class StressSignals(BaseModel):
    critical_sanity: bool
    high_corruption: bool


def stress_signals(stats: PlayerStats) -> StressSignals:
    return StressSignals(
        critical_sanity=stats.sanity < 20,
        high_corruption=stats.corruption > 60,
    )
