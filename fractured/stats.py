"""Stat vector updates."""

from __future__ import annotations

from fractured.models import Number, PlayerStats, StatDelta

STAT_MIN = 0
STAT_MAX = 100


def clamp(value: Number, lo: Number = STAT_MIN, hi: Number = STAT_MAX) -> Number:
    return max(lo, min(hi, value))


def apply_delta(stats: PlayerStats, delta: StatDelta) -> PlayerStats:
    """Return a new vector with delta applied.

    sanity and corruption are clamped to [0, 100]; truth and trust
    accumulate without bounds.
    """
    return PlayerStats(
        sanity=clamp(stats.sanity + (delta.sanity or 0)),
        corruption=clamp(stats.corruption + (delta.corruption or 0)),
        truth=stats.truth + (delta.truth or 0),
        trust=stats.trust + (delta.trust or 0),
    )
