"""Choice eligibility: which of a scene's choices the player may pick."""

from __future__ import annotations

from fractured.models import Choice, GameState, PlayerStats, Scene, StatCheck


def check_stat(stats: PlayerStats, check: StatCheck) -> bool:
    current = getattr(stats, check.stat)
    if check.condition == "gt":
        return current > check.value
    if check.condition == "lt":
        return current < check.value
    return current == check.value


def is_available(choice: Choice, state: GameState) -> bool:
    # Hidden choices are revealed by a flag keyed by the choice's own id.
    if choice.hidden and not state.flags.get(choice.id):
        return False
    if not choice.required_stats:
        return True
    return all(check_stat(state.stats, check) for check in choice.required_stats)


def available_choices(scene: Scene, state: GameState) -> list[Choice]:
    """Filter scene.choices against state, preserving authored order."""
    return [c for c in scene.choices if is_available(c, state)]
