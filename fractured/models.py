"""Core domain models.

Scene content, the stat vector and the session state all live here.
Pydantic is used for validation and serialisation at every data boundary:
scene content is loaded through these models, and session snapshots are
persisted and restored through them.
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, JsonValue, field_validator

logger = logging.getLogger(__name__)

Number = int | float
StatName = Literal["sanity", "corruption", "truth", "trust"]
Comparison = Literal["gt", "lt", "eq"]

# A choice with this id resets the session instead of transitioning.
RESTART_CHOICE_ID = "restart"


class Speaker(str, Enum):
    PLAYER = "PLAYER"
    IRIS = "IRIS"
    SARAH = "SARAH"
    SYSTEM = "SYSTEM"
    COLLECTIVE = "COLLECTIVE"
    UNKNOWN = "UNKNOWN"
    HALLUCINATION = "HALLUCINATION"
    DR_ZHAO = "DR_ZHAO"
    CASSANDRA = "CASSANDRA"
    MARCUS = "MARCUS"
    AVA = "AVA"
    JENNIFER = "JENNIFER"
    ALEX = "ALEX"
    DIGITAL_ALEX = "DIGITAL_ALEX"
    COMMITTEE_CHAIR = "COMMITTEE_CHAIR"


class PlayerStats(BaseModel):
    """The four-field stat vector. sanity/corruption are kept in [0, 100]."""

    model_config = ConfigDict(frozen=True)

    sanity: Number
    corruption: Number
    truth: Number
    trust: Number


class StatDelta(BaseModel):
    """Partial stat change; absent fields mean 0."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    sanity: Number | None = None
    corruption: Number | None = None
    truth: Number | None = None
    trust: Number | None = None


class StatCheck(BaseModel):
    model_config = ConfigDict(frozen=True)

    stat: StatName
    value: Number
    condition: Comparison


class Choice(BaseModel):
    """A player-selectable edge from one scene to another."""

    model_config = ConfigDict(frozen=True)

    id: str
    text: str
    next_scene_id: str
    required_stats: list[StatCheck] | None = None
    effects: StatDelta | None = None
    meta_effect: str | None = None  # open vocabulary, see SceneGraph.meta_effects
    hidden: bool = False


class AutoTransition(BaseModel):
    model_config = ConfigDict(frozen=True)

    delay: Number  # milliseconds
    next_scene_id: str


class Scene(BaseModel):
    """One immutable node of narrative content."""

    model_config = ConfigDict(frozen=True)

    id: str
    speaker: Speaker
    text: str
    bg_image: str | None = None
    glitch_base_intensity: float | None = Field(default=None, ge=0, le=1)
    auto_transition: AutoTransition | None = None
    choices: list[Choice] = Field(default_factory=list)

    @field_validator("speaker", mode="before")
    @classmethod
    def _unknown_speaker(cls, value: Any) -> Any:
        if isinstance(value, Speaker):
            return value
        try:
            return Speaker(value)
        except ValueError:
            logger.warning("Unknown speaker %r in scene content, using UNKNOWN", value)
            return Speaker.UNKNOWN


INITIAL_STATS = PlayerStats(sanity=90, corruption=10, truth=5, trust=0)


class GameState(BaseModel):
    """Mutable per-session state. Only meta_memory survives a reset."""

    current_scene_id: str
    stats: PlayerStats = INITIAL_STATS
    inventory: list[str] = Field(default_factory=list)
    flags: dict[str, bool] = Field(default_factory=dict)
    history: list[str] = Field(default_factory=list)  # append-only, never deduplicated
    glitch_mode: bool = False
    meta_memory: dict[str, JsonValue] = Field(default_factory=dict)
