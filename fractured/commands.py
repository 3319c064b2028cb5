"""Commands and the pure state transition function.

Every mutation of a GameState is one of six commands:

    TRANSITION    move to a scene, append it to history, recompute glitch_mode
    UPDATE_STATS  apply a StatDelta (sanity/corruption clamped)
    SET_FLAG      set a narrative flag
    UPDATE_META   set a meta-memory key (the machine persists meta on this)
    RESET         back to the initial state, meta_memory carried over
    LOAD_GAME     replace the state with a previously saved snapshot

apply() never touches storage or timers; GameMachine layers those on top.
plan_choice() turns a player choice into the command batch that resolves it.
"""

from __future__ import annotations

import logging
from typing import Annotated, Literal

from pydantic import BaseModel, Field, JsonValue

from fractured.glitch import is_glitch_scene
from fractured.models import INITIAL_STATS, RESTART_CHOICE_ID, Choice, GameState, StatDelta
from fractured.scenes import SceneGraph
from fractured.stats import apply_delta

logger = logging.getLogger(__name__)


class Transition(BaseModel):
    type: Literal["TRANSITION"] = "TRANSITION"
    scene_id: str


class UpdateStats(BaseModel):
    type: Literal["UPDATE_STATS"] = "UPDATE_STATS"
    stats: StatDelta


class SetFlag(BaseModel):
    type: Literal["SET_FLAG"] = "SET_FLAG"
    key: str
    value: bool


class UpdateMeta(BaseModel):
    type: Literal["UPDATE_META"] = "UPDATE_META"
    key: str
    value: JsonValue


class Reset(BaseModel):
    type: Literal["RESET"] = "RESET"


class LoadGame(BaseModel):
    type: Literal["LOAD_GAME"] = "LOAD_GAME"
    state: GameState


Command = Annotated[
    Transition | UpdateStats | SetFlag | UpdateMeta | Reset | LoadGame,
    Field(discriminator="type"),
]

# Commands after which the current scene may differ.
SCENE_COMMANDS = (Transition, Reset, LoadGame)


def initial_state(graph: SceneGraph, meta_memory: dict[str, JsonValue] | None = None) -> GameState:
    start = graph.start
    return GameState(
        current_scene_id=start.id,
        stats=INITIAL_STATS,
        inventory=[],
        flags={},
        history=[start.id],
        glitch_mode=is_glitch_scene(start),
        meta_memory=dict(meta_memory or {}),
    )


def apply(state: GameState, command: Command, graph: SceneGraph) -> GameState:
    """Return the state that results from command. state is not modified."""
    if isinstance(command, Transition):
        scene_id = graph.resolve_id(command.scene_id)
        return state.model_copy(update={
            "current_scene_id": scene_id,
            "history": [*state.history, scene_id],
            "glitch_mode": is_glitch_scene(graph.get(scene_id)),
        })

    if isinstance(command, UpdateStats):
        return state.model_copy(update={"stats": apply_delta(state.stats, command.stats)})

    if isinstance(command, SetFlag):
        return state.model_copy(update={"flags": {**state.flags, command.key: command.value}})

    if isinstance(command, UpdateMeta):
        return state.model_copy(
            update={"meta_memory": {**state.meta_memory, command.key: command.value}}
        )

    if isinstance(command, Reset):
        return initial_state(graph, state.meta_memory)

    if isinstance(command, LoadGame):
        loaded = command.state.model_copy(deep=True)
        if loaded.current_scene_id not in graph:
            loaded.current_scene_id = graph.resolve_id(loaded.current_scene_id)
            loaded.glitch_mode = is_glitch_scene(graph.get(loaded.current_scene_id))
        return loaded

    raise TypeError(f"Unknown command {command!r}")


def plan_choice(choice: Choice, graph: SceneGraph) -> list[Command]:
    """Commands that resolve a player picking choice, in order."""
    if choice.id == RESTART_CHOICE_ID:
        return [Reset()]

    commands: list[Command] = []
    if choice.effects is not None:
        commands.append(UpdateStats(stats=choice.effects))
    if choice.meta_effect:
        effect = graph.meta_effects.get(choice.meta_effect)
        if effect is None:
            logger.debug("Meta-effect %r has no handler, ignored", choice.meta_effect)
        else:
            commands.append(SetFlag(key=effect.flag, value=True))
            commands.append(UpdateMeta(key=effect.meta_key, value=True))
    commands.append(Transition(scene_id=choice.next_scene_id))
    return commands
