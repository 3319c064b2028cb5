"""Game state machine, the single owner of one session's GameState.

Readers get copies of the state and subscribe to change notifications;
every mutation goes through dispatch() or choose().

Commit flow for a batch of commands (one dispatch, or one whole choice):
  1. Fold the commands through commands.apply() into a new state.
  2. Publish the new state in one step, so readers never see stats
     updated without the matching transition.
  3. Persist meta-memory if the batch contained UPDATE_META.
  4. Re-arm the auto-transition timer if the batch may have changed scene.
  5. Persist the session snapshot (best effort) and notify listeners.

Auto-transition: entering a scene with an auto_transition schedules a
one-shot TRANSITION. Any later scene change cancels it, and a token check
keeps a timer that slipped past cancellation from applying.
"""

from __future__ import annotations

import logging
from functools import partial
from typing import Callable

from fractured.choices import available_choices
from fractured.commands import (
    SCENE_COMMANDS,
    Command,
    LoadGame,
    Transition,
    UpdateMeta,
    apply,
    initial_state,
    plan_choice,
)
from fractured.glitch import calculate_glitch_intensity
from fractured.models import Choice, GameState, Scene
from fractured.scenes import SceneGraph
from fractured.storage import Storage
from fractured.timers import Scheduler, TimerHandle

logger = logging.getLogger(__name__)

Listener = Callable[[GameState], None]


class ChoiceError(ValueError):
    """Raised when the player picks a choice that is not currently available."""


class GameMachine:
    """Owns and mutates one session.

    Args:
        graph:     Shared scene content.
        storage:   Where session and meta blobs go. None keeps everything
                   in memory.
        scheduler: Timer source for auto-transitions. None disables them.
        state:     Starting state. Defaults to a fresh session seeded with
                   the stored meta-memory.
    """

    def __init__(
        self,
        graph: SceneGraph,
        *,
        storage: Storage | None = None,
        scheduler: Scheduler | None = None,
        state: GameState | None = None,
    ) -> None:
        self._graph = graph
        self._storage = storage
        self._scheduler = scheduler
        self._listeners: list[Listener] = []
        self._timer: TimerHandle | None = None
        self._timer_token = 0
        if state is None:
            meta = storage.load_meta() if storage is not None else {}
            state = initial_state(graph, meta)
        self._state = state
        self._arm_auto_transition()

    @classmethod
    def resume(
        cls,
        graph: SceneGraph,
        *,
        storage: Storage,
        scheduler: Scheduler | None = None,
    ) -> GameMachine:
        """Continue from the stored session blob, or start fresh without one."""
        snapshot = storage.load_session()
        if snapshot is None:
            return cls(graph, storage=storage, scheduler=scheduler)
        meta = storage.read_meta()
        if meta is not None:
            snapshot.meta_memory = meta
        state = apply(initial_state(graph), LoadGame(state=snapshot), graph)
        logger.info("Resumed session at %r", state.current_scene_id)
        return cls(graph, storage=storage, scheduler=scheduler, state=state)

    # ------------------------------------------------------------------
    # Readers
    # ------------------------------------------------------------------

    @property
    def graph(self) -> SceneGraph:
        return self._graph

    @property
    def state(self) -> GameState:
        return self._state.model_copy(deep=True)

    @property
    def current_scene(self) -> Scene:
        return self._graph.resolve(self._state.current_scene_id)

    def available_choices(self) -> list[Choice]:
        return available_choices(self.current_scene, self._state)

    def glitch_intensity(self) -> float:
        return calculate_glitch_intensity(
            self._state.stats, self.current_scene.glitch_base_intensity or 0
        )

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call listener with the new state after every commit. Returns an unsubscribe."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    def dispatch(self, command: Command) -> GameState:
        return self._commit([command])

    def choose(self, choice_id: str) -> GameState:
        """Resolve the player picking choice_id in the current scene."""
        for choice in self.available_choices():
            if choice.id == choice_id:
                return self._commit(plan_choice(choice, self._graph))
        raise ChoiceError(
            f"Choice {choice_id!r} is not available in scene {self._state.current_scene_id!r}"
        )

    def close(self) -> None:
        """Drop any pending auto-transition."""
        self._cancel_timer()
        self._timer_token += 1

    def _commit(self, commands: list[Command]) -> GameState:
        state = self._state
        for command in commands:
            state = apply(state, command, self._graph)
        self._state = state

        if any(isinstance(c, UpdateMeta) for c in commands):
            self._save_meta()
        if any(isinstance(c, SCENE_COMMANDS) for c in commands):
            self._arm_auto_transition()
        self._save_session()

        for listener in list(self._listeners):
            listener(self.state)
        return self.state

    # ------------------------------------------------------------------
    # Auto-transition timer
    # ------------------------------------------------------------------

    def _cancel_timer(self) -> None:
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None

    def _arm_auto_transition(self) -> None:
        self._cancel_timer()
        self._timer_token += 1
        if self._scheduler is None:
            return
        scene = self.current_scene
        auto = scene.auto_transition
        if auto is None:
            return
        logger.debug(
            "Scene %r auto-advances to %r after %s", scene.id, auto.next_scene_id, auto.delay
        )
        self._timer = self._scheduler.call_later(
            auto.delay, partial(self._fire_auto_transition, self._timer_token, auto.next_scene_id)
        )

    def _fire_auto_transition(self, token: int, scene_id: str) -> None:
        if token != self._timer_token:
            logger.debug("Stale auto-transition to %r ignored", scene_id)
            return
        self._timer = None
        self._commit([Transition(scene_id=scene_id)])

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    def _save_meta(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save_meta(self._state.meta_memory)
        except OSError as e:
            logger.warning("Meta-memory save failed: %s", e)

    def _save_session(self) -> None:
        if self._storage is None:
            return
        try:
            self._storage.save_session(self._state)
        except OSError as e:
            logger.warning("Session save failed: %s", e)
