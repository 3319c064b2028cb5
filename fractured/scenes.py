"""Scene graph: static, read-only narrative content.

Content is a JSON document:

    {
      "title": "Fractured",
      "start_scene": "start",
      "meta_effects": {"SEE_DOOR": {"flag": "o5", "meta_key": "hasSeenDoor"}},
      "scenes": {"start": {...Scene...}, ...}
    }

The graph is loaded once and shared by every session. Dangling references
are not rejected at load time; lookups of unknown ids fall back to the
start scene (see SceneGraph.resolve) and lint_scene_graph() reports them
offline.
"""

from __future__ import annotations

import logging
from collections import Counter
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field, model_validator

from fractured.models import Scene

logger = logging.getLogger(__name__)


class MetaEffect(BaseModel):
    """What a meta-effect tag does: reveal a hidden choice and remember it."""

    model_config = ConfigDict(frozen=True)

    flag: str
    meta_key: str


class SceneGraph(BaseModel):
    model_config = ConfigDict(frozen=True)

    title: str = ""
    start_scene: str = "start"
    meta_effects: dict[str, MetaEffect] = Field(default_factory=dict)
    scenes: dict[str, Scene]

    @model_validator(mode="after")
    def _start_exists(self) -> SceneGraph:
        if self.start_scene not in self.scenes:
            raise ValueError(f"Start scene {self.start_scene!r} is not in the graph")
        return self

    def __contains__(self, scene_id: object) -> bool:
        return scene_id in self.scenes

    @property
    def start(self) -> Scene:
        return self.scenes[self.start_scene]

    def get(self, scene_id: str) -> Scene | None:
        return self.scenes.get(scene_id)

    def resolve_id(self, scene_id: str) -> str:
        """Return scene_id if it exists, else the start id (logged as broken content)."""
        if scene_id in self.scenes:
            return scene_id
        logger.warning(
            "Content integrity: scene %r does not exist, falling back to %r",
            scene_id, self.start_scene,
        )
        return self.start_scene

    def resolve(self, scene_id: str) -> Scene:
        return self.scenes[self.resolve_id(scene_id)]


def load_scene_graph(path: Path) -> SceneGraph:
    """Read and validate a content file."""
    graph = SceneGraph.model_validate_json(path.read_text(encoding="utf-8"))
    logger.info("Loaded %d scenes from %s", len(graph.scenes), path)
    return graph


def lint_scene_graph(graph: SceneGraph) -> list[str]:
    """Return authoring problems as human-readable lines.

    Checks: dangling choice and auto-transition targets, duplicate choice
    ids within a scene, scenes unreachable from the start scene, and
    hidden choices that no meta-effect can reveal.
    """
    problems: list[str] = []
    revealable = {effect.flag for effect in graph.meta_effects.values()}

    for scene_id, scene in graph.scenes.items():
        if scene.id != scene_id:
            problems.append(f"{scene_id}: scene declares id {scene.id!r}")
        for choice in scene.choices:
            if choice.next_scene_id not in graph:
                problems.append(
                    f"{scene_id}: choice {choice.id!r} targets missing scene {choice.next_scene_id!r}"
                )
            if choice.hidden and choice.id not in revealable:
                problems.append(f"{scene_id}: hidden choice {choice.id!r} can never be revealed")
        auto = scene.auto_transition
        if auto is not None and auto.next_scene_id not in graph:
            problems.append(
                f"{scene_id}: auto-transition targets missing scene {auto.next_scene_id!r}"
            )
        dupes = [cid for cid, n in Counter(c.id for c in scene.choices).items() if n > 1]
        for cid in dupes:
            problems.append(f"{scene_id}: duplicate choice id {cid!r}")

    for scene_id in sorted(set(graph.scenes) - _reachable(graph)):
        problems.append(f"{scene_id}: unreachable from {graph.start_scene!r}")
    return problems


def _reachable(graph: SceneGraph) -> set[str]:
    seen: set[str] = set()
    stack = [graph.start_scene]
    while stack:
        scene_id = stack.pop()
        if scene_id in seen or scene_id not in graph:
            continue
        seen.add(scene_id)
        scene = graph.scenes[scene_id]
        stack.extend(c.next_scene_id for c in scene.choices)
        if scene.auto_transition is not None:
            stack.append(scene.auto_transition.next_scene_id)
    return seen
