"""Playthrough analysis: the visited path as a list of annotated nodes."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel

from fractured.models import StatDelta
from fractured.scenes import SceneGraph

NodeKind = Literal["start", "decision", "narrative", "end"]


class PathNode(BaseModel):
    index: int
    scene_id: str
    kind: NodeKind
    label: str
    impact: StatDelta | None = None


def analyze_history(history: list[str], graph: SceneGraph) -> list[PathNode]:
    """Annotate each visited scene.

    impact is the effects of the choice in the previous scene that leads
    here, when there is one. Ids missing from the graph are skipped but
    keep their index.
    """
    nodes: list[PathNode] = []
    last = len(history) - 1
    for index, scene_id in enumerate(history):
        scene = graph.get(scene_id)
        if scene is None:
            continue

        impact = None
        if index > 0:
            previous = graph.get(history[index - 1])
            if previous is not None:
                choice = next(
                    (c for c in previous.choices if c.next_scene_id == scene_id), None
                )
                if choice is not None:
                    impact = choice.effects

        if index == 0:
            kind: NodeKind = "start"
        elif index == last:
            kind = "end"
        elif len(scene.choices) > 1:
            kind = "decision"
        else:
            kind = "narrative"

        if index == 0:
            label = "INIT_SEQ"
        elif impact is not None:
            label = "ALTERATION"
        else:
            label = "MEM_FRAGMENT"

        nodes.append(PathNode(index=index, scene_id=scene_id, kind=kind, label=label, impact=impact))
    return nodes
