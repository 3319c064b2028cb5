"""Scene graph fixtures shared by the tests."""

from pathlib import Path

import pytest

from fractured.scenes import SceneGraph, load_scene_graph

STORY_PATH = Path(__file__).parent.parent / "presets" / "story.json"


def make_graph(**overrides) -> SceneGraph:
    """A five-scene graph exercising every content feature.

    start ──(auto 3000)──▶ hall ──▶ door (glitch 0.8) ──▶ end ──restart──▶ start
                            │                            ▲
                            └── vault (hidden, gated) ───┘
    """
    data = {
        "title": "Test",
        "start_scene": "start",
        "meta_effects": {"SEE_DOOR": {"flag": "vault", "meta_key": "hasSeenDoor"}},
        "scenes": {
            "start": {
                "id": "start",
                "speaker": "SYSTEM",
                "text": "Booting.",
                "auto_transition": {"delay": 3000, "next_scene_id": "hall"},
                "choices": [],
            },
            "hall": {
                "id": "hall",
                "speaker": "IRIS",
                "text": "A hall.",
                "choices": [
                    {"id": "walk", "text": "Walk", "next_scene_id": "end", "effects": {"trust": 5}},
                    {
                        "id": "look",
                        "text": "Look at the door",
                        "next_scene_id": "door",
                        "effects": {"corruption": 15, "truth": 5},
                        "meta_effect": "SEE_DOOR",
                    },
                    {
                        "id": "vault",
                        "text": "Open the vault",
                        "next_scene_id": "end",
                        "hidden": True,
                        "required_stats": [{"stat": "truth", "value": 5, "condition": "gt"}],
                    },
                    {
                        "id": "odd",
                        "text": "Do something odd",
                        "next_scene_id": "hall",
                        "meta_effect": "NOT_A_REAL_TAG",
                    },
                ],
            },
            "door": {
                "id": "door",
                "speaker": "UNKNOWN",
                "text": "A door.",
                "glitch_base_intensity": 0.8,
                "auto_transition": {"delay": 2000, "next_scene_id": "end"},
                "choices": [{"id": "back", "text": "Back", "next_scene_id": "hall"}],
            },
            "end": {
                "id": "end",
                "speaker": "SARAH",
                "text": "The end.",
                "choices": [{"id": "restart", "text": "Restart", "next_scene_id": "start"}],
            },
        },
    }
    data.update(overrides)
    return SceneGraph.model_validate(data)


@pytest.fixture
def graph() -> SceneGraph:
    return make_graph()


@pytest.fixture(scope="session")
def story() -> SceneGraph:
    """The bundled content."""
    return load_scene_graph(STORY_PATH)
