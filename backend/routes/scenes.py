"""Read-only scene content endpoints."""

from fastapi import APIRouter, HTTPException

from backend import registry

router = APIRouter()


@router.get("/scenes")
async def list_scenes():
    """Content title, start scene, and all scene ids."""
    graph = registry.scene_graph()
    return {
        "title": graph.title,
        "start_scene": graph.start_scene,
        "scene_ids": list(graph.scenes),
    }


@router.get("/scenes/{scene_id}")
async def get_scene(scene_id: str):
    """Get a single scene by id."""
    scene = registry.scene_graph().get(scene_id)
    if scene is None:
        raise HTTPException(404, "Scene not found")
    return scene
