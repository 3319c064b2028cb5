"""Session CRUD, player choices, and raw command dispatch."""

from typing import Any

from fastapi import APIRouter, HTTPException

from backend import registry, storage
from fractured.analysis import analyze_history
from fractured.display import chapter_title, speaker_name
from fractured.glitch import stress_signals
from fractured.machine import ChoiceError, GameMachine

from .models import ChooseBody, CreateSession, DispatchBody

router = APIRouter()


def _machine_or_404(slug: str) -> GameMachine:
    machine = registry.get_machine(slug)
    if machine is None:
        raise HTTPException(404, "Session not found")
    return machine


def _view(machine: GameMachine) -> dict[str, Any]:
    """Everything presentation needs to draw the current moment."""
    state = machine.state
    scene = machine.current_scene
    return {
        "state": state.model_dump(),
        "current_scene": scene.model_dump(),
        "choices": [c.model_dump() for c in machine.available_choices()],
        "glitch_intensity": machine.glitch_intensity(),
        "stress": stress_signals(state.stats).model_dump(),
        "speaker_name": speaker_name(scene.speaker),
        "chapter": chapter_title(state.current_scene_id),
    }


@router.get("/sessions")
async def list_sessions():
    """List all sessions."""
    return storage.list_sessions()


@router.post("/sessions")
async def create_session(body: CreateSession):
    """Create a session and return it with its opening view."""
    session = storage.create_session(body.name)
    machine = _machine_or_404(session["slug"])
    return {**session, "view": _view(machine)}


@router.get("/sessions/{slug}")
async def get_session(slug: str):
    """Current state, scene, available choices, and derived signals."""
    return _view(_machine_or_404(slug))


@router.delete("/sessions/{slug}")
async def delete_session(slug: str):
    """Delete a session, its saved state and its meta-memory."""
    registry.drop_machine(slug)
    if not storage.delete_session(slug):
        raise HTTPException(404, "Session not found")
    return {"ok": True}


@router.post("/sessions/{slug}/choose")
async def choose(slug: str, body: ChooseBody):
    """Pick one of the current scene's available choices."""
    machine = _machine_or_404(slug)
    try:
        machine.choose(body.choice_id)
    except ChoiceError as e:
        raise HTTPException(400, str(e))
    return _view(machine)


@router.post("/sessions/{slug}/dispatch")
async def dispatch(slug: str, body: DispatchBody):
    """Apply one raw command (TRANSITION, UPDATE_STATS, SET_FLAG, UPDATE_META, RESET, LOAD_GAME)."""
    machine = _machine_or_404(slug)
    machine.dispatch(body.command)
    return _view(machine)


@router.get("/sessions/{slug}/analysis")
async def analysis(slug: str):
    """The visited path annotated node by node."""
    machine = _machine_or_404(slug)
    nodes = analyze_history(machine.state.history, machine.graph)
    return [n.model_dump() for n in nodes]
