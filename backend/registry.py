"""Live game machines, one per session slug.

Machines are built lazily on first access and kept for the life of the
process so their auto-transition timers keep running between requests.
The scene graph is loaded once by init_registry() and shared by all.
"""

import logging

from fractured.machine import GameMachine
from fractured.scenes import SceneGraph
from fractured.timers import AsyncioScheduler, Scheduler

from backend import storage

logger = logging.getLogger(__name__)

_graph: SceneGraph | None = None
_scheduler: Scheduler | None = None
_machines: dict[str, GameMachine] = {}


def init_registry(graph: SceneGraph, scheduler: Scheduler | None = None) -> None:
    """Set shared content. scheduler overrides the config-driven default."""
    global _graph, _scheduler
    for machine in _machines.values():
        machine.close()
    _machines.clear()
    _graph = graph
    _scheduler = scheduler


def scene_graph() -> SceneGraph:
    assert _graph is not None, "Call init_registry() before using the registry"
    return _graph


def _make_scheduler(config: dict) -> Scheduler | None:
    if _scheduler is not None:
        return _scheduler
    if not config["auto_advance"]:
        return None
    return AsyncioScheduler(time_scale=config["time_scale"])


def get_machine(slug: str) -> GameMachine | None:
    """Return the session's machine, building it on first use. None if no such session."""
    machine = _machines.get(slug)
    if machine is not None:
        return machine
    if storage.get_session(slug) is None:
        return None

    config = storage.get_config()
    blobs = storage.session_storage(slug)
    scheduler = _make_scheduler(config)
    if config["resume_sessions"]:
        machine = GameMachine.resume(scene_graph(), storage=blobs, scheduler=scheduler)
    else:
        machine = GameMachine(scene_graph(), storage=blobs, scheduler=scheduler)
    _machines[slug] = machine
    logger.debug("Machine started for session %r", slug)
    return machine


def drop_machine(slug: str) -> None:
    machine = _machines.pop(slug, None)
    if machine is not None:
        machine.close()
