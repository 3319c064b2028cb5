import os
from pathlib import Path

from dotenv import load_dotenv
from fastapi import FastAPI

from backend import registry, storage
from backend.routes import router
from fractured.scenes import load_scene_graph
from fractured.timers import Scheduler

load_dotenv(Path(__file__).parent.parent / ".env")

DEFAULT_DATA_DIR = Path(__file__).parent.parent / "data"


def create_app(data_dir: Path | None = None, scheduler: Scheduler | None = None) -> FastAPI:
    resolved = data_dir or Path(os.getenv("DATA_DIR", str(DEFAULT_DATA_DIR)))
    storage.init_storage(resolved)
    registry.init_registry(load_scene_graph(storage.story_path()), scheduler=scheduler)

    app = FastAPI(title="Fractured")
    app.include_router(router, prefix="/api")
    return app


# Default app instance for uvicorn (uses DATA_DIR env var or default)
app = create_app()
