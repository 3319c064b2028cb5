"""Session metadata CRUD and per-session blob storage."""

import json
import shutil
from datetime import datetime, timezone
from typing import Any

from fractured.storage import Storage

from .core import sessions_dir, slugify


def list_sessions() -> list[dict[str, Any]]:
    results = []
    for path in sorted(sessions_dir().glob("*.json")):
        results.append(json.loads(path.read_text()))
    return results


def get_session(slug: str) -> dict[str, Any] | None:
    path = sessions_dir() / f"{slug}.json"
    if not path.is_file():
        return None
    return json.loads(path.read_text())


def create_session(name: str) -> dict[str, Any]:
    """Register a new session; the slug gets a -2, -3 ... suffix on collision."""
    base_slug = slugify(name)
    target_slug = base_slug
    counter = 2
    while (sessions_dir() / f"{target_slug}.json").exists():
        target_slug = f"{base_slug}-{counter}"
        counter += 1

    session = {
        "name": name,
        "slug": target_slug,
        "created_at": datetime.now(timezone.utc).isoformat(),
    }
    (sessions_dir() / f"{target_slug}.json").write_text(json.dumps(session, indent=2))
    (sessions_dir() / target_slug).mkdir(exist_ok=True)
    return session


def delete_session(slug: str) -> bool:
    json_path = sessions_dir() / f"{slug}.json"
    if not json_path.is_file():
        return False
    json_path.unlink()
    child_dir = sessions_dir() / slug
    if child_dir.is_dir():
        shutil.rmtree(child_dir)
    return True


def session_storage(slug: str) -> Storage:
    """Blob storage (session snapshot + meta-memory) for one session."""
    return Storage(sessions_dir() / slug)
