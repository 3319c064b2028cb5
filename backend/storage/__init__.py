"""File-based JSON storage for the service.

Data layout:
  data/
    config.json          App settings (content path, auto-advance, timing)
    sessions/            Player sessions
      <slug>.json        Session metadata (name, slug, created_at)
      <slug>/            Blobs written by fractured.storage.Storage:
        fractured_game_state_v1.json  Full GameState snapshot
        fractured_meta_memory.json    Meta-memory, survives resets
  presets/
    story.json           Bundled scene content

Slug rules: name → Unicode normalize → strip non-ASCII → lowercase →
replace non-alnum runs with hyphen → strip leading/trailing hyphens.

Config: get_config() returns defaults merged with stored values.
update_config() overwrites known keys and ignores the rest.
"""

# Re-export all public symbols so `from backend import storage` keeps working.

from .core import (  # noqa: F401
    data_dir,
    default_story_path,
    init_storage,
    presets_dir,
    sessions_dir,
    slugify,
)

from .sessions import (  # noqa: F401
    create_session,
    delete_session,
    get_session,
    list_sessions,
    session_storage,
)

from .config import (  # noqa: F401
    get_config,
    story_path,
    update_config,
)
