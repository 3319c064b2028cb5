"""JSON file storage for one player's session.

Two independent blobs, each overwritten whole on every save:

    {base}/
      fractured_game_state_v1.json   ← full GameState snapshot (session blob)
      fractured_meta_memory.json     ← meta-memory mapping, survives resets

Writes go to a .tmp sibling first and replace the blob in one rename.
A blob that cannot be parsed or validated is treated as absent: the
problem is logged and callers fall back to defaults.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from fractured.models import GameState

logger = logging.getLogger(__name__)

SAVE_KEY = "fractured_game_state_v1"
META_KEY = "fractured_meta_memory"


class Storage:
    def __init__(self, base_path: Path) -> None:
        self._base = base_path
        self._base.mkdir(parents=True, exist_ok=True)

    @property
    def base_path(self) -> Path:
        return self._base

    # ------------------------------------------------------------------
    # Internal path helpers
    # ------------------------------------------------------------------

    def _blob_path(self, key: str) -> Path:
        return self._base / f"{key}.json"

    def _read_blob(self, key: str) -> Any | None:
        path = self._blob_path(key)
        if not path.is_file():
            return None
        try:
            return json.loads(path.read_text(encoding="utf-8"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.warning("Ignoring malformed blob %s: %s", path, e)
            return None

    def _write_blob(self, key: str, text: str) -> None:
        path = self._blob_path(key)
        tmp_path = path.with_suffix(path.suffix + ".tmp")
        tmp_path.write_text(text, encoding="utf-8")
        tmp_path.replace(path)

    # ------------------------------------------------------------------
    # Session blob
    # ------------------------------------------------------------------

    def save_session(self, state: GameState) -> None:
        self._write_blob(SAVE_KEY, state.model_dump_json(indent=2))

    def load_session(self) -> GameState | None:
        raw = self._read_blob(SAVE_KEY)
        if raw is None:
            return None
        try:
            return GameState.model_validate(raw)
        except ValidationError as e:
            logger.warning("Ignoring invalid session blob: %s", e)
            return None

    def clear_session(self) -> None:
        self._blob_path(SAVE_KEY).unlink(missing_ok=True)

    # ------------------------------------------------------------------
    # Meta blob
    # ------------------------------------------------------------------

    def read_meta(self) -> dict[str, Any] | None:
        """The stored meta-memory, or None when the blob is missing or malformed."""
        raw = self._read_blob(META_KEY)
        if raw is None:
            return None
        if not isinstance(raw, dict):
            logger.warning("Ignoring meta blob of type %s", type(raw).__name__)
            return None
        return raw

    def load_meta(self) -> dict[str, Any]:
        meta = self.read_meta()
        return meta if meta is not None else {}

    def save_meta(self, meta_memory: dict[str, Any]) -> None:
        self._write_blob(META_KEY, json.dumps(meta_memory, indent=2))
