from __future__ import annotations

import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from filelock import FileLock

from adapters.filesystem.json_utils import load_json, write_json_atomic
from domain.ports.repositories import SceneRepository

SCENE_SUFFIX = ".excalidraw"
_SCENE_ID_PATTERN = re.compile(r"^[A-Za-z0-9][A-Za-z0-9_.-]*$")


class FileSystemSceneRepository(SceneRepository):
    def load(self, path: Path) -> dict[str, Any]:
        return load_json(path)

    def save(self, payload: Mapping[str, Any], path: Path) -> None:
        path.parent.mkdir(parents=True, exist_ok=True)
        with FileLock(str(self._lock_path(path))):
            write_json_atomic(path, dict(payload))

    def path_for(self, directory: Path, scene_id: str) -> Path:
        if not _SCENE_ID_PATTERN.match(scene_id) or ".." in scene_id:
            msg = f"Invalid scene id: {scene_id!r}"
            raise ValueError(msg)
        return directory / f"{scene_id}{SCENE_SUFFIX}"

    def _lock_path(self, path: Path) -> Path:
        return path.with_suffix(f"{path.suffix}.lock")
