from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from adapters.filesystem.json_utils import load_json, write_json_atomic
from domain.models import ExcalidrawDocument, SceneDocument
from domain.ports.repositories import ExcalidrawRepository


class FileSystemExcalidrawRepository(ExcalidrawRepository):
    def load(self, path: Path) -> ExcalidrawDocument:
        return SceneDocument.model_validate(load_json(path)).to_excalidraw_document()

    def load_all_with_paths(self, directory: Path) -> list[tuple[Path, ExcalidrawDocument]]:
        return [(path, self.load(path)) for path in sorted(self._iter_paths(directory))]

    def save(self, document: ExcalidrawDocument, path: Path) -> None:
        write_json_atomic(path, document.to_dict())

    def _iter_paths(self, directory: Path) -> Iterable[Path]:
        for pattern in ("*.excalidraw", "*.json"):
            yield from directory.glob(pattern)
