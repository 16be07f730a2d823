from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Protocol

from domain.models import ExcalidrawDocument


class SceneRepository(Protocol):
    def load(self, path: Path) -> dict[str, Any]: ...

    def save(self, payload: Mapping[str, Any], path: Path) -> None: ...


class ExcalidrawRepository(Protocol):
    def load(self, path: Path) -> ExcalidrawDocument: ...

    def load_all_with_paths(self, directory: Path) -> Sequence[tuple[Path, ExcalidrawDocument]]: ...

    def save(self, document: ExcalidrawDocument, path: Path) -> None: ...
