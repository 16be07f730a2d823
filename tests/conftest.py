from __future__ import annotations

import os
from collections.abc import Callable, Generator
from pathlib import Path

import pytest

from app.config import AppSettings, EditorSettings
from domain.services.duplicate_selection import DuplicateSelection
from tests.helpers.scene_fixtures import sequential_ids


def _clear_scene_env() -> None:
    for key in list(os.environ):
        if key.startswith("SCENE_"):
            os.environ.pop(key, None)


_clear_scene_env()


@pytest.fixture(autouse=True)
def clear_scene_env() -> Generator[None, None, None]:
    _clear_scene_env()
    yield
    _clear_scene_env()


@pytest.fixture
def action() -> DuplicateSelection:
    return DuplicateSelection(grid_size=20, id_factory=sequential_ids())


@pytest.fixture
def editor_settings(tmp_path: Path) -> EditorSettings:
    return EditorSettings(
        grid_size=20,
        scenes_dir=tmp_path / "scenes",
        excalidraw_base_url="http://testserver/excalidraw",
        excalidraw_max_url_length=100_000,
        log_level="DEBUG",
    )


@pytest.fixture
def app_settings_factory(editor_settings: EditorSettings) -> Callable[..., AppSettings]:
    def _factory(**overrides: object) -> AppSettings:
        return AppSettings(editor=editor_settings.model_copy(update=overrides))

    return _factory


@pytest.fixture
def app_settings(app_settings_factory: Callable[..., AppSettings]) -> AppSettings:
    return app_settings_factory()
