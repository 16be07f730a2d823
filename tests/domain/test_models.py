from __future__ import annotations

import pytest
from pydantic import ValidationError

from domain.models import DuplicationResult, KeyEvent, SceneDocument
from tests.helpers.scene_fixtures import app_state, scene_payload, shape


def test_scene_document_keeps_unknown_element_fields() -> None:
    element = shape("a", group_ids=["g"])
    element["roundness"] = {"type": 3}

    document = SceneDocument.model_validate(
        scene_payload([element], app_state(["a"]))
    ).to_excalidraw_document()

    restored = document.elements[0]
    assert restored["groupIds"] == ["g"]
    assert restored["roundness"] == {"type": 3}
    assert document.app_state["selectedElementIds"] == {"a": True}


def test_scene_document_rejects_duplicate_ids() -> None:
    with pytest.raises(ValidationError, match="Duplicate element id"):
        SceneDocument.model_validate(scene_payload([shape("a"), shape("a")], app_state()))


def test_scene_document_defaults_missing_sections() -> None:
    element = shape("a")
    element["groupIds"] = None

    document = SceneDocument.model_validate({"elements": [element], "appState": None})

    assert document.elements[0].group_ids == []
    assert document.app_state == {}
    assert document.files == {}


def test_duplication_result_serializes_with_camel_case_keys() -> None:
    result = DuplicationResult(elements=[], app_state={}, commit_to_history=True)

    assert result.to_dict() == {"elements": [], "appState": {}, "commitToHistory": True}


@pytest.mark.parametrize(
    ("event", "expected"),
    [
        (KeyEvent(key="d", ctrl_key=True), True),
        (KeyEvent(key="d", meta_key=True), False),
        (KeyEvent(key="d", meta_key=True, is_darwin=True), True),
        (KeyEvent(key="d", ctrl_key=True, is_darwin=True), False),
    ],
)
def test_ctrl_or_cmd_depends_on_platform(event: KeyEvent, expected: bool) -> None:
    assert event.ctrl_or_cmd is expected
