from __future__ import annotations

from domain.services.selection import (
    get_non_deleted_elements,
    get_selected_elements,
    is_some_element_selected,
)
from tests.helpers.scene_fixtures import app_state, container_with_text, frame, ids, shape


def test_selected_elements_ignore_stale_ids() -> None:
    elements = [shape("a"), shape("b")]

    assert ids(get_selected_elements(elements, app_state(["b", "ghost"]))) == ["b"]


def test_bound_text_is_included_on_request() -> None:
    container, label = container_with_text("c", "t")
    elements = [container, label]
    state = app_state(["c"])

    assert ids(get_selected_elements(elements, state)) == ["c"]
    assert ids(get_selected_elements(elements, state, include_bound_text_element=True)) == [
        "c",
        "t",
    ]


def test_frame_members_precede_their_frame() -> None:
    elements = [frame("f"), shape("a", frame_id="f"), shape("b")]

    selected = get_selected_elements(elements, app_state(["f"]), include_elements_in_frames=True)

    assert ids(selected) == ["a", "f"]


def test_some_element_selected_and_deleted_filter() -> None:
    elements = [shape("a"), shape("gone", is_deleted=True)]

    assert ids(get_non_deleted_elements(elements)) == ["a"]
    assert is_some_element_selected(elements, app_state(["gone"]))
    assert not is_some_element_selected(get_non_deleted_elements(elements), app_state(["gone"]))
