from __future__ import annotations

from typing import Any

from domain.services.duplicate_selection import DuplicateSelection
from domain.services.linear_element_editor import duplicate_selected_points
from tests.helpers.scene_fixtures import app_state, arrow, shape


def _editing(element_id: str, indices: list[int] | None) -> dict[str, Any]:
    state = app_state([element_id])
    state["editingLinearElement"] = {"elementId": element_id, "selectedPointsIndices": indices}
    return state


def _line() -> dict[str, Any]:
    line = arrow("l", points=[[0.0, 0.0], [10.0, 10.0], [20.0, 0.0]])
    line["type"] = "line"
    return line


def test_point_is_inserted_halfway_to_the_next_one() -> None:
    line = _line()
    elements = [shape("x"), line]

    result = duplicate_selected_points(elements, _editing("l", [0]))

    assert result is not None
    assert result.commit_to_history
    assert result.elements[1]["points"] == [[0.0, 0.0], [5.0, 5.0], [10.0, 10.0], [20.0, 0.0]]
    assert result.app_state["editingLinearElement"]["selectedPointsIndices"] == [1]
    assert result.elements[0] is elements[0]
    assert line["points"] == [[0.0, 0.0], [10.0, 10.0], [20.0, 0.0]]


def test_last_point_copy_is_nudged_and_size_recomputed() -> None:
    result = duplicate_selected_points([_line()], _editing("l", [2]))

    assert result is not None
    updated = result.elements[0]
    assert updated["points"][-1] == [50.0, 30.0]
    assert len(updated["points"]) == 4
    assert (updated["width"], updated["height"]) == (50.0, 30.0)
    assert result.app_state["editingLinearElement"]["selectedPointsIndices"] == [3]


def test_several_selected_points_shift_following_indices() -> None:
    result = duplicate_selected_points([_line()], _editing("l", [0, 1]))

    assert result is not None
    assert result.elements[0]["points"] == [
        [0.0, 0.0],
        [5.0, 5.0],
        [10.0, 10.0],
        [15.0, 5.0],
        [20.0, 0.0],
    ]
    assert result.app_state["editingLinearElement"]["selectedPointsIndices"] == [1, 3]


def test_missing_element_or_indices_gives_no_result() -> None:
    assert duplicate_selected_points([_line()], _editing("ghost", [0])) is None
    assert duplicate_selected_points([_line()], _editing("l", None)) is None


def test_action_routes_point_editing_to_the_line_editor() -> None:
    action = DuplicateSelection()

    result = action.perform([_line()], _editing("l", [0]))

    assert result is not None
    assert len(result.elements) == 1
    assert len(result.elements[0]["points"]) == 4
    assert action.perform([_line()], _editing("l", None)) is None
