from __future__ import annotations

import copy
from collections.abc import Sequence

from domain.models import AppState, DuplicationResult, Element

END_POINT_NUDGE = 30.0


def duplicate_selected_points(
    elements: Sequence[Element], app_state: AppState
) -> DuplicationResult | None:
    """Insert a point after every selected vertex of the edited line or arrow.

    A new point lands halfway to the following vertex; after the last vertex
    it is a copy nudged outwards so the two do not overlap.
    """
    editing = app_state.get("editingLinearElement")
    if not editing:
        return None
    selected_indices = editing.get("selectedPointsIndices")
    element_id = editing.get("elementId")
    position = next(
        (index for index, element in enumerate(elements) if element.get("id") == element_id),
        None,
    )
    if position is None or selected_indices is None:
        return None

    element = copy.deepcopy(elements[position])
    points = [list(point) for point in element.get("points") or []]
    selected = set(selected_indices)
    next_points: list[list[float]] = []
    next_selected_indices: list[int] = []
    point_added_to_end = False

    for index, point in enumerate(points):
        next_points.append(point)
        if index not in selected:
            continue
        if index + 1 < len(points):
            following = points[index + 1]
            next_points.append([(point[0] + following[0]) / 2, (point[1] + following[1]) / 2])
        else:
            point_added_to_end = True
            next_points.append([point[0], point[1]])
        next_selected_indices.append(len(next_points) - 1)

    if point_added_to_end:
        last = next_points[-1]
        next_points[-1] = [last[0] + END_POINT_NUDGE, last[1] + END_POINT_NUDGE]

    element["points"] = next_points
    if next_points:
        xs = [point[0] for point in next_points]
        ys = [point[1] for point in next_points]
        element["width"] = max(xs) - min(xs)
        element["height"] = max(ys) - min(ys)

    next_elements = list(elements)
    next_elements[position] = element
    return DuplicationResult(
        elements=next_elements,
        app_state={
            **app_state,
            "editingLinearElement": {**editing, "selectedPointsIndices": next_selected_indices},
        },
        commit_to_history=True,
    )
