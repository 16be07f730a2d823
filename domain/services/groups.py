from __future__ import annotations

from collections.abc import Callable, Sequence

from domain.models import AppState, Element
from domain.services.selection import get_selected_elements


def get_selected_group_for_element(app_state: AppState, element: Element) -> str | None:
    editing_group_id = app_state.get("editingGroupId")
    selected_group_ids = app_state.get("selectedGroupIds") or {}
    for group_id in element.get("groupIds") or []:
        if group_id == editing_group_id:
            continue
        if selected_group_ids.get(group_id):
            return group_id
    return None


def get_elements_in_group(elements: Sequence[Element], group_id: str) -> list[Element]:
    return [element for element in elements if group_id in (element.get("groupIds") or [])]


def select_group(group_id: str, app_state: AppState, elements: Sequence[Element]) -> AppState:
    elements_in_group = get_elements_in_group(elements, group_id)
    selected_group_ids = dict(app_state.get("selectedGroupIds") or {})
    if len(elements_in_group) < 2:
        if selected_group_ids.get(group_id) or app_state.get("editingGroupId") == group_id:
            selected_group_ids[group_id] = False
            return {**app_state, "selectedGroupIds": selected_group_ids, "editingGroupId": None}
        return app_state

    selected_group_ids[group_id] = True
    selected_element_ids = dict(app_state.get("selectedElementIds") or {})
    for element in elements_in_group:
        selected_element_ids[element["id"]] = True
    return {
        **app_state,
        "selectedGroupIds": selected_group_ids,
        "selectedElementIds": selected_element_ids,
    }


def select_groups_for_selected_elements(
    app_state: AppState, elements: Sequence[Element]
) -> AppState:
    next_state: AppState = {**app_state, "selectedGroupIds": {}}
    selected_elements = get_selected_elements(elements, app_state)
    if not selected_elements:
        return {**next_state, "editingGroupId": None}

    editing_group_id = app_state.get("editingGroupId")
    for element in selected_elements:
        group_ids = list(element.get("groupIds") or [])
        if editing_group_id and editing_group_id in group_ids:
            group_ids = group_ids[: group_ids.index(editing_group_id)]
        if group_ids:
            next_state = select_group(group_ids[-1], next_state, elements)
    return next_state


def get_new_group_ids_for_duplication(
    group_ids: Sequence[str],
    editing_group_id: str | None,
    mapper: Callable[[str], str],
) -> list[str]:
    """Remap the groups nested inside the edited group (all groups when not editing).

    Groups are ordered innermost first, so everything from the edited group
    outwards keeps its id and the duplicate stays inside the group being edited.
    """
    copy = list(group_ids)
    end_index = len(copy)
    if editing_group_id and editing_group_id in copy:
        end_index = copy.index(editing_group_id)
    for index in range(end_index):
        copy[index] = mapper(copy[index])
    return copy
