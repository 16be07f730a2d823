from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from domain.models import GRID_SIZE, AppState, DuplicationResult, Element, KeyEvent
from domain.services.binding import fix_bindings_after_duplication
from domain.services.duplicate_element import IdFactory, duplicate_element
from domain.services.element_order import normalize_element_order
from domain.services.frames import (
    bind_elements_to_frames_after_duplication,
    exclude_elements_in_frames_from_selection,
    get_frame_elements,
    is_frame_element,
)
from domain.services.groups import (
    get_elements_in_group,
    get_selected_group_for_element,
    select_groups_for_selected_elements,
)
from domain.services.linear_element_editor import duplicate_selected_points
from domain.services.selection import (
    get_non_deleted_elements,
    get_selected_elements,
    is_some_element_selected,
)
from domain.services.text_binding import (
    bind_text_to_shape_after_duplication,
    get_bound_text_element,
    is_bound_to_container,
)

logger = logging.getLogger(__name__)


class DuplicateSelection:
    """Duplicate the selected elements of a scene (Ctrl/Cmd+D).

    Groups, containers with their bound text and frames with their members are
    cloned as one unit. Clones are placed right after the originals they were
    made from and shifted by half a grid cell on both axes.
    """

    name = "duplicateSelection"
    shortcut_key = "d"

    def __init__(self, grid_size: float = GRID_SIZE, id_factory: IdFactory | None = None) -> None:
        self.grid_size = grid_size
        self.id_factory = id_factory

    def perform(
        self, elements: Sequence[Element], app_state: AppState
    ) -> DuplicationResult | None:
        if app_state.get("editingLinearElement"):
            return duplicate_selected_points(elements, app_state)
        if not self.is_visible(elements, app_state):
            return None
        result = self.duplicate_elements(elements, app_state)
        return DuplicationResult(
            elements=result.elements,
            app_state=result.app_state,
            commit_to_history=True,
        )

    def key_test(self, event: KeyEvent) -> bool:
        return event.ctrl_or_cmd and event.key.lower() == self.shortcut_key

    def is_visible(self, elements: Sequence[Element], app_state: AppState) -> bool:
        return is_some_element_selected(get_non_deleted_elements(elements), app_state)

    def duplicate_elements(
        self, elements: Sequence[Element], app_state: AppState
    ) -> DuplicationResult:
        sorted_elements = normalize_element_order(elements)
        elements_map = {element.get("id"): element for element in sorted_elements}
        offset = self.grid_size / 2
        editing_group_id = app_state.get("editingGroupId")
        group_id_map: dict[str, str] = {}
        new_elements: list[Element] = []
        old_elements: list[Element] = []
        old_id_to_duplicated_id: dict[str, str] = {}

        def duplicate_and_offset(element: Element) -> Element:
            new_element = duplicate_element(
                editing_group_id,
                group_id_map,
                element,
                {"x": element.get("x", 0) + offset, "y": element.get("y", 0) + offset},
                id_factory=self.id_factory,
            )
            old_id_to_duplicated_id[element["id"]] = new_element["id"]
            old_elements.append(element)
            new_elements.append(new_element)
            return new_element

        ids_to_duplicate = {
            element.get("id")
            for element in get_selected_elements(
                sorted_elements,
                app_state,
                include_bound_text_element=True,
                include_elements_in_frames=True,
            )
        }

        if not ids_to_duplicate:
            return DuplicationResult(
                elements=list(elements), app_state=dict(app_state), commit_to_history=False
            )

        processed_ids: set[str] = set()
        elements_with_clones: list[Element] = []

        def emit(unit: Iterable[Element]) -> None:
            for element in unit:
                processed_ids.add(element["id"])
                elements_with_clones.append(element)

        for element in sorted_elements:
            element_id = element.get("id")
            if element_id in processed_ids:
                continue
            if element_id not in ids_to_duplicate:
                emit([element])
                continue

            bound_text = get_bound_text_element(element, elements_map)
            if element.get("groupIds") or bound_text is not None or is_frame_element(element):
                group_id = get_selected_group_for_element(app_state, element)
                if group_id:
                    unit = self._group_unit(sorted_elements, group_id)
                    emit(unit + [duplicate_and_offset(member) for member in unit])
                    continue
                if bound_text is not None:
                    emit(
                        [
                            element,
                            bound_text,
                            duplicate_and_offset(element),
                            duplicate_and_offset(bound_text),
                        ]
                    )
                    continue
                if is_frame_element(element):
                    members = get_frame_elements(sorted_elements, element_id)
                    emit(
                        members
                        + [element]
                        + [duplicate_and_offset(member) for member in members]
                        + [duplicate_and_offset(element)]
                    )
                    continue

            # members of a selected frame are cloned by the frame branch
            if element.get("frameId") not in ids_to_duplicate:
                emit([element, duplicate_and_offset(element)])

        final_elements = _keep_last_occurrences(elements_with_clones)

        bind_text_to_shape_after_duplication(final_elements, old_elements, old_id_to_duplicated_id)
        fix_bindings_after_duplication(final_elements, old_elements, old_id_to_duplicated_id)
        bind_elements_to_frames_after_duplication(
            final_elements, old_elements, old_id_to_duplicated_id
        )

        selected_element_ids = {
            element["id"]: True
            for element in exclude_elements_in_frames_from_selection(new_elements)
            if not is_bound_to_container(element) and not element.get("isDeleted")
        }
        next_app_state = select_groups_for_selected_elements(
            {**app_state, "selectedGroupIds": {}, "selectedElementIds": selected_element_ids},
            get_non_deleted_elements(final_elements),
        )
        logger.debug(
            "Duplicated %d of %d elements into %d new elements.",
            len(old_elements),
            len(elements),
            len(new_elements),
        )
        return DuplicationResult(
            elements=final_elements,
            app_state=next_app_state,
            commit_to_history=bool(new_elements),
        )

    def _group_unit(self, sorted_elements: Sequence[Element], group_id: str) -> list[Element]:
        unit: list[Element] = []
        for member in get_elements_in_group(sorted_elements, group_id):
            if is_frame_element(member):
                unit.extend(get_frame_elements(sorted_elements, member["id"]))
            unit.append(member)
        # A frame member that is also a group member must be cloned only once.
        return _keep_last_occurrences(unit)


def _keep_last_occurrences(elements: Sequence[Element]) -> list[Element]:
    """Drop repeated ids, keeping the last occurrence of each.

    The scan runs from the end and the kept elements are reversed back into
    forward order.
    """
    seen: set[str] = set()
    kept_reversed: list[Element] = []
    for element in reversed(elements):
        element_id = element.get("id")
        if element_id in seen:
            continue
        seen.add(element_id)
        kept_reversed.append(element)
    kept_reversed.reverse()
    return kept_reversed
