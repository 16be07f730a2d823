from __future__ import annotations

import logging
from collections.abc import Sequence

from domain.models import Element

logger = logging.getLogger(__name__)


def normalize_element_order(elements: Sequence[Element]) -> list[Element]:
    """Return elements in canonical z-order.

    Members of a group are made contiguous (anchored at the first member) and
    bound text elements are moved right after their container. The input list
    and its elements are left untouched.
    """
    return _normalize_bound_elements_order(_normalize_group_element_order(elements))


def _group_signature(element: Element) -> tuple[str, ...]:
    return tuple(element.get("groupIds") or ())


def _order_inner_groups(elements: list[Element]) -> list[Element]:
    ordered: list[Element] = []
    remaining = elements
    while remaining:
        signature = _group_signature(remaining[0])
        same = [element for element in remaining if _group_signature(element) == signature]
        remaining = [element for element in remaining if _group_signature(element) != signature]
        ordered.extend(same)
    return ordered


def _normalize_group_element_order(elements: Sequence[Element]) -> list[Element]:
    handled: set[str] = set()
    ordered: list[Element] = []
    for index, element in enumerate(elements):
        element_id = element.get("id")
        if element_id in handled:
            continue
        group_ids = element.get("groupIds") or []
        if group_ids:
            top_group = group_ids[-1]
            group_elements = [
                candidate
                for candidate in elements[index:]
                if top_group in (candidate.get("groupIds") or [])
                and candidate.get("id") not in handled
            ]
            for candidate in group_elements:
                handled.add(candidate.get("id"))
            ordered.extend(_order_inner_groups(group_elements))
        else:
            handled.add(element_id)
            ordered.append(element)

    if not _is_permutation(ordered, elements):
        logger.error("Group order normalization lost elements, keeping original order.")
        return list(elements)
    return ordered


def _normalize_bound_elements_order(elements: Sequence[Element]) -> list[Element]:
    by_id = {element.get("id"): element for element in elements}
    placed: set[str] = set()
    ordered: list[Element] = []

    def place(element: Element) -> None:
        element_id = element.get("id")
        if element_id in placed:
            return
        placed.add(element_id)
        ordered.append(element)

    for element in elements:
        if element.get("id") in placed:
            continue
        bound_elements = element.get("boundElements") or []
        if bound_elements:
            place(element)
            for bound in bound_elements:
                child = by_id.get(bound.get("id"))
                if child is not None and bound.get("type") == "text":
                    place(child)
        elif element.get("type") == "text" and element.get("containerId"):
            container = by_id.get(element["containerId"])
            listed = container is not None and any(
                bound.get("id") == element.get("id")
                for bound in container.get("boundElements") or []
            )
            # listed text is placed by its container
            if not listed:
                place(element)
        else:
            place(element)

    if not _is_permutation(ordered, elements):
        logger.error("Bound element order normalization lost elements, keeping original order.")
        return list(elements)
    return ordered


def _is_permutation(ordered: Sequence[Element], elements: Sequence[Element]) -> bool:
    if len(ordered) != len(elements):
        return False
    return {id(element) for element in ordered} == {id(element) for element in elements}
