from __future__ import annotations

from domain.services.duplicate_element import duplicate_element, random_id
from tests.helpers.scene_fixtures import arrow, sequential_ids, shape


def test_duplicate_gets_new_identity_and_overrides() -> None:
    original = shape("a", x=10.0, y=20.0)

    duplicated = duplicate_element(
        None, {}, original, {"x": 20.0, "y": 30.0}, id_factory=sequential_ids()
    )

    assert duplicated["id"] == "new-1"
    assert (duplicated["x"], duplicated["y"]) == (20.0, 30.0)
    assert duplicated["type"] == "rectangle"
    assert "updated" in duplicated
    assert original["id"] == "a"
    assert original["x"] == 10.0


def test_duplicate_is_a_deep_copy() -> None:
    original = arrow("a", start="s")

    duplicated = duplicate_element(None, {}, original)
    duplicated["points"][0][0] = 99.0
    duplicated["startBinding"]["gap"] = 0

    assert original["points"][0][0] == 0.0
    assert original["startBinding"]["gap"] == 8
    assert duplicated["id"] != original["id"]


def test_group_map_is_shared_between_duplicates() -> None:
    group_id_map: dict[str, str] = {}
    make_id = sequential_ids()

    first = duplicate_element(None, group_id_map, shape("a", group_ids=["g"]), id_factory=make_id)
    second = duplicate_element(None, group_id_map, shape("b", group_ids=["g"]), id_factory=make_id)

    assert first["id"] == "new-1"
    assert first["groupIds"] == ["new-2"]
    assert second["id"] == "new-3"
    assert second["groupIds"] == ["new-2"]
    assert group_id_map == {"g": "new-2"}


def test_edited_group_is_kept_on_the_duplicate() -> None:
    duplicated = duplicate_element(
        "outer",
        {},
        shape("a", group_ids=["inner", "outer"]),
        id_factory=sequential_ids(),
    )

    assert duplicated["groupIds"] == ["new-2", "outer"]


def test_random_ids_are_unique() -> None:
    assert len({random_id() for _ in range(50)}) == 50
