from __future__ import annotations

from datetime import datetime

from conftest import make_entry

from core.models import FAR_PAST, SortCriterion
from core.services.sort_service import SortService


def _names(entries):
    return [e.display_name for e in entries]


def test_name_sort_is_ascending_and_does_not_mutate_input():
    entries = [make_entry("c.txt"), make_entry("a.txt"), make_entry("b.txt")]
    original = list(entries)

    result = SortService().sort(entries, SortCriterion.NAME)

    assert _names(result) == ["a.txt", "b.txt", "c.txt"]
    assert entries == original


def test_name_sort_uses_code_point_order():
    entries = [make_entry("b.txt"), make_entry("B.txt"), make_entry("a.txt")]

    assert _names(SortService().sort(entries, SortCriterion.NAME)) == ["B.txt", "a.txt", "b.txt"]


def test_oldest_first_orders_by_modification_time_with_sentinel_first():
    entries = [
        make_entry("new", modified=datetime(2024, 5, 1)),
        make_entry("unknown", modified=FAR_PAST),
        make_entry("old", modified=datetime(2020, 1, 1)),
    ]

    assert _names(SortService().sort(entries, SortCriterion.OLDEST_FIRST)) == [
        "unknown",
        "old",
        "new",
    ]


def test_largest_first_is_descending_and_stable_for_ties():
    entries = [
        make_entry("small1", size=10),
        make_entry("big", size=5000),
        make_entry("small2", size=10),
        make_entry("mid", size=300),
    ]

    assert _names(SortService().sort(entries, SortCriterion.LARGEST_FIRST)) == [
        "big",
        "mid",
        "small1",
        "small2",
    ]


def test_resorting_is_idempotent():
    sorter = SortService()
    entries = [make_entry("x", size=3), make_entry("y", size=3), make_entry("z", size=9)]
    for criterion in SortCriterion:
        once = sorter.sort(entries, criterion)
        assert sorter.sort(once, criterion) == once


def test_insertion_index_places_entry_after_equal_keys():
    sorter = SortService()
    queue = sorter.sort(
        [make_entry("a", size=100), make_entry("b", size=50), make_entry("c", size=50)],
        SortCriterion.LARGEST_FIRST,
    )

    assert sorter.insertion_index(queue, make_entry("d", size=50), SortCriterion.LARGEST_FIRST) == 3
    assert sorter.insertion_index(queue, make_entry("e", size=75), SortCriterion.LARGEST_FIRST) == 1
    assert sorter.insertion_index([], make_entry("f"), SortCriterion.NAME) == 0


def test_parse_falls_back_to_name():
    assert SortCriterion.parse("largest_first") is SortCriterion.LARGEST_FIRST
    assert SortCriterion.parse(" Oldest_First ") is SortCriterion.OLDEST_FIRST
    assert SortCriterion.parse("random") is SortCriterion.NAME
    assert SortCriterion.parse(None) is SortCriterion.NAME
