"""Result aggregation into ordered, category-keyed snapshots."""

from __future__ import annotations

import pytest

from factories import make_item
from storesearch.domain.snapshot import Snapshot
from storesearch.search.aggregator import ResultAggregator


def test_reset_produces_empty_snapshot_for_generation():
    aggregator = ResultAggregator()
    aggregator.merge([make_item(1, "song")])

    snapshot = aggregator.reset(generation=4)

    assert snapshot.is_empty
    assert len(snapshot) == 0
    assert snapshot.generation == 4
    assert aggregator.snapshot is snapshot


@pytest.mark.parametrize(
    ("kind", "title"),
    [
        ("feature-movie", "Movies"),
        ("song", "Music"),
        ("album", "Music"),
        ("software", "Apps"),
        ("ebook", "Books"),
    ],
)
def test_each_known_kind_lands_in_exactly_one_section(kind, title):
    aggregator = ResultAggregator()
    snapshot = aggregator.merge([make_item(1, kind)])
    assert snapshot.section_titles == (title,)
    assert snapshot.item_identifiers == ("1",)


def test_unknown_kinds_are_dropped():
    aggregator = ResultAggregator()
    snapshot = aggregator.merge(
        [make_item(1, "music-video"), make_item(2, "podcast"), make_item(3, "Feature-Movie")]
    )
    assert snapshot.is_empty


def test_sections_keep_fixed_order_across_merges():
    aggregator = ResultAggregator()
    aggregator.merge([make_item("b1", "ebook")])
    aggregator.merge([make_item("s1", "song"), make_item("a1", "software")])
    snapshot = aggregator.merge([make_item("m1", "feature-movie"), make_item("s2", "album")])

    assert snapshot.section_titles == ("Movies", "Music", "Apps", "Books")
    assert [item.id for item in snapshot.items_in("Music")] == ["s1", "s2"]
    assert snapshot.title_for_section(2) == "Apps"
    assert snapshot.number_of_items == 5


def test_merge_returns_new_snapshot_each_time():
    aggregator = ResultAggregator()
    first = aggregator.merge([make_item(1, "song")])
    second = aggregator.merge([make_item(2, "song")])

    assert first is not second
    assert first.item_identifiers == ("1",)
    assert second.item_identifiers == ("1", "2")


def test_duplicate_ids_within_generation_keep_first_arrival():
    aggregator = ResultAggregator()
    aggregator.merge([make_item(7, "song", name="first")])
    snapshot = aggregator.merge([make_item(7, "song", name="second"), make_item(8, "song")])

    assert snapshot.item_identifiers == ("7", "8")
    assert snapshot.items_in("Music")[0].name == "first"


def test_reset_forgets_seen_ids():
    aggregator = ResultAggregator()
    aggregator.merge([make_item(7, "song")])
    aggregator.reset(generation=2)
    snapshot = aggregator.merge([make_item(7, "song")])
    assert snapshot.item_identifiers == ("7",)
    assert snapshot.generation == 2


def test_items_in_missing_section_is_empty():
    assert Snapshot.empty().items_in("Movies") == ()
