"""SearchScope catalog: media mapping, expansion and kind classification."""

from __future__ import annotations

import pytest

from storesearch.domain.scopes import CONCRETE_SCOPES, SearchScope


def test_media_types_match_api_vocabulary():
    assert [scope.media_type for scope in SearchScope] == [
        "all",
        "movie",
        "music",
        "software",
        "ebook",
    ]
    assert [scope.title for scope in SearchScope] == ["All", "Movies", "Music", "Apps", "Books"]


def test_all_expands_to_concrete_scopes_in_section_order():
    assert SearchScope.ALL.expand() == (
        SearchScope.MOVIES,
        SearchScope.MUSIC,
        SearchScope.APPS,
        SearchScope.BOOKS,
    )
    assert SearchScope.MUSIC.expand() == (SearchScope.MUSIC,)
    assert SearchScope.ALL not in CONCRETE_SCOPES


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        ("feature-movie", SearchScope.MOVIES),
        ("song", SearchScope.MUSIC),
        ("album", SearchScope.MUSIC),
        ("software", SearchScope.APPS),
        ("ebook", SearchScope.BOOKS),
        ("music-video", None),
        ("podcast", None),
        ("Song", None),
        ("", None),
    ],
)
def test_for_kind_uses_exact_match(kind, expected):
    assert SearchScope.for_kind(kind) is expected


def test_layout_hints_differ_for_meta_scope():
    all_layout = SearchScope.ALL.layout
    assert all_layout.items_per_group == 1
    assert all_layout.scroll_behavior == "continuous_group_leading_boundary"
    assert all_layout.group_width_fraction == pytest.approx(1 / 3)

    books_layout = SearchScope.BOOKS.layout
    assert books_layout.items_per_group == 3
    assert books_layout.scroll_behavior == "none"
    assert books_layout.group_width_fraction == 1.0


def test_from_index_follows_declaration_order():
    assert SearchScope.from_index(0) is SearchScope.ALL
    assert SearchScope.from_index(3) is SearchScope.APPS
    with pytest.raises(ValueError):
        SearchScope.from_index(5)
