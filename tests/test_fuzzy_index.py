from __future__ import annotations

import logging

from catalog.models import Record
from catalog.services.fuzzy_index import FuzzyIndex, build_index, similarity
from catalog.services.normalizer import normalize_records


def test_typo_matches_approximately(seasons) -> None:
    index = FuzzyIndex(normalize_records(seasons))

    assert [r.id for r in index.search("wintr")] == ["B"]


def test_blank_query_returns_everything_in_order(seasons) -> None:
    records = normalize_records(seasons)
    index = FuzzyIndex(records)

    assert index.search("") == records
    assert index.search("   ") == records


def test_title_outweighs_contributor_names() -> None:
    by_name = Record(id="lyricist", title="Zzz", lyricist=["Moonlight"])
    by_title = Record(id="title", title="Moonlight")
    index = FuzzyIndex([by_name, by_title])

    hits = index.search_hits("moonlight")

    assert [h.record.id for h in hits] == ["title", "lyricist"]
    assert hits[0].matched_fields == ["title"]
    assert hits[1].matched_fields == ["lyricist"]
    assert hits[0].score > hits[1].score


def test_single_character_cjk_query(library) -> None:
    index = FuzzyIndex(normalize_records(library))

    assert [r.id for r in index.search("春")] == [3]


def test_match_anywhere_in_field(library) -> None:
    index = FuzzyIndex(normalize_records(library))

    assert 2 in [r.id for r in index.search("lights")]


def test_full_width_and_case_are_folded() -> None:
    index = FuzzyIndex([Record(id=1, title="Winter"), Record(id=2, title="Summer")])

    assert [r.id for r in index.search("ＷＩＮＴＥＲ")] == [1]


def test_query_spanning_fields_matches_composite_text() -> None:
    record = Record(id=1, title="Harbor", album="Lights")
    index = FuzzyIndex([record, Record(id=2, title="Unrelated")])

    hits = index.search_hits("blue harbor lights")

    assert [h.record.id for h in hits] == [1]
    assert hits[0].matched_fields == ["content"]


def test_short_field_does_not_fully_match_long_query() -> None:
    assert similarity("a long query", "a") < 60
    assert similarity("wintr", "winter") >= 60


def test_search_failure_degrades_to_candidates(seasons, monkeypatch, caplog) -> None:
    records = normalize_records(seasons)
    index = FuzzyIndex(records)

    def boom(query):
        raise RuntimeError("matcher exploded")

    monkeypatch.setattr(index, "search_hits", boom)

    with caplog.at_level(logging.ERROR):
        result = index.search("wintr")

    assert result == records
    assert any("Fuzzy search failed" in r.message for r in caplog.records)


def test_build_index_of_empty_set() -> None:
    index = build_index([])

    assert index is not None
    assert index.search("anything") == []
    assert index.search("") == []
