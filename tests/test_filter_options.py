from __future__ import annotations

from catalog.config import ALL, UNKNOWN
from catalog.models import Record
from catalog.services.normalizer import normalize_records
from catalog.services.processing.filter_builder import compute_filter_options, slider_years


def test_year_options_for_seasons(seasons) -> None:
    options = compute_filter_options(normalize_records(seasons))

    assert options.year == [ALL, 2021, 2020, UNKNOWN]
    assert slider_years(options) == [2021, 2020]


def test_type_priority_then_first_seen() -> None:
    records = normalize_records([
        Record(id=1, title="a", type=["Remix"]),
        Record(id=2, title="b", type=["Cover", "Anime"]),
        Record(id=3, title="c", type=["Original"]),
    ])

    assert compute_filter_options(records).type == [ALL, "Original", "Cover", "Remix", "Anime"]


def test_unknown_only_when_some_record_lacks_a_value(library) -> None:
    options = compute_filter_options(normalize_records(library))

    assert options.type[-1] == UNKNOWN
    assert options.lyricist == [ALL, "Alice", "Moonlight", "李四", "张三", UNKNOWN]
    assert options.composer == [ALL, "Bob", "Dave", UNKNOWN]
    assert options.arranger == [ALL, "Carol", "Erin", UNKNOWN]
    assert options.year == [ALL, 2021, 2019, 2018, UNKNOWN]


def test_complete_dimension_has_no_unknown() -> None:
    records = normalize_records([
        Record(id=1, title="a", date="2001-01-01", composer=["X"]),
        Record(id=2, title="b", date="2002-01-01", composer=["Y", "X"]),
    ])
    options = compute_filter_options(records)

    assert options.composer == [ALL, "X", "Y"]
    assert options.year == [ALL, 2002, 2001]


def test_empty_record_set() -> None:
    options = compute_filter_options([])

    assert options.type == [ALL]
    assert options.year == [ALL]
    assert slider_years(options) == []
