from __future__ import annotations

from catalog.models import FilterState
from catalog.services.query_state import (
    filter_state_from_params,
    filter_state_to_params,
    page_from_params,
)

YEARS = [2021, 2020, 2019]


def test_absent_parameters_give_defaults() -> None:
    assert filter_state_from_params({}, YEARS) == FilterState()
    assert page_from_params({}) == 1


def test_round_trip() -> None:
    state = FilterState(query="spring", type="Cover", composer="张三", year_range=(0, 1))

    params = filter_state_to_params(state, YEARS, page=3)

    assert params == {
        "q": "spring",
        "type": "Cover",
        "composer": "张三",
        "yearStart": "0",
        "yearEnd": "1",
        "page": "3",
    }
    assert filter_state_from_params(params, YEARS) == state
    assert page_from_params(params) == 3


def test_defaults_are_omitted() -> None:
    assert filter_state_to_params(FilterState(), YEARS) == {}
    assert filter_state_to_params(FilterState(year_range=(0, 2)), YEARS, page=1) == {}


def test_full_range_parameters_collapse_to_default() -> None:
    state = filter_state_from_params({"yearStart": "0", "yearEnd": "2"}, YEARS)

    assert state.year_range is None


def test_partial_and_out_of_range_year_parameters() -> None:
    assert filter_state_from_params({"yearStart": "1"}, YEARS).year_range == (1, 2)
    assert filter_state_from_params({"yearEnd": "0"}, YEARS).year_range == (0, 0)
    assert filter_state_from_params({"yearStart": "9", "yearEnd": "-4"}, YEARS).year_range is None
    assert filter_state_from_params({"yearStart": "2", "yearEnd": "1"}, YEARS).year_range == (1, 2)


def test_unparsable_numbers_fall_back_to_defaults() -> None:
    assert filter_state_from_params({"yearStart": "abc", "yearEnd": "x"}, YEARS).year_range is None
    assert page_from_params({"page": "zero"}) == 1
    assert page_from_params({"page": "0"}) == 1
    assert page_from_params({"page": "-2"}) == 1


def test_single_value_year_round_trip() -> None:
    for year in ("Unknown", "2020"):
        state = FilterState(year=year, year_range=(0, 0))

        params = filter_state_to_params(state, YEARS)

        assert params == {"year": year, "yearStart": "0", "yearEnd": "0"}
        assert filter_state_from_params(params, YEARS) == state

    assert "year" not in filter_state_to_params(FilterState(year="All"), YEARS)
