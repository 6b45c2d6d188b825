from typing import Dict, Mapping, Optional, Sequence, Tuple

from catalog.config import ALL, EXACT_DIMENSIONS
from catalog.models import FilterState
from catalog.services.year_range import clamp_range, is_full_range

# Bookmark parameter names.
QUERY_PARAM = "q"
YEAR_START_PARAM = "yearStart"
YEAR_END_PARAM = "yearEnd"
PAGE_PARAM = "page"
# Single-value year form (All / Unknown / a year); independent of the range.
YEAR_PARAM = "year"

def _parse_int(value: Optional[str]) -> Optional[int]:
    if value is None:
        return None
    try:
        return int(str(value).strip())
    except ValueError:
        return None

def filter_state_from_params(params: Mapping[str, str], years: Sequence[int]) -> FilterState:
    """
    Rebuilds a FilterState from bookmark parameters. Every absent or
    unparsable parameter falls back to its default.
    """
    top = max(0, len(years) - 1)
    start = _parse_int(params.get(YEAR_START_PARAM))
    end = _parse_int(params.get(YEAR_END_PARAM))

    year_range: Optional[Tuple[int, int]] = None
    if start is not None or end is not None:
        year_range = clamp_range((start if start is not None else 0, end if end is not None else top), years)
        if is_full_range(year_range, years):
            year_range = None

    selections = {d: params.get(d) or ALL for d in EXACT_DIMENSIONS}
    return FilterState(
        query=params.get(QUERY_PARAM) or "",
        year=params.get(YEAR_PARAM) or ALL,
        year_range=year_range,
        **selections,
    )

def page_from_params(params: Mapping[str, str]) -> int:
    page = _parse_int(params.get(PAGE_PARAM))
    return page if page is not None and page >= 1 else 1

def filter_state_to_params(state: FilterState, years: Sequence[int], page: int = 1) -> Dict[str, str]:
    """
    Serializes a FilterState (and page) into bookmark parameters, omitting
    every value equal to its default.
    """
    params: Dict[str, str] = {}
    if state.query:
        params[QUERY_PARAM] = state.query
    for dimension in EXACT_DIMENSIONS:
        selection = state.selection(dimension)
        if selection != ALL:
            params[dimension] = selection
    if state.year != ALL:
        params[YEAR_PARAM] = str(state.year)
    if not is_full_range(state.year_range, years):
        start, end = clamp_range(state.year_range, years)
        params[YEAR_START_PARAM] = str(start)
        params[YEAR_END_PARAM] = str(end)
    if page > 1:
        params[PAGE_PARAM] = str(page)
    return params
