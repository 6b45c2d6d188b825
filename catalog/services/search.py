from typing import Any, Dict, List, Optional, Sequence

from catalog.config import ALL, UNKNOWN, EXACT_DIMENSIONS
from catalog.logging_setup import logger
from catalog.models import FilterOptions, FilterState, Page, PaginationState, Record
from catalog.services.fuzzy_index import FuzzyIndex, build_index
from catalog.services.pagination import paginate
from catalog.services.processing.cache_utils import SnapshotCache
from catalog.services.processing.filter_builder import compute_filter_options, slider_years
from catalog.services.year_range import selected_years
from catalog.store import CatalogSnapshot, store

# Passes that are not handed prebuilt artifacts share them per record list,
# so repeated passes over one snapshot build the index only once.
index_cache: SnapshotCache[Optional[FuzzyIndex]] = SnapshotCache(build_index, name="fuzzy_index")
options_cache: SnapshotCache[FilterOptions] = SnapshotCache(compute_filter_options, name="filter_options")

# --- DETAILS LOOKUP

def get_record_details(record_id: str) -> Record:
    """
    Retrieves one normalized record from the current snapshot.
    Raises KeyError if not found.
    """
    snapshot = store.get_snapshot()
    if snapshot is None:
        raise RuntimeError("Data is still being loaded")

    record = snapshot.by_id.get(str(record_id))
    if record is None:
        raise KeyError(f"Song with ID '{record_id}' not found")
    return record


# --- FILTER LOGIC ---

def _matches_exact(selection: str, values: Sequence[str]) -> bool:
    """
    "All" passes everything, "Unknown" passes only an empty value list, any
    other selection must be one of the record's values.
    """
    if selection == ALL:
        return True
    if selection == UNKNOWN:
        return not values
    return selection in values

def _matches_year_value(selection: str, year: Optional[int]) -> bool:
    """Single-value form of the year dimension."""
    if selection == ALL:
        return True
    if selection == UNKNOWN:
        return year is None
    return year is not None and str(year) == str(selection).strip()

def _record_passes(record: Record, state: FilterState, permitted_years: Optional[set]) -> bool:
    for dimension in EXACT_DIMENSIONS:
        if not _matches_exact(state.selection(dimension), getattr(record, dimension)):
            return False

    if not _matches_year_value(state.year, record.year):
        return False

    # Records without a year never fall inside an explicit range.
    if permitted_years is not None and record.year not in permitted_years:
        return False

    return True

def apply_filters(candidates: Sequence[Record], state: FilterState, years: Sequence[int]) -> List[Record]:
    """
    Keeps the candidates that satisfy every active predicate (AND), preserving
    their order.
    """
    permitted = selected_years(state.year_range, years)
    permitted_years = set(permitted) if permitted is not None else None
    return [record for record in candidates if _record_passes(record, state, permitted_years)]

def run_filter_pass(
    records: Sequence[Record],
    state: FilterState,
    options: Optional[FilterOptions] = None,
    index: Optional[FuzzyIndex] = None,
) -> List[Record]:
    """
    One search + filter pass over a normalized snapshot. With a blank query the
    canonical order is kept; otherwise the matcher's ranking replaces it.
    """
    if options is None:
        options = options_cache.get(records)

    candidates: Sequence[Record] = records
    if state.query.strip():
        if index is None:
            index = index_cache.get(records)
        if index is not None:
            candidates = index.search(state.query)
        else:
            logger.warning("No fuzzy index available, query ignored", extra={"query": state.query})

    return apply_filters(candidates, state, slider_years(options))
def run_search(
    snapshot: CatalogSnapshot,
    state: FilterState,
    pagination: PaginationState,
    auto_clamp: bool = True,
) -> Dict[str, Any]:
    """
    Runs a pass against one snapshot and returns the requested page. The
    caller passes the snapshot its `state` was read against, so a reload
    in between cannot remap the year-range indices.
    """
    results = run_filter_pass(snapshot.records, state, snapshot.options, snapshot.index)
    page: Page = paginate(results, pagination.items_per_page, pagination.current_page, auto_clamp=auto_clamp)
    return {"page": page, "years": snapshot.years}
