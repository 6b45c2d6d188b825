from typing import Dict, Any, List, Sequence
from collections import defaultdict

from catalog.config import ALL, UNKNOWN, TYPE_ORDER, NAME_DIMENSIONS
from catalog.models import FilterOptions, Record
from catalog.services.name_sorter import sort_names

def _order_types(seen: List[str]) -> List[str]:
    """Editorial categories first in their declared order, then the rest as first seen."""
    preferred = [t for t in TYPE_ORDER if t in seen]
    return preferred + [t for t in seen if t not in TYPE_ORDER]

def compute_filter_options(records: Sequence[Record]) -> FilterOptions:
    """
    Builds the selectable values for every filter dimension from a normalized
    record set. Every list starts with "All"; "Unknown" is appended only when
    at least one record has no value for that dimension.
    """
    # dict keys keep first-seen order, which the "type" dimension relies on
    values: Dict[str, Dict[Any, None]] = defaultdict(dict)
    has_unknown: Dict[str, bool] = defaultdict(bool)

    def add_to_filters(key: str, raw_values) -> None:
        """
        Helper function to add a record's values for one dimension. An empty
        or missing value flags the dimension's "Unknown" bucket.
        """
        if isinstance(raw_values, (list, tuple, set)):
            present = [v for v in raw_values if v]
        else:
            present = [raw_values] if raw_values else []

        if not present:
            has_unknown[key] = True
            return
        for v in present:
            values[key].setdefault(v, None)

    for record in records:
        add_to_filters('type', record.type)
        add_to_filters('year', record.year)
        for dimension in NAME_DIMENSIONS:
            add_to_filters(dimension, getattr(record, dimension))

    # Sort filters
    ordered: Dict[str, List[Any]] = {
        'type': _order_types(list(values['type'])),
        'year': sorted(values['year'], reverse=True),
    }
    for dimension in NAME_DIMENSIONS:
        ordered[dimension] = sort_names(values[dimension])

    options: Dict[str, List[Any]] = {}
    for key, value_list in ordered.items():
        options[key] = [ALL, *value_list]
        if has_unknown[key]:
            options[key].append(UNKNOWN)

    return FilterOptions(**options)

def slider_years(options: FilterOptions) -> List[int]:
    """The year list the range slider walks over: descending, without sentinels."""
    return [y for y in options.year if y not in (ALL, UNKNOWN)]
