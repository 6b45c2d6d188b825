from typing import List, Optional, Sequence, Tuple, Union

from catalog.models import Handle

YearRange = Tuple[int, int]

def last_index(years: Sequence[int]) -> int:
    return max(0, len(years) - 1)

def full_range(years: Sequence[int]) -> YearRange:
    return (0, last_index(years))

def is_disabled(years: Sequence[int]) -> bool:
    """With fewer than two distinct years the slider is a fixed value."""
    return len(years) <= 1

def clamp_range(year_range: Optional[YearRange], years: Sequence[int]) -> YearRange:
    """
    Clamps both indices into [0, last] and reorders a crossed pair. None
    stands for the full span.
    """
    if year_range is None or is_disabled(years):
        return full_range(years)
    top = last_index(years)
    start, end = (max(0, min(top, i)) for i in year_range)
    if start > end:
        start, end = end, start
    return (start, end)

def is_full_range(year_range: Optional[YearRange], years: Sequence[int]) -> bool:
    return clamp_range(year_range, years) == full_range(years)

def selected_years(year_range: Optional[YearRange], years: Sequence[int]) -> Optional[List[int]]:
    """
    Maps slider indices to the permitted years. None means no year filtering,
    which is what the full span (or a disabled slider) collapses to.
    """
    if not years or is_full_range(year_range, years):
        return None
    start, end = clamp_range(year_range, years)
    return list(years[start:end + 1])

def position_to_index(position: float, years: Sequence[int]) -> int:
    """Nearest index for a 0..1 position along the slider track."""
    position = max(0.0, min(1.0, position))
    return int(position * last_index(years) + 0.5)

def drag_handle(
    year_range: YearRange,
    handle: Union[Handle, str],
    index: int,
    years: Sequence[int],
) -> YearRange:
    """
    Moves one handle. A handle dragged past the other stops at the other's
    position. Disabled sliders never move.
    """
    start, end = clamp_range(year_range, years)
    if is_disabled(years):
        return (start, end)
    index = max(0, min(last_index(years), index))
    if Handle(handle) == Handle.START:
        return (min(index, end), end)
    return (start, max(index, start))

def click_track(year_range: YearRange, index: int, years: Sequence[int]) -> YearRange:
    """Jumps the nearer handle to a clicked index; on a tie the end handle moves."""
    start, end = clamp_range(year_range, years)
    if is_disabled(years):
        return (start, end)
    index = max(0, min(last_index(years), index))
    if abs(index - start) < abs(index - end):
        return drag_handle((start, end), Handle.START, index, years)
    return drag_handle((start, end), Handle.END, index, years)
