from typing import Any, Sequence

from catalog.models import Page, PaginationState

def total_pages_for(total_items: int, items_per_page: int) -> int:
    if items_per_page < 1:
        raise ValueError("items_per_page must be a positive integer")
    return -(-total_items // items_per_page)

def clamp_page(page: int, total_pages: int) -> int:
    return max(1, min(page, max(1, total_pages)))

def paginate(
    items: Sequence[Any],
    items_per_page: int,
    current_page: int = 1,
    auto_clamp: bool = True,
) -> Page:
    """
    Slices an ordered list into one page. The requested page is clamped into
    [1, max(1, total_pages)] unless `auto_clamp` is off, in which case a page
    past the end is kept as requested and yields no items. Pages below 1 are
    always raised to 1.
    """
    total_items = len(items)
    total_pages = total_pages_for(total_items, items_per_page)
    page = clamp_page(current_page, total_pages) if auto_clamp else max(1, current_page)

    offset = (page - 1) * items_per_page
    page_items = list(items[offset:offset + items_per_page])
    return Page(
        items=page_items,
        current_page=page,
        total_pages=total_pages,
        start_index=offset + 1 if page_items else 0,
        end_index=offset + len(page_items) if page_items else 0,
        total_items=total_items,
        items_per_page=items_per_page,
    )

# --- STATE TRANSITIONS ---

def on_data_change(
    state: PaginationState,
    total_items: int,
    reset_on_change: bool = False,
    auto_clamp: bool = True,
) -> PaginationState:
    """
    Follows a change of the filtered set. With `reset_on_change` a different
    size sends the viewer back to page 1; otherwise the page is only clamped,
    and left untouched when the caller opted out of clamping.
    """
    if reset_on_change and total_items != state.total_items:
        return state.model_copy(update={"current_page": 1, "total_items": total_items})
    page = state.current_page
    if auto_clamp:
        page = clamp_page(page, total_pages_for(total_items, state.items_per_page))
    return state.model_copy(update={"current_page": page, "total_items": total_items})

def with_items_per_page(state: PaginationState, items_per_page: int) -> PaginationState:
    total_pages = total_pages_for(state.total_items, items_per_page)
    return state.model_copy(update={
        "items_per_page": items_per_page,
        "current_page": clamp_page(state.current_page, total_pages),
    })

def set_page(state: PaginationState, page: int) -> PaginationState:
    """Moves to `page` only when it exists; other requests leave the state as is."""
    if 1 <= page <= state.total_pages:
        return state.model_copy(update={"current_page": page})
    return state

def next_page(state: PaginationState) -> PaginationState:
    return set_page(state, state.current_page + 1)

def prev_page(state: PaginationState) -> PaginationState:
    return set_page(state, state.current_page - 1)

def first_page(state: PaginationState) -> PaginationState:
    return state.model_copy(update={"current_page": 1})

def last_page(state: PaginationState) -> PaginationState:
    return state.model_copy(update={"current_page": max(1, state.total_pages)})
