from typing import Callable, Dict, List, Mapping, Optional, Tuple

from catalog.config import ALL, DEBOUNCE_MS, ITEMS_PER_PAGE
from catalog.logging_setup import logger
from catalog.models import Dimension, FilterState, Page, PaginationState, Record
from catalog.services import pagination as pager
from catalog.services.query_state import (
    filter_state_from_params,
    filter_state_to_params,
    page_from_params,
)
from catalog.services.scheduling import Debouncer
from catalog.services.search import run_filter_pass
from catalog.services.year_range import clamp_range, full_range, is_full_range
from catalog.store import CatalogSnapshot

class BrowseSession:
    """
    Interaction state for one viewer of a catalog snapshot.

    `state` always reflects what the viewer has typed or dragged. The query and
    the year range reach the filter pass through debouncers, so `applied_state`
    can lag behind `state` for up to the debounce delay. Every filter change
    sends the viewer back to page 1.
    """

    def __init__(
        self,
        snapshot: CatalogSnapshot,
        state: Optional[FilterState] = None,
        page: int = 1,
        items_per_page: int = ITEMS_PER_PAGE,
        delay_ms: int = DEBOUNCE_MS,
        on_result: Optional[Callable[[Page], None]] = None,
    ):
        self.snapshot = snapshot
        self.state = state or FilterState()
        self.on_result = on_result
        self.pagination = PaginationState(current_page=max(1, page), items_per_page=items_per_page)
        self.results: List[Record] = []
        self.page: Optional[Page] = None

        self._applied_query = self.state.query
        self._applied_range = self.state.year_range
        # An emptied query restores the full list without waiting.
        self.query_debouncer: Debouncer[str] = Debouncer(
            self._apply_query, delay_ms, immediate=lambda q: not q.strip()
        )
        self.range_debouncer: Debouncer[Optional[Tuple[int, int]]] = Debouncer(self._apply_range, delay_ms)

        self._refresh()
        self._publish()

    # --- constructors / bookmarks ---

    @classmethod
    def from_params(cls, snapshot: CatalogSnapshot, params: Mapping[str, str], **kwargs) -> "BrowseSession":
        state = filter_state_from_params(params, snapshot.years)
        return cls(snapshot, state=state, page=page_from_params(params), **kwargs)

    def to_params(self) -> Dict[str, str]:
        return filter_state_to_params(self.state, self.snapshot.years, self.pagination.current_page)

    @property
    def applied_state(self) -> FilterState:
        return self.state.model_copy(update={"query": self._applied_query, "year_range": self._applied_range})

    @property
    def year_range(self) -> Tuple[int, int]:
        return clamp_range(self.state.year_range, self.snapshot.years)

    # --- pass execution ---

    def _refresh(self) -> None:
        snapshot = self.snapshot
        self.results = run_filter_pass(snapshot.records, self.applied_state, snapshot.options, snapshot.index)
        self.pagination = pager.on_data_change(self.pagination, len(self.results))
        logger.debug(
            "Filter pass completed",
            extra={"results": len(self.results), "page": self.pagination.current_page},
        )

    def _publish(self) -> None:
        self.page = pager.paginate(
            self.results, self.pagination.items_per_page, self.pagination.current_page
        )
        if self.on_result is not None:
            self.on_result(self.page)

    def _reset_page(self) -> None:
        self.pagination = pager.first_page(self.pagination)

    def _apply_query(self, query: str) -> None:
        self._applied_query = query
        self._refresh()
        self._publish()

    def _apply_range(self, year_range: Optional[Tuple[int, int]]) -> None:
        self._applied_range = year_range
        self._refresh()
        self._publish()

    def flush(self) -> None:
        """Applies any debounced change immediately."""
        self.query_debouncer.flush()
        self.range_debouncer.flush()

    def replace_snapshot(self, snapshot: CatalogSnapshot) -> None:
        """
        Switches to a reloaded catalog. Selections are kept; the year range is
        re-clamped to the new slider and the page to the new result size.
        """
        self.snapshot = snapshot
        if self.state.year_range is not None:
            year_range = clamp_range(self.state.year_range, snapshot.years)
            if is_full_range(year_range, snapshot.years):
                year_range = None
            self.state = self.state.model_copy(update={"year_range": year_range})
            self._applied_range = year_range
        self._refresh()
        self._publish()

    # --- filter setters ---

    def set_query(self, query: str) -> None:
        self.state = self.state.model_copy(update={"query": query})
        self._reset_page()
        self.query_debouncer.submit(query)

    def set_year_range(self, year_range: Tuple[int, int]) -> None:
        clamped = clamp_range(year_range, self.snapshot.years)
        stored = None if is_full_range(clamped, self.snapshot.years) else clamped
        self.state = self.state.model_copy(update={"year_range": stored})
        self._reset_page()
        self.range_debouncer.submit(stored)

    def set_filter(self, dimension: Dimension, value: str) -> None:
        """Sets one exact-match selection (or the single-value year form)."""
        dimension = Dimension(dimension)
        self.state = self.state.model_copy(update={dimension.value: value or ALL})
        self._reset_page()
        self._refresh()
        self._publish()

    def reset_all_filters(self) -> None:
        self.query_debouncer.cancel()
        self.range_debouncer.cancel()
        self.state = FilterState()
        self._applied_query = ""
        self._applied_range = None
        self._reset_page()
        self._refresh()
        self._publish()

    @property
    def has_active_filters(self) -> bool:
        default = FilterState()
        return any(
            self.state.selection(d) != default.selection(d) for d in Dimension
        ) or bool(self.state.query) or self.year_range != full_range(self.snapshot.years)

    # --- pagination ---

    def set_items_per_page(self, items_per_page: int) -> None:
        self.pagination = pager.with_items_per_page(self.pagination, items_per_page)
        self._publish()

    def set_page(self, page: int) -> None:
        self.pagination = pager.set_page(self.pagination, page)
        self._publish()

    def next_page(self) -> None:
        self.pagination = pager.next_page(self.pagination)
        self._publish()

    def prev_page(self) -> None:
        self.pagination = pager.prev_page(self.pagination)
        self._publish()

    def first_page(self) -> None:
        self.pagination = pager.first_page(self.pagination)
        self._publish()

    def last_page(self) -> None:
        self.pagination = pager.last_page(self.pagination)
        self._publish()
