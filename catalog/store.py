import threading
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from catalog.models import FilterOptions, Record
from catalog.services.fuzzy_index import FuzzyIndex

@dataclass(frozen=True)
class CatalogSnapshot:
    """
    Everything derived from one load of the record source. Passes read a
    snapshot as a whole, so a reload never shows up half-applied.
    """
    records: List[Record]
    options: FilterOptions
    years: List[int]
    index: Optional[FuzzyIndex]
    by_id: Dict[str, Record] = field(default_factory=dict)

class Store:
    """
    A thread-safe application store for the catalog snapshot and readiness state.
    """
    def __init__(self):
        self.snapshot: Optional[CatalogSnapshot] = None
        self.lock = threading.Lock()
        self.is_ready: bool = False

    def swap_snapshot(self, new_snapshot: CatalogSnapshot) -> None:
        """
        Atomically replaces the snapshot under a lock and sets the
        application state to ready.
        """
        with self.lock:
            self.snapshot = new_snapshot
            self.is_ready = True

    def get_snapshot(self) -> Optional[CatalogSnapshot]:
        with self.lock:
            return self.snapshot if self.is_ready else None

# Export a singleton instance for global use.
store = Store()
