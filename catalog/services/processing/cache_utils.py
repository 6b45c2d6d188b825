import threading
from collections import OrderedDict
from typing import Callable, Generic, Optional, Sequence, Tuple, TypeVar

from catalog.config import INDEX_CACHE_SIZE
from catalog.logging_setup import logger

T = TypeVar("T")

class SnapshotCache(Generic[T]):
    """
    Size-bounded LRU cache of artifacts built from a record list, keyed by the
    list's identity. The list itself is held alongside the artifact so an id
    cannot be recycled while its entry is alive.
    """
    def __init__(self, builder: Callable[[Sequence], T], max_size: int = INDEX_CACHE_SIZE, name: str = "snapshot"):
        if max_size < 1:
            raise ValueError("max_size must be at least 1")
        self.builder = builder
        self.max_size = max_size
        self.name = name
        self.entries: "OrderedDict[int, Tuple[Sequence, T]]" = OrderedDict()
        self.lock = threading.Lock()
        self.hits = 0
        self.misses = 0

    def get(self, records: Sequence) -> T:
        """
        Returns the artifact for `records`, building it on a miss and evicting
        the least recently used entry when full.
        """
        key = id(records)
        with self.lock:
            cached = self.entries.get(key)
            if cached is not None and cached[0] is records:
                self.entries.move_to_end(key)
                self.hits += 1
                logger.debug("Cache hit", extra={"cache": self.name, "size": len(self.entries)})
                return cached[1]

        artifact = self.builder(records)

        with self.lock:
            self.misses += 1
            self.entries[key] = (records, artifact)
            self.entries.move_to_end(key)
            while len(self.entries) > self.max_size:
                _, (evicted, _) = self.entries.popitem(last=False)
                logger.debug("Cache eviction", extra={"cache": self.name, "records": len(evicted)})
        return artifact

    def peek(self, records: Sequence) -> Optional[T]:
        with self.lock:
            cached = self.entries.get(id(records))
            if cached is not None and cached[0] is records:
                return cached[1]
            return None

    def clear(self) -> None:
        with self.lock:
            self.entries.clear()

    def __len__(self) -> int:
        return len(self.entries)
