import time
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence, Tuple

from rapidfuzz import fuzz

from catalog.config import (
    NAME_DIMENSIONS,
    SEARCH_CONTENT_WEIGHT,
    SEARCH_FIELD_WEIGHTS,
    SEARCH_MIN_MATCH_CHAR_LENGTH,
    SEARCH_THRESHOLD,
)
from catalog.logging_setup import logger
from catalog.models import Record
from catalog.textual_manipulation import normalize_for_search

@dataclass(frozen=True)
class IndexEntry:
    """Pre-folded search text for one record, kept per field plus one composite string."""
    position: int
    fields: Dict[str, Tuple[str, ...]]
    content: str

@dataclass
class SearchHit:
    record: Record
    score: float
    matched_fields: List[str] = field(default_factory=list)

def similarity(query: str, text: str) -> float:
    """
    Location-agnostic similarity in 0..100. A query shorter than the text is
    aligned against the best-matching window of the text; otherwise the two
    strings are compared whole so that a short field cannot fully match a
    longer query.
    """
    if not query or not text:
        return 0.0
    if len(query) <= len(text):
        return fuzz.partial_ratio(query, text)
    return fuzz.ratio(query, text)

class FuzzyIndex:
    """
    Weighted approximate-text index over a record snapshot. Build once per
    snapshot; `search` is cheap relative to the build.
    """

    def __init__(
        self,
        records: Sequence[Record],
        weights: Optional[Dict[str, float]] = None,
        threshold: float = SEARCH_THRESHOLD,
        min_match_char_length: int = SEARCH_MIN_MATCH_CHAR_LENGTH,
    ):
        start_time = time.time()
        self.records: List[Record] = list(records)
        self.weights = dict(weights or SEARCH_FIELD_WEIGHTS)
        self.min_score = (1.0 - threshold) * 100
        self.min_match_char_length = max(1, min_match_char_length)
        self.entries: List[IndexEntry] = [self._build_entry(i, r) for i, r in enumerate(self.records)]
        logger.debug(
            "Fuzzy index built",
            extra={"records": len(self.records), "build_ms": f"{(time.time() - start_time) * 1000:.2f}"},
        )

    @staticmethod
    def _build_entry(position: int, record: Record) -> IndexEntry:
        fields: Dict[str, Tuple[str, ...]] = {
            "title": (normalize_for_search(record.title),),
            "album": (normalize_for_search(record.album),) if record.album else (),
        }
        for dimension in NAME_DIMENSIONS:
            fields[dimension] = tuple(normalize_for_search(n) for n in getattr(record, dimension))

        content = " ".join(
            part for part in [
                record.title,
                record.album or "",
                *(" ".join(getattr(record, d)) for d in NAME_DIMENSIONS),
            ] if part
        )
        return IndexEntry(position=position, fields=fields, content=normalize_for_search(content))

    def _score_entry(self, query: str, entry: IndexEntry) -> Optional[SearchHit]:
        score = 0.0
        matched: List[str] = []
        for name, texts in entry.fields.items():
            best = max((similarity(query, t) for t in texts), default=0.0)
            if best >= self.min_score:
                score += self.weights.get(name, 0.0) * best / 100
                matched.append(name)

        if not matched:
            best = similarity(query, entry.content)
            if best < self.min_score:
                return None
            score = SEARCH_CONTENT_WEIGHT * best / 100
            matched.append("content")

        return SearchHit(record=self.records[entry.position], score=score, matched_fields=matched)

    def search_hits(self, query: str) -> List[SearchHit]:
        """
        Returns scored matches, best first. Ties keep index (canonical) order.
        """
        folded = normalize_for_search(query)
        if len(folded) < self.min_match_char_length:
            return []

        hits = [hit for hit in (self._score_entry(folded, e) for e in self.entries) if hit]
        hits.sort(key=lambda h: -h.score)
        return hits

    def search(self, query: str) -> List[Record]:
        """
        Returns the records matching `query`, ranked by weighted similarity.
        A blank query skips matching and returns every record in index order.
        Any matcher failure degrades to that same full list.
        """
        if not query or not query.strip():
            return list(self.records)
        try:
            return [hit.record for hit in self.search_hits(query)]
        except Exception as e:
            logger.error(
                "Fuzzy search failed, returning unranked candidates",
                extra={"query": query, "error": str(e)},
                exc_info=True,
            )
            return list(self.records)

def build_index(records: Sequence[Record]) -> Optional[FuzzyIndex]:
    """Builds an index, or returns None when the build fails so callers can skip ranking."""
    try:
        return FuzzyIndex(records)
    except Exception as e:
        logger.error("Fuzzy index build failed", extra={"error": str(e)}, exc_info=True)
        return None
