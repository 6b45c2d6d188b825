import re
from datetime import date, datetime, timezone
from typing import Iterable, List, Optional, Tuple

from catalog.models import Record

# Partial ISO forms: "2020" and "2020-03".
PARTIAL_DATE_RE = re.compile(r'^(\d{4})(?:-(\d{1,2}))?$')

def parse_timestamp(value: Optional[str]) -> Optional[datetime]:
    """
    Parses an ISO date or timestamp into a naive UTC datetime. Accepts full
    dates, full timestamps (with or without an offset or trailing "Z") and the
    partial "YYYY" / "YYYY-MM" forms. Returns None for anything else.
    """
    if not value or not isinstance(value, str):
        return None
    text = value.strip()

    try:
        parsed = datetime.fromisoformat(text.replace("Z", "+00:00"))
    except ValueError:
        parsed = None
    if parsed is not None:
        if parsed.tzinfo is not None:
            parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
        return parsed

    partial = PARTIAL_DATE_RE.match(text)
    if partial:
        year, month = int(partial.group(1)), int(partial.group(2) or 1)
        try:
            return datetime(year, month, 1)
        except ValueError:
            return None
    return None

def parse_date(value: Optional[str]) -> Optional[date]:
    """Calendar date of `parse_timestamp`, or None."""
    parsed = parse_timestamp(value)
    return parsed.date() if parsed else None

def derive_year(record: Record) -> Optional[int]:
    parsed = parse_date(record.date)
    return parsed.year if parsed else None

def normalize_record(record: Record) -> Record:
    """Returns a copy of the record whose `year` is recomputed from `date`."""
    return record.model_copy(update={"year": derive_year(record)})

def canonical_sort_key(record: Record) -> Tuple[int, float]:
    """
    Dated records first, newest first down to the second. Undated records
    share one key so that the stable sort keeps their input order.
    """
    parsed = parse_timestamp(record.date)
    if parsed is None:
        return (1, 0.0)
    return (0, -(parsed - datetime.min).total_seconds())

def normalize_records(records: Iterable[Record]) -> List[Record]:
    """
    Recomputes every record's year and returns the records in canonical
    (reverse-chronological) order. Running it on its own output is a no-op.
    """
    normalized = [normalize_record(r) for r in records]
    normalized.sort(key=canonical_sort_key)
    return normalized
