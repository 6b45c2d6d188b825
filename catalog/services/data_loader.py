import time
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

import orjson
from pydantic import ValidationError

from catalog.config import CATALOG_DATA_PATH
from catalog.logging_setup import logger
from catalog.models import Record
from catalog.services.fuzzy_index import build_index
from catalog.services.normalizer import normalize_records
from catalog.services.processing.filter_builder import compute_filter_options, slider_years
from catalog.store import CatalogSnapshot, Store, store

def read_raw_records(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Reads the raw record array from a JSON file. Both a bare array and an
    object with a "songs" array are accepted.
    """
    payload = orjson.loads(Path(path).read_bytes())
    if isinstance(payload, dict):
        payload = payload.get("songs", [])
    if not isinstance(payload, list):
        raise ValueError(f"Expected a list of records in {path}")
    return payload

def parse_records(raw_records: Sequence[Dict[str, Any]]) -> List[Record]:
    """
    Validates raw objects into records. Malformed entries are logged and
    skipped; they never abort the load.
    """
    records: List[Record] = []
    skipped = 0
    for position, raw in enumerate(raw_records):
        try:
            records.append(Record.model_validate(raw))
        except ValidationError as e:
            skipped += 1
            logger.warning(
                "Skipping malformed record",
                extra={"position": position, "id": raw.get("id") if isinstance(raw, dict) else None, "error": str(e)},
            )
    if skipped:
        logger.info(f"{skipped} of {len(raw_records)} records skipped during validation")
    return records

def build_snapshot(records: Sequence[Record]) -> CatalogSnapshot:
    """
    Normalizes a record set and derives everything a filter pass needs.
    """
    normalized = normalize_records(records)
    options = compute_filter_options(normalized)
    return CatalogSnapshot(
        records=normalized,
        options=options,
        years=slider_years(options),
        index=build_index(normalized),
        by_id={str(r.id): r for r in normalized},
    )

def load_and_process_data(path: Union[str, Path] = CATALOG_DATA_PATH, target: Store = store) -> Optional[CatalogSnapshot]:
    """
    Handles the entire process of reading, normalizing and caching the catalog.
    The new snapshot is swapped in only once it is fully built. On failure None
    is returned and the store keeps whatever it held before, so a failed reload
    leaves a loaded service serving its previous snapshot.
    """
    logger.info("--- Starting Catalog Loading ---", extra={"path": str(path)})
    start_time = time.time()

    try:
        raw_records = read_raw_records(path)
    except (OSError, ValueError) as e:
        logger.critical(
            f"Could not read catalog records: {e}",
            extra={"keeping_previous": target.is_ready},
            exc_info=True,
        )
        return None

    snapshot = build_snapshot(parse_records(raw_records))
    target.swap_snapshot(snapshot)
    logger.info(
        "--- Catalog Loading Complete ---",
        extra={
            "records": len(snapshot.records),
            "years": len(snapshot.years),
            "load_ms": f"{(time.time() - start_time) * 1000:.2f}",
        },
    )
    return snapshot
