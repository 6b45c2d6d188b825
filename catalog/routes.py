# catalog/routes.py

from fastapi import APIRouter, HTTPException, Query, Request, status
from fastapi.responses import ORJSONResponse

from catalog.config import CATALOG_DATA_PATH, ITEMS_PER_PAGE
from catalog.models import PaginationState
from catalog.store import store
from catalog.services.data_loader import load_and_process_data
from catalog.services.query_state import filter_state_from_params, filter_state_to_params, page_from_params
from catalog.services.search import get_record_details, run_search

router = APIRouter()

def _require_snapshot():
    snapshot = store.get_snapshot()
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Data is still being loaded. Please try again later."
        )
    return snapshot

@router.get("/health/ready", tags=["Health"])
def get_readiness_status():
    """
    Readiness probe to check if the catalog load is complete.
    """
    if store.is_ready:
        return {"status": "ready"}
    return ORJSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content={"status": "loading_data"}
    )

@router.get("/filters/options", tags=["Metadata"])
def get_filter_options():
    """
    Returns available filter options for the frontend.
    """
    snapshot = _require_snapshot()
    return {
        **snapshot.options.model_dump(),
        "slider_years": snapshot.years,
    }

@router.get("/songs", tags=["Songs"])
def search_songs(request: Request, per_page: int = Query(ITEMS_PER_PAGE, alias="perPage", ge=1, le=500)):
    """
    Runs one search + filter pass. Query parameters follow the bookmark format
    (q, type, lyricist, composer, arranger, year, yearStart, yearEnd, page).
    """
    snapshot = _require_snapshot()
    params = request.query_params
    state = filter_state_from_params(params, snapshot.years)
    pagination = PaginationState(current_page=page_from_params(params), items_per_page=per_page)

    # One snapshot for the whole pass: `state` was resolved against its years.
    result = run_search(snapshot, state, pagination)
    page = result["page"]
    return {
        "items": [record.model_dump() for record in page.items],
        "currentPage": page.current_page,
        "totalPages": page.total_pages,
        "startIndex": page.start_index,
        "endIndex": page.end_index,
        "totalItems": page.total_items,
        "state": state.model_dump(),
        "params": filter_state_to_params(state, result["years"], page.current_page),
    }

@router.get("/songs/{song_id}", tags=["Songs"])
def get_song(song_id: str):
    """
    Retrieves one normalized song by its ID.
    """
    _require_snapshot()
    try:
        return get_record_details(song_id).model_dump()
    except KeyError as e:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(e))
    except RuntimeError as e:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(e))

@router.post("/admin/reload", tags=["Admin"])
def reload_catalog(request: Request):
    """
    Re-reads the record source and swaps in a freshly built snapshot.
    """
    path = getattr(request.app.state, "catalog_path", CATALOG_DATA_PATH)
    snapshot = load_and_process_data(path)
    if snapshot is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog could not be loaded."
        )
    return {"status": "ready", "records": len(snapshot.records)}
