import time
import uuid
from contextlib import asynccontextmanager
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware
from fastapi.responses import ORJSONResponse
from asgi_correlation_id import CorrelationIdMiddleware

from catalog.config import CATALOG_DATA_PATH
from catalog.logging_setup import setup_logging, logger
from catalog.services.data_loader import load_and_process_data
from catalog.routes import router

@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handles application startup and shutdown events.
    """
    setup_logging()
    logger.info("--- Application Starting Up ---")

    app.state.catalog_path = getattr(app.state, "catalog_path", CATALOG_DATA_PATH)
    # A failed load leaves the readiness probe at 503; POST /admin/reload retries.
    load_and_process_data(app.state.catalog_path)

    yield
    logger.info("--- Application Shutting Down ---")

app = FastAPI(
    title="Song Catalog API",
    description="Search, filter and paginate the song catalog.",
    version="1.0.0",
    default_response_class=ORJSONResponse,
    lifespan=lifespan,
)


# MIDDLEWARE CONFIGURATION

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(GZipMiddleware, minimum_size=1000)
app.add_middleware(CorrelationIdMiddleware)

@app.middleware("http")
async def logging_middleware(request: Request, call_next):
    """
    Global middleware to handle logging and uncaught exceptions.
    """
    start_time = time.time()
    logger.info(
        "Request received",
        extra={"method": request.method, "url": str(request.url)}
    )
    try:
        response = await call_next(request)
        process_time = (time.time() - start_time) * 1000
        logger.info(
            "Request completed",
            extra={
                "method": request.method,
                "url": str(request.url),
                "status_code": response.status_code,
                "process_time_ms": f"{process_time:.2f}",
            },
        )
        return response
    except Exception as e:
        correlation_id = getattr(request.state, 'correlation_id', str(uuid.uuid4()))
        logger.critical(
            "Unhandled exception",
            extra={"method": request.method, "url": str(request.url), "error": str(e)},
            exc_info=True,
        )
        return ORJSONResponse(
            status_code=500,
            content={
                "error": "Internal Server Error",
                "message": "An unexpected error occurred.",
                "correlation_id": correlation_id,
            },
        )

#ROUTER INCLUSION
app.include_router(router)
