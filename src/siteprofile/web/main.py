"""
FastAPI application exposing business profile extraction over HTTP.
"""

from __future__ import annotations

import time
from contextlib import asynccontextmanager
from typing import Any, AsyncGenerator, Callable, Dict, Optional
from uuid import uuid4

import structlog
from fastapi import Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, Response
from prometheus_client import CONTENT_TYPE_LATEST
from pydantic import BaseModel

from siteprofile import __version__
from siteprofile.config import settings
from siteprofile.exceptions import InputError, ProfileError
from siteprofile.observability import configure_logging, export_prometheus
from siteprofile.service import BusinessProfileService

logger = structlog.get_logger(__name__)


class ScrapeRequest(BaseModel):
    url: Optional[str] = None


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle."""
    configure_logging(settings.monitoring)
    app.state.start_time = time.time()
    logger.info("Starting SiteProfile API", version=__version__)

    yield

    logger.info("Shutting down SiteProfile API")


app = FastAPI(
    title="SiteProfile API",
    version=__version__,
    lifespan=lifespan,
)


def get_service(request: Request) -> BusinessProfileService:
    """Return the application's profile service, creating it on first use."""
    service = getattr(request.app.state, "service", None)
    if service is None:
        service = BusinessProfileService(settings)
        request.app.state.service = service
    return service


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


@app.exception_handler(RequestValidationError)
async def invalid_body_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    logger.info("Rejected unreadable request body", path=request.url.path, errors=len(exc.errors()))
    return _error(400, "Invalid request body")


@app.post("/api/scrape")
async def scrape(payload: ScrapeRequest, service: BusinessProfileService = Depends(get_service)) -> Any:
    """Extract a business profile for the posted URL."""
    try:
        record = await service.extract_business_profile(payload.url)
    except InputError as e:
        return _error(400, str(e))
    except ProfileError as e:
        return _error(500, str(e))
    except Exception as e:
        logger.exception("Unexpected error while scraping website", url=payload.url)
        return _error(500, str(e) or "Failed to scrape website")

    return JSONResponse(content=record.to_dict())


@app.get("/health")
async def health_check() -> Dict[str, Any]:
    """Health check endpoint for Kubernetes/Docker."""
    return {
        "status": "healthy",
        "timestamp": time.time(),
        "version": __version__,
    }


@app.get("/metrics")
async def get_prometheus_metrics() -> Response:
    """Endpoint for Prometheus to scrape."""
    return Response(export_prometheus(), media_type=CONTENT_TYPE_LATEST)


@app.middleware("http")
async def add_process_time_header(request: Request, call_next: Callable) -> Any:
    """Add request headers and log all requests."""
    start_time = time.time()
    request_id = str(uuid4())
    request.state.request_id = request_id
    structlog.contextvars.bind_contextvars(request_id=request_id)

    try:
        response = await call_next(request)

        process_time = time.time() - start_time
        response.headers["X-Process-Time"] = str(process_time)
        response.headers["X-Request-ID"] = request_id

        logger.info(
            "API request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            response_time_ms=round(process_time * 1000, 2),
            client=request.client.host if request.client else None,
        )
        return response
    finally:
        structlog.contextvars.unbind_contextvars("request_id")


def run_web_server(host: str = "127.0.0.1", port: int = 8000) -> None:
    """Function to run the FastAPI server."""
    import uvicorn

    logger.info("Starting SiteProfile web server", url=f"http://{host}:{port}")
    uvicorn.run(app, host=host, port=port, log_config=None)
