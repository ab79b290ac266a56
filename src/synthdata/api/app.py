"""FastAPI application serving generated records over HTTP.

Each handler is a single linear pipeline: resolve parameters, generate,
serialize, respond. Taxonomy errors become 400/500 responses carrying
``{"error": message}``.
"""

from contextlib import asynccontextmanager
from typing import Any
import sqlite3
import time

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response, StreamingResponse

from synthdata import __version__
from synthdata.api.docs import API_DOCS
from synthdata.engine.generation_engine import GeneratedDataset, GenerationEngine
from synthdata.errors import SynthDataError
from synthdata.logging_config import configure_logging, get_logger
from synthdata.output.serializers import (
    JSON_MEDIA_TYPE,
    iter_json,
    media_type_for,
    render,
    should_stream,
)
from synthdata.params.base import EntityKind
from synthdata.params.resolver import ParameterResolver
from synthdata.settings import Settings, get_settings
from synthdata.storage.request_log import RequestLog

logger = get_logger(__name__)

TRACKED_ENDPOINTS = {f"/{kind.value}" for kind in EntityKind}


def _respond(dataset: GeneratedDataset, settings: Settings) -> Response:
    if should_stream(dataset, settings.streaming_threshold):
        return StreamingResponse(iter_json(dataset), media_type=JSON_MEDIA_TYPE)
    return Response(
        content=render(dataset),
        media_type=media_type_for(dataset.config.format),
    )


def _generate(request: Request, kind: EntityKind, body: Any = None) -> Response:
    engine: GenerationEngine = request.app.state.engine
    dataset = engine.generate(kind, request.query_params, body)
    return _respond(dataset, request.app.state.settings)


def create_app(
    settings: Settings | None = None,
    request_log: RequestLog | None = None,
) -> FastAPI:
    """Create the API application.

    Args:
        settings: Settings to use instead of the environment
        request_log: Request log to use instead of the configured sqlite file

    Returns:
        The configured FastAPI app
    """
    settings = settings or get_settings()
    configure_logging(settings.log_level, settings.log_json)

    if request_log is None and settings.request_log_enabled:
        request_log = RequestLog(settings.request_log_path)

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        logger.info("service_starting", service=settings.app_name, version=__version__)
        yield
        logger.info("service_stopping", service=settings.app_name)
        if app.state.request_log is not None:
            app.state.request_log.close()

    app = FastAPI(
        title=settings.app_name,
        description="Synthetic data API",
        version=__version__,
        docs_url="/swagger",
        redoc_url=None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.engine = GenerationEngine(
        resolver=ParameterResolver(default_locale=settings.default_locale),
    )
    app.state.request_log = request_log

    if settings.enable_cors:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=[settings.allowed_origins] if settings.allowed_origins else ["*"],
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        path = request.url.path

        logger.info(
            "request_served",
            method=request.method,
            path=path,
            status=response.status_code,
            duration_ms=round((time.perf_counter() - started) * 1000, 2),
        )

        log = request.app.state.request_log
        if log is not None and path in TRACKED_ENDPOINTS:
            try:
                log.record(path)
            except sqlite3.Error as e:
                logger.warning("request_log_failed", path=path, error=str(e))

        return response

    @app.exception_handler(SynthDataError)
    async def synthdata_error_handler(request: Request, exc: SynthDataError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.error("generation_error", path=request.url.path, error=exc.message)
        else:
            logger.info("request_rejected", path=request.url.path, error=exc.message)
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("unexpected_error", path=request.url.path)
        return JSONResponse(status_code=500, content={"error": "Internal server error"})

    @app.get("/")
    async def root() -> dict[str, Any]:
        return {
            "message": "Welcome to the synthetic data API",
            "version": __version__,
            "docs": "/docs",
            "endpoints": sorted(TRACKED_ENDPOINTS),
        }

    @app.get("/docs")
    async def docs() -> dict[str, Any]:
        """Static description of the endpoints and their parameters."""
        return API_DOCS

    @app.get("/health")
    async def health() -> dict[str, str]:
        return {"status": "healthy", "service": settings.app_name}

    @app.get("/stats")
    async def stats(request: Request) -> dict[str, Any]:
        """Request counts per generation endpoint."""
        log = request.app.state.request_log
        if log is None:
            return {"enabled": False, "total": 0, "endpoints": {}}
        return {"enabled": True, "total": log.total(), "endpoints": log.counts()}

    @app.get("/users")
    async def users(request: Request) -> Response:
        return _generate(request, EntityKind.USERS)

    @app.get("/products")
    async def products(request: Request) -> Response:
        return _generate(request, EntityKind.PRODUCTS)

    @app.get("/companies")
    async def companies(request: Request) -> Response:
        return _generate(request, EntityKind.COMPANIES)

    @app.get("/transactions")
    async def transactions(request: Request) -> Response:
        return _generate(request, EntityKind.TRANSACTIONS)

    @app.get("/dataset")
    async def dataset(request: Request) -> Response:
        return _generate(request, EntityKind.DATASET)

    @app.get("/timeseries")
    async def timeseries(request: Request) -> Response:
        return _generate(request, EntityKind.TIMESERIES)

    @app.post("/custom")
    async def custom(request: Request) -> Response:
        try:
            body = await request.json()
        except ValueError:
            body = None
        return _generate(request, EntityKind.CUSTOM, body)

    return app
