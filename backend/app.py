"""FastAPI application entry point for the hotel offer gateway."""

import logging
import sys
import time

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware

from config import settings
from errors import register_error_handlers
from services.cache import TTLCache
from services.hotel_search import HotelSearch
from services.supplier_client import SupplierClient
from services.suppliers import SupplierRegistry

# Structured logging: JSON for production, human-readable for local
if settings.is_production:
    logging.basicConfig(
        level=logging.INFO,
        format='{"time":"%(asctime)s","level":"%(levelname)s","logger":"%(name)s","message":"%(message)s"}',
        stream=sys.stdout,
    )
else:
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

logger = logging.getLogger(__name__)


def build_hotel_search() -> HotelSearch:
    """Wire cache, supplier client and orchestrator from settings."""
    return HotelSearch(
        cache=TTLCache(ttl_minutes=settings.cache_ttl_minutes),
        client=SupplierClient(timeout_seconds=settings.supplier_timeout_seconds),
        fetch_timeout=settings.supplier_timeout_seconds,
    )


def create_app(
    hotel_search: HotelSearch | None = None,
    supplier_registry: SupplierRegistry | None = None,
) -> FastAPI:
    """Create the app. Components not passed in are built on startup from settings."""
    app = FastAPI(title="Hotel Offer Gateway", version="1.0.0")
    app.state.hotel_search = hotel_search
    app.state.supplier_registry = supplier_registry

    # CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Security headers
    @app.middleware("http")
    async def add_security_headers(request: Request, call_next):
        response: Response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        if settings.is_production:
            response.headers["Strict-Transport-Security"] = "max-age=31536000; includeSubDomains"
        return response

    # Request log
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        start = time.perf_counter()
        response: Response = await call_next(request)
        logger.info(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            (time.perf_counter() - start) * 1000,
        )
        return response

    # Centralized error handlers
    register_error_handlers(app)

    from routes.health import router as health_router
    from routes.hotels import router as hotels_router

    app.include_router(health_router)
    app.include_router(hotels_router)

    @app.on_event("startup")
    async def _build_components() -> None:
        problems = settings.validate()
        if problems:
            logger.warning("Configuration problems: %s", "; ".join(problems))
        if app.state.supplier_registry is None:
            app.state.supplier_registry = SupplierRegistry.from_yaml(settings.suppliers_file)
        if app.state.hotel_search is None:
            app.state.hotel_search = build_hotel_search()

    @app.on_event("shutdown")
    async def _close_clients() -> None:
        if app.state.hotel_search is not None:
            await app.state.hotel_search.client.aclose()

    return app


app = create_app()


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="0.0.0.0", port=settings.port)
