"""Health and readiness check routes."""

import logging

from fastapi import APIRouter, Request
from fastapi.responses import PlainTextResponse

from config import settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/health", response_class=PlainTextResponse)
async def health() -> str:
    """Liveness check, no external calls."""
    return "OK"


@router.get("/ready")
async def ready(request: Request) -> dict:
    """Readiness check with cache and supplier registry details."""
    state = request.app.state
    search = getattr(state, "hotel_search", None)
    registry = getattr(state, "supplier_registry", None)
    return {
        "status": "ok" if search is not None else "starting",
        "service": "hotel-offer-gateway",
        "commit": settings.git_sha,
        "cached_entries": len(search.cache) if search is not None else 0,
        "suppliers": registry.ids if registry is not None else [],
    }
