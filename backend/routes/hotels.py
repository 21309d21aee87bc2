"""Hotel search route: cheapest offer per property across suppliers.

GET /api/hotels?checkin=YYYY-MM-DD&checkout=YYYY-MM-DD&destination=<str>&guests=<int>[&suppliers=a,b]
"""

import logging
from datetime import date, datetime

from fastapi import APIRouter, Query, Request

from errors import InvalidParameterError, MissingParameterError
from services.offers import StayRequest

logger = logging.getLogger(__name__)

router = APIRouter()


def _require(name: str, value: str | None) -> str:
    if value is None or not value.strip():
        raise MissingParameterError(name)
    return value.strip()


def _parse_date(name: str, value: str) -> date:
    # exactly YYYY-MM-DD, zero padded
    if len(value) == 10:
        try:
            return datetime.strptime(value, "%Y-%m-%d").date()
        except ValueError:
            pass
    raise InvalidParameterError(name, f"expected YYYY-MM-DD, got {value!r}")


def _parse_guests(value: str) -> int:
    try:
        guests = int(value)
    except ValueError:
        raise InvalidParameterError("guests", f"expected an integer, got {value!r}") from None
    if guests <= 0:
        raise InvalidParameterError("guests", "must be a positive integer")
    return guests


@router.get("/api/hotels")
async def hotels(
    request: Request,
    checkin: str | None = Query(None),
    checkout: str | None = Query(None),
    destination: str | None = Query(None),
    guests: str | None = Query(None),
    suppliers: str | None = Query(None),
) -> dict:
    """Best price per property for a stay, over all or the selected suppliers."""
    # Checked in this order so the first missing parameter is reported.
    checkin = _require("checkin", checkin)
    checkout = _require("checkout", checkout)
    destination = _require("destination", destination)
    guests = _require("guests", guests)

    checkin_date = _parse_date("checkin", checkin)
    checkout_date = _parse_date("checkout", checkout)
    if checkout_date <= checkin_date:
        raise InvalidParameterError("checkout", "must be after checkin")

    registry = request.app.state.supplier_registry
    stay = StayRequest(
        checkin=checkin_date,
        checkout=checkout_date,
        destination=destination,
        guests=_parse_guests(guests),
        suppliers=registry.resolve(suppliers),
    )

    offers = await request.app.state.hotel_search.handle(stay)
    return {"data": [offer.to_dict() for offer in offers]}
