"""Cache key builders for supplier responses.

Free-text fields are percent-encoded so the ``:`` separator can never appear
inside a field; ("12", 3) and ("1", 23) therefore map to different keys.
"""

from urllib.parse import quote

from services.offers import StayRequest

KEY_PREFIX = "hotels"


def _field(value: str) -> str:
    return quote(value, safe="")


def derive_key(request: StayRequest, supplier_id: str) -> str:
    """Build the cache key for one supplier's answer to a stay request."""
    return ":".join(
        (
            KEY_PREFIX,
            request.checkin.isoformat(),
            request.checkout.isoformat(),
            _field(request.destination),
            str(request.guests),
            _field(supplier_id),
        )
    )
