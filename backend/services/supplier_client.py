"""HTTP client for supplier endpoints.

Each supplier answers a GET on its URL with a JSON array of
``{"property": str, "price": number}`` objects. The client only moves bytes;
tagging offers with the supplier id is the caller's job.
"""

import json
import logging
import math

import httpx

from errors import SupplierFetchError, SupplierResponseError, SupplierTimeoutError
from services.offers import Offer

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 10.0


class SupplierClient:
    def __init__(self, timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS, transport: httpx.AsyncBaseTransport | None = None):
        self.timeout_seconds = timeout_seconds
        self._client = httpx.AsyncClient(timeout=timeout_seconds, transport=transport)

    async def fetch(self, url: str) -> str:
        """GET a supplier URL and return the raw body. No retries."""
        try:
            resp = await self._client.get(url)
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            raise SupplierTimeoutError(self.timeout_seconds, url=url) from e
        except httpx.HTTPStatusError as e:
            raise SupplierFetchError(f"HTTP {e.response.status_code}", url=url) from e
        except httpx.HTTPError as e:
            raise SupplierFetchError(f"{type(e).__name__}: {e}", url=url) from e
        return resp.text

    async def aclose(self) -> None:
        await self._client.aclose()


def parse_offers(body: str, supplier_id: str) -> list[Offer]:
    """Parse a supplier response body into offers tagged with ``supplier_id``."""
    try:
        items = json.loads(body)
    except ValueError as e:
        # JSONDecodeError, or an integer literal over the int digit limit
        raise SupplierResponseError(f"invalid JSON: {e}", supplier=supplier_id) from e

    if not isinstance(items, list):
        raise SupplierResponseError("expected a JSON array of offers", supplier=supplier_id)

    offers = []
    for i, item in enumerate(items):
        if not isinstance(item, dict):
            raise SupplierResponseError(f"offer {i} is not an object", supplier=supplier_id)
        prop = item.get("property")
        price = item.get("price")
        if not isinstance(prop, str) or not prop:
            raise SupplierResponseError(f"offer {i} has no property", supplier=supplier_id)
        # bool is an int subclass, reject it explicitly
        if isinstance(price, bool) or not isinstance(price, (int, float)):
            raise SupplierResponseError(f"offer {i} has no numeric price", supplier=supplier_id)
        try:
            value = float(price)
        except OverflowError as e:
            raise SupplierResponseError(f"offer {i} has an out of range price", supplier=supplier_id) from e
        if value < 0 or not math.isfinite(value):
            raise SupplierResponseError(f"offer {i} has invalid price {value}", supplier=supplier_id)
        offers.append(Offer(property=prop, price=value, supplier_id=supplier_id))
    return offers
