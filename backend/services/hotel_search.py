"""Fan a stay request out to suppliers and reduce to the best offer per property."""

import asyncio
import logging
from collections.abc import Callable, Iterable

from errors import SupplierError, SupplierTimeoutError
from services.cache import TTLCache
from services.cache_keys import derive_key
from services.offers import Offer, StayRequest, reduce_best_offers
from services.supplier_client import DEFAULT_TIMEOUT_SECONDS, SupplierClient, parse_offers

logger = logging.getLogger(__name__)

Reducer = Callable[[Iterable[Offer]], list[Offer]]


class HotelSearch:
    def __init__(
        self,
        cache: TTLCache,
        client: SupplierClient,
        reducer: Reducer = reduce_best_offers,
        fetch_timeout: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self.cache = cache
        self.client = client
        self.reducer = reducer
        self.fetch_timeout = fetch_timeout

    async def handle(self, request: StayRequest) -> list[Offer]:
        """Return the cheapest offer per property across the request's suppliers.

        Suppliers are queried concurrently but their offers are concatenated in
        the request's supplier order, so ties resolve the same way every time.
        A supplier that fails is logged and left out.
        """
        suppliers = list(request.suppliers.items())
        results = await asyncio.gather(
            *[self._supplier_offers(request, supplier_id, url) for supplier_id, url in suppliers]
        )

        succeeded = [offers for offers in results if offers is not None]
        all_offers = [offer for offers in succeeded for offer in offers]
        best = self.reducer(all_offers)
        logger.info(
            "Search %s %s..%s x%d: %d offers from %d/%d suppliers, %d properties",
            request.destination,
            request.checkin,
            request.checkout,
            request.guests,
            len(all_offers),
            len(succeeded),
            len(suppliers),
            len(best),
        )
        return best

    async def _supplier_offers(self, request: StayRequest, supplier_id: str, url: str) -> list[Offer] | None:
        """Cached or freshly fetched offers of one supplier, None if it failed."""
        key = derive_key(request, supplier_id)

        async def fetch() -> list[Offer]:
            try:
                body = await asyncio.wait_for(self.client.fetch(url), timeout=self.fetch_timeout)
            except asyncio.TimeoutError as e:
                raise SupplierTimeoutError(self.fetch_timeout, supplier=supplier_id, url=url) from e
            return parse_offers(body, supplier_id)

        try:
            return await self.cache.get_or_fetch(key, fetch)
        except SupplierError as e:
            logger.warning("Supplier %s excluded: %s", supplier_id, e)
            return None
