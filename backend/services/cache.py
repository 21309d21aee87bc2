"""In-memory TTL cache for supplier offers, with single-flight fills.

Expiry is lazy: a stale entry stays in the store until the next ``set`` for
its key overwrites it, but ``get`` treats it as a miss. The key space is
bounded by the request shapes actually seen, so nothing is purged.

Note: each uvicorn worker has its own cache instance. With --workers 2 a
supplier may be called once per worker for the same request shape.
"""

import asyncio
import logging
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from services.offers import Offer

logger = logging.getLogger(__name__)

DEFAULT_TTL_MINUTES = 5


@dataclass(frozen=True)
class CacheEntry:
    offers: tuple[Offer, ...]
    expires_at: float


class TTLCache:
    def __init__(self, ttl_minutes: float = DEFAULT_TTL_MINUTES, clock: Callable[[], float] = time.time):
        self.ttl_minutes = ttl_minutes
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}
        # key -> future of the fetch currently filling that key
        self._in_flight: dict[str, asyncio.Future] = {}

    def __len__(self) -> int:
        return len(self._store)

    @property
    def in_flight(self) -> int:
        return len(self._in_flight)

    def expiry_time(self) -> float:
        return self._clock() + self.ttl_minutes * 60

    def get(self, key: str) -> list[Offer] | None:
        entry = self._store.get(key)
        if entry is not None and entry.expires_at > self._clock():
            return list(entry.offers)
        return None

    def set(self, key: str, offers: list[Offer]) -> None:
        self._store[key] = CacheEntry(offers=tuple(offers), expires_at=self.expiry_time())

    async def get_or_fetch(self, key: str, fetch: Callable[[], Awaitable[list[Offer]]]) -> list[Offer]:
        """Return fresh cached offers, or fill the key with exactly one ``fetch``.

        Callers arriving while a fill is running await that fill instead of
        starting their own. A failed fill raises the same error in every
        waiter and leaves the key empty, so the next call fetches again. If
        the caller owning the fill is cancelled, its waiters retry the fill.
        """
        cached = self.get(key)
        if cached is not None:
            return cached

        pending = self._in_flight.get(key)
        if pending is not None:
            logger.debug("Awaiting in-flight fetch for %s", key)
            try:
                # shield: a cancelled waiter must not cancel the shared fill
                offers = await asyncio.shield(pending)
            except asyncio.CancelledError:
                if not pending.cancelled():
                    raise
                # The owner was cancelled, not us: start a fresh attempt.
                logger.debug("In-flight fetch for %s abandoned, retrying", key)
                return await self.get_or_fetch(key, fetch)
            return list(offers)

        future = asyncio.get_running_loop().create_future()
        self._in_flight[key] = future
        try:
            offers = list(await fetch())
        except asyncio.CancelledError:
            future.cancel()
            raise
        except Exception as exc:
            future.set_exception(exc)
            # mark retrieved so an unwatched failure is not reported by asyncio
            future.exception()
            raise
        else:
            self.set(key, offers)
            future.set_result(offers)
            logger.debug("Cached %d offers for %s", len(offers), key)
            return list(offers)
        finally:
            del self._in_flight[key]
