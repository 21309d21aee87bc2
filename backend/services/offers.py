"""Stay requests, supplier offers and the best-price reducer."""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from datetime import date


@dataclass(frozen=True)
class StayRequest:
    """One validated hotel search, with its suppliers already resolved."""

    checkin: date
    checkout: date
    destination: str
    guests: int
    # supplier id -> URL, in the order suppliers are queried
    suppliers: Mapping[str, str] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Offer:
    property: str
    price: float
    supplier_id: str = ""

    def to_dict(self) -> dict:
        return {"property": self.property, "price": self.price, "supplierId": self.supplier_id}


def reduce_best_offers(offers: Iterable[Offer]) -> list[Offer]:
    """Keep the cheapest offer per property.

    On equal prices the offer seen first wins, so the result only depends on
    the order suppliers were presented in. Properties keep first-seen order.
    """
    best: dict[str, Offer] = {}
    for offer in offers:
        current = best.get(offer.property)
        if current is None or offer.price < current.price:
            best[offer.property] = offer
    return list(best.values())
