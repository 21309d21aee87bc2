"""Shared fixtures: two canned suppliers served through httpx.MockTransport."""

from datetime import date

import httpx
import pytest

from services.offers import StayRequest

SUPPLIER1_URL = "https://suppliers.test/supplier1"
SUPPLIER2_URL = "https://suppliers.test/supplier2"

SUPPLIER_BODIES = {
    SUPPLIER1_URL: '[{"property":"One","price":304.2},{"property":"Two","price":400.22},{"property":"Three","price":299.3}]',
    SUPPLIER2_URL: '[{"property":"One","price":289.2},{"property":"Two","price":405.22},{"property":"Three","price":288.3}]',
}


class FakeSuppliers:
    """Mock transport handler that counts calls per URL."""

    def __init__(self, bodies: dict[str, str]):
        self.bodies = dict(bodies)
        self.calls: dict[str, int] = {}
        self.failures: dict[str, Exception | int] = {}

    def __call__(self, request: httpx.Request) -> httpx.Response:
        url = str(request.url)
        self.calls[url] = self.calls.get(url, 0) + 1
        failure = self.failures.get(url)
        if isinstance(failure, Exception):
            raise failure
        if isinstance(failure, int):
            return httpx.Response(failure, text="upstream error")
        if url not in self.bodies:
            return httpx.Response(404, text="not found")
        return httpx.Response(200, text=self.bodies[url])


@pytest.fixture
def fake_suppliers():
    return FakeSuppliers(SUPPLIER_BODIES)


@pytest.fixture
def transport(fake_suppliers):
    return httpx.MockTransport(fake_suppliers)


@pytest.fixture
def supplier_map():
    return {"supplier1": SUPPLIER1_URL, "supplier2": SUPPLIER2_URL}


@pytest.fixture
def stay(supplier_map):
    return StayRequest(
        checkin=date(2011, 12, 11),
        checkout=date(2018, 12, 1),
        destination="istanbul",
        guests=2,
        suppliers=supplier_map,
    )


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()
