"""
Tests for the supplier HTTP client and response parsing.
"""

import httpx
import pytest

from conftest import SUPPLIER1_URL, SUPPLIER_BODIES
from errors import SupplierFetchError, SupplierResponseError, SupplierTimeoutError
from services.offers import Offer
from services.supplier_client import SupplierClient, parse_offers


class TestFetch:
    @pytest.mark.asyncio
    async def test_returns_raw_body(self, transport):
        client = SupplierClient(transport=transport)
        try:
            assert await client.fetch(SUPPLIER1_URL) == SUPPLIER_BODIES[SUPPLIER1_URL]
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_non_success_status_raises(self, fake_suppliers, transport):
        fake_suppliers.failures[SUPPLIER1_URL] = 503
        client = SupplierClient(transport=transport)
        try:
            with pytest.raises(SupplierFetchError, match="HTTP 503") as exc_info:
                await client.fetch(SUPPLIER1_URL)
            assert exc_info.value.url == SUPPLIER1_URL
            assert exc_info.value.supplier is None
            assert str(exc_info.value).startswith(f"Supplier at {SUPPLIER1_URL}:")
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_timeout_raises_timeout_error(self, fake_suppliers, transport):
        fake_suppliers.failures[SUPPLIER1_URL] = httpx.ReadTimeout("slow")
        client = SupplierClient(timeout_seconds=2, transport=transport)
        try:
            with pytest.raises(SupplierTimeoutError) as exc_info:
                await client.fetch(SUPPLIER1_URL)
            assert exc_info.value.status_code == 504
        finally:
            await client.aclose()

    @pytest.mark.asyncio
    async def test_connection_error_raises_fetch_error(self, fake_suppliers, transport):
        fake_suppliers.failures[SUPPLIER1_URL] = httpx.ConnectError("refused")
        client = SupplierClient(transport=transport)
        try:
            with pytest.raises(SupplierFetchError, match="ConnectError"):
                await client.fetch(SUPPLIER1_URL)
        finally:
            await client.aclose()


class TestParseOffers:
    def test_tags_offers_with_supplier(self):
        offers = parse_offers(SUPPLIER_BODIES[SUPPLIER1_URL], "supplier1")
        assert offers == [
            Offer("One", 304.2, "supplier1"),
            Offer("Two", 400.22, "supplier1"),
            Offer("Three", 299.3, "supplier1"),
        ]

    def test_integer_price_becomes_float(self):
        [offer] = parse_offers('[{"property": "One", "price": 300}]', "s")
        assert offer.price == 300.0
        assert isinstance(offer.price, float)

    def test_empty_array(self):
        assert parse_offers("[]", "s") == []

    @pytest.mark.parametrize(
        "body",
        [
            "not json",
            '{"property": "One", "price": 1}',
            '["One"]',
            '[{"price": 1}]',
            '[{"property": "One"}]',
            '[{"property": "One", "price": "cheap"}]',
            '[{"property": "One", "price": true}]',
            '[{"property": "One", "price": -1}]',
            '[{"property": "One", "price": NaN}]',
        ],
    )
    def test_malformed_body_raises(self, body):
        with pytest.raises(SupplierResponseError) as exc_info:
            parse_offers(body, "supplier1")
        assert exc_info.value.supplier == "supplier1"

    @pytest.mark.parametrize("digits", [400, 5000])
    def test_oversized_integer_price_raises(self, digits):
        body = '[{"property": "One", "price": ' + "9" * digits + "}]"
        with pytest.raises(SupplierResponseError) as exc_info:
            parse_offers(body, "supplier1")
        assert exc_info.value.supplier == "supplier1"
