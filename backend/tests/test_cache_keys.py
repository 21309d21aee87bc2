from dataclasses import replace
from datetime import date

import pytest

from services.cache_keys import derive_key
from services.offers import StayRequest


def test_same_request_same_key(stay):
    twin = StayRequest(
        checkin=date(2011, 12, 11),
        checkout=date(2018, 12, 1),
        destination="istanbul",
        guests=2,
    )
    assert derive_key(stay, "supplier1") == derive_key(twin, "supplier1")


def test_key_is_stable_text(stay):
    assert derive_key(stay, "supplier1") == "hotels:2011-12-11:2018-12-01:istanbul:2:supplier1"


@pytest.mark.parametrize(
    "change",
    [
        {"checkin": date(2011, 12, 12)},
        {"checkout": date(2018, 12, 2)},
        {"destination": "ankara"},
        {"guests": 3},
    ],
)
def test_any_field_change_changes_key(stay, change):
    assert derive_key(replace(stay, **change), "supplier1") != derive_key(stay, "supplier1")


def test_supplier_changes_key(stay):
    assert derive_key(stay, "supplier1") != derive_key(stay, "supplier2")


def test_supplier_allow_list_does_not_change_key(stay):
    assert derive_key(replace(stay, suppliers={}), "supplier1") == derive_key(stay, "supplier1")


def test_adjacent_fields_do_not_collide(stay):
    a = replace(stay, destination="12", guests=3)
    b = replace(stay, destination="1", guests=23)
    assert derive_key(a, "s") != derive_key(b, "s")


def test_delimiter_inside_field_is_escaped(stay):
    a = derive_key(replace(stay, destination="rome:2"), "x")
    b = derive_key(replace(stay, destination="rome"), "2:x")
    assert a != b
    assert "rome%3A2" in a
