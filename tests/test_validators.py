"""Tests for checkout field validation and order id helpers."""

import re
from datetime import datetime, timedelta

import pytest

from services.order_service.service import OrderService
from services.order_service.validators import (
    validate_address,
    validate_email,
    validate_name,
    validate_phone,
)


@pytest.mark.parametrize("phone", ["9876543210", "6000000000", "7123456789"])
def test_valid_phone(phone):
    assert validate_phone(phone)


@pytest.mark.parametrize("phone", ["5876543210", "987654321", "98765432101", "98765abcde", ""])
def test_invalid_phone(phone):
    assert not validate_phone(phone)


def test_email():
    assert validate_email("ravi@example.com")
    assert not validate_email("ravi@example")
    assert not validate_email("ravi example@x.com")


def test_name():
    assert validate_name("Ravi Kumar")
    assert not validate_name("Ra")
    assert not validate_name("R2D2 Unit")


def test_address_needs_length_and_pincode():
    assert validate_address("12 MG Road, Bengaluru 560038")
    assert not validate_address("12 MG Road, Bengaluru")
    assert not validate_address("Flat 560038")


def test_order_id_format():
    order_id = OrderService.generate_order_id(datetime(2026, 10, 17, 23, 59))
    assert re.fullmatch(r"ORD-20261017-\d{5}", order_id)
    assert 10000 <= int(order_id[-5:]) <= 99999


class TestRemainingCooldown:
    start = datetime(2026, 10, 17, 9, 30, 0)

    def at(self, seconds: float) -> int:
        return OrderService.remaining_cooldown(self.start, self.start + timedelta(seconds=seconds), window=60)

    def test_immediately(self):
        assert self.at(0) == 60

    def test_ten_seconds(self):
        assert self.at(10) == 50

    def test_rounds_elapsed_down(self):
        assert self.at(10.9) == 50

    def test_never_below_one(self):
        assert self.at(59.99) == 1
        assert self.at(60) == 1

    def test_clock_skew_is_capped(self):
        assert self.at(-5) == 60
