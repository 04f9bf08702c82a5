"""
Testes do cálculo do restante e da conversão de valores digitados
"""

from decimal import Decimal

import pytest

from core.calculator import compute_remaining, money, parse_money, to_decimal


def test_remaining_is_value_minus_deposit():
    assert compute_remaining(Decimal("350.00"), Decimal("120.50")) == Decimal("229.50")


def test_remaining_not_clamped():
    assert compute_remaining(Decimal("100"), Decimal("150")) == Decimal("-50")


def test_remaining_accepts_floats_without_binary_noise():
    assert compute_remaining(0.3, 0.1) == Decimal("0.2")


@pytest.mark.parametrize("text, expected", [
    ("150", Decimal("150")),
    ("150,50", Decimal("150.50")),
    ("150.5", Decimal("150.5")),
    ("1.234,56", Decimal("1234.56")),
    ("R$ 80,00", Decimal("80.00")),
    ("  42 ", Decimal("42")),
])
def test_parse_money(text, expected):
    assert parse_money(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "12,3,4", "NaN", "Infinity", None])
def test_parse_money_invalid_defaults_to_zero(text):
    assert parse_money(text) == Decimal("0")


def test_to_decimal_none_is_zero():
    assert to_decimal(None) == Decimal("0")


def test_money_brazilian_format():
    assert money(Decimal("1234.5")) == "R$ 1.234,50"
    assert money(0) == "R$ 0,00"
    assert money(Decimal("-50")) == "R$ -50,00"
