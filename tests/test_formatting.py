"""Tests for currency display formatting."""

from decimal import Decimal

import pytest

from moneyflow.core.formatting import format_amount, format_currency


class TestFormatCurrency:

    @pytest.mark.parametrize("amount, expected", [
        (0, "0"),
        (950, "950"),
        (1500, "1\u202f500"),
        (Decimal("2000000"), "2\u202f000\u202f000"),
        (Decimal("1234.5"), "1\u202f234,5"),
        (Decimal("0.1235"), "0,124"),
        (Decimal("-15000"), "-15\u202f000"),
    ])
    def test_format_amount(self, amount, expected):
        assert format_amount(amount) == expected

    def test_default_currency(self):
        assert format_currency(25000) == "25\u202f000 XAF"

    def test_other_currency(self):
        assert format_currency(Decimal("10.50"), "XOF") == "10,5 XOF"

    def test_float_input(self):
        assert format_currency(1500.75, "XAF") == "1\u202f500,75 XAF"
