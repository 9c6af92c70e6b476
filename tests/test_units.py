"""Tests for wei/gwei/ether conversion."""

import pytest

from academy.units import format_ether, format_gwei, format_units, parse_ether, parse_units

ONE_AND_A_HALF_ETH = 1_500_000_000_000_000_000


class TestFormat:
    def test_one_and_a_half_ether(self):
        assert format_ether(ONE_AND_A_HALF_ETH) == "1.5"
        assert format_gwei(ONE_AND_A_HALF_ETH) == "1500000000"

    def test_whole_numbers_have_no_decimal_point(self):
        assert format_ether(10**18) == "1"
        assert format_ether(0) == "0"

    def test_smallest_amount_has_no_exponent(self):
        assert format_units(1, "ether") == "0.000000000000000001"
        assert format_gwei(1) == "0.000000001"

    def test_wei_unit_is_identity(self):
        assert format_units(12345, "wei") == "12345"

    def test_unknown_unit(self):
        with pytest.raises(ValueError, match="Unknown unit"):
            format_units(1, "doge")


class TestParse:
    def test_parse_ether(self):
        assert parse_ether("1.0") == 10**18
        assert parse_ether("1.5") == ONE_AND_A_HALF_ETH
        assert parse_ether("0") == 0

    def test_parse_gwei(self):
        assert parse_units("1.5", "gwei") == 1_500_000_000
        assert parse_units("0.000000001", "gwei") == 1

    def test_trailing_zeros_allowed(self):
        assert parse_units("2.50000000000", "gwei") == 2_500_000_000

    def test_too_many_decimals(self):
        with pytest.raises(ValueError, match="Too many decimal places"):
            parse_ether("0.0000000000000000001")
        with pytest.raises(ValueError, match="Too many decimal places"):
            parse_units("0.1234567891", "gwei")

    @pytest.mark.parametrize("text", ["", "abc", "1.2.3", "NaN", "Infinity"])
    def test_not_a_number(self, text):
        with pytest.raises(ValueError):
            parse_ether(text)

    def test_format_then_parse_is_exact(self):
        wei = 123_456_789_012_345_678
        assert parse_ether(format_ether(wei)) == wei
