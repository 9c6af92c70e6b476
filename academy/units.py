"""Unit conversion between wei and human-readable denominations.

Exact Decimal arithmetic on top of ``Web3.from_wei`` / ``Web3.to_wei``;
floats never enter the calculation.
"""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

from web3 import Web3

UNIT_DECIMALS = {
    "wei": 0,
    "kwei": 3,
    "mwei": 6,
    "gwei": 9,
    "szabo": 12,
    "finney": 15,
    "ether": 18,
}


def _decimals(unit: str) -> int:
    try:
        return UNIT_DECIMALS[unit]
    except KeyError:
        raise ValueError(
            f"Unknown unit '{unit}'. Available: {list(UNIT_DECIMALS.keys())}"
        ) from None


def format_units(wei: int, unit: str = "ether") -> str:
    """Render a wei amount in ``unit`` without exponent or trailing zeros."""
    _decimals(unit)
    text = format(Decimal(Web3.from_wei(wei, unit)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def format_ether(wei: int) -> str:
    return format_units(wei, "ether")


def format_gwei(wei: int) -> str:
    return format_units(wei, "gwei")


def parse_units(text: Union[str, int, Decimal], unit: str = "ether") -> int:
    """Parse a decimal amount in ``unit`` into wei.

    Raises ValueError for non-numbers and for more fractional digits than
    the unit can represent. Trailing zeros do not count as digits.
    """
    decimals = _decimals(unit)
    try:
        value = Decimal(str(text).strip())
    except InvalidOperation:
        raise ValueError(f"Not a number: {text!r}") from None
    if not value.is_finite():
        raise ValueError(f"Not a finite number: {text!r}")
    if value != 0 and value.normalize().as_tuple().exponent < -decimals:
        raise ValueError(
            f"Too many decimal places for {unit} (max {decimals}): {text!r}"
        )
    return int(Web3.to_wei(value, unit))


def parse_ether(text: Union[str, int, Decimal]) -> int:
    return parse_units(text, "ether")
