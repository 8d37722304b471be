"""Print cost estimation.

The same function prices the advisory estimate on the client and the
authoritative charge on the server, so both must round identically: the
total is computed exactly and rounded once, half-up, to the currency's
minor unit.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from eprinter.exceptions import CopiesOutOfRangeError
from eprinter.typing.enums import PrintMode
from eprinter.typing.models import CostEstimate, PricingTable

MINOR_UNIT = Decimal("0.01")
MINOR_UNITS_PER_MAJOR = 100


def round_currency(value: Decimal) -> Decimal:
    """Round an amount to two decimal places, half-up.

    Args:
        value (Decimal): Exact amount.

    Returns:
        Decimal: Amount in minor-unit precision.
    """
    return value.quantize(MINOR_UNIT, rounding=ROUND_HALF_UP)


def to_minor_units(amount: Decimal) -> int:
    """Convert a rounded amount to integer minor units (paise, cents).

    Args:
        amount (Decimal): Amount with at most two decimal places.

    Returns:
        int: Amount in minor units.
    """
    return int(round_currency(amount) * MINOR_UNITS_PER_MAJOR)


def format_currency(amount: Decimal, symbol: str = "₹") -> str:
    """Format an amount for display.

    Args:
        amount (Decimal): Amount to format.
        symbol (str): Currency symbol.

    Returns:
        str: E.g. `"₹40.00"`.
    """
    return f"{symbol}{round_currency(amount):,.2f}"


def check_copies(copies: int, max_copies: int | None = None) -> None:
    """Validate a copy count against the policy ceiling.

    Args:
        copies (int): Copies requested.
        max_copies (int | None): Policy ceiling; no upper bound when omitted.

    Raises:
        CopiesOutOfRangeError: If copies is not a whole number, is below 1 or exceeds the ceiling.
    """
    if isinstance(copies, bool) or not isinstance(copies, int) or copies < 1:
        raise CopiesOutOfRangeError(copies=copies, max_copies=max_copies)
    if max_copies is not None and copies > max_copies:
        raise CopiesOutOfRangeError(copies=copies, max_copies=max_copies)


def estimate(
    resolved_page_count: int,
    copies: int,
    mode: PrintMode | str,
    pricing: PricingTable,
    *,
    max_copies: int | None = None,
) -> CostEstimate:
    """Price a resolved selection.

    Args:
        resolved_page_count (int): Number of distinct pages selected, at least 1.
        copies (int): Number of copies requested.
        mode (PrintMode | str): Print mode.
        pricing (PricingTable): One pricing snapshot; read once for the whole computation.
        max_copies (int | None): Policy ceiling for `copies`, supplied by the pricing source.

    Raises:
        ValueError: If `resolved_page_count` is below 1.
        CopiesOutOfRangeError: If `copies` is below 1 or above `max_copies`.
        UnknownModeError: If `pricing` has no price for `mode`.

    Returns:
        CostEstimate: Impressions, unit price and rounded total, with the inputs echoed.
    """
    if isinstance(resolved_page_count, bool) or resolved_page_count < 1:
        raise ValueError(f"resolved_page_count must be at least 1, got {resolved_page_count!r}")  # noqa: TRY003
    check_copies(copies, max_copies)

    unit_price = pricing.unit_price(mode)
    total_impressions = resolved_page_count * copies
    total_cost = round_currency(Decimal(total_impressions) * unit_price)

    return CostEstimate(
        resolved_page_count=resolved_page_count,
        copies=copies,
        mode=PrintMode(mode),
        pricing=pricing,
        total_impressions=total_impressions,
        unit_price=unit_price,
        total_cost=total_cost,
    )
