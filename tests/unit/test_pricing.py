from __future__ import annotations

from decimal import Decimal

import pytest

from eprinter.exceptions import CopiesOutOfRangeError, EstimateError, UnknownModeError
from eprinter.pricing import estimate, format_currency, round_currency, to_minor_units
from eprinter.typing.enums import PrintMode
from eprinter.typing.models import PricingTable


def test_estimate_color_job(pricing: PricingTable) -> None:
    cost = estimate(4, 2, "color", pricing)

    assert cost.total_impressions == 8
    assert cost.unit_price == Decimal("5.0")
    assert cost.total_cost == Decimal("40.00")
    assert cost.to_payload() == {
        "totalImpressions": 8,
        "unitPrice": Decimal("5.0"),
        "totalCost": Decimal("40.00"),
    }


def test_doubling_copies_doubles_monochrome_cost(pricing: PricingTable) -> None:
    single = estimate(3, 1, "monochrome", pricing)
    double = estimate(3, 2, "monochrome", pricing)

    assert single.total_cost == Decimal("3.00")
    assert double.total_cost == Decimal("6.00")
    assert double.total_cost > single.total_cost


def test_estimate_echoes_inputs(pricing: PricingTable) -> None:
    cost = estimate(2, 3, PrintMode.COLOR, pricing)

    assert cost.resolved_page_count == 2
    assert cost.copies == 3
    assert cost.mode is PrintMode.COLOR
    assert cost.pricing == pricing


def test_estimate_accepts_legacy_mode_spelling(pricing: PricingTable) -> None:
    assert estimate(1, 1, "black", pricing).mode is PrintMode.MONOCHROME


def test_estimate_cost_is_monotonic_in_copies_and_pages() -> None:
    table = PricingTable(monochrome="0.37", color="2.49")
    for mode in PrintMode:
        by_copies = [estimate(7, copies, mode, table).total_cost for copies in range(1, 30)]
        by_pages = [estimate(pages, 3, mode, table).total_cost for pages in range(1, 30)]
        assert by_copies == sorted(by_copies)
        assert by_pages == sorted(by_pages)


def test_estimate_rounds_once_at_the_end() -> None:
    table = PricingTable(monochrome="0.333", color="1")

    cost = estimate(3, 1, "monochrome", table)

    assert cost.total_cost == Decimal("1.00")


def test_estimate_rounds_half_up() -> None:
    table = PricingTable(monochrome="0.125", color="0.005")

    assert estimate(1, 1, "monochrome", table).total_cost == Decimal("0.13")
    assert estimate(1, 1, "color", table).total_cost == Decimal("0.01")


def test_float_prices_do_not_leak_binary_error() -> None:
    table = PricingTable(monochrome=0.1, color=0.7)

    assert table.monochrome == Decimal("0.1")
    assert estimate(3, 1, "monochrome", table).total_cost == Decimal("0.30")


def test_estimate_is_idempotent(pricing: PricingTable) -> None:
    first = estimate(13, 7, "color", pricing)
    second = estimate(13, 7, "color", pricing)

    assert first == second
    assert str(first.total_cost) == str(second.total_cost)


def test_estimates_from_different_snapshots_are_not_equal() -> None:
    first = estimate(2, 1, "color", PricingTable(monochrome=1, color=5, version="a"))
    second = estimate(2, 1, "color", PricingTable(monochrome=1, color=5, version="b"))

    assert first.total_cost == second.total_cost
    assert first != second


@pytest.mark.parametrize("copies", [0, -2])
def test_estimate_rejects_fewer_than_one_copy(pricing: PricingTable, copies: int) -> None:
    with pytest.raises(CopiesOutOfRangeError, match="At least 1 copy"):
        estimate(1, copies, "monochrome", pricing)


def test_estimate_rejects_copies_above_policy(pricing: PricingTable) -> None:
    with pytest.raises(CopiesOutOfRangeError) as exc_info:
        estimate(1, 51, "monochrome", pricing, max_copies=50)

    assert exc_info.value.to_payload() == {
        "errorKind": "CopiesOutOfRangeError",
        "detail": "Maximum 50 copies allowed (requested 51)",
    }


def test_estimate_without_policy_has_no_copy_ceiling(pricing: PricingTable) -> None:
    assert estimate(1, 1000, "monochrome", pricing).total_impressions == 1000


def test_estimate_rejects_unknown_mode(pricing: PricingTable) -> None:
    with pytest.raises(UnknownModeError) as exc_info:
        estimate(1, 1, "sepia", pricing)

    assert isinstance(exc_info.value, EstimateError)
    assert "sepia" in exc_info.value.detail


def test_estimate_requires_at_least_one_page(pricing: PricingTable) -> None:
    with pytest.raises(ValueError, match="resolved_page_count"):
        estimate(0, 1, "monochrome", pricing)


def test_round_currency() -> None:
    assert round_currency(Decimal("2.675")) == Decimal("2.68")
    assert round_currency(Decimal("2")) == Decimal("2.00")


def test_to_minor_units() -> None:
    assert to_minor_units(Decimal("40.00")) == 4000
    assert to_minor_units(Decimal("0.13")) == 13


def test_format_currency() -> None:
    assert format_currency(Decimal("40")) == "₹40.00"
    assert format_currency(Decimal("1234.5"), "$") == "$1,234.50"


@pytest.mark.parametrize("copies", [2.5, "3"])
def test_estimate_reports_non_integer_copies_as_given(pricing: PricingTable, copies: object) -> None:
    with pytest.raises(CopiesOutOfRangeError) as exc_info:
        estimate(1, copies, "monochrome", pricing)  # type: ignore[arg-type]

    assert exc_info.value.copies == copies
    assert exc_info.value.detail == f"Copies must be a whole number, got {copies!r}"
