"""CLI entry point for E-Printer quoting."""

from __future__ import annotations

import argparse
import json
from decimal import Decimal, InvalidOperation
from typing import TYPE_CHECKING, Any

from eprinter import __version__, logger
from eprinter.availability import check_service_status
from eprinter.dependencies import ensure_cli_dependencies_for_remote_pricing
from eprinter.exceptions import PackageError, QuoteError
from eprinter.logging import configure_logging
from eprinter.page_range import describe_selection, resolve
from eprinter.pricing import estimate, format_currency
from eprinter.settings import get_settings
from eprinter.sources import HttpPricingSource, StaticPricingSource, pricing_source_from_settings
from eprinter.typing.enums import PrintMode

if TYPE_CHECKING:
    from eprinter.settings import Settings
    from eprinter.typing.protocol import PricingSource

EXIT_REJECTED = 2


def _print_mode_from_cli(value: str) -> PrintMode:
    """Convert `--mode` CLI value into a print mode.

    Args:
        value (str): CLI value (`monochrome`, `color` or an accepted alias such as `black`).

    Raises:
        argparse.ArgumentTypeError: If value is not supported.

    Returns:
        PrintMode: Selected mode.
    """
    try:
        return PrintMode(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError("--mode must be one of: monochrome, color") from exc  # noqa: TRY003


def _price_from_cli(value: str) -> Decimal:
    """Convert a price flag into a non-negative decimal.

    Args:
        value (str): CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a non-negative number.

    Returns:
        Decimal: Parsed price.
    """
    try:
        price = Decimal(value)
    except InvalidOperation as exc:
        raise argparse.ArgumentTypeError(f"invalid price: '{value}'") from exc  # noqa: TRY003
    if not price.is_finite() or price < 0:
        raise argparse.ArgumentTypeError(f"price must be a non-negative number, got '{value}'")  # noqa: TRY003
    return price


def _positive_int_from_cli(value: str) -> int:
    """Convert a count flag into a positive integer.

    Args:
        value (str): CLI value.

    Raises:
        argparse.ArgumentTypeError: If value is not a positive integer.

    Returns:
        int: Parsed count.
    """
    try:
        number = int(value)
    except ValueError as exc:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'") from exc  # noqa: TRY003
    if number < 1:
        raise argparse.ArgumentTypeError(f"expected a positive integer, got '{value}'")  # noqa: TRY003
    return number


def _add_source_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--pricing-url", default=None, dest="pricing_url")
    parser.add_argument("--monochrome-price", type=_price_from_cli, default=None, dest="monochrome_price")
    parser.add_argument("--color-price", type=_price_from_cli, default=None, dest="color_price")
    parser.add_argument(
        "--max-copies",
        type=_positive_int_from_cli,
        default=None,
        dest="max_copies",
        help="Copy limit for static prices; can only lower a published limit",
    )


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Returns:
        argparse.ArgumentParser: The configured argument parser.
    """
    parser = argparse.ArgumentParser(prog="eprinter")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")

    subparsers = parser.add_subparsers(dest="command")

    quote_parser = subparsers.add_parser("quote", help="Resolve a page range and estimate its print cost")
    quote_parser.add_argument("--pages", default="all", dest="pages")
    quote_parser.add_argument("--total-pages", required=True, type=_positive_int_from_cli, dest="total_pages")
    quote_parser.add_argument("--copies", type=int, default=1)
    quote_parser.add_argument("--mode", type=_print_mode_from_cli, default=PrintMode.MONOCHROME)
    _add_source_arguments(quote_parser)

    status_parser = subparsers.add_parser("status", help="Show whether the print service accepts new jobs")
    _add_source_arguments(status_parser)

    return parser


def _build_source(args: argparse.Namespace, settings: Settings) -> PricingSource:
    """Pick the pricing source from CLI flags, falling back to settings.

    Args:
        args (argparse.Namespace): Parsed CLI args.
        settings (Settings): Runtime settings.

    Returns:
        PricingSource: Source to query.
    """
    max_copies = args.max_copies or settings.max_copies
    if args.pricing_url:
        ensure_cli_dependencies_for_remote_pricing()
        return HttpPricingSource(settings, base_url=args.pricing_url)
    if args.monochrome_price is not None and args.color_price is not None:
        return StaticPricingSource.from_prices(
            args.monochrome_price,
            args.color_price,
            max_copies=max_copies,
            version="cli",
        )

    source = pricing_source_from_settings(settings)
    if isinstance(source, HttpPricingSource):
        ensure_cli_dependencies_for_remote_pricing()
    return source


def _run_quote(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    """Resolve and price the requested selection.

    Args:
        args (argparse.Namespace): Parsed CLI args.
        settings (Settings): Runtime settings.

    Returns:
        dict[str, Any]: JSON-ready quote.
    """
    source = _build_source(args, settings)
    selection = resolve(args.pages, args.total_pages)
    policy = source.fetch()
    max_copies = policy.max_copies if args.max_copies is None else min(args.max_copies, policy.max_copies)
    cost = estimate(
        selection.count,
        args.copies,
        args.mode,
        policy.pricing,
        max_copies=max_copies,
    )
    return {
        "selection": {**selection.to_payload(), "summary": describe_selection(selection)},
        "estimate": {
            **cost.to_payload(),
            "mode": cost.mode.to_str(),
            "copies": cost.copies,
            "formatted": format_currency(cost.total_cost, settings.currency_symbol),
            "pricingVersion": cost.pricing.version,
        },
    }


def _run_status(args: argparse.Namespace, settings: Settings) -> dict[str, Any]:
    """Report service availability from the current snapshot.

    Args:
        args (argparse.Namespace): Parsed CLI args.
        settings (Settings): Runtime settings.

    Returns:
        dict[str, Any]: JSON-ready status.
    """
    policy = _build_source(args, settings).fetch()
    return check_service_status(policy).model_dump(mode="json")


_COMMANDS = {
    "quote": _run_quote,
    "status": _run_status,
}


def _emit(payload: dict[str, Any]) -> None:
    print(json.dumps(payload, default=str, ensure_ascii=False, indent=2))  # noqa: T201


def main(argv: list[str] | None = None) -> int:
    """Run the CLI.

    Args:
        argv (list[str] | None): Arguments; defaults to `sys.argv[1:]`.

    Returns:
        int: Exit code (0 for success, 2 for a rejected quote, 1 for other errors).
    """
    settings = get_settings()
    configure_logging(settings=settings)

    parser = build_parser()
    args = parser.parse_args(argv)

    handler = _COMMANDS.get(args.command)
    if handler is None:
        parser.print_help()
        return 0

    try:
        payload = handler(args, settings)
    except QuoteError as exc:
        logger.info("Quote rejected", extra={"error_kind": exc.error_kind})
        _emit(exc.to_payload())
        return EXIT_REJECTED
    except PackageError:
        logger.exception("Command failed")
        return 1
    except KeyboardInterrupt:
        logger.info("Command aborted by user")
        return 130

    _emit(payload)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
