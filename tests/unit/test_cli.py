from __future__ import annotations

import json
from argparse import Namespace
from decimal import Decimal

import pytest

from eprinter import cli
from eprinter.exceptions import DependencyError
from eprinter.settings import Settings
from eprinter.sources import HttpPricingSource, StaticPricingSource, UnconfiguredPricingSource
from eprinter.typing.enums import PrintMode


@pytest.fixture
def settings(mocker) -> Settings:
    settings = Settings(pricing_url=None, pricing_monochrome=None, pricing_color=None, log_json=False)
    mocker.patch("eprinter.cli.get_settings", return_value=settings)
    return settings


def _source_args(**overrides: object) -> Namespace:
    values: dict[str, object] = {
        "pricing_url": None,
        "monochrome_price": None,
        "color_price": None,
        "max_copies": None,
    }
    values.update(overrides)
    return Namespace(**values)


def test_build_parser_supports_version_flag(capsys) -> None:
    parser = cli.build_parser()

    with pytest.raises(SystemExit) as exc_info:
        parser.parse_args(["--version"])
    assert exc_info.value.code == 0

    captured = capsys.readouterr()
    assert "0.1.0" in captured.out


def test_build_parser_quote_defaults() -> None:
    args = cli.build_parser().parse_args(["quote", "--total-pages", "12"])

    assert args.pages == "all"
    assert args.copies == 1
    assert args.mode is PrintMode.MONOCHROME


@pytest.mark.parametrize(
    "argv",
    [
        ["quote", "--total-pages", "0"],
        ["quote", "--total-pages", "3", "--mode", "sepia"],
        ["quote", "--total-pages", "3", "--color-price", "-1"],
        ["quote", "--total-pages", "3", "--monochrome-price", "cheap"],
    ],
)
def test_build_parser_rejects_bad_values(argv: list[str]) -> None:
    with pytest.raises(SystemExit) as exc_info:
        cli.build_parser().parse_args(argv)

    assert exc_info.value.code == 2


def test_build_source_prefers_static_flags(settings: Settings) -> None:
    source = cli._build_source(_source_args(monochrome_price=Decimal(1), color_price=Decimal(5)), settings)

    assert isinstance(source, StaticPricingSource)
    assert source.fetch().pricing.version == "cli"
    assert source.fetch().max_copies == settings.max_copies


def test_build_source_uses_url_flag(settings: Settings, mocker) -> None:
    check = mocker.patch("eprinter.cli.ensure_cli_dependencies_for_remote_pricing")

    source = cli._build_source(_source_args(pricing_url="https://eprinter.example.edu/api"), settings)

    assert isinstance(source, HttpPricingSource)
    assert source.url == "https://eprinter.example.edu/api/settings"
    check.assert_called_once_with()


def test_build_source_falls_back_to_settings(settings: Settings) -> None:
    assert isinstance(cli._build_source(_source_args(), settings), UnconfiguredPricingSource)


def test_main_quote_prints_estimate(settings: Settings, capsys) -> None:
    exit_code = cli.main(
        [
            "quote",
            "--pages",
            "1-3,5",
            "--total-pages",
            "10",
            "--copies",
            "2",
            "--mode",
            "color",
            "--monochrome-price",
            "1",
            "--color-price",
            "5",
        ],
    )

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["selection"] == {"pages": [1, 2, 3, 5], "count": 4, "summary": "Pages 1-3,5 (4 of 10)"}
    assert payload["estimate"]["totalImpressions"] == 8
    assert payload["estimate"]["totalCost"] == "40.00"
    assert payload["estimate"]["formatted"] == "₹40.00"
    assert payload["estimate"]["mode"] == "color"


def test_main_quote_reports_rejection(settings: Settings, capsys) -> None:
    exit_code = cli.main(
        ["quote", "--pages", "1,47", "--total-pages", "32", "--monochrome-price", "1", "--color-price", "5"],
    )

    assert exit_code == cli.EXIT_REJECTED
    assert json.loads(capsys.readouterr().out) == {
        "errorKind": "OutOfBoundsError",
        "detail": "Page 47 does not exist in this document (document has 32 pages)",
    }


def test_main_quote_applies_copy_limit_flag(settings: Settings, capsys) -> None:
    exit_code = cli.main(
        [
            "quote",
            "--total-pages",
            "2",
            "--copies",
            "6",
            "--max-copies",
            "5",
            "--monochrome-price",
            "1",
            "--color-price",
            "5",
        ],
    )

    assert exit_code == cli.EXIT_REJECTED
    assert json.loads(capsys.readouterr().out)["errorKind"] == "CopiesOutOfRangeError"


def test_main_quote_without_prices_is_unavailable(settings: Settings, capsys) -> None:
    exit_code = cli.main(["quote", "--total-pages", "2"])

    assert exit_code == cli.EXIT_REJECTED
    assert json.loads(capsys.readouterr().out)["errorKind"] == "PricingUnavailableError"


def test_main_status_prints_service_status(settings: Settings, capsys) -> None:
    exit_code = cli.main(["status", "--monochrome-price", "1", "--color-price", "5"])

    assert exit_code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["accepting_orders"] is True
    assert payload["business_hours"] == {"start": "09:00", "end": "18:00"}


def test_main_returns_one_on_package_error(settings: Settings, mocker) -> None:
    mocker.patch(
        "eprinter.cli.ensure_cli_dependencies_for_remote_pricing",
        side_effect=DependencyError(missing_package=["httpx"], message="remote pricing"),
    )

    assert cli.main(["status", "--pricing-url", "https://eprinter.example.edu/api"]) == 1


def test_main_without_command_prints_help(settings: Settings, capsys) -> None:
    assert cli.main([]) == 0
    assert "usage" in capsys.readouterr().out.lower()


def test_main_quote_cannot_raise_published_copy_limit(settings: Settings, mocker, capsys) -> None:
    mocker.patch("eprinter.cli._build_source", return_value=StaticPricingSource.from_prices(1, 5, max_copies=10))

    exit_code = cli.main(["quote", "--total-pages", "2", "--copies", "11", "--max-copies", "20"])

    assert exit_code == cli.EXIT_REJECTED
    assert json.loads(capsys.readouterr().out) == {
        "errorKind": "CopiesOutOfRangeError",
        "detail": "Maximum 10 copies allowed (requested 11)",
    }
