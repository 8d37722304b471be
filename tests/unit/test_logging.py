from __future__ import annotations

import json
from decimal import Decimal

import structlog

from eprinter import logger as package_logger
from eprinter.logging import _render_amounts, configure_logging, get_logger
from eprinter.settings import Settings


def test_stdlib_logger_is_configured(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="INFO"), force=True)
    logger = get_logger("tests")
    logger.info("hello")

    captured = capsys.readouterr()
    assert "hello" in captured.err.lower()


def test_json_logs_carry_message_and_bound_context(capsys) -> None:
    configure_logging(settings=Settings(log_json=True, log_level="INFO"), force=True)
    logger = get_logger("tests")

    with structlog.contextvars.bound_contextvars(unique_id="PRT-1-abcde"):
        logger.info("Authorized print job", total_cost=Decimal("40.00"))

    line = capsys.readouterr().err.strip().splitlines()[-1]
    record = json.loads(line)
    assert record["message"] == "Authorized print job"
    assert record["unique_id"] == "PRT-1-abcde"
    assert record["total_cost"] == "40.00"
    assert record["level"] == "info"


def test_log_level_filters_lower_events(capsys) -> None:
    configure_logging(settings=Settings(log_json=False, log_level="WARNING"), force=True)
    get_logger("tests").info("quiet")

    assert "quiet" not in capsys.readouterr().err


def test_package_logger_created_on_import() -> None:
    assert callable(getattr(package_logger, "info", None))


def test_amounts_passed_in_extra_are_rendered_as_plain_strings() -> None:
    event = {"event": "Authorized print job", "extra": {"total_cost": Decimal("40.00"), "impressions": 8}}

    rendered = _render_amounts(None, "info", event)

    assert rendered["extra"] == {"total_cost": "40.00", "impressions": 8}
