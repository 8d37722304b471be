"""Pricing snapshot and cost estimate models."""

from __future__ import annotations

import re
from datetime import UTC, datetime
from decimal import Decimal, InvalidOperation

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator

from eprinter.exceptions import UnknownModeError
from eprinter.typing.enums import PrintMode

_HH_MM = re.compile(r"^(?:[01]\d|2[0-3]):[0-5]\d$")

DEFAULT_ALLOWED_FILE_TYPES = ("pdf", "doc", "docx", "jpg", "jpeg", "png")


def to_decimal(value: object) -> object:
    """Convert numeric input to `Decimal` without binary float artefacts.

    Args:
        value: Raw value from a payload or caller.

    Returns:
        object: A `Decimal` for numeric input, else the value untouched for pydantic to reject.
    """
    if isinstance(value, Decimal) or isinstance(value, bool):
        return value
    if isinstance(value, (int, float, str)):
        try:
            return Decimal(str(value).strip())
        except InvalidOperation:
            return value
    return value


class PricingTable(BaseModel):
    """Price per impression for each print mode."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    monochrome: Decimal = Field(
        ge=0,
        validation_alias=AliasChoices("monochrome", "blackPrintCost", "blackAndWhite", "black"),
    )
    color: Decimal = Field(
        ge=0,
        validation_alias=AliasChoices("color", "colorPrintCost"),
    )
    version: str | None = Field(default=None, validation_alias=AliasChoices("version", "updatedAt"))

    @field_validator("monochrome", "color", mode="before")
    @classmethod
    def _normalize_prices(cls, value: object) -> object:
        return to_decimal(value)

    @property
    def rates(self) -> dict[PrintMode, Decimal]:
        """Return the table as a mode-keyed mapping."""
        return {PrintMode.MONOCHROME: self.monochrome, PrintMode.COLOR: self.color}

    def unit_price(self, mode: PrintMode | str) -> Decimal:
        """Return the price of one impression in `mode`.

        Args:
            mode: Print mode or one of its accepted spellings.

        Raises:
            UnknownModeError: If the table has no entry for the mode.

        Returns:
            Decimal: Unit price.
        """
        try:
            key = PrintMode(mode)
        except ValueError as exc:
            raise UnknownModeError(mode=str(mode)) from exc
        price = self.rates.get(key)
        if price is None:
            raise UnknownModeError(mode=key.value)
        return price


class FileConstraints(BaseModel):
    """Upload limits published alongside prices."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    max_file_size_mb: float = Field(
        default=50,
        gt=0,
        validation_alias=AliasChoices("max_file_size_mb", "maxFileSize"),
    )
    allowed_file_types: tuple[str, ...] = Field(
        default=DEFAULT_ALLOWED_FILE_TYPES,
        validation_alias=AliasChoices("allowed_file_types", "allowedFileTypes"),
    )

    @field_validator("allowed_file_types", mode="before")
    @classmethod
    def _normalize_types(cls, value: object) -> object:
        if isinstance(value, (list, tuple)):
            return tuple(str(item).strip().lower().lstrip(".") for item in value if str(item).strip())
        return value

    @property
    def max_file_size_bytes(self) -> int:
        """Return the size ceiling in bytes."""
        return int(self.max_file_size_mb * 1024 * 1024)


class BusinessHours(BaseModel):
    """Daily window during which submissions are accepted."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    start: str = "09:00"
    end: str = "18:00"

    @field_validator("start", "end")
    @classmethod
    def _validate_clock(cls, value: str) -> str:
        if not _HH_MM.match(value):
            raise ValueError(f"Expected HH:MM, got '{value}'")  # noqa: TRY003
        return value


class PricingPolicy(BaseModel):
    """One consistent snapshot from the pricing source."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    pricing: PricingTable
    max_copies: int = Field(ge=1)
    file_constraints: FileConstraints = Field(default_factory=FileConstraints)
    business_hours: BusinessHours = Field(default_factory=BusinessHours)
    maintenance_mode: bool = False
    accepting_orders: bool = True
    fetched_at: datetime = Field(default_factory=lambda: datetime.now(UTC))


class CostEstimate(BaseModel):
    """Derived cost of printing a resolved selection.

    The inputs are echoed so a consumer can audit which pricing snapshot
    produced the total.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    resolved_page_count: int = Field(ge=1)
    copies: int = Field(ge=1)
    mode: PrintMode
    pricing: PricingTable
    total_impressions: int = Field(ge=1)
    unit_price: Decimal = Field(ge=0)
    total_cost: Decimal = Field(ge=0)

    def to_payload(self) -> dict[str, object]:
        """Return the `{totalImpressions, unitPrice, totalCost}` wire shape.

        Returns:
            dict[str, object]: Estimate payload.
        """
        return {
            "totalImpressions": self.total_impressions,
            "unitPrice": self.unit_price,
            "totalCost": self.total_cost,
        }
