"""Print job descriptor, authorization and advisory quote models."""

from __future__ import annotations

from datetime import time
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, Field

from eprinter.typing.enums import Orientation, PageSize, PrintMode, QuoteState
from eprinter.typing.models.pricing import BusinessHours, CostEstimate
from eprinter.typing.models.selection import ResolvedSelection


class DocumentRef(BaseModel):
    """Identity of an uploaded document."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    document_id: str = Field(min_length=1)
    name: str = Field(min_length=1)
    size_bytes: int | None = Field(default=None, ge=0)


class PrintJobDescriptor(BaseModel):
    """Immutable bundle submitted to the order pipeline.

    `selection` records the raw expression together with the page count the
    client believed the document had. The server re-resolves the expression
    and never trusts the pages or the estimate sent here.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    document: DocumentRef
    selection: ResolvedSelection
    copies: int = Field(ge=1)
    mode: PrintMode
    page_size: PageSize = PageSize.A4
    orientation: Orientation = Orientation.AUTO
    duplex: bool = False
    client_estimate: CostEstimate | None = None

    @property
    def page_expression(self) -> str:
        """Return the raw page-range expression typed by the user."""
        return self.selection.expression

    @property
    def claimed_total_pages(self) -> int:
        """Return the page count the client believed the document had."""
        return self.selection.total_pages


class PriceReconciliation(BaseModel):
    """Comparison between the advisory and authoritative totals."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    client_total: Decimal | None
    server_total: Decimal
    changed: bool
    message: str | None = None


class AuthorizedJob(BaseModel):
    """Server-accepted job carrying the cost that will be charged."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    unique_id: str
    descriptor: PrintJobDescriptor
    selection: ResolvedSelection
    estimate: CostEstimate
    reconciliation: PriceReconciliation
    amount_minor_units: int = Field(ge=0)


class AdvisoryQuote(BaseModel):
    """Client-side estimate shown for feedback only."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    state: QuoteState
    selection: ResolvedSelection | None = None
    estimate: CostEstimate | None = None
    error: dict[str, str] | None = None

    @property
    def label(self) -> str:
        """Return the caption distinguishing the figure from a final price."""
        if self.state is QuoteState.UNAVAILABLE:
            return "Estimate unavailable"
        if self.state is QuoteState.INVALID:
            return "Fix the highlighted options to see an estimate"
        return "Estimated cost (final price confirmed at checkout)"


class ServiceStatus(BaseModel):
    """Whether new submissions are accepted right now, and why not."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    available: bool
    maintenance_mode: bool
    accepting_orders: bool
    within_business_hours: bool
    business_hours: BusinessHours
    current_time: time
    reasons: tuple[str, ...] = ()


class DocumentCheck(BaseModel):
    """Outcome of checking an upload against the file constraints."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    accepted: bool
    extension: str
    reasons: tuple[str, ...] = ()
