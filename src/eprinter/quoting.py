"""Advisory quotes shown while the user fills in the print form."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eprinter.exceptions import EstimateError, PricingUnavailableError, SelectionError
from eprinter.page_range import resolve
from eprinter.pricing import estimate
from eprinter.typing.enums import PrintMode, QuoteState
from eprinter.typing.models import AdvisoryQuote

if TYPE_CHECKING:
    from eprinter.typing.models import PricingPolicy
    from eprinter.typing.protocol import PricingSource


class PricingSession:
    """Pricing snapshot held for one form session.

    The snapshot is fetched on first use and kept until `refresh` is called.
    There is no expiry; the caller decides when prices are re-read.
    """

    def __init__(self, source: PricingSource) -> None:
        """Initialize the session.

        Args:
            source (PricingSource): Where snapshots come from.
        """
        self._source = source
        self._policy: PricingPolicy | None = None

    @property
    def policy(self) -> PricingPolicy | None:
        """Return the snapshot in use, if one has been fetched."""
        return self._policy

    def current(self) -> PricingPolicy:
        """Return the session snapshot, fetching it on first use.

        Raises:
            PricingUnavailableError: If the first fetch fails.

        Returns:
            PricingPolicy: Snapshot in use.
        """
        if self._policy is None:
            return self.refresh()
        return self._policy

    def refresh(self) -> PricingPolicy:
        """Replace the snapshot with a fresh one.

        The previous snapshot is kept when the fetch fails.

        Raises:
            PricingUnavailableError: If the fetch fails.

        Returns:
            PricingPolicy: New snapshot.
        """
        self._policy = self._source.fetch()
        return self._policy


def advise(
    expression: str | None,
    total_pages: int,
    copies: int,
    mode: PrintMode | str,
    session: PricingSession,
) -> AdvisoryQuote:
    """Compute the estimate displayed next to the print form.

    Validation errors and an unreachable pricing source are reported in
    the returned quote instead of being raised, so the form keeps working.

    Args:
        expression (str | None): Page-range expression as typed.
        total_pages (int): Page count of the uploaded document.
        copies (int): Copies requested.
        mode (PrintMode | str): Print mode.
        session (PricingSession): Session snapshot holder.

    Returns:
        AdvisoryQuote: Ready, invalid or unavailable quote.
    """
    try:
        selection = resolve(expression, total_pages)
    except SelectionError as exc:
        return AdvisoryQuote(state=QuoteState.INVALID, error=exc.to_payload())

    try:
        policy = session.current()
    except PricingUnavailableError as exc:
        return AdvisoryQuote(state=QuoteState.UNAVAILABLE, selection=selection, error=exc.to_payload())

    try:
        cost = estimate(selection.count, copies, mode, policy.pricing, max_copies=policy.max_copies)
    except EstimateError as exc:
        return AdvisoryQuote(state=QuoteState.INVALID, selection=selection, error=exc.to_payload())

    return AdvisoryQuote(state=QuoteState.READY, selection=selection, estimate=cost)
