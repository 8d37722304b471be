"""In-process pricing sources."""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from eprinter.exceptions import PricingUnavailableError
from eprinter.typing.models import PricingPolicy, PricingTable


class StaticPricingSource:
    """Serve one fixed snapshot, e.g. prices pinned in configuration."""

    def __init__(self, policy: PricingPolicy) -> None:
        """Initialize the source.

        Args:
            policy (PricingPolicy): Snapshot returned by every fetch.
        """
        self._policy = policy

    @classmethod
    def from_prices(
        cls,
        monochrome: Decimal | float | str,
        color: Decimal | float | str,
        *,
        max_copies: int = 50,
        version: str | None = None,
        **policy_fields: Any,
    ) -> StaticPricingSource:
        """Build a source from bare per-mode prices.

        Args:
            monochrome: Monochrome price per impression.
            color: Color price per impression.
            max_copies (int): Copy limit.
            version (str | None): Optional label identifying the price list.
            **policy_fields: Extra `PricingPolicy` fields (file constraints, hours, flags).

        Returns:
            StaticPricingSource: Configured source.
        """
        pricing = PricingTable(monochrome=monochrome, color=color, version=version)
        return cls(PricingPolicy(pricing=pricing, max_copies=max_copies, **policy_fields))

    def fetch(self) -> PricingPolicy:
        """Return the fixed snapshot."""
        return self._policy

    async def afetch(self) -> PricingPolicy:
        """Return the fixed snapshot."""
        return self._policy


class UnconfiguredPricingSource:
    """Source used when no prices are configured; every fetch fails."""

    reason = "no pricing source configured; set PRICING_URL or PRICING_MONOCHROME and PRICING_COLOR"

    def fetch(self) -> PricingPolicy:
        """Fail the fetch.

        Raises:
            PricingUnavailableError: Always.
        """
        raise PricingUnavailableError(reason=self.reason)

    async def afetch(self) -> PricingPolicy:
        """Fail the fetch.

        Raises:
            PricingUnavailableError: Always.
        """
        raise PricingUnavailableError(reason=self.reason)
