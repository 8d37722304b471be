"""Collaborator interfaces."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from eprinter.typing.models import AuthorizedJob, PricingPolicy, PrintJobDescriptor


class PricingSource(Protocol):
    """Read-only provider of the current pricing policy."""

    def fetch(self) -> PricingPolicy:
        """Fetch one consistent pricing snapshot.

        Raises:
            PricingUnavailableError: If the snapshot cannot be retrieved.

        Returns:
            PricingPolicy: Current prices, copy limit and file constraints.
        """


class OrderPipeline(Protocol):
    """Order/payment pipeline that takes over an accepted job."""

    def submit(self, descriptor: PrintJobDescriptor) -> AuthorizedJob:
        """Accept one descriptor and return it with its authoritative cost.

        Args:
            descriptor: Descriptor assembled by the client.

        Raises:
            QuoteError: If the job is rejected.

        Returns:
            AuthorizedJob: Accepted job.
        """
