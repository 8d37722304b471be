"""Pricing sources."""

from __future__ import annotations

from typing import TYPE_CHECKING

from eprinter.sources.remote import HttpPricingSource
from eprinter.sources.static import StaticPricingSource, UnconfiguredPricingSource

if TYPE_CHECKING:
    from eprinter.settings import Settings
    from eprinter.typing.protocol import PricingSource


def pricing_source_from_settings(settings: Settings) -> PricingSource:
    """Select the pricing source described by settings.

    `PRICING_URL` wins over static prices. Without either, the returned
    source fails every fetch rather than inventing a price.

    Args:
        settings (Settings): Runtime settings.

    Returns:
        PricingSource: Configured source.
    """
    if settings.pricing_url:
        return HttpPricingSource(settings)
    if settings.pricing_monochrome is not None and settings.pricing_color is not None:
        return StaticPricingSource.from_prices(
            settings.pricing_monochrome,
            settings.pricing_color,
            max_copies=settings.max_copies,
            version="settings",
        )
    return UnconfiguredPricingSource()


__all__ = [
    "HttpPricingSource",
    "StaticPricingSource",
    "UnconfiguredPricingSource",
    "pricing_source_from_settings",
]
