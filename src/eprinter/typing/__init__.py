"""Typing-centric domain modules."""

from eprinter.typing.enums import Orientation, PageSize, PrintMode, QuoteState
from eprinter.typing.models import (
    AdvisoryQuote,
    AuthorizedJob,
    BusinessHours,
    CostEstimate,
    DocumentCheck,
    DocumentRef,
    FileConstraints,
    PriceReconciliation,
    PricingPolicy,
    PricingTable,
    PrintJobDescriptor,
    ResolvedSelection,
    ServiceStatus,
)
from eprinter.typing.protocol import OrderPipeline, PricingSource

__all__ = [
    "AdvisoryQuote",
    "AuthorizedJob",
    "BusinessHours",
    "CostEstimate",
    "DocumentCheck",
    "DocumentRef",
    "FileConstraints",
    "OrderPipeline",
    "Orientation",
    "PageSize",
    "PriceReconciliation",
    "PricingPolicy",
    "PricingSource",
    "PricingTable",
    "PrintJobDescriptor",
    "PrintMode",
    "QuoteState",
    "ResolvedSelection",
    "ServiceStatus",
]
