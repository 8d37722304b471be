"""Core domain model exports."""

from eprinter.typing.models.job import (
    AdvisoryQuote,
    AuthorizedJob,
    DocumentCheck,
    DocumentRef,
    PriceReconciliation,
    PrintJobDescriptor,
    ServiceStatus,
)
from eprinter.typing.models.pricing import (
    BusinessHours,
    CostEstimate,
    FileConstraints,
    PricingPolicy,
    PricingTable,
)
from eprinter.typing.models.selection import ResolvedSelection

__all__ = [
    "AdvisoryQuote",
    "AuthorizedJob",
    "BusinessHours",
    "CostEstimate",
    "DocumentCheck",
    "DocumentRef",
    "FileConstraints",
    "PriceReconciliation",
    "PricingPolicy",
    "PricingTable",
    "PrintJobDescriptor",
    "ResolvedSelection",
    "ServiceStatus",
]
