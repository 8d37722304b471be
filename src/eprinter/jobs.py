"""Print job descriptor assembly and server-side authorization."""

from __future__ import annotations

import secrets
import string
from datetime import UTC, datetime
from typing import TYPE_CHECKING, TypeVar

import structlog

from eprinter import logger
from eprinter.availability import ensure_service_available
from eprinter.exceptions import QuoteError, UnknownModeError, UnsupportedOptionError
from eprinter.page_range import resolve
from eprinter.pricing import check_copies, estimate, format_currency, to_minor_units
from eprinter.typing.enums import Orientation, PageSize, PrintMode
from eprinter.typing.models import AuthorizedJob, PriceReconciliation, PrintJobDescriptor

if TYPE_CHECKING:
    from collections.abc import Callable

    from eprinter.typing.models import CostEstimate, DocumentRef, PricingPolicy
    from eprinter.typing.protocol import PricingSource

_ID_ALPHABET = string.digits + string.ascii_lowercase

T = TypeVar("T", PageSize, Orientation)


def _job_option(option_type: type[T], value: T | str, option: str) -> T:
    try:
        return option_type(value)
    except ValueError as exc:
        allowed = tuple(member.value for member in option_type)
        raise UnsupportedOptionError(option=option, value=str(value), allowed=allowed) from exc


def generate_unique_id(now: datetime | None = None) -> str:
    """Generate the collection ID printed on the receipt.

    Args:
        now (datetime | None): Creation time; defaults to now.

    Returns:
        str: ID like `PRT-1718000000000-k3x9a`.
    """
    moment = now or datetime.now(UTC)
    millis = int(moment.timestamp() * 1000)
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(5))
    return f"PRT-{millis}-{suffix}"


def assemble_descriptor(
    document: DocumentRef,
    expression: str | None,
    *,
    total_pages: int,
    copies: int,
    mode: PrintMode | str,
    policy: PricingPolicy | None = None,
    page_size: PageSize | str = PageSize.A4,
    orientation: Orientation | str = Orientation.AUTO,
    duplex: bool = False,
) -> PrintJobDescriptor:
    """Build the descriptor the client submits.

    Args:
        document (DocumentRef): Uploaded document.
        expression (str | None): Page-range expression as typed.
        total_pages (int): Page count as the client knows it.
        copies (int): Copies requested.
        mode (PrintMode | str): Print mode.
        policy (PricingPolicy | None): Session snapshot; without it no advisory estimate is attached.
        page_size (PageSize | str): Paper size.
        orientation (Orientation | str): Orientation.
        duplex (bool): Print on both sides.

    Raises:
        SelectionError: If the expression does not resolve.
        UnknownModeError: If the mode is not a known print mode.
        UnsupportedOptionError: If the page size or orientation is not supported.
        CopiesOutOfRangeError: If copies is below 1 or above the policy ceiling.

    Returns:
        PrintJobDescriptor: Immutable descriptor.
    """
    try:
        print_mode = PrintMode(mode)
    except ValueError as exc:
        raise UnknownModeError(mode=str(mode)) from exc

    selection = resolve(expression, total_pages)
    paper = _job_option(PageSize, page_size, "page size")
    layout = _job_option(Orientation, orientation, "orientation")
    check_copies(copies, policy.max_copies if policy is not None else None)

    client_estimate = None
    if policy is not None:
        client_estimate = estimate(selection.count, copies, mode, policy.pricing, max_copies=policy.max_copies)

    return PrintJobDescriptor(
        document=document,
        selection=selection,
        copies=copies,
        mode=print_mode,
        page_size=paper,
        orientation=layout,
        duplex=duplex,
        client_estimate=client_estimate,
    )


def reconcile(
    client_estimate: CostEstimate | None,
    server_estimate: CostEstimate,
    *,
    currency_symbol: str = "₹",
) -> PriceReconciliation:
    """Compare the advisory total with the authoritative one.

    Args:
        client_estimate (CostEstimate | None): Estimate the client displayed, if any.
        server_estimate (CostEstimate): Authoritative estimate.
        currency_symbol (str): Symbol used in the warning.

    Returns:
        PriceReconciliation: Comparison, with a user-facing warning when totals differ.
    """
    client_total = client_estimate.total_cost if client_estimate is not None else None
    changed = client_total is not None and client_total != server_estimate.total_cost

    message = None
    if changed:
        before = format_currency(client_total, currency_symbol)
        after = format_currency(server_estimate.total_cost, currency_symbol)
        message = f"Price changed since you last viewed this: {before} → {after}"

    return PriceReconciliation(
        client_total=client_total,
        server_total=server_estimate.total_cost,
        changed=changed,
        message=message,
    )


def authorize_job(
    descriptor: PrintJobDescriptor,
    *,
    document_pages: int,
    source: PricingSource,
    now: datetime | None = None,
    check_availability: bool = True,
    currency_symbol: str = "₹",
) -> AuthorizedJob:
    """Recompute a submitted job's cost from server-side inputs.

    The descriptor's resolved pages and estimate are ignored: the raw
    expression is re-resolved against the stored document's page count and
    priced with a freshly fetched snapshot. Any failure rejects the job with
    its specific error.

    Args:
        descriptor (PrintJobDescriptor): Descriptor sent by the client.
        document_pages (int): Page count of the stored document.
        source (PricingSource): Authoritative pricing source.
        now (datetime | None): Moment used for the unique id and the business-hours check; naive values
            are local time, aware values are converted to local time before comparing with opening hours.
        check_availability (bool): Reject when the service is closed.
        currency_symbol (str): Symbol used in the reconciliation warning.

    Raises:
        QuoteError: The specific selection, estimate, availability or pricing error.

    Returns:
        AuthorizedJob: Job with the cost to charge.
    """
    unique_id = generate_unique_id(now)
    tokens = structlog.contextvars.bind_contextvars(unique_id=unique_id, document_id=descriptor.document.document_id)
    try:
        try:
            selection = resolve(descriptor.page_expression, document_pages)
            policy = source.fetch()
            if check_availability:
                ensure_service_available(policy, now)
            server_estimate = estimate(
                selection.count,
                descriptor.copies,
                descriptor.mode,
                policy.pricing,
                max_copies=policy.max_copies,
            )
        except QuoteError as exc:
            logger.info("Rejected print job", extra={"error_kind": exc.error_kind, "detail": exc.detail})
            raise

        reconciliation = reconcile(descriptor.client_estimate, server_estimate, currency_symbol=currency_symbol)
        if reconciliation.changed:
            logger.warning(
                "Client estimate differs from authoritative cost",
                extra={
                    "client_total": reconciliation.client_total,
                    "server_total": reconciliation.server_total,
                    "claimed_total_pages": descriptor.claimed_total_pages,
                    "document_pages": document_pages,
                    "pricing_version": policy.pricing.version,
                },
            )

        job = AuthorizedJob(
            unique_id=unique_id,
            descriptor=descriptor,
            selection=selection,
            estimate=server_estimate,
            reconciliation=reconciliation,
            amount_minor_units=to_minor_units(server_estimate.total_cost),
        )
        logger.info(
            "Authorized print job",
            extra={"total_cost": server_estimate.total_cost, "impressions": server_estimate.total_impressions},
        )
        return job
    finally:
        structlog.contextvars.reset_contextvars(**tokens)


class AuthorizingPipeline:
    """Order pipeline front door that authorizes jobs before handing them on.

    `page_counter` maps a document id to the page count of the stored file.
    """

    def __init__(
        self,
        source: PricingSource,
        page_counter: Callable[[str], int],
        *,
        check_availability: bool = True,
        currency_symbol: str = "₹",
    ) -> None:
        """Initialize the pipeline.

        Args:
            source (PricingSource): Authoritative pricing source.
            page_counter (Callable[[str], int]): Page-count lookup for stored documents.
            check_availability (bool): Reject when the service is closed.
            currency_symbol (str): Symbol used in reconciliation warnings.
        """
        self._source = source
        self._page_counter = page_counter
        self._check_availability = check_availability
        self._currency_symbol = currency_symbol

    def submit(self, descriptor: PrintJobDescriptor) -> AuthorizedJob:
        """Authorize one descriptor.

        Args:
            descriptor (PrintJobDescriptor): Descriptor sent by the client.

        Raises:
            QuoteError: If the job is rejected.

        Returns:
            AuthorizedJob: Accepted job.
        """
        return authorize_job(
            descriptor,
            document_pages=self._page_counter(descriptor.document.document_id),
            source=self._source,
            check_availability=self._check_availability,
            currency_symbol=self._currency_symbol,
        )
