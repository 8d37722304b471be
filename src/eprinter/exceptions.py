"""Package exceptions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import ClassVar


class PackageError(Exception):
    """Root exception for the package."""


@dataclass(frozen=True)
class SettingsError(PackageError):
    """Raised when settings cannot be loaded or validated."""

    message: str = "Failed to load settings"
    exc: BaseException | None = None

    def __str__(self) -> str:
        """Return error message payload."""
        return f"{self.message}: {self.exc}" if self.exc else self.message


@dataclass(frozen=True)
class DependencyError(PackageError):
    """Raised when optional runtime dependencies are missing."""

    missing_package: list[str]
    message: str

    def __str__(self) -> str:
        """Return error message payload."""
        return f"Missing runtime dependencies for '{self.message}': {', '.join(self.missing_package)}"


class QuoteError(PackageError):
    """Base for every validation failure a quote or submission can report.

    Subclasses set `error_kind` and implement `detail`, the human-readable
    reason shown on the form surface.
    """

    error_kind: ClassVar[str] = "QuoteError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        return self.error_kind

    def to_payload(self) -> dict[str, str]:
        """Return the `{errorKind, detail}` wire shape.

        Returns:
            dict[str, str]: Error payload.
        """
        return {"errorKind": self.error_kind, "detail": self.detail}

    def __str__(self) -> str:
        """Return error message payload."""
        return self.detail


class SelectionError(QuoteError):
    """Raised when a page-selection expression cannot be resolved."""


@dataclass(frozen=True)
class MalformedTermError(SelectionError):
    """Raised when a term is neither an integer nor an `a-b` range."""

    term: str
    error_kind: ClassVar[str] = "MalformedTermError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        return f"'{self.term}' is not a page number or a range like 5-10"


@dataclass(frozen=True)
class InvertedRangeError(SelectionError):
    """Raised when a range starts after it ends."""

    start: int
    end: int
    error_kind: ClassVar[str] = "InvertedRangeError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        return f"Range {self.start}-{self.end} starts after it ends; did you mean {self.end}-{self.start}?"


@dataclass(frozen=True)
class OutOfBoundsError(SelectionError):
    """Raised when a page number falls outside `[1, total_pages]`."""

    page: int
    total_pages: int
    error_kind: ClassVar[str] = "OutOfBoundsError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        noun = "page" if self.total_pages == 1 else "pages"
        return f"Page {self.page} does not exist in this document (document has {self.total_pages} {noun})"


@dataclass(frozen=True)
class EmptySelectionError(SelectionError):
    """Raised when an expression selects no pages at all."""

    expression: str
    error_kind: ClassVar[str] = "EmptySelectionError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        return f"'{self.expression}' does not select any pages"


class EstimateError(QuoteError):
    """Raised when a resolved selection cannot be priced."""


@dataclass(frozen=True)
class CopiesOutOfRangeError(EstimateError):
    """Raised when the copy count is below 1 or above the policy maximum."""

    copies: object
    max_copies: int | None = None
    error_kind: ClassVar[str] = "CopiesOutOfRangeError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        if isinstance(self.copies, bool) or not isinstance(self.copies, int):
            return f"Copies must be a whole number, got {self.copies!r}"
        if self.copies < 1:
            return "At least 1 copy is required"
        return f"Maximum {self.max_copies} copies allowed (requested {self.copies})"


@dataclass(frozen=True)
class UnknownModeError(EstimateError):
    """Raised when the pricing table has no entry for a print mode."""

    mode: str
    error_kind: ClassVar[str] = "UnknownModeError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        return f"No price is configured for print mode '{self.mode}'"


@dataclass(frozen=True)
class UnsupportedOptionError(QuoteError):
    """Raised when a job option such as the page size has no known value."""

    option: str
    value: str
    allowed: tuple[str, ...] = ()
    error_kind: ClassVar[str] = "UnsupportedOptionError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        return f"Unsupported {self.option} '{self.value}'. Expected one of: {', '.join(self.allowed)}"


@dataclass(frozen=True)
class PricingUnavailableError(QuoteError):
    """Raised when the pricing source cannot be reached or returns garbage."""

    reason: str
    error_kind: ClassVar[str] = "PricingUnavailableError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        return f"Current prices could not be retrieved: {self.reason}"


@dataclass(frozen=True)
class ServiceUnavailableError(QuoteError):
    """Raised when the print service is not accepting submissions."""

    reasons: tuple[str, ...]
    error_kind: ClassVar[str] = "ServiceUnavailableError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        return "; ".join(self.reasons) or "Service is unavailable"


@dataclass(frozen=True)
class DocumentRejectedError(QuoteError):
    """Raised when an uploaded document violates the file constraints."""

    reasons: tuple[str, ...]
    error_kind: ClassVar[str] = "DocumentRejectedError"

    @property
    def detail(self) -> str:
        """Return the human-readable reason."""
        return "; ".join(self.reasons)
