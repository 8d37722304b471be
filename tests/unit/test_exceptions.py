from __future__ import annotations

import pytest

from eprinter.exceptions import (
    CopiesOutOfRangeError,
    DependencyError,
    DocumentRejectedError,
    EmptySelectionError,
    EstimateError,
    InvertedRangeError,
    MalformedTermError,
    OutOfBoundsError,
    PackageError,
    PricingUnavailableError,
    QuoteError,
    SelectionError,
    ServiceUnavailableError,
    SettingsError,
    UnknownModeError,
)


def test_root_exception_hierarchy() -> None:
    assert issubclass(SettingsError, PackageError)
    assert issubclass(DependencyError, PackageError)
    assert issubclass(QuoteError, PackageError)
    for error in (MalformedTermError, InvertedRangeError, OutOfBoundsError, EmptySelectionError):
        assert issubclass(error, SelectionError)
    for error in (CopiesOutOfRangeError, UnknownModeError):
        assert issubclass(error, EstimateError)


@pytest.mark.parametrize(
    ("error", "detail"),
    [
        (MalformedTermError(term="x"), "'x' is not a page number or a range like 5-10"),
        (InvertedRangeError(start=5, end=3), "Range 5-3 starts after it ends; did you mean 3-5?"),
        (OutOfBoundsError(page=3, total_pages=1), "Page 3 does not exist in this document (document has 1 page)"),
        (EmptySelectionError(expression=","), "',' does not select any pages"),
        (CopiesOutOfRangeError(copies=0), "At least 1 copy is required"),
        (UnknownModeError(mode="sepia"), "No price is configured for print mode 'sepia'"),
        (PricingUnavailableError(reason="timeout"), "Current prices could not be retrieved: timeout"),
        (ServiceUnavailableError(reasons=()), "Service is unavailable"),
        (DocumentRejectedError(reasons=("too big",)), "too big"),
    ],
)
def test_quote_errors_expose_kind_and_detail(error: QuoteError, detail: str) -> None:
    assert error.detail == detail
    assert str(error) == detail
    assert error.to_payload() == {"errorKind": type(error).__name__, "detail": detail}


def test_quote_errors_are_immutable() -> None:
    error = OutOfBoundsError(page=11, total_pages=10)

    with pytest.raises(AttributeError):
        error.page = 12  # type: ignore[misc]


def test_infrastructure_error_messages() -> None:
    assert str(SettingsError(exc=ValueError("bad"))) == "Failed to load settings: bad"
    assert str(DependencyError(missing_package=["httpx"], message="remote pricing")) == (
        "Missing runtime dependencies for 'remote pricing': httpx"
    )
