"""Page-range expression parsing.

An expression is either `all` (or blank), meaning the whole document, or a
comma-separated list of page numbers and inclusive `a-b` ranges such as
`1-5,8,10-12`. Matching is case-insensitive and whitespace around numbers,
hyphens and commas is ignored.

Every bad term is rejected with its own error. Out-of-range pages are never
clamped and unparsable input never falls back to the whole document.
Duplicate pages are not an error; they are folded into one.
"""

from __future__ import annotations

import re
from itertools import groupby

from eprinter.exceptions import (
    EmptySelectionError,
    InvertedRangeError,
    MalformedTermError,
    OutOfBoundsError,
)
from eprinter.typing.models import ResolvedSelection

ALL_PAGES = "all"

_TERM = re.compile(r"(\d+)(?:\s*-\s*(\d+))?", re.ASCII)


def _parse_term(term: str) -> tuple[int, int]:
    """Parse one term into an inclusive `(start, end)` pair.

    Args:
        term (str): Stripped, non-empty term.

    Raises:
        MalformedTermError: If the term is not `n` or `a-b`.
        InvertedRangeError: If `a > b`.

    Returns:
        tuple[int, int]: Inclusive bounds; equal for a single page.
    """
    match = _TERM.fullmatch(term)
    if match is None:
        raise MalformedTermError(term=term)

    start = int(match.group(1))
    end = int(match.group(2)) if match.group(2) is not None else start
    if start > end:
        raise InvertedRangeError(start=start, end=end)
    return start, end


def _check_bounds(start: int, end: int, total_pages: int) -> None:
    if start < 1 or start > total_pages:
        raise OutOfBoundsError(page=start, total_pages=total_pages)
    if end > total_pages:
        raise OutOfBoundsError(page=end, total_pages=total_pages)


def resolve(expression: str | None, total_pages: int) -> ResolvedSelection:
    """Resolve a page-range expression against a document's page count.

    Args:
        expression (str | None): User-supplied selection, e.g. `"1-3,5"` or `"all"`.
        total_pages (int): Number of pages in the document.

    Raises:
        ValueError: If `total_pages` is not a positive integer.
        MalformedTermError: If a term is not a number or range.
        InvertedRangeError: If a range starts after it ends.
        OutOfBoundsError: If a page lies outside `[1, total_pages]`.
        EmptySelectionError: If the expression selects no pages.

    Returns:
        ResolvedSelection: Sorted, distinct pages and their count.
    """
    if isinstance(total_pages, bool) or not isinstance(total_pages, int) or total_pages < 1:
        raise ValueError(f"total_pages must be a positive integer, got {total_pages!r}")  # noqa: TRY003

    raw = expression or ""
    if raw.strip().lower() in {"", ALL_PAGES}:
        return ResolvedSelection(expression=raw, total_pages=total_pages, pages=tuple(range(1, total_pages + 1)))

    pages: set[int] = set()
    for term in (part.strip() for part in raw.split(",")):
        if not term:
            continue
        if term.lower() == ALL_PAGES:
            raise MalformedTermError(term=term)
        start, end = _parse_term(term)
        _check_bounds(start, end, total_pages)
        pages.update(range(start, end + 1))

    if not pages:
        raise EmptySelectionError(expression=raw)

    return ResolvedSelection(expression=raw, total_pages=total_pages, pages=tuple(sorted(pages)))


def compress_pages(pages: tuple[int, ...] | list[int]) -> str:
    """Render sorted pages back into the shortest canonical expression.

    Args:
        pages: Distinct pages in ascending order.

    Returns:
        str: Expression such as `"1-3,5"`; resolving it yields the same pages.
    """
    parts: list[str] = []
    for _, run in groupby(enumerate(pages), key=lambda item: item[1] - item[0]):
        block = [page for _, page in run]
        parts.append(str(block[0]) if len(block) == 1 else f"{block[0]}-{block[-1]}")
    return ",".join(parts)


def describe_selection(selection: ResolvedSelection) -> str:
    """Return a short human-readable summary of a selection.

    Args:
        selection (ResolvedSelection): Resolved selection.

    Returns:
        str: E.g. `"All pages (1-12)"` or `"Pages 1-3,5 (4 of 12)"`.
    """
    if selection.is_whole_document:
        return f"All pages (1-{selection.total_pages})"
    return f"Pages {compress_pages(selection.pages)} ({selection.count} of {selection.total_pages})"
