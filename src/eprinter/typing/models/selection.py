"""Page selection models."""

from __future__ import annotations

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ResolvedSelection(BaseModel):
    """Canonical set of pages selected by a page-range expression."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    expression: str
    total_pages: int = Field(ge=1)
    pages: tuple[int, ...]

    @model_validator(mode="after")
    def _check_pages(self) -> Self:
        """Ensure pages are sorted, distinct and inside the document.

        Raises:
            ValueError: If the page tuple breaks the canonical form.

        Returns:
            Self: The validated selection.
        """
        if not self.pages:
            raise ValueError("A resolved selection must contain at least one page")  # noqa: TRY003
        if any(later <= earlier for earlier, later in zip(self.pages, self.pages[1:], strict=False)):
            raise ValueError("Pages must be strictly ascending")  # noqa: TRY003
        if self.pages[0] < 1 or self.pages[-1] > self.total_pages:
            raise ValueError("Pages must lie within the document")  # noqa: TRY003
        return self

    @property
    def count(self) -> int:
        """Return the number of selected pages."""
        return len(self.pages)

    @property
    def is_whole_document(self) -> bool:
        """Return whether every page of the document is selected."""
        return self.count == self.total_pages

    def to_payload(self) -> dict[str, object]:
        """Return the `{pages, count}` wire shape.

        Returns:
            dict[str, object]: Selection payload.
        """
        return {"pages": list(self.pages), "count": self.count}
