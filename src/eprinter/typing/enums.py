"""Project enums."""

from __future__ import annotations

from enum import StrEnum


class _EnumMixin(StrEnum):
    """Shared conversion helpers for user-facing enums."""

    @classmethod
    def from_str(cls, value: str) -> _EnumMixin:
        """Parse enum from string.

        Args:
            value: Raw string value.

        Raises:
            ValueError: If the value is not supported.

        Returns:
            _EnumMixin: Parsed enum value.
        """
        try:
            return cls(value)
        except ValueError as exc:
            supported = ", ".join(member.value for member in cls)
            message = f"Unsupported {cls.__name__} value '{value}'. Expected one of: {supported}"
            raise ValueError(message) from exc

    def to_str(self) -> str:
        """Return string representation.

        Returns:
            str: Enum string value.
        """
        return self.value


# Spellings used by the settings API and older clients.
_MODE_ALIASES = {
    "black": "monochrome",
    "bw": "monochrome",
    "blackandwhite": "monochrome",
    "mono": "monochrome",
    "colour": "color",
}


class PrintMode(_EnumMixin):
    """Ink mode that selects the per-impression price."""

    MONOCHROME = "monochrome"
    COLOR = "color"

    @classmethod
    def _missing_(cls, value: object) -> PrintMode | None:
        if not isinstance(value, str):
            return None
        key = value.strip().lower().replace("_", "").replace("-", "").replace(" ", "")
        key = _MODE_ALIASES.get(key, key)
        for member in cls:
            if member.value == key:
                return member
        return None


class PageSize(_EnumMixin):
    """Supported paper sizes."""

    A4 = "A4"
    A3 = "A3"
    LETTER = "Letter"
    LEGAL = "Legal"


class Orientation(_EnumMixin):
    """Page orientation requested for the job."""

    AUTO = "auto"
    PORTRAIT = "portrait"
    LANDSCAPE = "landscape"


class QuoteState(_EnumMixin):
    """Display state of an advisory quote."""

    READY = "ready"
    INVALID = "invalid"
    UNAVAILABLE = "unavailable"
