"""Upload checks against the published file constraints."""

from __future__ import annotations

from pathlib import PurePath

from eprinter.exceptions import DocumentRejectedError
from eprinter.typing.models import DocumentCheck, FileConstraints


def _format_megabytes(value: float) -> str:
    return f"{value:g}MB"


def check_document(name: str, size_bytes: int, constraints: FileConstraints) -> DocumentCheck:
    """Check an upload's size and type.

    Args:
        name (str): Original file name.
        size_bytes (int): File size in bytes.
        constraints (FileConstraints): Limits from the current pricing snapshot.

    Returns:
        DocumentCheck: Whether the file is accepted and why not.
    """
    extension = PurePath(name).suffix.lower().lstrip(".")
    reasons: list[str] = []

    if size_bytes > constraints.max_file_size_bytes:
        reasons.append(f"File size should be less than {_format_megabytes(constraints.max_file_size_mb)}")
    if extension not in constraints.allowed_file_types:
        allowed = ", ".join(constraints.allowed_file_types)
        shown = extension or "(none)"
        reasons.append(f"File type '{shown}' is not supported. Allowed types: {allowed}")

    return DocumentCheck(accepted=not reasons, extension=extension, reasons=tuple(reasons))


def ensure_document_accepted(name: str, size_bytes: int, constraints: FileConstraints) -> DocumentCheck:
    """Raise when an upload violates the file constraints.

    Args:
        name (str): Original file name.
        size_bytes (int): File size in bytes.
        constraints (FileConstraints): Limits from the current pricing snapshot.

    Raises:
        DocumentRejectedError: If the file is too large or of an unsupported type.

    Returns:
        DocumentCheck: The passing check.
    """
    check = check_document(name, size_bytes, constraints)
    if not check.accepted:
        raise DocumentRejectedError(reasons=check.reasons)
    return check
