from __future__ import annotations

import pytest

from eprinter.documents import check_document, ensure_document_accepted
from eprinter.exceptions import DocumentRejectedError
from eprinter.typing.models import FileConstraints


def test_check_document_accepts_allowed_file() -> None:
    check = check_document("Thesis.PDF", 1024, FileConstraints())

    assert check.accepted is True
    assert check.extension == "pdf"
    assert check.reasons == ()


def test_check_document_rejects_large_file() -> None:
    constraints = FileConstraints(max_file_size_mb=1)

    check = check_document("notes.pdf", 1024 * 1024 + 1, constraints)

    assert check.accepted is False
    assert check.reasons == ("File size should be less than 1MB",)


def test_check_document_accepts_file_at_size_limit() -> None:
    assert check_document("notes.pdf", 1024 * 1024, FileConstraints(max_file_size_mb=1)).accepted is True


def test_check_document_rejects_unsupported_type() -> None:
    check = check_document("slides.pptx", 10, FileConstraints(allowed_file_types=["pdf", "png"]))

    assert check.reasons == ("File type 'pptx' is not supported. Allowed types: pdf, png",)


def test_check_document_without_extension() -> None:
    check = check_document("README", 10, FileConstraints(allowed_file_types=["pdf"]))

    assert check.extension == ""
    assert check.reasons == ("File type '(none)' is not supported. Allowed types: pdf",)


def test_ensure_document_accepted_raises_all_reasons() -> None:
    constraints = FileConstraints(max_file_size_mb=50, allowed_file_types=["pdf"])

    with pytest.raises(DocumentRejectedError) as exc_info:
        ensure_document_accepted("scan.tiff", 60 * 1024 * 1024, constraints)

    assert str(exc_info.value) == (
        "File size should be less than 50MB; File type 'tiff' is not supported. Allowed types: pdf"
    )
