"""PDF upload handling.

Validates the MIME type, reads the upload, and encodes it as base64 for the
model request. Page metadata is extracted with pypdf on a best-effort basis.
"""

import base64
import io
import logging
from typing import Protocol

from fastapi.concurrency import run_in_threadpool
from pypdf import PdfReader
from pypdf.errors import PdfReadError

from documind.errors import DocuMindError
from documind.models.schemas import Document

logger = logging.getLogger(__name__)

# Constants
PDF_MIME_TYPE = "application/pdf"
SOFT_MAX_UPLOAD_BYTES = 50 * 1024 * 1024  # 50MB, advisory only


class UploadError(DocuMindError):
    """Raised when an upload cannot become a Document."""

    pass


class UploadValidationError(UploadError):
    """Raised when the upload is not a PDF."""

    def __init__(self, message: str = "Please upload a valid PDF file.") -> None:
        super().__init__(message)


class FileReadError(UploadError):
    """Raised when the file bytes could not be read."""

    def __init__(self, message: str = "Failed to read file.") -> None:
        super().__init__(message)


class FileProcessingError(UploadError):
    """Raised for any other failure while preparing the document."""

    def __init__(self, message: str = "File processing error.") -> None:
        super().__init__(message)


class PDFUpload(Protocol):
    """The subset of fastapi.UploadFile the handler relies on."""

    filename: str | None
    content_type: str | None

    async def read(self) -> bytes: ...


def validate_pdf_upload(content_type: str | None, filename: str | None = None) -> None:
    """Reject anything whose MIME type is not exactly application/pdf.

    Args:
        content_type: MIME type reported by the client.
        filename: Only used for logging.

    Raises:
        UploadValidationError: If the MIME type is not PDF.
    """
    if content_type != PDF_MIME_TYPE:
        logger.warning(f"Rejected upload {filename!r} with content type {content_type!r}")
        raise UploadValidationError()


def _count_pages(content: bytes) -> int | None:
    """Return the page count, or None when pypdf cannot read the file."""
    try:
        return len(PdfReader(io.BytesIO(content)).pages)
    except PdfReadError as e:
        logger.warning(f"pypdf could not read the document: {e}")
    except Exception as e:
        logger.warning(f"Failed to count pages: {e}")
    return None


def encode_pdf(content: bytes, name: str, content_type: str = PDF_MIME_TYPE) -> Document:
    """Build a Document from raw PDF bytes.

    Args:
        content: Raw bytes of the file.
        name: Original filename.
        content_type: MIME type of the file.

    Returns:
        Document carrying the base64 payload and metadata.
    """
    if len(content) > SOFT_MAX_UPLOAD_BYTES:
        logger.warning(
            f"{name} is {len(content) / (1024 * 1024):.1f}MB, above the recommended 50MB"
        )

    return Document(
        name=name,
        content_type=content_type,
        size=len(content),
        base64_data=base64.b64encode(content).decode("ascii"),
        pages=_count_pages(content),
    )


async def read_pdf_upload(file: PDFUpload) -> Document:
    """Read an uploaded PDF and encode it for the model.

    The MIME type must already have been checked with validate_pdf_upload.

    Args:
        file: The uploaded file.

    Returns:
        The encoded Document.

    Raises:
        FileReadError: If reading the upload fails.
        FileProcessingError: If encoding the document fails.
    """
    try:
        content = await file.read()
    except Exception as e:
        logger.error(f"Failed to read upload {file.filename!r}: {e}")
        raise FileReadError() from e

    try:
        document = await run_in_threadpool(
            encode_pdf,
            content,
            name=file.filename or "document.pdf",
            content_type=file.content_type or PDF_MIME_TYPE,
        )
    except Exception as e:
        logger.error(f"Failed to process upload {file.filename!r}: {e}")
        raise FileProcessingError() from e

    logger.info(f"Read {document.name} ({document.size} bytes, pages={document.pages})")
    return document
