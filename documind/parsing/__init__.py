"""Upload handling for PDF documents.

Responsibilities:
    - MIME type validation (application/pdf only)
    - Async read of the uploaded bytes
    - Base64 encoding for inline model requests
    - Best-effort page count with pypdf
"""

from documind.parsing.pdf_upload import (
    FileProcessingError,
    FileReadError,
    UploadError,
    UploadValidationError,
    encode_pdf,
    read_pdf_upload,
    validate_pdf_upload,
)

__all__ = [
    "FileProcessingError",
    "FileReadError",
    "UploadError",
    "UploadValidationError",
    "encode_pdf",
    "read_pdf_upload",
    "validate_pdf_upload",
]
