"""Acceptance checks for uploaded PDF files."""

from dataclasses import dataclass
from typing import Optional, Protocol, Union, runtime_checkable

from ...infrastructure.storage import PDF_MEDIA_TYPE

MIN_SIZE_BYTES = 1024
MAX_SIZE_BYTES = 50 * 1024 * 1024
PDF_SIGNATURE = "%PDF"
SIGNATURE_READ_LENGTH = 5


@runtime_checkable
class AsyncReadable(Protocol):
    """Anything with an awaitable ``read(size)``, e.g. FastAPI's ``UploadFile``.

    Sources that also provide an awaitable ``seek(offset)`` are read in place;
    others are read once into memory by the upload pipeline.
    """

    async def read(self, size: int = -1) -> bytes: ...


@dataclass(frozen=True)
class ValidationVerdict:
    """Outcome of validating an upload. ``reason`` is set when invalid."""

    valid: bool
    reason: Optional[str] = None

    @classmethod
    def accept(cls) -> "ValidationVerdict":
        return cls(valid=True)

    @classmethod
    def reject(cls, reason: str) -> "ValidationVerdict":
        return cls(valid=False, reason=reason)


async def _read_signature(content: Union[bytes, AsyncReadable]) -> bytes:
    if isinstance(content, (bytes, bytearray, memoryview)):
        return bytes(content[:SIGNATURE_READ_LENGTH])

    head = await content.read(SIGNATURE_READ_LENGTH)
    seek = getattr(content, "seek", None)
    if seek is not None:
        await seek(0)
    return head


async def validate_pdf(
    content: Union[bytes, AsyncReadable],
    content_type: str,
    size: int,
    min_size: int = MIN_SIZE_BYTES,
    max_size: int = MAX_SIZE_BYTES,
) -> ValidationVerdict:
    """Decide whether an upload is an acceptable PDF.

    Rules are evaluated in order and the first failure wins:

    1. ``content_type`` must be exactly ``application/pdf``.
    2. ``size`` must be greater than ``min_size``.
    3. ``size`` must not exceed ``max_size``.
    4. The first five bytes must start with ``%PDF``.

    Only the declared type and size are trusted for rules 1-3; the content
    is only consulted for the signature. Sources with an async ``seek`` are
    rewound after the signature is read; a source without one loses the
    signature bytes, so callers buffer such sources before validating.

    Args:
        content: Raw bytes or an async readable source
        content_type: Declared media type
        size: Declared size in bytes
        min_size: Exclusive lower size bound
        max_size: Inclusive upper size bound

    Returns:
        The verdict, with a human-readable reason when invalid
    """
    if content_type != PDF_MEDIA_TYPE:
        return ValidationVerdict.reject("File must be a PDF document")

    if size <= min_size:
        return ValidationVerdict.reject("File is too small to be a valid PDF")

    if size > max_size:
        return ValidationVerdict.reject(f"File size exceeds {max_size // (1024 * 1024)}MB limit")

    try:
        head = await _read_signature(content)
    except Exception:
        return ValidationVerdict.reject("Failed to read file")

    if not head.decode("latin-1").startswith(PDF_SIGNATURE):
        return ValidationVerdict.reject("File does not appear to be a valid PDF")

    return ValidationVerdict.accept()
