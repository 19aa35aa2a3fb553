"""Upload constraints: content type allow-list and size ceiling."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass

from config import MAX_UPLOAD_BYTES

_SIZE_UNITS = ("Bytes", "KB", "MB", "GB")

# Rejection reasons carried on UploadValidation.reason
NO_FILE = "no_file"
INVALID_TYPE = "invalid_type"
TOO_LARGE = "too_large"


@dataclass(frozen=True)
class UploadValidation:
    """Outcome of validate_upload().

    message is safe to show to users; reason is one of NO_FILE,
    INVALID_TYPE or TOO_LARGE when the upload is rejected, None otherwise.
    """

    success: bool
    message: str
    reason: str | None = None

    def __bool__(self) -> bool:
        return self.success


def format_file_size(num_bytes: int) -> str:
    """Format a byte count for humans, e.g. 1536 -> "1.5 KB"."""
    if num_bytes <= 0:
        return "0 Bytes"
    exponent = 0
    while exponent < len(_SIZE_UNITS) - 1 and num_bytes >= 1024 ** (exponent + 1):
        exponent += 1
    value = f"{num_bytes / 1024 ** exponent:.2f}".rstrip("0").rstrip(".")
    return f"{value} {_SIZE_UNITS[exponent]}"


def guess_content_type(filename: str | None) -> str | None:
    if not filename:
        return None
    content_type, _ = mimetypes.guess_type(filename)
    return content_type


def validate_upload(
    filename: str | None,
    content_type: str | None,
    size: int | None,
    max_size: int = MAX_UPLOAD_BYTES,
) -> UploadValidation:
    """Check an uploaded file against the type allow-list and size ceiling.

    Args:
        filename: Original filename; used to guess the type when
                  content_type is missing.
        content_type: MIME type reported by the client, if any.
        size: Size in bytes, or None when no file was provided.
        max_size: Maximum accepted size in bytes.

    Returns:
        UploadValidation with success flag and a user-facing message.
    """
    if not filename and not size:
        return UploadValidation(False, "No file provided", NO_FILE)

    content_type = content_type or guess_content_type(filename)
    if not content_type or not content_type.startswith("image/"):
        return UploadValidation(
            False, "Invalid file type. Please upload an image file.", INVALID_TYPE
        )

    if size is not None and size > max_size:
        max_size_mb = round(max_size / (1024 * 1024))
        return UploadValidation(
            False, f"File is too large. Maximum size is {max_size_mb}MB.", TOO_LARGE
        )

    return UploadValidation(True, "File is valid")
