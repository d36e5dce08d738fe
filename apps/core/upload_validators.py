"""
File Upload Validators

Validates uploaded documents with:
  1. Maximum file size enforcement
  2. Extension whitelist
  3. MIME type whitelist
  4. Magic-bytes verification

Usage:
    from apps.core.upload_validators import validate_upload

    validate_upload(request.FILES['document'])
"""

import logging
import mimetypes
import os

from django.conf import settings

from .exceptions import FileTooLarge, UnsupportedFormat

logger = logging.getLogger(__name__)

# ── Allow-list (images, PDF, Word) ──────────────────────────────────────────

ALLOWED_EXTENSIONS = frozenset({".jpeg", ".jpg", ".png", ".pdf", ".doc", ".docx"})

ALLOWED_MIME_TYPES = frozenset({
    "image/jpeg",
    "image/jpg",
    "image/png",
    "application/pdf",
    "application/msword",
    "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
})

# Magic bytes → expected MIME prefix mapping
_MAGIC_BYTES = {
    b"\x89PNG":       "image/png",
    b"\xff\xd8\xff":  "image/jp",
    b"%PDF":          "application/pdf",
    b"PK":            "application/vnd.openxmlformats",  # docx
    b"\xd0\xcf\x11":  "application/msword",              # legacy .doc
}


def max_upload_size_bytes():
    return getattr(settings, "MAX_UPLOAD_SIZE_MB", 10) * 1024 * 1024


def _check_magic_bytes(file_obj, content_type):
    """
    Read the first 8 bytes and verify them against known signatures.
    Every allowed format has a signature, so unknown content is rejected.
    """
    file_obj.seek(0)
    header = file_obj.read(8)
    file_obj.seek(0)

    if not header:
        return False

    for magic, expected_prefix in _MAGIC_BYTES.items():
        if header.startswith(magic):
            return content_type.startswith(expected_prefix)

    return False


def validate_upload(file_obj):
    """
    Central file-upload validator.

    Raises ``FileTooLarge`` on an oversized file and ``UnsupportedFormat``
    on a disallowed extension, MIME type, or magic-byte mismatch.
    """
    # ── 1. Size check ────────────────────────────────────────────────────
    size = getattr(file_obj, "size", None)
    limit = max_upload_size_bytes()
    if size is not None and size > limit:
        raise FileTooLarge(
            f"File too large. Maximum allowed size is {limit // (1024 * 1024)} MB.",
            field="document",
        )

    # ── 2. Extension check ───────────────────────────────────────────────
    name = getattr(file_obj, "name", "") or ""
    _, ext = os.path.splitext(name)
    ext = ext.lower()

    if ext not in ALLOWED_EXTENSIONS:
        raise UnsupportedFormat(field="document")

    # ── 3. MIME type check ───────────────────────────────────────────────
    content_type = getattr(file_obj, "content_type", None)
    if not content_type:
        content_type, _ = mimetypes.guess_type(name)
    content_type = (content_type or "").lower()

    if content_type not in ALLOWED_MIME_TYPES:
        raise UnsupportedFormat(field="document")

    # ── 4. Magic-byte verification ───────────────────────────────────────
    if not _check_magic_bytes(file_obj, content_type):
        logger.warning(
            "upload_magic_byte_mismatch file=%s content_type=%s",
            name,
            content_type,
        )
        raise UnsupportedFormat(
            "File content does not match its declared type.",
            field="document",
        )

    return content_type
