"""Image helpers: MIME sniffing and data URL conversion."""

from __future__ import annotations

import base64
import binascii
from typing import Tuple

DEFAULT_IMAGE_MIME = "image/jpeg"

PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE = b"\xff\xd8\xff"
GIF_SIGNATURES = (b"GIF87a", b"GIF89a")


def detect_mime_type(data: bytes) -> str:
    """
    Infer an image MIME type from its leading bytes.

    PNG, JPEG, GIF and WEBP are recognized. Anything else is reported as JPEG.
    """
    if data.startswith(PNG_SIGNATURE):
        return "image/png"
    if data.startswith(JPEG_SIGNATURE):
        return "image/jpeg"
    if data[:6] in GIF_SIGNATURES:
        return "image/gif"
    if len(data) >= 12 and data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return DEFAULT_IMAGE_MIME


def to_data_url(data: bytes, mime_type: str = "") -> str:
    """Encode image bytes as a ``data:`` URI."""
    mime_type = mime_type or detect_mime_type(data)
    encoded = base64.b64encode(data).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"


def from_data_url(data_url: str) -> Tuple[bytes, str]:
    """
    Decode a base64 ``data:`` URI into ``(bytes, mime_type)``.

    Raises ValueError if the URI is not a base64 data URL.
    """
    if not data_url.startswith("data:") or "," not in data_url:
        raise ValueError("Not a data URL")

    header, payload = data_url[5:].split(",", 1)
    if not header.endswith(";base64"):
        raise ValueError("Only base64 data URLs are supported")

    mime_type = header[: -len(";base64")] or DEFAULT_IMAGE_MIME
    try:
        return base64.b64decode(payload, validate=True), mime_type
    except binascii.Error as e:
        raise ValueError(f"Invalid base64 payload: {e}") from e
