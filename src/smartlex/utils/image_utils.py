# -*- coding: utf-8 -*-
"""Image helpers for attaching screenshots to an analysis request."""

from __future__ import annotations

import base64
from pathlib import Path


PNG_SIGNATURE = b"\x89PNG\r\n\x1a\n"
JPEG_SIGNATURE = b"\xff\xd8\xff"


def is_png_bytes(data: bytes) -> bool:
    """Return True if bytes look like a PNG file."""
    return data.startswith(PNG_SIGNATURE)


def guess_mime(data: bytes) -> str:
    if is_png_bytes(data):
        return "image/png"
    if data.startswith(JPEG_SIGNATURE):
        return "image/jpeg"
    if data[:4] == b"RIFF" and data[8:12] == b"WEBP":
        return "image/webp"
    return "application/octet-stream"


def file_to_data_url(path: str | Path) -> str:
    """Read an image file into a ``data:<mime>;base64,...`` URL."""
    raw = Path(path).read_bytes()
    return f"data:{guess_mime(raw)};base64,{base64.b64encode(raw).decode('ascii')}"


def split_image_data(image_data: str) -> tuple[str, str]:
    """Return ``(mime, base64)`` for a data URL or bare base64 text."""
    if image_data.startswith("data:") and "," in image_data:
        header, b64 = image_data.split(",", 1)
        mime = header[len("data:"):].split(";", 1)[0] or "application/octet-stream"
        return mime, b64
    head = base64.b64decode(image_data[:32] + "=" * (-len(image_data[:32]) % 4), validate=False)
    return guess_mime(head), image_data
