from __future__ import annotations

import base64
import mimetypes
from pathlib import Path


def guess_image_mime(path: Path) -> str:
    """Infer an image MIME type from the file extension.

    Falls back to ``image/<ext>`` for extensions mimetypes does not know
    (e.g. pnm, exif).
    """

    mime, _ = mimetypes.guess_type(path.name)
    if mime:
        return mime
    ext = path.suffix.lstrip(".").lower() or "octet-stream"
    return f"image/{ext}"


def encode_image(path: Path) -> str:
    """Read an image file and return it as a base64 data URI."""

    payload = base64.b64encode(path.read_bytes()).decode("ascii")
    return f"data:{guess_image_mime(path)};base64,{payload}"


__all__ = ["encode_image", "guess_image_mime"]
