from __future__ import annotations

import logging
import re
from pathlib import Path

from ..errors import ResourceNotFoundError
from .images import encode_image
from .loader import is_external, is_inline, resolve_resource

logger = logging.getLogger(__name__)

IMAGE_EXTENSIONS = (
    "jpg",
    "gif",
    "png",
    "jpeg",
    "exif",
    "bmp",
    "tiff",
    "ppm",
    "pgm",
    "pbm",
    "pnm",
    "svg",
)

_CSS_URL_RE = re.compile(
    r"url\((?:\"|')?"  # opening paren and optional quote
    r"(?P<path>.*?\.(?:" + "|".join(IMAGE_EXTENSIONS) + r"))"
    r"(?:\"|')?\)",
    re.IGNORECASE,
)


def rewrite_css_urls(css_text: str, base_dir: Path) -> str:
    """Replace ``url(...)`` image references with base64 data URIs.

    - Paths resolve against ``base_dir`` (the stylesheet's own directory)
    - Leave data:, other URI schemes and protocol-relative references unchanged
    - Leave references to missing files unchanged, logging a warning
    """

    def _repl(m: re.Match[str]) -> str:
        path = m.group("path")
        if is_external(path) or is_inline(path):
            return m.group(0)
        try:
            image_path = resolve_resource(base_dir, path, kind="css image")
        except ResourceNotFoundError as exc:
            logger.warning("%s", exc)
            return m.group(0)
        logger.debug("Fetching image for css resource %s", image_path)
        return f"url({encode_image(image_path)})"

    return _CSS_URL_RE.sub(_repl, css_text)


__all__ = ["IMAGE_EXTENSIONS", "rewrite_css_urls"]
