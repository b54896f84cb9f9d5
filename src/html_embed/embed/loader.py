from __future__ import annotations

import re
from pathlib import Path

from ..errors import ResourceNotFoundError

# Any URI scheme (http:, ftp:, file:, ...) or a protocol-relative reference
_EXTERNAL_RE = re.compile(r"^(?:[a-z][a-z0-9+.-]*:|//)", re.IGNORECASE)


def is_inline(src: str) -> bool:
    """Return True for references that are already data URIs."""

    return src.strip().lower().startswith("data:")


def is_external(src: str) -> bool:
    """Return True for references carrying a URI scheme other than data:."""

    return bool(_EXTERNAL_RE.match(src.strip())) and not is_inline(src)


def resolve_resource(base_dir: Path, relative_path: str, kind: str | None = None) -> Path:
    """Resolve ``relative_path`` under ``base_dir`` and check it exists.

    Root-relative references (``/app.js``) stay under ``base_dir``.
    Raises ResourceNotFoundError before any read is attempted.
    """

    path = base_dir / relative_path.strip().lstrip("/\\")
    if not path.is_file():
        raise ResourceNotFoundError(path, kind=kind)
    return path


def read_text_resource(
    base_dir: Path, relative_path: str, kind: str | None = None
) -> tuple[Path, str]:
    """Resolve a textual resource and return its path with its content.

    Bytes that are not valid UTF-8 decode to U+FFFD instead of failing.
    """

    path = resolve_resource(base_dir, relative_path, kind)
    return path, path.read_text(encoding="utf-8", errors="replace")


__all__ = [
    "is_external",
    "is_inline",
    "read_text_resource",
    "resolve_resource",
]
