"""Directory-level embedding pipeline.

Every discovered file becomes its own asyncio task; blocking file I/O runs
through ``asyncio.to_thread`` so reads and writes for different files can be
in flight together. ``asyncio.gather`` is the single point where the run
waits for all files. The first fatal error cancels the remaining tasks and
propagates to the caller.

Progress events emitted through ``on_progress(event, payload)``:
- ``run:empty``: no .html files in the source directory
- ``run:start``: files discovered, payload carries ``total``
- ``file:start`` / ``file:written``: per-file lifecycle
- ``run:done``: the completion tracker saw the last write
"""

from __future__ import annotations

import asyncio
import logging
import os
from collections.abc import Callable
from contextlib import suppress
from dataclasses import dataclass, field
from pathlib import Path
from tempfile import NamedTemporaryFile

from .embed.document import parse_document, serialize_document
from .embed.tags import EmbedReport, embed_resources
from .errors import (
    DocumentParseError,
    InputReadError,
    OutputDirectoryError,
    OutputWriteError,
    SourceDirectoryError,
)
from .model.options import EmbedOptions
from .tracker import CompletionTracker

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[str, dict[str, int | str]], None] | None


@dataclass
class RunResult:
    source: Path
    output: Path
    files: list[Path] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    completed: bool = False


def _safe_emit(on_progress: ProgressCallback, event: str, payload: dict[str, int | str]) -> None:
    if on_progress is None:
        return
    with suppress(Exception):
        on_progress(event, payload)


def discover_html_files(source: Path) -> list[Path]:
    """List ``.html`` files directly inside ``source`` (no recursion)."""

    if not source.is_dir():
        raise SourceDirectoryError(source)
    return sorted(
        entry
        for entry in source.iterdir()
        if entry.is_file() and entry.suffix.lower() == ".html"
    )


def prepare_output_dir(output: Path) -> None:
    """Create the output directory if missing; parents must already exist."""

    if output.is_dir():
        return
    try:
        output.mkdir()
    except OSError as exc:
        raise OutputDirectoryError(output, exc) from exc


def atomic_write_text(path: Path, data: str, *, encoding: str = "utf-8") -> None:
    """Write text to a temp file beside ``path`` then replace ``path`` with it.

    The output directory must already exist. On any failure the temp file is
    removed before the error propagates.
    """

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            "w", encoding=encoding, dir=str(path.parent), prefix=f".{path.name}.", delete=False
        ) as tmp:
            tmp_path = Path(tmp.name)
            tmp.write(data)
            tmp.flush()
            os.fsync(tmp.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if tmp_path is not None:
            tmp_path.unlink(missing_ok=True)
        raise


def embed_file(path: Path, options: EmbedOptions) -> tuple[str, EmbedReport]:
    """Read, parse, embed and serialize one HTML file.

    Resources resolve relative to the HTML file's directory.
    """

    try:
        html = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise InputReadError(path, exc) from exc

    logger.debug("Parsing file...")
    try:
        soup = parse_document(html, normalize_whitespace=options.minify)
    except Exception as exc:
        raise DocumentParseError(path, exc) from exc

    report = embed_resources(soup, path.parent, options)
    return serialize_document(soup), report


async def process_file(
    path: Path,
    options: EmbedOptions,
    tracker: CompletionTracker,
    on_progress: ProgressCallback = None,
) -> Path:
    """Embed one file and write it under the output directory."""

    logger.debug("Opening file %s", path)
    _safe_emit(on_progress, "file:start", {"path": str(path)})

    html, report = await asyncio.to_thread(embed_file, path, options)
    logger.debug(
        "Embedded %d resource(s) in %s, %d missing",
        report.total_embedded,
        path.name,
        report.total_missing,
    )

    out_path = options.output / path.name
    logger.debug("Writing embedded file %s", out_path)
    try:
        await asyncio.to_thread(atomic_write_text, out_path, html)
    except OSError as exc:
        raise OutputWriteError(out_path, exc) from exc
    logger.debug("Success!")

    _safe_emit(on_progress, "file:written", {"path": str(out_path)})
    tracker.mark_done()
    return out_path


async def run(options: EmbedOptions, on_progress: ProgressCallback = None) -> RunResult:
    """Embed every .html file in ``options.source`` into ``options.output``."""

    result = RunResult(source=options.source, output=options.output)
    result.files = discover_html_files(options.source)

    if not result.files:
        _safe_emit(on_progress, "run:empty", {"source": str(options.source)})
        return result

    prepare_output_dir(options.output)

    def _on_complete() -> None:
        result.completed = True
        _safe_emit(on_progress, "run:done", {"total": len(result.files)})

    tracker = CompletionTracker(len(result.files), on_complete=_on_complete)
    _safe_emit(
        on_progress,
        "run:start",
        {"total": len(result.files), "source": str(options.source)},
    )

    tasks = [
        asyncio.create_task(process_file(path, options, tracker, on_progress))
        for path in result.files
    ]
    try:
        result.written = list(await asyncio.gather(*tasks))
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise

    return result


__all__ = [
    "RunResult",
    "atomic_write_text",
    "discover_html_files",
    "embed_file",
    "prepare_output_dir",
    "process_file",
    "run",
]
