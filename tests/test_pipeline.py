from __future__ import annotations

import asyncio
from collections.abc import Callable
from pathlib import Path

import pytest

from html_embed.errors import (
    ExternalResourceNotSupportedError,
    OutputDirectoryError,
    OutputWriteError,
    SourceDirectoryError,
)
from html_embed.model.options import EmbedOptions
from html_embed.pipeline import (
    atomic_write_text,
    discover_html_files,
    embed_file,
    prepare_output_dir,
    run,
)


def _write(path: Path, text: str) -> Path:
    path.write_text(text, encoding="utf-8")
    return path


def test_discover_html_files_non_recursive(site: Path) -> None:
    _write(site / "b.html", "")
    _write(site / "A.HTML", "")
    _write(site / "notes.txt", "")
    _write(site / "page.htm", "")
    (site / "nested").mkdir()
    _write(site / "nested" / "deep.html", "")
    (site / "dir.html").mkdir()

    assert [p.name for p in discover_html_files(site)] == ["A.HTML", "b.html"]


def test_discover_missing_source(tmp_path: Path) -> None:
    with pytest.raises(SourceDirectoryError) as excinfo:
        discover_html_files(tmp_path / "nope")
    assert "Source directory not found" in str(excinfo.value)


def test_prepare_output_dir_creates_once(tmp_path: Path) -> None:
    out = tmp_path / "dist"
    prepare_output_dir(out)
    assert out.is_dir()
    # existing directory is fine
    prepare_output_dir(out)


def test_prepare_output_dir_is_not_recursive(tmp_path: Path) -> None:
    with pytest.raises(OutputDirectoryError):
        prepare_output_dir(tmp_path / "missing-parent" / "dist")


def test_atomic_write_text_replaces(tmp_path: Path) -> None:
    target = tmp_path / "a.html"
    target.write_text("old", encoding="utf-8")

    atomic_write_text(target, "new")

    assert target.read_text(encoding="utf-8") == "new"
    assert [p.name for p in tmp_path.iterdir()] == ["a.html"]


def test_atomic_write_text_cleans_up_on_failure(tmp_path: Path) -> None:
    target = tmp_path / "a.html"
    target.mkdir()

    with pytest.raises(OSError):
        atomic_write_text(target, "new")

    assert [p.name for p in tmp_path.iterdir()] == ["a.html"]


def test_embed_file_resolves_relative_to_html(site: Path) -> None:
    _write(site / "a.js", "X")
    page = _write(site / "index.html", '<html><body><script src="a.js"></script></body></html>')

    html, report = embed_file(page, EmbedOptions(source=site))

    assert html == "<html><body><script>X</script></body></html>"
    assert report.total_embedded == 1


def test_run_writes_every_file_and_completes_once(
    site: Path, tmp_path: Path, make_png: Callable[..., Path]
) -> None:
    _write(site / "a.js", "X")
    _write(site / "b.css", "Y")
    make_png(site / "d.png")
    names = [f"page{i}.html" for i in range(5)]
    for name in names:
        _write(
            site / name,
            '<link rel="stylesheet" href="b.css"><script src="a.js"></script><img src="d.png">',
        )
    out = tmp_path / "dist"
    events: list[str] = []

    result = asyncio.run(
        run(
            EmbedOptions(source=site, output=out, images=True),
            on_progress=lambda event, payload: events.append(event),
        )
    )

    assert result.completed
    assert sorted(p.name for p in result.written) == names
    assert sorted(p.name for p in out.iterdir()) == names
    assert events.count("file:written") == 5
    assert events.count("run:done") == 1
    assert events.index("run:done") > max(i for i, e in enumerate(events) if e == "file:written")
    assert events[0] == "run:start"

    text = (out / "page0.html").read_text(encoding="utf-8")
    assert "<style>Y</style>" in text
    assert "<script>X</script>" in text
    assert 'src="data:image/png;base64,' in text


def test_run_empty_source_creates_nothing(site: Path, tmp_path: Path) -> None:
    _write(site / "readme.md", "# hi")
    out = tmp_path / "dist"
    events: list[str] = []

    result = asyncio.run(
        run(EmbedOptions(source=site, output=out), on_progress=lambda e, p: events.append(e))
    )

    assert not result.completed
    assert result.files == []
    assert events == ["run:empty"]
    assert not out.exists()


def test_run_missing_resource_is_not_fatal(site: Path, tmp_path: Path) -> None:
    html = '<script src="gone.js"></script>'
    _write(site / "index.html", html)
    out = tmp_path / "dist"

    result = asyncio.run(run(EmbedOptions(source=site, output=out)))

    assert result.completed
    assert (out / "index.html").read_text(encoding="utf-8") == html


def test_run_external_with_flag_is_fatal(site: Path, tmp_path: Path) -> None:
    _write(site / "index.html", '<script src="https://cdn.example.com/x.js"></script>')

    with pytest.raises(ExternalResourceNotSupportedError):
        asyncio.run(run(EmbedOptions(source=site, output=tmp_path / "dist", external=True)))


def test_run_write_failure_is_fatal(site: Path, tmp_path: Path) -> None:
    _write(site / "index.html", "<p>x</p>")
    out = tmp_path / "dist"
    (out / "index.html").mkdir(parents=True)

    with pytest.raises(OutputWriteError) as excinfo:
        asyncio.run(run(EmbedOptions(source=site, output=out)))
    assert "Failed to write file" in str(excinfo.value)
    assert [p.name for p in out.iterdir()] == ["index.html"]


def test_run_swallows_progress_callback_errors(site: Path, tmp_path: Path) -> None:
    _write(site / "index.html", "<p>x</p>")

    def _boom(event: str, payload: dict[str, int | str]) -> None:
        raise RuntimeError("ui broke")

    result = asyncio.run(run(EmbedOptions(source=site, output=tmp_path / "dist"), on_progress=_boom))

    assert result.completed
