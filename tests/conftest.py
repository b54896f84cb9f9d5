import logging
import sys
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
from PIL import Image

PROJECT_ROOT = Path(__file__).resolve().parents[1]
SRC_PATH = PROJECT_ROOT / "src"
if str(SRC_PATH) not in sys.path:
    sys.path.insert(0, str(SRC_PATH))


@pytest.fixture
def isolate_logging():
    """Isolate root logging configuration between tests.

    Rich handlers bound to a CliRunner stream must not leak into later tests
    once that stream is closed.
    """
    original_handlers = logging.root.handlers[:]
    original_level = logging.root.level

    logging.root.handlers.clear()
    logging.root.addHandler(logging.NullHandler())

    yield

    logging.root.handlers.clear()
    logging.root.handlers.extend(original_handlers)
    logging.root.setLevel(original_level)


@pytest.fixture(autouse=True)
def _reset_html_embed_logger() -> Iterator[None]:
    """Undo configure_logging() so caplog sees html_embed records."""
    yield
    logger = logging.getLogger("html_embed")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


@pytest.fixture
def make_png() -> Callable[..., Path]:
    """Write a small valid PNG at the given path and return it."""

    def _make(path: Path, size: tuple[int, int] = (2, 2)) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGB", size, color=(255, 0, 0)).save(path, format="PNG")
        return path

    return _make


@pytest.fixture
def site(tmp_path: Path) -> Path:
    """An empty source directory under tmp_path."""
    src = tmp_path / "src"
    src.mkdir()
    return src
