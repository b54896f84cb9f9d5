"""Run configuration for html-embed.

Options are built from CLI flags only; there is no config file or
environment lookup.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path


@dataclass
class EmbedOptions:
    """Configuration for a single embedding run.

    Defaults match the CLI defaults, so ``EmbedOptions()`` reads ``src/``
    and writes ``dist/`` with only scripts and stylesheets embedded.
    """

    # Directory scanned (non-recursively) for .html files
    source: Path = Path("src")

    # Directory receiving the embedded copies; created if missing
    output: Path = Path("dist")

    # Inline <img src> as data URIs
    images: bool = False

    # Fetch http(s) resources; always fails when a remote reference is hit
    external: bool = False

    # Collapse whitespace runs in text nodes while parsing
    minify: bool = False

    # Emit per-file and per-resource diagnostics
    verbose: bool = False

    @classmethod
    def from_cli(
        cls,
        *,
        source: Path,
        output: Path,
        images: bool = False,
        external: bool = False,
        minify: bool = False,
        all_features: bool = False,
        verbose: bool = False,
    ) -> EmbedOptions:
        """Create options from CLI arguments.

        ``all_features`` is the ``--all`` shorthand and turns on images,
        external and minify regardless of their individual values.
        """

        if all_features:
            images = external = minify = True

        return cls(
            source=source,
            output=output,
            images=images,
            external=external,
            minify=minify,
            verbose=verbose,
        )


__all__ = ["EmbedOptions"]
