"""CLI interface for html-embed."""

import asyncio
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console
from rich.markup import escape

from html_embed import __version__
from html_embed.errors import EmbedError
from html_embed.logging_setup import configure_logging
from html_embed.model.options import EmbedOptions
from html_embed.pipeline import run
from html_embed.ui.progress import ProgressReporter

app = typer.Typer(
    name="html-embed",
    help="Inline scripts, stylesheets and images into self-contained HTML files.",
    add_completion=False,
)


def version_callback(value: bool) -> None:
    """Version callback for --version flag."""
    if value:
        typer.echo(f"html-embed version {__version__}")
        raise typer.Exit()


@app.command()
def embed(
    source: Annotated[
        Path,
        typer.Option("--source", "-s", help="Specify source directory"),
    ] = Path("src"),
    output: Annotated[
        Path,
        typer.Option("--output", "-o", help="Specify output directory"),
    ] = Path("dist"),
    images: Annotated[
        bool,
        typer.Option("--images", "-i", help="Convert images to base64 and embed them"),
    ] = False,
    external: Annotated[
        bool,
        typer.Option("--external", "-e", help="Fetch external resources and embed them"),
    ] = False,
    minify: Annotated[
        bool,
        typer.Option("--minify", "-m", help="Minify resources and html"),
    ] = False,
    all_features: Annotated[
        bool,
        typer.Option("--all", "-a", help="Shorthand for -iem"),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Output all operations"),
    ] = False,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit",
        ),
    ] = None,
) -> None:
    """
    Embed the local resources of every .html file in a directory.

    Each file in the source directory is parsed, its <script src> and
    <link rel href> references are replaced with inline content, and the
    result is written under the output directory with the same name.

    Examples:

        html-embed --source html/ --output compiled/ -i

        html-embed -a

        html-embed -s ./ -im
    """
    options = EmbedOptions.from_cli(
        source=source,
        output=output,
        images=images,
        external=external,
        minify=minify,
        all_features=all_features,
        verbose=verbose,
    )

    console = Console(soft_wrap=True, highlight=False)
    configure_logging(verbose=options.verbose, console=console)

    source_label = escape(str(options.source.resolve()))

    try:
        with ProgressReporter(console=console) as pr:

            def _emit(event: str, payload: dict[str, int | str]) -> None:
                if event == "run:start":
                    total = int(payload["total"])
                    plural = "s" if total > 1 else ""
                    console.print(
                        f"Processing {total} html file{plural} in directory "
                        f"[blue]{source_label}[/blue]"
                    )
                elif event == "run:empty":
                    console.print(
                        "[yellow]Did not find any .html files in directory "
                        f"[blue]{source_label}[/blue][/yellow]"
                    )
                pr.emit(event, payload)

            result = asyncio.run(run(options, on_progress=_emit))
    except EmbedError as exc:
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        raise typer.Exit(1) from exc

    if result.completed:
        console.print("[green]Done :)[/green]")


if __name__ == "__main__":  # pragma: no cover - executed only via `python -m`
    app()
