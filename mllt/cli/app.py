"""Main CLI application."""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Optional

import typer
from typing_extensions import Annotated

from ..core.errors import MlltError
from ..core.models import DEFAULT_CONFIG_FILE, Config
from ..scaffold import instantiate_site
from ..site import Site
from .formatting import format_duration

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="mllt",
    help="A tiny static site generator designed for self-hosting linktree-like pages.",
    no_args_is_help=True,
)


def configure_logging(verbose: int, quiet: bool) -> None:
    """Set the root log level from the -v / -q flags."""
    if quiet:
        level = logging.ERROR
    elif verbose >= 1:
        level = logging.DEBUG
    else:
        level = logging.INFO
    logging.basicConfig(level=level, format="[%(levelname)s] %(message)s")


@app.callback()
def cli(
    verbose: Annotated[
        int,
        typer.Option(
            "--verbose",
            "-v",
            count=True,
            help="Sets the verbosity level.",
        ),
    ] = 0,
    quiet: Annotated[
        bool,
        typer.Option(
            "--quiet",
            "-q",
            help="Suppress all messages besides errors.",
        ),
    ] = False,
) -> None:
    """Render linktree-like sites from Jinja2 templates."""
    if verbose and quiet:
        raise typer.BadParameter("--verbose and --quiet are mutually exclusive")
    configure_logging(verbose, quiet)
    logger.debug("Strike the Earth!")


def _build(
    config_path: Path,
    strict: Optional[bool],
    output: Optional[Path],
    content: Optional[Path],
    theme: Optional[Path],
    assets: Optional[Path],
    workers: Optional[int],
) -> None:
    started = time.perf_counter()

    # CLI flags override values from the config file and environment.
    config = Config.from_file(config_path).merge_with(
        strict=strict,
        out_dir=output,
        content=content,
        theme=theme,
        assets=assets,
        workers=workers,
    )
    logger.debug(f"Final Config: {config!r}")

    logger.info(f'Building site to "{config.site.out_dir}"')
    Site(config).build()
    logger.info(f"Done! Took {format_duration(time.perf_counter() - started)}")


@app.command("build")
def build(
    strict: Annotated[
        Optional[bool],
        typer.Option(
            "--strict/--no-strict",
            help="Treat missing template values as errors instead of empty strings.",
            show_default=False,
        ),
    ] = None,
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Overrides the output folder.", metavar="DIR"),
    ] = None,
    content: Annotated[
        Optional[Path],
        typer.Option("--content", help="Overrides the content folder.", metavar="DIR"),
    ] = None,
    theme: Annotated[
        Optional[Path],
        typer.Option("--theme", help="Overrides the theme folder.", metavar="DIR"),
    ] = None,
    assets: Annotated[
        Optional[Path],
        typer.Option("--assets", help="Overrides the assets folder.", metavar="DIR"),
    ] = None,
    workers: Annotated[
        Optional[int],
        typer.Option("--workers", min=1, help="Threads used to render and copy files."),
    ] = None,
    config: Annotated[
        Path,
        typer.Option("--config", "-c", help="Path to the config file.", metavar="FILE"),
    ] = DEFAULT_CONFIG_FILE,
) -> None:
    """Render the site to static HTML."""
    try:
        _build(config, strict, output, content, theme, assets, workers)
    except MlltError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc


@app.command("new")
def new(
    base_path: Annotated[
        Path,
        typer.Argument(help="Path to the new project root.", metavar="PATH"),
    ],
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Create the project even if the destination is non-empty, overwriting files.",
        ),
    ] = False,
) -> None:
    """Create a new mllt site at the given path."""
    try:
        instantiate_site(base_path, clobber=force)
    except MlltError as exc:
        logger.error(str(exc))
        raise typer.Exit(code=1) from exc


# Short aliases: `mllt b`, `mllt n`
app.command("b", hidden=True)(build)
app.command("n", hidden=True)(new)


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
