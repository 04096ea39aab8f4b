"""cidoc CLI - Main entry point.

Commands:
- generate: Generate or update the documentation of a CI manifest
- sections: List section identifiers
"""

import logging
from pathlib import Path
from typing import Annotated, Optional

import typer
from rich.logging import RichHandler

from cidoc import __version__
from cidoc.commands import generate_command, sections_command
from cidoc.display import console, print_error
from cidoc.document.models import parse_section_identifier
from cidoc.exceptions import CidocError
from cidoc.markdown.formatter import LinkFormat

app = typer.Typer(
    help="cidoc - Generate README documentation from CI/CD manifests.",
    no_args_is_help=True,
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"cidoc {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route log records through rich; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool,
        typer.Option(
            "--version",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = False,
) -> None:
    """cidoc - Generate README documentation from CI/CD manifests."""
    pass


@app.command()
def generate(
    source: Annotated[Path, typer.Argument(help="Path to action.yml or a workflow file")],
    output: Annotated[
        Optional[Path],
        typer.Option("--output", "-o", help="Destination document (default: next to the manifest)"),
    ] = None,
    dry_run: Annotated[
        bool, typer.Option("--dry-run", help="Show the changes without writing them")
    ] = False,
    include_section: Annotated[
        Optional[list[str]],
        typer.Option("--include-section", "-i", help="Only generate this section (repeatable)"),
    ] = None,
    exclude_section: Annotated[
        Optional[list[str]],
        typer.Option("--exclude-section", "-e", help="Skip this section (repeatable)"),
    ] = None,
    link_format: Annotated[
        Optional[LinkFormat],
        typer.Option("--link-format", help="How bare URLs are rewritten"),
    ] = None,
    ref: Annotated[
        Optional[str],
        typer.Option("--ref", help="Tag or branch pinned in usage examples, e.g. v1"),
    ] = None,
    sha: Annotated[
        Optional[str],
        typer.Option("--sha", help="Commit sha pinned in usage examples"),
    ] = None,
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
) -> None:
    """Generate or update documentation for a manifest.

    Only the regions between section markers are rewritten; everything
    else in the destination document is kept as is.

    Examples:
        cidoc generate action.yml
        cidoc generate .github/workflows/release.yml --dry-run
        cidoc generate action.yml -o docs/README.md --exclude-section usage
        cidoc generate action.yml --ref v1.2.0
    """
    configure_logging(verbose)
    try:
        generate_command(
            source,
            output=output,
            dry_run=dry_run,
            include=[parse_section_identifier(s) for s in include_section or []],
            exclude=[parse_section_identifier(s) for s in exclude_section or []],
            link_format=link_format,
            ref=ref,
            sha=sha,
        )
    except CidocError as e:
        print_error(e.message)
        raise typer.Exit(1) from e


@app.command()
def sections() -> None:
    """List section identifiers in canonical order."""
    sections_command()


if __name__ == "__main__":
    app()
