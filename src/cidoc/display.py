"""Rich display utilities for the cidoc CLI."""

from rich.console import Console
from rich.syntax import Syntax
from rich.table import Table

from cidoc.document.models import SectionIdentifier
from cidoc.generator.service import GenerationResult

console = Console()


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[bold green]✓[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    console.print(f"[bold red]✗[/] {message}")


def print_warning(message: str) -> None:
    """Print a warning message."""
    console.print(f"[bold yellow]⚠[/] {message}")


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[bold blue]ℹ[/] {message}")


def print_diff(diff: str) -> None:
    """Print a unified diff with syntax highlighting."""
    console.print(Syntax(diff, "diff", theme="ansi_dark", word_wrap=True))


def print_generation_result(result: GenerationResult, dry_run: bool = False) -> None:
    """Summarize a generation run."""
    for warning in result.warnings:
        print_warning(warning)

    if dry_run:
        if result.changed:
            print_info(f"Changes for [cyan]{result.destination}[/] (dry run, nothing written):")
            print_diff(result.diff)
        else:
            print_success(f"{result.destination} is up to date")
        return

    if not result.changed:
        print_success(f"{result.destination} is up to date")
        return

    details = []
    if result.inserted:
        details.append("added " + ", ".join(s.value for s in result.inserted))
    if result.removed:
        details.append("removed " + ", ".join(s.value for s in result.removed))
    suffix = f" [dim]({'; '.join(details)})[/]" if details else ""
    print_success(f"Updated [cyan]{result.destination}[/]{suffix}")


def print_sections(sections: list[SectionIdentifier], supported: set[SectionIdentifier]) -> None:
    """Print section identifiers in canonical order."""
    table = Table(title="Sections")
    table.add_column("Section", style="cyan")
    table.add_column("Start marker")
    table.add_column("Generated")

    for section in sections:
        generated = "[green]yes[/]" if section in supported else "[dim]no[/]"
        table.add_row(section.value, f"<!-- {section.value}:start -->", generated)

    console.print(table)
