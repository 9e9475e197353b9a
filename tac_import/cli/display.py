"""Rich display helpers for CLI output."""

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from tac_import.importer.diagnostics import CharacterDump
from tac_import.importer.results import ImportReport


# Shared console instance
console = Console()


def display_error(message: str) -> None:
    """Display error message.

    Args:
        message: Error message.
    """
    console.print(f"[bold red]Error:[/bold red] {escape(message)}")


def display_success(message: str) -> None:
    """Display success message.

    Args:
        message: Success message.
    """
    console.print(f"[bold green]{escape(message)}[/bold green]")


def display_info(message: str) -> None:
    """Display info message.

    Args:
        message: Info message.
    """
    console.print(f"[dim]{escape(message)}[/dim]")


def display_import_report(report: ImportReport) -> None:
    """Display per-kind counts and a table of failed items."""
    table = Table(title="TAC Import", box=box.ROUNDED)
    table.add_column("Kind", style="white")
    table.add_column("Imported", justify="right", style="green")
    table.add_column("Failed", justify="right", style="red")

    for label, tally in (
        ("Scenes", report.scenes),
        ("Monsters", report.monsters),
        ("Notes", report.notes),
    ):
        table.add_row(label, str(tally.success), str(tally.failure))

    console.print(table)

    if not report.failures:
        return

    failures = Table(title="Failures", box=box.ROUNDED)
    failures.add_column("Kind", style="cyan")
    failures.add_column("Name", style="yellow")
    failures.add_column("Detail", style="white", max_width=60)
    for failure in report.failures:
        failures.add_row(failure.kind.value, escape(failure.name), escape(failure.detail))
    console.print(failures)


def display_page_list(pages: list[dict]) -> None:
    """Display pages with their object counts.

    Args:
        pages: List of dicts with id, name, width, height, graphics, paths.
    """
    if not pages:
        console.print("[dim]No pages found.[/dim]")
        return

    table = Table(title="Pages")
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Size", style="green")
    table.add_column("Graphics", justify="right")
    table.add_column("Paths", justify="right")

    for p in pages:
        table.add_row(
            str(p.get("id", "")),
            escape(p.get("name", "")),
            f"{p.get('width', '?')} x {p.get('height', '?')}",
            str(p.get("graphics", 0)),
            str(p.get("paths", 0)),
        )

    console.print(table)


def display_character_dumps(dumps: list[CharacterDump]) -> None:
    """Display every dumped character with its raw attribute values."""
    if not dumps:
        console.print("[dim]No characters found.[/dim]")
        return

    for dump in dumps:
        table = Table(title=escape(dump.name), box=box.ROUNDED)
        table.add_column("Attribute", style="white")
        table.add_column("Current", style="cyan")
        table.add_column("Max", style="yellow")
        for attribute in dump.attributes:
            table.add_row(escape(attribute.name), escape(repr(attribute.current)), escape(repr(attribute.max)))
        console.print(table)
        if dump.error:
            display_error(f"{dump.name}: {dump.error}")
