"""Main CLI application for TAC imports."""

import asyncio
import json
import logging
from pathlib import Path
from typing import Any

import typer
from rich.logging import RichHandler

from tac_import.chat.commands import CommandHandler
from tac_import.chat.transport import ConsoleTransport
from tac_import.cli.commands import campaign, page
from tac_import.cli.context import open_repository
from tac_import.cli.display import (
    console,
    display_character_dumps,
    display_error,
    display_import_report,
    display_info,
)
from tac_import.config import settings
from tac_import.importer.batch_importer import BatchImporter
from tac_import.importer.diagnostics import dump_all_characters
from tac_import.importer.exceptions import PayloadError
from tac_import.schemas.import_batch import ImportBatch

# Create main app
app = typer.Typer(
    name="tac",
    help="Import TAC adventure exports into a campaign's world model",
    add_completion=True,
)

# Add sub-commands
app.add_typer(campaign.app, name="campaign")
app.add_typer(page.app, name="page")


def _load_payload(file_path: Path) -> Any:
    """Read a JSON or YAML batch file."""
    suffix = file_path.suffix.lower()
    with open(file_path) as f:
        if suffix in (".yaml", ".yml"):
            import yaml

            return yaml.safe_load(f)
        if suffix == ".json":
            return json.load(f)
    raise PayloadError(f"Unsupported file format: {suffix}. Use .json, .yaml or .yml")


@app.command()
def chat(
    line: str = typer.Argument(..., help='Chat line, e.g. "!tac --import {...}"'),
    campaign_name: str = typer.Option(
        settings.default_campaign, "--campaign", "-c", help="Campaign name"
    ),
) -> None:
    """Feed one chat line through the command interface."""
    with open_repository(campaign_name) as repository:
        handler = CommandHandler(repository, ConsoleTransport(console))
        handled = handler.handle_text(line)
    if not handled:
        display_info(f"Ignored: not addressed to !{settings.command_prefix}")


@app.command("import")
def import_file(
    file_path: Path = typer.Argument(..., help="JSON or YAML export file"),
    campaign_name: str = typer.Option(
        settings.default_campaign, "--campaign", "-c", help="Campaign name"
    ),
) -> None:
    """Import a TAC export file."""
    if not file_path.exists():
        display_error(f"File not found: {file_path}")
        raise typer.Exit(1)

    try:
        batch = ImportBatch.from_payload(_load_payload(file_path))
    except PayloadError as e:
        display_error(f"Invalid import payload: {e}")
        raise typer.Exit(1)
    except Exception as e:
        display_error(f"Failed to parse {file_path}: {e}")
        raise typer.Exit(1)

    with open_repository(campaign_name) as repository:
        report = BatchImporter(repository, ConsoleTransport(console)).process_batch(batch)

    display_import_report(report)
    if report.has_failures:
        raise typer.Exit(1)


@app.command()
def dump(
    campaign_name: str = typer.Option(
        settings.default_campaign, "--campaign", "-c", help="Campaign name"
    ),
) -> None:
    """Show every character's attributes."""
    with open_repository(campaign_name) as repository:
        dumps = asyncio.run(dump_all_characters(repository, ConsoleTransport(console)))
    display_character_dumps(dumps)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """TAC Import - bring adventure exports into your campaign.

    Use 'tac page create NAME' to make a page, then 'tac import FILE'.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else settings.log_level,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


if __name__ == "__main__":
    app()
