"""Page management commands."""

import typer

from tac_import.cli.context import open_repository
from tac_import.cli.display import display_error, display_page_list, display_success
from tac_import.config import settings
from tac_import.database.models.enums import ObjectType
from tac_import.importer.exceptions import EntityCreationError
from tac_import.importer.upsert import EntityUpserter

app = typer.Typer(help="Page management commands")


@app.command()
def create(
    name: str = typer.Argument(..., help="Page name; scenes are matched to pages by name"),
    width: float = typer.Option(settings.page_size_units, "--width", help="Width in grid cells"),
    height: float = typer.Option(settings.page_size_units, "--height", help="Height in grid cells"),
    campaign_name: str = typer.Option(
        settings.default_campaign, "--campaign", "-c", help="Campaign name"
    ),
) -> None:
    """Create an empty page for a scene to be imported into."""
    with open_repository(campaign_name) as repository:
        if repository.find_by_type_and_name(ObjectType.PAGE, name):
            display_error(f"A page named {name} already exists")
            raise typer.Exit(1)
        try:
            page = EntityUpserter(repository).create_page(name, width=width, height=height)
        except EntityCreationError as e:
            display_error(str(e))
            raise typer.Exit(1)
        display_success(f"Created page {name} (id {page.id})")


@app.command("list")
def list_pages(
    campaign_name: str = typer.Option(
        settings.default_campaign, "--campaign", "-c", help="Campaign name"
    ),
) -> None:
    """List pages with how many graphics and paths each holds."""
    with open_repository(campaign_name) as repository:
        pages = [
            {
                "id": page.id,
                "name": page.get("name"),
                "width": page.get("width"),
                "height": page.get("height"),
                "graphics": len(repository.find_children_of_page(ObjectType.GRAPHIC, page.id)),
                "paths": len(repository.find_children_of_page(ObjectType.PATH, page.id)),
            }
            for page in repository.find_all(ObjectType.PAGE)
        ]
    display_page_list(pages)
