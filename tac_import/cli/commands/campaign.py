"""Campaign management commands."""

import typer

from tac_import.cli.display import display_info, display_success
from tac_import.config import settings
from tac_import.database.connection import get_db_session, init_db
from tac_import.managers.campaign_manager import get_campaign, get_or_create_campaign

app = typer.Typer(help="Campaign management commands")


@app.command()
def init(
    campaign_name: str = typer.Option(
        settings.default_campaign, "--campaign", "-c", help="Campaign name"
    ),
) -> None:
    """Create the database tables and the campaign."""
    init_db()
    with get_db_session() as db:
        existing = get_campaign(db, campaign_name)
        if existing is not None:
            display_info(f"Campaign already exists: {campaign_name}")
            return
        campaign = get_or_create_campaign(db, campaign_name)
        display_success(f"Created campaign {campaign.name} (id {campaign.id})")
