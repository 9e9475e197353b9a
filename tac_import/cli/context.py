"""Shared setup for CLI commands that touch the world model."""

from contextlib import contextmanager
from typing import Generator

from tac_import.database.connection import get_db_session, init_db
from tac_import.managers.campaign_manager import get_or_create_campaign
from tac_import.world.repository import SqlWorldRepository


@contextmanager
def open_repository(campaign_name: str) -> Generator[SqlWorldRepository, None, None]:
    """Open the campaign's world model, creating tables and campaign as needed.

    Changes are committed when the block exits cleanly.
    """
    init_db()
    with get_db_session() as db:
        campaign = get_or_create_campaign(db, campaign_name)
        yield SqlWorldRepository(db, campaign)
