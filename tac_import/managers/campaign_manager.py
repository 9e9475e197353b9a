"""Campaign lookup helpers."""

import logging

from sqlalchemy.orm import Session

from tac_import.database.models.world import Campaign

logger = logging.getLogger(__name__)


def get_campaign(db: Session, name: str) -> Campaign | None:
    """Get a campaign by name, or None if it does not exist."""
    return db.query(Campaign).filter(Campaign.name == name).first()


def get_or_create_campaign(db: Session, name: str) -> Campaign:
    """Get a campaign by name, creating it on first use.

    Args:
        db: Database session.
        name: Campaign name.

    Returns:
        The existing or newly created Campaign.
    """
    campaign = get_campaign(db, name)
    if campaign is None:
        campaign = Campaign(name=name)
        db.add(campaign)
        db.flush()
        logger.info(f"Created campaign: {name}")
    return campaign
