"""Base manager class with common patterns."""

from sqlalchemy.orm import Session

from tac_import.database.models.world import Campaign


class BaseManager:
    """Base class for campaign-scoped managers.

    Provides common patterns:
    - Database session access
    - Campaign scoping (all queries filter by campaign_id)
    """

    def __init__(self, db: Session, campaign: Campaign) -> None:
        """Initialize manager with database session and campaign.

        Args:
            db: SQLAlchemy database session
            campaign: Campaign whose world model is being managed
        """
        self.db = db
        self.campaign = campaign

    @property
    def campaign_id(self) -> int:
        """Get current campaign ID for query scoping."""
        return self.campaign.id
