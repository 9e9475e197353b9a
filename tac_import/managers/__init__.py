"""Manager classes for campaign-scoped world state."""

from tac_import.managers.base import BaseManager
from tac_import.managers.campaign_manager import get_or_create_campaign

__all__ = ["BaseManager", "get_or_create_campaign"]
