"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from tac_import.world.defaults import PAGE_SIZE_UNITS


LogLevel = Literal["DEBUG", "INFO", "WARNING", "ERROR"]


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Database
    database_url: str = "sqlite:///tac_import.db"
    default_campaign: str = "default"

    # ==========================================================================
    # Chat Command Settings
    # ==========================================================================
    # Lines look like "!tac --import {...}". Replies are whispered to the GM.
    command_prefix: str = "tac"
    whisper_target: str = "gm"
    sender_name: str = "tac"

    # ==========================================================================
    # Geometry
    # ==========================================================================
    # The authoring tool exports on a square canvas of this edge length.
    source_canvas_size: int = 1536
    dest_cell_px: int = 70  # Pixels per grid cell on the destination page
    px_per_foot: int = 14  # 70 px per 5 ft cell
    page_size_units: float = PAGE_SIZE_UNITS  # Page edge length in grid cells

    # Create pages for scenes that have none instead of failing the scene
    create_missing_pages: bool = False

    # Debug
    debug: bool = False
    log_level: LogLevel = "INFO"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


# Convenience alias
settings = get_settings()
