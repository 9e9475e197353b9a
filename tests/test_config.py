"""Tests for application settings."""

from tac_import.config import Settings, get_settings
from tac_import.world.defaults import PAGE_SIZE_UNITS


def test_defaults():
    settings = Settings(_env_file=None)

    assert settings.command_prefix == "tac"
    assert settings.whisper_target == "gm"
    assert settings.source_canvas_size == 1536
    assert settings.dest_cell_px == 70
    assert settings.px_per_foot == 14
    assert settings.page_size_units == PAGE_SIZE_UNITS == 21.94
    assert settings.create_missing_pages is False


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("COMMAND_PREFIX", "import")
    monkeypatch.setenv("CREATE_MISSING_PAGES", "true")

    settings = Settings(_env_file=None)

    assert settings.command_prefix == "import"
    assert settings.create_missing_pages is True


def test_get_settings_is_cached():
    assert get_settings() is get_settings()
