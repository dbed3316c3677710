"""Centralized settings loader for the application.

Infrastructure-level module: must not import from services/, repositories/
or logging_config.py to avoid circular imports.
"""

import tomllib
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path(__file__).resolve().parent / "settings.toml"

_cached_settings: dict[Path, dict] = {}


def _load_settings(settings_path: Path = SETTINGS_PATH) -> dict:
    """Load and cache settings from the TOML file, once per path."""
    key = Path(settings_path).resolve()
    if key in _cached_settings:
        return _cached_settings[key]
    try:
        with open(key, "rb") as f:
            _cached_settings[key] = tomllib.load(f)
            return _cached_settings[key]
    except Exception as e:
        logger.error("Failed to load settings from %s: %s", settings_path, e)
        raise


def clear_settings_cache() -> None:
    """Forget cached settings so the next read hits the file again."""
    _cached_settings.clear()


def get_season_config(settings: dict | None = None):
    """Return the SeasonConfig built from settings.toml.

    Module-level convenience function so callers don't need SettingsService.
    """
    from domain.season import SeasonConfig

    settings = settings if settings is not None else _load_settings()
    sheet = settings["sheet"]
    season = settings.get("season", {})
    map_cfg = settings.get("map", {})
    defaults = SeasonConfig(sheet_id=sheet["sheet_id"])
    return SeasonConfig(
        sheet_id=sheet["sheet_id"],
        csv_url_template=sheet.get("csv_url_template", defaults.csv_url_template),
        year=int(season.get("year", defaults.year)),
        months=tuple(season.get("months", defaults.months)),
        title=season.get("title", defaults.title),
        timeout=float(sheet.get("timeout", defaults.timeout)),
        center_lat=float(map_cfg.get("center_lat", defaults.center_lat)),
        center_lon=float(map_cfg.get("center_lon", defaults.center_lon)),
        zoom=map_cfg.get("zoom", defaults.zoom),
        selected_zoom=map_cfg.get("selected_zoom", defaults.selected_zoom),
        map_style=map_cfg.get("style", defaults.map_style),
    )


class SettingsService:
    """Read-only accessor for application settings.

    Settings are cached at module level after the first read.
    """

    def __init__(self, settings_path: str | Path = SETTINGS_PATH):
        self.settings = _load_settings(Path(settings_path))

    @property
    def log_level(self) -> str:
        return self.settings["env"]["log_level"]

    @property
    def env(self) -> str:
        return self.settings["env"]["env"]

    @property
    def season(self):
        return get_season_config(self.settings)
