"""Persistent user settings stored as JSON.

Uses platformdirs for the cross-platform location:
  Linux:   ~/.config/starlanes/settings.json
  macOS:   ~/Library/Application Support/starlanes/settings.json
  Windows: C:/Users/.../AppData/Local/starlanes/settings.json

Only the last database selection and window size are kept; the map itself is
always rebuilt from the database.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path

from platformdirs import user_config_dir

from ..constants import APP_NAME, SCREEN_HEIGHT, SCREEN_WIDTH

logger = logging.getLogger(__name__)

SETTINGS_DIR = Path(user_config_dir(APP_NAME))
SETTINGS_FILE = SETTINGS_DIR / "settings.json"


@dataclass
class Settings:
    """Last used database selection and window geometry."""

    database_path: str | None = None
    game_id: int | None = None
    race_id: int | None = None
    window_width: int = SCREEN_WIDTH
    window_height: int = SCREEN_HEIGHT


# ── Serialise helpers ─────────────────────────────────────────────────

def _settings_to_dict(s: Settings) -> dict:
    return {
        "version": 1,
        "database_path": s.database_path,
        "game_id": s.game_id,
        "race_id": s.race_id,
        "window_width": s.window_width,
        "window_height": s.window_height,
    }


def _settings_from_dict(d: dict) -> Settings:
    return Settings(
        database_path=d.get("database_path"),
        game_id=d.get("game_id"),
        race_id=d.get("race_id"),
        window_width=int(d.get("window_width", SCREEN_WIDTH)),
        window_height=int(d.get("window_height", SCREEN_HEIGHT)),
    )


# ── Top-level API ─────────────────────────────────────────────────────

def save_settings(settings: Settings, path: Path = SETTINGS_FILE) -> Path:
    """Write settings to JSON and return the file path."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps(_settings_to_dict(settings), indent=2))
    logger.debug("Saved settings to %s", path)
    return path


def load_settings(path: Path = SETTINGS_FILE) -> Settings:
    """Read settings. Returns defaults if the file is missing or unreadable."""
    if not path.exists():
        return Settings()
    try:
        data = json.loads(path.read_text())
        return _settings_from_dict(data)
    except (json.JSONDecodeError, OSError, TypeError, ValueError, AttributeError) as exc:
        logger.warning("Ignoring unreadable settings file %s: %s", path, exc)
        return Settings()
