"""
Tests for settings persistence.
"""

import json

from starlanes.constants import SCREEN_WIDTH
from starlanes.models.settings import Settings, load_settings, save_settings


class TestSettings:
    """Tests for save_settings / load_settings."""

    def test_save_then_load(self, tmp_path):
        path = tmp_path / "cfg" / "settings.json"
        saved = Settings(database_path="/saves/AuroraDB.db", game_id=3, race_id=12,
                         window_width=1600, window_height=900)
        assert save_settings(saved, path) == path
        assert path.is_file()
        assert load_settings(path) == saved

    def test_file_is_versioned_json(self, tmp_path):
        path = save_settings(Settings(game_id=1), tmp_path / "settings.json")
        data = json.loads(path.read_text())
        assert data["version"] == 1
        assert data["game_id"] == 1

    def test_missing_file_gives_defaults(self, tmp_path):
        path = tmp_path / "absent.json"
        assert load_settings(path) == Settings()

    def test_corrupt_file_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("{not json")
        assert load_settings(path) == Settings()

    def test_wrong_shape_gives_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text("[1, 2, 3]")
        assert load_settings(path) == Settings()

    def test_partial_file_fills_defaults(self, tmp_path):
        path = tmp_path / "settings.json"
        path.write_text(json.dumps({"database_path": "db.sqlite"}))
        settings = load_settings(path)
        assert settings.database_path == "db.sqlite"
        assert settings.game_id is None
        assert settings.window_width == SCREEN_WIDTH
