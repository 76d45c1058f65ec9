"""
Tests for the command-line entry point (no window is opened).
"""

import pytest

import starlanes.__main__ as cli
from starlanes.models.settings import Settings


@pytest.fixture
def stored(monkeypatch):
    """Replace the on-disk settings with an in-memory value."""
    value = Settings()
    monkeypatch.setattr(cli, "load_settings", lambda: value)
    monkeypatch.setattr(cli, "save_settings", lambda settings: None)
    return value


class TestResolveSettings:
    """Tests for merging arguments with stored settings."""

    def test_arguments_override(self):
        args = cli.build_parser().parse_args(["new.db", "--game", "2", "--race", "5"])
        merged = cli.resolve_settings(args, Settings(database_path="old.db", game_id=1, race_id=1))
        assert (merged.database_path, merged.game_id, merged.race_id) == ("new.db", 2, 5)

    def test_stored_values_fill_gaps(self):
        args = cli.build_parser().parse_args([])
        stored = Settings(database_path="old.db", game_id=1, race_id=4, window_width=900)
        merged = cli.resolve_settings(args, stored)
        assert merged == stored

    def test_zero_ids_are_kept(self):
        args = cli.build_parser().parse_args(["--game", "0"])
        merged = cli.resolve_settings(args, Settings(game_id=7))
        assert merged.game_id == 0


class TestMain:
    """Tests for main() exit codes and listings."""

    def test_no_database(self, stored, capsys):
        assert cli.main([]) == 2
        assert "AuroraDB.db" in capsys.readouterr().err

    def test_list_games(self, stored, aurora_db, capsys):
        assert cli.main([str(aurora_db), "--list-games"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out == ["1\tSol Campaign", "2\tSandbox"]

    def test_list_races(self, stored, aurora_db, capsys):
        assert cli.main([str(aurora_db), "--game", "1", "--list-races"]) == 0
        out = capsys.readouterr().out.splitlines()
        assert out[0] == "10\tHumans"
        assert len(out) == 3

    def test_list_races_needs_game(self, stored, aurora_db):
        assert cli.main([str(aurora_db), "--list-races"]) == 2

    def test_bad_database(self, stored, tmp_path):
        assert cli.main([str(tmp_path / "missing.db"), "--list-games"]) == 1

    def test_missing_race(self, stored, aurora_db):
        assert cli.main([str(aurora_db), "--game", "1"]) == 2

    def test_version(self, capsys):
        with pytest.raises(SystemExit) as exc:
            cli.main(["--version"])
        assert exc.value.code == 0
        assert "starlanes" in capsys.readouterr().out
