"""
Tests for reading map data from a save database.
"""

import pytest

from starlanes.models.extraction import (
    DataExtractionError,
    extract_population_data,
    extract_system_connections,
    get_capital_system_id,
    list_games,
    list_races,
    load_map_data,
)
from starlanes.models.session import MapSession


class TestListing:
    """Tests for game and race discovery."""

    def test_list_games(self, aurora_db):
        games = list_games(aurora_db)
        assert [(g.game_id, g.name) for g in games] == [(1, "Sol Campaign"), (2, "Sandbox")]

    def test_list_races(self, aurora_db):
        races = list_races(aurora_db, 1)
        assert [r.name for r in races] == ["Humans", "Zorg", "Hermits"]

    def test_list_races_unknown_game(self, aurora_db):
        assert list_races(aurora_db, 99) == []

    def test_missing_database(self, tmp_path):
        with pytest.raises(DataExtractionError):
            list_games(tmp_path / "nope.db")

    def test_not_a_save_database(self, tmp_path):
        path = tmp_path / "empty.db"
        path.write_bytes(b"")
        with pytest.raises(DataExtractionError):
            list_games(path)


class TestConnections:
    """Tests for jump link extraction."""

    def test_surveyed_systems_sorted_by_name(self, aurora_db):
        systems = extract_system_connections(aurora_db, 1, 10)
        assert [s.system_name for s in systems] == ["Alpha Centauri", "Barnard's Star", "Sol"]

    def test_links_and_gates(self, aurora_db):
        systems = {s.system_id: s for s in extract_system_connections(aurora_db, 1, 10)}
        sol = systems[100]
        links = {c.system_id: c.gate_faction for c in sol.connected_to}
        assert links == {101: 10, 102: 0}
        assert sol.connection_count == 2

    def test_unsurveyed_far_end_excluded(self, aurora_db):
        systems = {s.system_id: s for s in extract_system_connections(aurora_db, 1, 10)}
        assert 103 not in systems
        assert [c.system_id for c in systems[102].connected_to] == [100]

    def test_link_names_resolved(self, aurora_db):
        systems = {s.system_id: s for s in extract_system_connections(aurora_db, 1, 10)}
        assert systems[101].connected_to[0].system_name == "Sol"

    def test_isolated_race_falls_back_to_survey(self, aurora_db):
        systems = extract_system_connections(aurora_db, 1, 30)
        assert [(s.system_id, s.system_name) for s in systems] == [(104, "Lonely")]
        assert systems[0].connected_to == []

    def test_unknown_race_has_no_systems(self, aurora_db):
        assert extract_system_connections(aurora_db, 1, 99) == []


class TestPopulation:
    """Tests for population extraction."""

    def test_summary(self, aurora_db):
        data = extract_population_data(aurora_db, 1, 10)
        assert data.race_name == "Humans"
        assert data.colony_count == 3
        assert data.total_population == pytest.approx(1546.18)

    def test_colonies_include_aliens_in_surveyed_systems(self, aurora_db):
        data = extract_population_data(aurora_db, 1, 10)
        assert [c.name for c in data.colonies] == [
            "Earth", "Zorg Hive", "Mars", "Centauri Colony",
        ]
        hive = data.find_colony("Zorg Hive")
        assert hive.controlling_race_name == "Zorg"
        assert hive.system_name == "Barnard's Star"
        assert hive.body_name == "Barnard b"

    def test_distribution_only_own_colonies(self, aurora_db):
        data = extract_population_data(aurora_db, 1, 10)
        by_system = {d.system_name: d for d in data.system_distribution}
        assert set(by_system) == {"Sol", "Alpha Centauri"}
        assert data.system_distribution[0].system_name == "Sol"
        sol = by_system["Sol"]
        assert sol.colony_count == 2
        assert sol.total_population == pytest.approx(1541.18)
        assert sorted(sol.colony_names) == ["Earth", "Mars"]

    def test_race_without_colonies_gets_empty_aggregate(self, aurora_db):
        data = extract_population_data(aurora_db, 1, 30)
        assert data.race_name == "Hermits"
        assert data.colony_count == 0
        assert data.total_population == 0.0
        assert data.colonies == []
        assert data.system_distribution == []

    def test_capital(self, aurora_db):
        assert get_capital_system_id(aurora_db, 1, 10) == 100
        assert get_capital_system_id(aurora_db, 1, 30) is None


class TestLoadMapData:
    """End-to-end: database to laid-out network."""

    def test_load_and_layout(self, aurora_db):
        data = load_map_data(aurora_db, 1, 10)
        assert data.capital_system_id == 100

        session = MapSession()
        layout = session.commit(session.begin(), data)
        network = layout.network

        assert layout.root_id == 100
        assert len(network) == 3
        assert {(e.a, e.b) for e in network.edges} == {(100, 101), (100, 102)}

        sol = network.nodes[100]
        assert sol.population == pytest.approx(1541.18)
        assert (sol.x, sol.y) == (0.0, 0.0)

        barnard = network.nodes[102]
        assert barnard.factions == ["Zorg"]
        assert barnard.depth == 1

    def test_race_without_colonies_still_gets_map(self, aurora_db):
        data = load_map_data(aurora_db, 1, 30)
        assert data.capital_system_id is None

        session = MapSession()
        layout = session.commit(session.begin(), data)
        network = layout.network

        assert list(network.nodes) == [104]
        assert network.nodes[104].name == "Lonely"
        assert not network.nodes[104].has_colony
        assert network.nodes[104].colonies == []
        assert layout.root_id == 104
