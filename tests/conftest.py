"""
Pytest configuration and shared fixtures.
"""

import sqlite3
import sys
from pathlib import Path

import pytest

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from starlanes.models.network import ConnectedSystem, SystemConnection  # noqa: E402


def make_system(system_id, name, *links):
    """SystemConnection from ``(target_id, gate)`` pairs or bare target ids."""
    connected = []
    for link in links:
        target, gate = link if isinstance(link, tuple) else (link, 0)
        connected.append(ConnectedSystem(system_id=target, gate_faction=gate))
    return SystemConnection(
        system_id=system_id,
        system_name=name,
        connected_to=connected,
        connection_count=len(connected),
    )


@pytest.fixture
def chain_systems():
    """Sol(1) - B(2) - C(3), links stored in both directions."""
    return [
        make_system(1, "Sol", 2),
        make_system(2, "B", 1, 3),
        make_system(3, "C", 2),
    ]


@pytest.fixture
def crowded_systems():
    """Sol with ten direct neighbours, all of which land in one sector."""
    children = list(range(2, 12))
    systems = [make_system(1, "Sol", *children)]
    systems += [make_system(cid, f"Child {cid}", 1) for cid in children]
    return systems


_SCHEMA = """
CREATE TABLE FCT_Game (GameID INTEGER, GameName TEXT);
CREATE TABLE FCT_Race (RaceID INTEGER, GameID INTEGER, RaceName TEXT);
CREATE TABLE FCT_System (SystemID INTEGER, GameID INTEGER);
CREATE TABLE FCT_RaceSysSurvey (SystemID INTEGER, GameID INTEGER, RaceID INTEGER, Name TEXT);
CREATE TABLE FCT_JumpPoint (
    WarpPointID INTEGER, SystemID INTEGER, WPLink INTEGER, JumpGateRaceID INTEGER
);
CREATE TABLE FCT_SystemBody (SystemBodyID INTEGER, GameID INTEGER, Name TEXT);
CREATE TABLE FCT_Population (
    PopulationID INTEGER, GameID INTEGER, RaceID INTEGER, SystemID INTEGER,
    SystemBodyID INTEGER, PopName TEXT, Population REAL, Capital INTEGER
);
"""


@pytest.fixture
def aurora_db(tmp_path):
    """A tiny Aurora-shaped save database.

    Game 1, race 10 (Humans) has surveyed Sol(100), Alpha Centauri(101) and
    Barnard's Star(102); system 103 is unsurveyed. Race 20 (Zorg) holds a
    colony at Barnard's Star. Race 30 (Hermits) knows one lonely system.
    """
    path = tmp_path / "AuroraDB.db"
    conn = sqlite3.connect(path)
    conn.executescript(_SCHEMA)
    conn.executemany("INSERT INTO FCT_Game VALUES (?, ?)", [(1, "Sol Campaign"), (2, "Sandbox")])
    conn.executemany(
        "INSERT INTO FCT_Race VALUES (?, ?, ?)",
        [(10, 1, "Humans"), (20, 1, "Zorg"), (30, 1, "Hermits")],
    )
    conn.executemany(
        "INSERT INTO FCT_System VALUES (?, 1)", [(100,), (101,), (102,), (103,), (104,)],
    )
    conn.executemany(
        "INSERT INTO FCT_RaceSysSurvey VALUES (?, 1, ?, ?)",
        [
            (100, 10, "Sol"),
            (101, 10, "Alpha Centauri"),
            (102, 10, "Barnard's Star"),
            (104, 30, "Lonely"),
        ],
    )
    conn.executemany(
        "INSERT INTO FCT_JumpPoint VALUES (?, ?, ?, ?)",
        [
            (1, 100, 2, 10),  # Sol -> Alpha Centauri, gated by Humans
            (2, 101, 1, 0),
            (3, 100, 4, 0),  # Sol <-> Barnard's Star
            (4, 102, 3, 0),
            (5, 102, 6, 0),  # Barnard's Star <-> unsurveyed 103
            (6, 103, 5, 0),
        ],
    )
    conn.executemany(
        "INSERT INTO FCT_SystemBody VALUES (?, 1, ?)",
        [(1000, "Earth"), (1001, "Mars"), (1002, "Rigil Kentaurus A-II"), (1003, "Barnard b")],
    )
    conn.executemany(
        "INSERT INTO FCT_Population VALUES (?, 1, ?, ?, ?, ?, ?, ?)",
        [
            (1, 10, 100, 1000, "Earth", 1500.0, 1),
            (2, 10, 100, 1001, "Mars", 41.18, 0),
            (3, 10, 101, 1002, "Centauri Colony", 5.0, 0),
            (4, 20, 102, 1003, "Zorg Hive", 300.0, 1),
        ],
    )
    conn.commit()
    conn.close()
    return path
