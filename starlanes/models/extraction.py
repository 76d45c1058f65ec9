"""Read star network and population data from an Aurora 4X save database."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import closing
from dataclasses import dataclass
from pathlib import Path

from .network import (
    ColonyDetails,
    ConnectedSystem,
    PopulationData,
    SystemConnection,
    SystemDistribution,
)
from .session import MapData

logger = logging.getLogger(__name__)


class DataExtractionError(Exception):
    """Any failure reading the save database."""


@dataclass
class GameInfo:
    game_id: int
    name: str


@dataclass
class RaceInfo:
    race_id: int
    name: str


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------

_GAMES_QUERY = "SELECT GameID, GameName FROM FCT_Game ORDER BY GameID"

_RACES_QUERY = "SELECT RaceID, RaceName FROM FCT_Race WHERE GameID = ? ORDER BY RaceID"

# Only systems surveyed by the race, and only links whose far end is surveyed too
_CONNECTIONS_QUERY = """
    WITH SystemNames AS (
        SELECT DISTINCT s.SystemID, rs.Name AS SystemName
        FROM FCT_System s
        JOIN FCT_RaceSysSurvey rs
            ON s.SystemID = rs.SystemID AND s.GameID = rs.GameID
        WHERE rs.RaceID = :race AND rs.GameID = :game AND s.GameID = :game
    ),
    ConnectedSystems AS (
        SELECT
            s1.SystemID AS SourceSystemID,
            sn1.SystemName AS SourceSystemName,
            jp1.WPLink AS DestinationWarpPointID,
            jp1.JumpGateRaceID
        FROM FCT_System s1
        JOIN FCT_JumpPoint jp1 ON s1.SystemID = jp1.SystemID
        JOIN SystemNames sn1 ON s1.SystemID = sn1.SystemID
        WHERE s1.GameID = :game AND jp1.WPLink > 0
    ),
    SystemLinks AS (
        SELECT
            cs.SourceSystemID,
            cs.SourceSystemName,
            s2.SystemID AS DestinationSystemID,
            sn2.SystemName AS DestinationSystemName,
            cs.JumpGateRaceID
        FROM ConnectedSystems cs
        JOIN FCT_JumpPoint jp2 ON cs.DestinationWarpPointID = jp2.WarpPointID
        JOIN FCT_System s2 ON jp2.SystemID = s2.SystemID
        JOIN SystemNames sn2 ON s2.SystemID = sn2.SystemID
    )
    SELECT
        SourceSystemID,
        SourceSystemName,
        json_group_array(
            json_object(
                'systemId', DestinationSystemID,
                'systemName', DestinationSystemName,
                'jumpGateRaceId', JumpGateRaceID
            )
        ),
        COUNT(DISTINCT DestinationSystemID)
    FROM SystemLinks
    GROUP BY SourceSystemID, SourceSystemName
    ORDER BY SourceSystemName
"""

_SURVEYED_SYSTEMS_QUERY = """
    SELECT s.SystemID, rs.Name
    FROM FCT_System s
    JOIN FCT_RaceSysSurvey rs
        ON s.SystemID = rs.SystemID AND s.GameID = rs.GameID
    WHERE rs.RaceID = :race AND rs.GameID = :game AND s.GameID = :game
    ORDER BY rs.Name
"""

# Ungrouped aggregate: a race with no colonies still yields one row
_POPULATION_STATS_QUERY = """
    SELECT
        (SELECT RaceName FROM FCT_Race WHERE RaceID = :race AND GameID = :game),
        COUNT(CASE WHEN p.Population > 0 THEN 1 END),
        SUM(p.Population)
    FROM FCT_Population p
    WHERE p.RaceID = :race AND p.GameID = :game
"""

# Every populated body in systems the race has surveyed, alien ones included
_COLONIES_QUERY = """
    SELECT
        p.PopulationID,
        p.PopName,
        p.Population,
        rss.Name,
        COALESCE(sb.Name, ''),
        p.RaceID,
        r.RaceName
    FROM FCT_Population p
    JOIN FCT_RaceSysSurvey rss
        ON p.SystemID = rss.SystemID AND p.GameID = rss.GameID
    LEFT JOIN FCT_SystemBody sb
        ON p.SystemBodyID = sb.SystemBodyID AND p.GameID = sb.GameID
    JOIN FCT_Race r ON p.RaceID = r.RaceID AND p.GameID = r.GameID
    WHERE rss.RaceID = :race AND rss.GameID = :game AND p.Population > 0
    ORDER BY p.Population DESC
"""

_SYSTEM_DISTRIBUTION_QUERY = """
    SELECT
        rss.Name,
        COUNT(*),
        SUM(p.Population),
        GROUP_CONCAT(p.PopName)
    FROM FCT_Population p
    JOIN FCT_RaceSysSurvey rss
        ON p.SystemID = rss.SystemID AND p.GameID = rss.GameID AND p.RaceID = rss.RaceID
    WHERE p.RaceID = :race AND p.GameID = :game AND p.Population > 0
    GROUP BY rss.SystemID, rss.Name
    ORDER BY SUM(p.Population) DESC
"""

_CAPITAL_QUERY = """
    SELECT SystemID FROM FCT_Population
    WHERE GameID = :game AND RaceID = :race AND Capital = 1
    LIMIT 1
"""


def _connect(db_path: str | Path) -> sqlite3.Connection:
    """Open the save database read-only."""
    uri = Path(db_path).expanduser().resolve().as_uri() + "?mode=ro"
    return sqlite3.connect(uri, uri=True)


def _query(db_path: str | Path, sql: str, params: dict | tuple = ()) -> list[tuple]:
    try:
        with closing(_connect(db_path)) as conn:
            return conn.execute(sql, params).fetchall()
    except sqlite3.Error as exc:
        raise DataExtractionError(f"Query failed on {db_path}: {exc}") from exc


# ---------------------------------------------------------------------------
# Public API
# ---------------------------------------------------------------------------


def list_games(db_path: str | Path) -> list[GameInfo]:
    return [GameInfo(game_id=row[0], name=row[1]) for row in _query(db_path, _GAMES_QUERY)]


def list_races(db_path: str | Path, game_id: int) -> list[RaceInfo]:
    rows = _query(db_path, _RACES_QUERY, (game_id,))
    return [RaceInfo(race_id=row[0], name=row[1]) for row in rows]


def extract_system_connections(
    db_path: str | Path, game_id: int, race_id: int,
) -> list[SystemConnection]:
    """Surveyed systems with their jump links to other surveyed systems.

    Falls back to the bare list of surveyed systems when no links exist, so a
    single-system game still yields one node.
    """
    params = {"game": game_id, "race": race_id}
    rows = _query(db_path, _CONNECTIONS_QUERY, params)
    if not rows:
        logger.debug("No jump links for race %d in game %d", race_id, game_id)
        return [
            SystemConnection(system_id=row[0], system_name=row[1] or "")
            for row in _query(db_path, _SURVEYED_SYSTEMS_QUERY, params)
        ]

    systems: list[SystemConnection] = []
    for system_id, name, links_json, count in rows:
        try:
            links = json.loads(links_json)
        except ValueError as exc:
            raise DataExtractionError(f"Malformed link list for system {system_id}") from exc
        systems.append(
            SystemConnection(
                system_id=system_id,
                system_name=name or "",
                connected_to=[ConnectedSystem.from_dict(link) for link in links],
                connection_count=count,
            )
        )
    logger.info("Extracted %d systems for race %d in game %d", len(systems), race_id, game_id)
    return systems


def extract_population_data(
    db_path: str | Path, game_id: int, race_id: int,
) -> PopulationData:
    params = {"game": game_id, "race": race_id}
    race_name, colony_count, total_population = _query(db_path, _POPULATION_STATS_QUERY, params)[0]
    if not colony_count:
        logger.debug("Race %d in game %d has no colonies", race_id, game_id)

    colonies = [
        ColonyDetails(
            id=row[0],
            name=row[1],
            population=float(row[2] or 0.0),
            system_name=row[3],
            body_name=row[4],
            controlling_race_id=row[5],
            controlling_race_name=row[6],
        )
        for row in _query(db_path, _COLONIES_QUERY, params)
    ]

    distribution = [
        SystemDistribution(
            system_name=row[0],
            colony_count=row[1],
            total_population=float(row[2] or 0.0),
            colony_names=row[3].split(",") if row[3] else [],
        )
        for row in _query(db_path, _SYSTEM_DISTRIBUTION_QUERY, params)
    ]

    return PopulationData(
        race_name=race_name or "",
        colony_count=colony_count or 0,
        total_population=float(total_population or 0.0),
        colonies=colonies,
        system_distribution=distribution,
    )


def get_capital_system_id(db_path: str | Path, game_id: int, race_id: int) -> int | None:
    rows = _query(db_path, _CAPITAL_QUERY, {"game": game_id, "race": race_id})
    return rows[0][0] if rows else None


def load_map_data(db_path: str | Path, game_id: int, race_id: int) -> MapData:
    """Everything the map needs for one race, read in one call."""
    return MapData(
        systems=extract_system_connections(db_path, game_id, race_id),
        population=extract_population_data(db_path, game_id, race_id),
        capital_system_id=get_capital_system_id(db_path, game_id, race_id),
    )
