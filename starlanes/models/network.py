"""Star network model: input records, nodes, edges and the graph builder."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Input records
# ---------------------------------------------------------------------------


@dataclass
class ConnectedSystem:
    """One directed jump link from a system to another."""

    system_id: int
    system_name: str = ""
    gate_faction: int = 0  # 0 = no jump gate, otherwise the race maintaining it

    @classmethod
    def from_dict(cls, d: dict) -> ConnectedSystem:
        gate = d.get("gateFaction", d.get("jumpGateRaceId", 0))
        return cls(
            system_id=int(d["systemId"]),
            system_name=d.get("systemName") or "",
            gate_faction=int(gate or 0),
        )


@dataclass
class SystemConnection:
    """A surveyed system and its outgoing jump links."""

    system_id: int
    system_name: str
    connected_to: list[ConnectedSystem] = field(default_factory=list)
    connection_count: int = 0

    @classmethod
    def from_dict(cls, d: dict) -> SystemConnection:
        links = [ConnectedSystem.from_dict(c) for c in d.get("connectedTo", [])]
        return cls(
            system_id=int(d["systemId"]),
            system_name=d.get("systemName") or "",
            connected_to=links,
            connection_count=int(d.get("connectionCount", len(links))),
        )


@dataclass
class ColonyDetails:
    """A single populated body, as reported by the data source."""

    id: int
    name: str
    population: float
    system_name: str
    body_name: str = ""
    controlling_race_id: int | None = None
    controlling_race_name: str | None = None

    @classmethod
    def from_dict(cls, d: dict) -> ColonyDetails:
        return cls(
            id=int(d["id"]),
            name=d["name"],
            population=float(d.get("population") or 0.0),
            system_name=d.get("systemName", ""),
            body_name=d.get("bodyName") or "",
            controlling_race_id=d.get("controllingRaceId"),
            controlling_race_name=d.get("controllingRaceName"),
        )


@dataclass
class SystemDistribution:
    """Own-race population totals for one system."""

    system_name: str
    colony_count: int
    total_population: float
    colony_names: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> SystemDistribution:
        return cls(
            system_name=d["systemName"],
            colony_count=int(d.get("colonyCount", 0)),
            total_population=float(d.get("totalPopulation") or 0.0),
            colony_names=list(d.get("colonyNames", [])),
        )


@dataclass
class PopulationData:
    """Population aggregate for the viewing race."""

    race_name: str
    colony_count: int = 0
    total_population: float = 0.0
    colonies: list[ColonyDetails] = field(default_factory=list)
    system_distribution: list[SystemDistribution] = field(default_factory=list)

    @classmethod
    def from_dict(cls, d: dict) -> PopulationData:
        summary = d.get("summary", {})
        return cls(
            race_name=d.get("raceName", ""),
            colony_count=int(summary.get("colonyCount", 0)),
            total_population=float(summary.get("totalPopulation") or 0.0),
            colonies=[ColonyDetails.from_dict(c) for c in d.get("colonies", [])],
            system_distribution=[
                SystemDistribution.from_dict(s) for s in d.get("systemDistribution", [])
            ],
        )

    def find_colony(self, name: str) -> ColonyDetails | None:
        for colony in self.colonies:
            if colony.name == name:
                return colony
        return None


# ---------------------------------------------------------------------------
# Derived graph
# ---------------------------------------------------------------------------


@dataclass
class Colony:
    """A colony attached to a star node."""

    name: str
    body_name: str
    population: float
    controlled_by: str | None = None  # Set only for foreign-controlled colonies


@dataclass
class StarNode:
    """A star system in the laid-out network."""

    id: int
    name: str
    degree: int = 0
    connected_ids: list[int] = field(default_factory=list)
    population: float = 0.0
    colonies: list[Colony] = field(default_factory=list)
    has_colony: bool = False
    x: float = 0.0
    y: float = 0.0
    depth: int = 0

    @property
    def is_foreign_held(self) -> bool:
        return any(c.controlled_by for c in self.colonies)

    @property
    def factions(self) -> list[str]:
        return list(dict.fromkeys(c.controlled_by for c in self.colonies if c.controlled_by))


@dataclass(frozen=True)
class Edge:
    """Undirected jump lane, stored once with ``a < b``."""

    a: int
    b: int
    gate_from_a: int = 0  # Gate flag on the a -> b link
    gate_from_b: int = 0  # Gate flag on the b -> a link

    def touches(self, node_id: int) -> bool:
        return node_id in (self.a, self.b)


@dataclass
class StarNetwork:
    """Nodes keyed by id (insertion ordered) plus the deduplicated edge list."""

    nodes: dict[int, StarNode] = field(default_factory=dict)
    edges: list[Edge] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.nodes)

    def get(self, node_id: int) -> StarNode | None:
        return self.nodes.get(node_id)

    def find_by_name(self, name: str) -> StarNode | None:
        for node in self.nodes.values():
            if node.name == name:
                return node
        return None

    def neighbors(self, node_id: int) -> list[StarNode]:
        node = self.nodes.get(node_id)
        if node is None:
            return []
        return [self.nodes[nid] for nid in node.connected_ids if nid in self.nodes]


# ---------------------------------------------------------------------------
# Builder
# ---------------------------------------------------------------------------


def build_network(
    systems: list[SystemConnection],
    population: PopulationData | None = None,
) -> StarNetwork:
    """Turn raw connection and population records into a node/edge graph."""
    network = StarNetwork()
    gates: dict[tuple[int, int], int] = {}

    for record in systems:
        if record.system_id in network.nodes:
            logger.debug("Duplicate system record %d ignored", record.system_id)
            continue
        distinct = dict.fromkeys(link.system_id for link in record.connected_to)
        network.nodes[record.system_id] = StarNode(
            id=record.system_id,
            name=record.system_name,
            degree=len(distinct),
        )

    for record in systems:
        node = network.nodes[record.system_id]
        for link in record.connected_to:
            if link.system_id not in network.nodes:
                logger.debug(
                    "Dropping dangling link %d -> %d", record.system_id, link.system_id,
                )
                continue
            key = (record.system_id, link.system_id)
            # Several jump points may link the same pair; any gate counts
            gates[key] = max(gates.get(key, 0), link.gate_faction)
            if link.system_id not in node.connected_ids:
                node.connected_ids.append(link.system_id)

    if population is not None:
        _attach_population(network, population)

    for node in network.nodes.values():
        for neighbor_id in node.connected_ids:
            # Each undirected lane is emitted once, from its lower id end
            if node.id < neighbor_id:
                network.edges.append(
                    Edge(
                        a=node.id,
                        b=neighbor_id,
                        gate_from_a=gates.get((node.id, neighbor_id), 0),
                        gate_from_b=gates.get((neighbor_id, node.id), 0),
                    )
                )

    logger.info(
        "Built star network: %d systems, %d lanes", len(network.nodes), len(network.edges),
    )
    return network


def _attach_population(network: StarNetwork, population: PopulationData) -> None:
    """Join population records onto nodes by system name."""
    for entry in population.system_distribution:
        node = network.find_by_name(entry.system_name)
        if node is None:
            logger.debug("No system named %r for population entry", entry.system_name)
            continue
        node.population = entry.total_population
        node.has_colony = True
        node.colonies = []
        for colony_name in entry.colony_names:
            details = population.find_colony(colony_name)
            node.colonies.append(
                Colony(
                    name=colony_name,
                    body_name=details.body_name if details else "",
                    population=details.population if details else 0.0,
                )
            )

    for details in population.colonies:
        owner = details.controlling_race_name
        if not owner or owner == population.race_name:
            continue
        node = network.find_by_name(details.system_name)
        if node is None:
            continue
        node.colonies.append(
            Colony(
                name=details.name,
                body_name=details.body_name,
                population=details.population,
                controlled_by=owner,
            )
        )
        node.has_colony = True
