"""Map session: which load request is current, and the layout built from it."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from .layout import Layout, compute_layout
from .network import PopulationData, SystemConnection, build_network

logger = logging.getLogger(__name__)


@dataclass
class MapData:
    """Resolved input for one map: connections, population and capital."""

    systems: list[SystemConnection]
    population: PopulationData | None = None
    capital_system_id: int | None = None


class MapSession:
    """Hands out load tokens and only accepts results for the latest one.

    Layout cannot be aborted once started, so a result arriving for an older
    request is dropped instead of replacing the newer map.
    """

    def __init__(self) -> None:
        self.generation = 0
        self.layout: Layout | None = None
        self.data: MapData | None = None

    def begin(self) -> int:
        self.generation += 1
        return self.generation

    def is_current(self, token: int) -> bool:
        return token == self.generation

    def commit(self, token: int, data: MapData) -> Layout | None:
        """Build and lay out ``data`` if ``token`` is still current."""
        if not self.is_current(token):
            logger.debug("Discarding stale map data (token %d, current %d)", token, self.generation)
            return None
        network = build_network(data.systems, data.population)
        layout = compute_layout(network, root_id=data.capital_system_id)
        if not self.is_current(token):
            logger.debug("Discarding stale layout (token %d)", token)
            return None
        self.data = data
        self.layout = layout
        return layout
