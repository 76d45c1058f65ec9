"""Ring layout for the star network.

Placement is a breadth-first traversal from a root system: every system sits
on a ring whose radius depends only on its hop distance from the root, and is
placed in the 45-degree sector its parent points to. A fixed number of
relaxation passes then spreads crowded systems along their ring without ever
changing the ring radius.
"""

from __future__ import annotations

import logging
import math
from collections import deque
from dataclasses import dataclass, field

from ..constants import (
    BASE_RADIUS,
    ITERATIONS,
    LEVEL_SPACING,
    MIN_DISTANCE,
    REPULSION_CONSTANT,
    REPULSION_THRESHOLD,
    ROOT_SYSTEM_NAME,
    SECTOR_COUNT,
)
from .network import StarNetwork, StarNode

logger = logging.getLogger(__name__)

_SECTOR_WIDTH = math.tau / SECTOR_COUNT


@dataclass
class Layout:
    """Result of a layout pass: the positioned network and its depth levels."""

    network: StarNetwork
    levels: list[list[int]] = field(default_factory=list)
    root_id: int | None = None

    @property
    def max_depth(self) -> int:
        return max(len(self.levels) - 1, 0)


def ring_radius(depth: int) -> float:
    """Radius of the ring holding systems ``depth`` hops from the root."""
    if depth <= 0:
        return 0.0
    return BASE_RADIUS + LEVEL_SPACING * depth


def choose_root(network: StarNetwork, root_id: int | None = None) -> StarNode | None:
    """Requested root if present, else the system named Sol, else the first one."""
    if not network.nodes:
        return None
    if root_id is not None and root_id in network.nodes:
        return network.nodes[root_id]
    sol = network.find_by_name(ROOT_SYSTEM_NAME)
    if sol is not None:
        return sol
    return next(iter(network.nodes.values()))


# ---------------------------------------------------------------------------
# Hierarchical placement
# ---------------------------------------------------------------------------


def place_hierarchical(network: StarNetwork, root_id: int | None = None) -> list[list[int]]:
    """Assign depth and an initial ring position to every node.

    Returns the depth levels as lists of node ids in discovery order.
    """
    root = choose_root(network, root_id)
    if root is None:
        return []

    root.depth = 0
    root.x = 0.0
    root.y = 0.0
    if len(network.nodes) == 1:
        return [[root.id]]

    levels, parents = _breadth_first_levels(network, root.id)

    reached = {nid for level in levels for nid in level}
    unreached = [nid for nid in network.nodes if nid not in reached]
    if unreached:
        logger.debug(
            "%d systems unreachable from %s, placed on trailing rings",
            len(unreached), root.name,
        )
    # One ring each, outward in node order
    levels.extend([nid] for nid in unreached)

    for depth, level in enumerate(levels):
        for nid in level:
            network.nodes[nid].depth = depth

    for depth in range(1, len(levels)):
        _place_level(network, levels[depth], depth, parents)

    return levels


def _breadth_first_levels(
    network: StarNetwork, root_id: int,
) -> tuple[list[list[int]], dict[int, int]]:
    """Iterative BFS; the first system to discover a neighbour becomes its parent."""
    visited = {root_id}
    parents: dict[int, int] = {}
    depth_of = {root_id: 0}
    levels: list[list[int]] = [[root_id]]
    queue = deque([root_id])

    while queue:
        current = queue.popleft()
        depth = depth_of[current] + 1
        for neighbor_id in network.nodes[current].connected_ids:
            if neighbor_id in visited or neighbor_id not in network.nodes:
                continue
            visited.add(neighbor_id)
            parents[neighbor_id] = current
            depth_of[neighbor_id] = depth
            if depth == len(levels):
                levels.append([])
            levels[depth].append(neighbor_id)
            queue.append(neighbor_id)

    return levels, parents


def _sector_of(angle: float) -> int:
    return int(math.floor((angle + math.pi) / _SECTOR_WIDTH)) % SECTOR_COUNT


def _place_level(
    network: StarNetwork, level: list[int], depth: int, parents: dict[int, int],
) -> None:
    """Spread one level across the sectors its parents point into."""
    radius = ring_radius(depth)
    sectors: dict[int, list[int]] = {}
    for nid in level:
        parent = network.nodes.get(parents.get(nid))
        parent_angle = math.atan2(parent.y, parent.x) if parent is not None else 0.0
        sectors.setdefault(_sector_of(parent_angle), []).append(nid)

    for sector in sorted(sectors):
        members = sectors[sector]
        start = sector * _SECTOR_WIDTH - math.pi
        count = max(1, len(members))
        for index, nid in enumerate(members):
            angle = start + _SECTOR_WIDTH * (index + 0.5) / count
            node = network.nodes[nid]
            node.x = radius * math.cos(angle)
            node.y = radius * math.sin(angle)


# ---------------------------------------------------------------------------
# Relaxation
# ---------------------------------------------------------------------------


def relax(
    network: StarNetwork,
    levels: list[list[int]],
    iterations: int = ITERATIONS,
) -> None:
    """Push crowded same-ring systems apart, then snap them back to their ring."""
    if len(network.nodes) <= 1:
        return

    for _ in range(iterations):
        for depth in range(1, len(levels)):
            _repel_level(network, levels[depth])

        for depth in range(1, len(levels)):
            radius = ring_radius(depth)
            for nid in levels[depth]:
                _snap_to_ring(network.nodes[nid], radius)


def _repel_level(network: StarNetwork, level: list[int]) -> None:
    nodes = [network.nodes[nid] for nid in level]
    for i, node_a in enumerate(nodes):
        for node_b in nodes[i + 1:]:
            dx = node_b.x - node_a.x
            dy = node_b.y - node_a.y
            dist = math.hypot(dx, dy)
            if dist >= REPULSION_THRESHOLD:
                continue
            if dist == 0.0:
                # Coincident: separate along the ring tangent at node_a
                dist = MIN_DISTANCE
                norm = math.hypot(node_a.x, node_a.y) or 1.0
                dx = -node_a.y / norm * dist
                dy = node_a.x / norm * dist
                if dx == 0.0 and dy == 0.0:
                    dx = dist
            force = REPULSION_CONSTANT / (dist * dist)
            force_x = dx / dist * force
            force_y = dy / dist * force
            node_a.x -= force_x
            node_a.y -= force_y
            node_b.x += force_x
            node_b.y += force_y


def _snap_to_ring(node: StarNode, radius: float) -> None:
    current = math.hypot(node.x, node.y)
    if current == 0.0:
        node.x, node.y = radius, 0.0
        return
    ratio = radius / current
    node.x *= ratio
    node.y *= ratio


def compute_layout(
    network: StarNetwork,
    root_id: int | None = None,
    iterations: int = ITERATIONS,
) -> Layout:
    """Place and relax ``network`` in place."""
    levels = place_hierarchical(network, root_id)
    relax(network, levels, iterations)
    root = choose_root(network, root_id)
    layout = Layout(network=network, levels=levels, root_id=root.id if root else None)
    logger.info(
        "Layout complete: %d systems on %d rings", len(network.nodes), layout.max_depth,
    )
    return layout
