"""Map styling: turns a laid-out network into drawable node/edge glyphs.

Nothing here touches pygame; the star map screen projects the glyphs through
the viewport and draws them.
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from ..constants import (
    CAPITAL_COLOR,
    FOREIGN_COLONY_COLOR,
    GATE_COLOR,
    LANE_COLOR,
    MINOR_COLONY_COLOR,
    POPULATION_TIERS,
    UNINHABITED_COLOR,
)
from ..models.interaction import InteractionState
from ..models.layout import Layout, ring_radius
from ..models.network import Edge, StarNode
from .colors import RGB, hex_to_rgb


@dataclass
class NodeGlyph:
    node_id: int
    x: float
    y: float
    size: float
    color: RGB
    label: str
    highlighted: bool = False
    selected: bool = False
    glow: bool = False  # Colonised systems get a soft halo


@dataclass
class EdgeGlyph:
    x1: float
    y1: float
    x2: float
    y2: float
    color_a: RGB  # Color at the (x1, y1) end
    color_b: RGB
    width: float
    alpha: int

    @property
    def is_gradient(self) -> bool:
        return self.color_a != self.color_b


@dataclass
class Scene:
    rings: list[float] = field(default_factory=list)
    edges: list[EdgeGlyph] = field(default_factory=list)
    nodes: list[NodeGlyph] = field(default_factory=list)

    @property
    def empty(self) -> bool:
        return not self.nodes


def node_size(node: StarNode) -> float:
    if not node.has_colony:
        return 3.0
    # Logarithmic so the homeworld does not swamp the map
    return 4.0 + 3.0 * math.log10(node.population + 1)


def node_color(
    node: StarNode,
    root_id: int | None = None,
    faction_colors: dict[str, str] | None = None,
) -> str:
    if node.id == root_id:
        return CAPITAL_COLOR
    factions = node.factions
    if factions:
        return (faction_colors or {}).get(factions[0], FOREIGN_COLONY_COLOR)
    if node.has_colony:
        for threshold, color in POPULATION_TIERS:
            if node.population > threshold:
                return color
        return MINOR_COLONY_COLOR
    return UNINHABITED_COLOR


def node_label(node: StarNode) -> str:
    if node.has_colony:
        return f"{node.name} ({node.population:.1f})"
    return node.name


def edge_colors(edge: Edge) -> tuple[str, str]:
    """Colors at the ``a`` and ``b`` ends; a gated end is drawn in gate color."""
    color_a = GATE_COLOR if edge.gate_from_a else LANE_COLOR
    color_b = GATE_COLOR if edge.gate_from_b else LANE_COLOR
    return color_a, color_b


def build_scene(
    layout: Layout,
    interaction: InteractionState | None = None,
    faction_colors: dict[str, str] | None = None,
) -> Scene:
    """Glyphs in model coordinates for the current layout and UI state."""
    interaction = interaction or InteractionState()
    network = layout.network
    scene = Scene(rings=[ring_radius(d) for d in range(1, len(layout.levels))])
    highlighted = interaction.highlighted_ids(network)
    selected = interaction.selected_id

    for edge in network.edges:
        node_a = network.nodes.get(edge.a)
        node_b = network.nodes.get(edge.b)
        if node_a is None or node_b is None:
            continue
        active = selected is not None and edge.touches(selected)
        color_a, color_b = edge_colors(edge)
        scene.edges.append(
            EdgeGlyph(
                x1=node_a.x,
                y1=node_a.y,
                x2=node_b.x,
                y2=node_b.y,
                color_a=hex_to_rgb(color_a),
                color_b=hex_to_rgb(color_b),
                width=2.0 if active else 1.0,
                alpha=255 if active else 150,
            )
        )

    for node in network.nodes.values():
        scene.nodes.append(
            NodeGlyph(
                node_id=node.id,
                x=node.x,
                y=node.y,
                size=node_size(node),
                color=hex_to_rgb(node_color(node, layout.root_id, faction_colors)),
                label=node_label(node),
                highlighted=node.id in highlighted,
                selected=node.id == selected,
                glow=node.has_colony,
            )
        )

    return scene
