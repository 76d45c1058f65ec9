"""Transient map UI state: hover, selection and search.

Kept apart from the network so that highlighting never touches node data.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from ..constants import MAX_SEARCH_RESULTS
from .network import StarNetwork, StarNode
from .viewport import Viewport


def search_systems(
    network: StarNetwork, term: str, limit: int = MAX_SEARCH_RESULTS,
) -> list[StarNode]:
    """Case-insensitive substring match on system names, first ``limit`` hits."""
    needle = term.strip().lower()
    if not needle:
        return []
    results: list[StarNode] = []
    for node in network.nodes.values():
        if needle in node.name.lower():
            results.append(node)
            if len(results) >= limit:
                break
    return results


@dataclass
class InteractionState:
    """Hover, selection and search state for one map view."""

    hovered_id: int | None = None
    selected_id: int | None = None
    search_visible: bool = False
    search_term: str = ""
    search_results: list[StarNode] = field(default_factory=list)

    def toggle_selection(self, node_id: int) -> None:
        if self.selected_id == node_id:
            self.selected_id = None
        else:
            self.selected_id = node_id

    def clear_selection(self) -> None:
        self.selected_id = None

    def highlighted_ids(self, network: StarNetwork) -> set[int]:
        """Hovered node, selected node and the selected node's neighbours."""
        ids: set[int] = set()
        if self.hovered_id is not None:
            ids.add(self.hovered_id)
        if self.selected_id is not None:
            ids.add(self.selected_id)
            ids.update(n.id for n in network.neighbors(self.selected_id))
        return ids

    # ------------------------------------------------------------------
    # Search
    # ------------------------------------------------------------------

    def toggle_search(self) -> None:
        self.search_visible = not self.search_visible
        self.search_term = ""
        self.search_results = []

    def set_search_term(self, term: str, network: StarNetwork) -> None:
        self.search_term = term
        self.search_results = search_systems(network, term)

    def close_search(self) -> None:
        self.search_visible = False
        self.search_term = ""
        self.search_results = []


def reset_view(viewport: Viewport, interaction: InteractionState) -> None:
    """Identity transform and no selection."""
    viewport.reset()
    interaction.clear_selection()
