"""Map legend overlay — node colors and jump lane styles."""

from __future__ import annotations

import pygame

from ..constants import (
    CAPITAL_COLOR,
    FOREIGN_COLONY_COLOR,
    GATE_COLOR,
    LANE_COLOR,
    LIGHT_GREY,
    MINOR_COLONY_COLOR,
    PANEL_BG,
    PANEL_BORDER,
    POPULATION_TIERS,
    UNINHABITED_COLOR,
    WHITE,
)
from ..models.network import StarNode
from .colors import blend, hex_to_rgb

_TIER_LABELS = [
    "Large Colony (>100 million)",
    "Medium Colony (10-100 million)",
    "Small Colony (1-10 million)",
]


class MapLegend:
    """Legend panel drawn in the bottom-left corner of the map."""

    def __init__(self) -> None:
        self.font = pygame.font.Font(None, 20)
        self.font_title = pygame.font.Font(None, 22)
        self.line_height = 18
        self.padding = 8

    def _entries(
        self, capital: StarNode | None, faction_colors: dict[str, str],
    ) -> list[tuple[str, str]]:
        if capital is not None:
            capital_label = f"{capital.name} ({capital.population:.2f} million)"
        else:
            capital_label = "Capital System"
        entries = [(capital_label, CAPITAL_COLOR)]
        if faction_colors:
            entries += [(f"{name} Colony", color) for name, color in faction_colors.items()]
        else:
            entries.append(("Alien-Controlled Colony", FOREIGN_COLONY_COLOR))
        entries += [(label, color) for label, (_, color) in zip(_TIER_LABELS, POPULATION_TIERS)]
        entries.append(("Minor Colony (<1 million)", MINOR_COLONY_COLOR))
        entries.append(("Uninhabited System", UNINHABITED_COLOR))
        return entries

    def draw(
        self,
        surface: pygame.Surface,
        capital: StarNode | None,
        faction_colors: dict[str, str],
    ) -> None:
        entries = self._entries(capital, faction_colors)
        lanes = [
            ("Jump Gate Connection", GATE_COLOR, GATE_COLOR),
            ("Single Jump Gate", GATE_COLOR, LANE_COLOR),
            ("Unstabilized Connection", LANE_COLOR, LANE_COLOR),
        ]

        rows = len(entries) + len(lanes) + 2
        w = 260
        h = rows * self.line_height + self.padding * 2 + 6
        x = 12
        y = surface.get_height() - h - 12

        panel = pygame.Surface((w, h), pygame.SRCALPHA)
        panel.fill(PANEL_BG)
        surface.blit(panel, (x, y))
        pygame.draw.rect(surface, PANEL_BORDER, (x, y, w, h), 1, border_radius=4)

        cy = y + self.padding
        surface.blit(self.font_title.render("Legend:", True, WHITE), (x + self.padding, cy))
        cy += self.line_height
        for label, color in entries:
            pygame.draw.circle(surface, hex_to_rgb(color), (x + 16, cy + 7), 5)
            surface.blit(self.font.render(label, True, LIGHT_GREY), (x + 28, cy))
            cy += self.line_height

        cy += 6
        surface.blit(self.font_title.render("Connections:", True, WHITE), (x + self.padding, cy))
        cy += self.line_height
        for label, start, end in lanes:
            self._draw_swatch(surface, hex_to_rgb(start), hex_to_rgb(end), x + 8, cy + 7)
            surface.blit(self.font.render(label, True, LIGHT_GREY), (x + 50, cy))
            cy += self.line_height

    def _draw_swatch(self, surface, start, end, x: int, y: int) -> None:
        length = 36
        for i in range(length):
            color = blend(start, end, i / (length - 1))
            pygame.draw.line(surface, color, (x + i, y), (x + i + 1, y), 2)
