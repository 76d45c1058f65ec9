"""Star map screen — pan/zoom view of the laid-out jump network."""

from __future__ import annotations

import logging
import math

import pygame

from ..constants import (
    AMBER,
    BACKGROUND,
    BUTTON_ZOOM_IN,
    BUTTON_ZOOM_OUT,
    CAPITAL_COLOR,
    CYAN,
    DIM_GREY,
    GATE_COLOR,
    LABEL_GREY,
    LANE_COLOR,
    LIGHT_GREY,
    MINOR_COLONY_COLOR,
    PANEL_BG,
    PANEL_BORDER,
    POPULATION_TIERS,
    RING_GREY,
    UNINHABITED_COLOR,
    WHEEL_ZOOM_IN,
    WHEEL_ZOOM_OUT,
    WHITE,
)
from ..models.interaction import InteractionState, reset_view
from ..models.layout import Layout
from ..models.network import StarNode
from ..models.viewport import Viewport
from ..ui.colors import assign_faction_colors, blend, rgb_to_hex
from ..ui.legend import MapLegend
from ..ui.render import EdgeGlyph, NodeGlyph, Scene, build_scene

logger = logging.getLogger(__name__)

_GRADIENT_STEPS = 8


class StarMapScreen:
    """Interactive star map with pan/zoom, selection and search."""

    def __init__(self, layout: Layout, viewport: Viewport) -> None:
        self.layout = layout
        self.network = layout.network
        self.viewport = viewport
        self.interaction = InteractionState()
        self.legend = MapLegend()

        self.font_label = pygame.font.Font(None, 18)
        self.font_label_bold = pygame.font.Font(None, 22)
        self.font_info = pygame.font.Font(None, 22)
        self.font_title = pygame.font.Font(None, 28)
        self.font_button = pygame.font.Font(None, 26)

        factions = [f for node in self.network.nodes.values() for f in node.factions]
        reserved = [
            CAPITAL_COLOR, MINOR_COLONY_COLOR, UNINHABITED_COLOR, GATE_COLOR, LANE_COLOR,
            rgb_to_hex(*BACKGROUND),
        ] + [color for _, color in POPULATION_TIERS]
        self.faction_colors = assign_faction_colors(factions, reserved)
        if self.faction_colors:
            logger.debug("Faction colors: %s", self.faction_colors)

        self.reload_requested = False
        self._buttons: list[tuple[pygame.Rect, str, str]] = []
        self._search_rows: list[tuple[pygame.Rect, int]] = []
        self._layout_buttons()

    @property
    def root(self) -> StarNode | None:
        if self.layout.root_id is None:
            return None
        return self.network.get(self.layout.root_id)

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def zoom_in(self) -> None:
        self.viewport.zoom_centered(BUTTON_ZOOM_IN)

    def zoom_out(self) -> None:
        self.viewport.zoom_centered(BUTTON_ZOOM_OUT)

    def reset_view(self) -> None:
        reset_view(self.viewport, self.interaction)

    def toggle_search(self) -> None:
        self.interaction.toggle_search()
        if self.interaction.search_visible:
            pygame.key.start_text_input()
        else:
            pygame.key.stop_text_input()

    def select_system(self, system_id: int) -> None:
        """Select a system from search and centre the view on it."""
        node = self.network.get(system_id)
        if node is None:
            return
        self.interaction.selected_id = system_id
        self.interaction.close_search()
        pygame.key.stop_text_input()
        self.viewport.center_on(node.x, node.y)

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def handle_events(self, event: pygame.event.Event) -> None:
        if event.type == pygame.VIDEORESIZE:
            # Viewport is already resized by the app
            self._layout_buttons()
        elif event.type == pygame.MOUSEWHEEL:
            mx, my = pygame.mouse.get_pos()
            delta = WHEEL_ZOOM_IN if event.y > 0 else WHEEL_ZOOM_OUT
            self.viewport.zoom_at(mx, my, delta)
        elif event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            self._handle_click(event.pos)
        elif event.type == pygame.MOUSEBUTTONUP and event.button == 1:
            self.viewport.end_drag()
        elif event.type == pygame.MOUSEMOTION:
            self.viewport.drag_to(*event.pos)
        elif event.type == pygame.TEXTINPUT and self.interaction.search_visible:
            self.interaction.set_search_term(
                self.interaction.search_term + event.text, self.network,
            )
        elif event.type == pygame.KEYDOWN:
            self._handle_key(event)

    def _handle_key(self, event: pygame.event.Event) -> None:
        if self.interaction.search_visible:
            if event.key == pygame.K_ESCAPE:
                self.toggle_search()
            elif event.key == pygame.K_BACKSPACE:
                self.interaction.set_search_term(
                    self.interaction.search_term[:-1], self.network,
                )
            elif event.key == pygame.K_RETURN and self.interaction.search_results:
                self.select_system(self.interaction.search_results[0].id)
            return

        if event.key in (pygame.K_PLUS, pygame.K_EQUALS, pygame.K_KP_PLUS):
            self.zoom_in()
        elif event.key in (pygame.K_MINUS, pygame.K_KP_MINUS):
            self.zoom_out()
        elif event.key == pygame.K_HOME:
            self.reset_view()
        elif event.key == pygame.K_SLASH or (
            event.key == pygame.K_f and event.mod & pygame.KMOD_CTRL
        ):
            self.toggle_search()
        elif event.key == pygame.K_F5:
            self.reload_requested = True

    def _handle_click(self, pos: tuple[int, int]) -> None:
        for rect, _, action in self._buttons:
            if rect.collidepoint(pos):
                getattr(self, action)()
                return
        for rect, system_id in self._search_rows:
            if rect.collidepoint(pos):
                self.select_system(system_id)
                return

        clicked = self._system_at_screen_pos(*pos)
        if clicked is not None:
            self.interaction.toggle_selection(clicked.id)
        else:
            self.viewport.begin_drag(*pos)

    def update(self, dt: float) -> None:
        if self.viewport.dragging:
            self.interaction.hovered_id = None
            return
        mx, my = pygame.mouse.get_pos()
        hovered = self._system_at_screen_pos(mx, my)
        self.interaction.hovered_id = hovered.id if hovered else None

    # ------------------------------------------------------------------
    # Hit testing
    # ------------------------------------------------------------------

    def _system_at_screen_pos(self, mx: float, my: float) -> StarNode | None:
        """Find the system nearest to screen coords, within click radius."""
        best: StarNode | None = None
        best_dist = float("inf")
        for node in self.network.nodes.values():
            sx, sy = self.viewport.to_screen(node.x, node.y)
            dist = math.hypot(mx - sx, my - sy)
            hit_radius = max(8.0, 6.0 * self.viewport.scale)
            if dist < hit_radius and dist < best_dist:
                best = node
                best_dist = dist
        return best

    # ------------------------------------------------------------------
    # Drawing
    # ------------------------------------------------------------------

    def draw(self, surface: pygame.Surface) -> None:
        scene = build_scene(self.layout, self.interaction, self.faction_colors)
        self._search_rows = []

        self._draw_rings(surface, scene)
        self._draw_edges(surface, scene.edges)
        self._draw_nodes(surface, scene.nodes)

        self.legend.draw(surface, self.root, self.faction_colors)
        self._draw_buttons(surface)

        selected = self.network.get(self.interaction.selected_id) if (
            self.interaction.selected_id is not None
        ) else None
        hovered = self.network.get(self.interaction.hovered_id) if (
            self.interaction.hovered_id is not None
        ) else None

        if self.interaction.search_visible:
            self._draw_search(surface)
        elif selected is not None:
            self._draw_system_panel(surface, selected)
        if hovered is not None and selected is None:
            self._draw_tooltip(surface, hovered)

    def _draw_rings(self, surface: pygame.Surface, scene: Scene) -> None:
        cx, cy = self.viewport.to_screen(0.0, 0.0)
        for radius in scene.rings:
            r = radius * self.viewport.scale
            dashes = max(12, int(math.tau * r / 10))
            step = math.tau / dashes
            for i in range(0, dashes, 2):
                a1, a2 = i * step, (i + 1) * step
                pygame.draw.line(
                    surface, RING_GREY,
                    (cx + r * math.cos(a1), cy + r * math.sin(a1)),
                    (cx + r * math.cos(a2), cy + r * math.sin(a2)),
                )

    def _draw_edges(self, surface: pygame.Surface, edges: list[EdgeGlyph]) -> None:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for edge in edges:
            x1, y1 = self.viewport.to_screen(edge.x1, edge.y1)
            x2, y2 = self.viewport.to_screen(edge.x2, edge.y2)
            width = max(1, round(edge.width))
            if not edge.is_gradient:
                pygame.draw.line(overlay, (*edge.color_a, edge.alpha), (x1, y1), (x2, y2), width)
                continue
            for i in range(_GRADIENT_STEPS):
                t0 = i / _GRADIENT_STEPS
                t1 = (i + 1) / _GRADIENT_STEPS
                color = blend(edge.color_a, edge.color_b, (t0 + t1) / 2)
                pygame.draw.line(
                    overlay, (*color, edge.alpha),
                    (x1 + (x2 - x1) * t0, y1 + (y2 - y1) * t0),
                    (x1 + (x2 - x1) * t1, y1 + (y2 - y1) * t1),
                    width,
                )
        surface.blit(overlay, (0, 0))

    def _draw_nodes(self, surface: pygame.Surface, nodes: list[NodeGlyph]) -> None:
        width, height = surface.get_size()
        scale = self.viewport.scale
        glow = pygame.Surface((width, height), pygame.SRCALPHA)
        visible: list[tuple[NodeGlyph, float, float, int]] = []

        for glyph in nodes:
            sx, sy = self.viewport.to_screen(glyph.x, glyph.y)
            radius = max(1, int(glyph.size * scale))
            # Skip if off screen
            if sx < -50 or sx > width + 50 or sy < -50 or sy > height + 50:
                continue
            visible.append((glyph, sx, sy, radius))
            if glyph.glow:
                alpha = 180 if glyph.highlighted else 75
                pygame.draw.circle(glow, (*glyph.color, alpha), (sx, sy), int(radius * 2.5))
        surface.blit(glow, (0, 0))

        for glyph, sx, sy, radius in visible:
            pygame.draw.circle(surface, glyph.color, (sx, sy), radius)
            if glyph.highlighted:
                pygame.draw.circle(surface, WHITE, (sx, sy), radius + 2, 1)
            if glyph.selected:
                pygame.draw.circle(surface, CYAN, (sx, sy), radius + 5, 2)

            # Labels for everything when zoomed in, otherwise only notable systems
            if glyph.highlighted or glyph.glow or scale >= 0.6:
                self._draw_label(surface, glyph, sx, sy, radius)

    def _draw_label(
        self, surface: pygame.Surface, glyph: NodeGlyph, sx: float, sy: float, radius: int,
    ) -> None:
        if glyph.highlighted:
            font, color = self.font_label_bold, WHITE
        else:
            font, color = self.font_label, LABEL_GREY if glyph.glow else DIM_GREY
        text = font.render(glyph.label, True, color)
        shadow = font.render(glyph.label, True, (0, 0, 0))
        tx = sx - text.get_width() // 2
        ty = sy - radius - 8 - text.get_height()
        surface.blit(shadow, (tx + 1, ty + 1))
        surface.blit(text, (tx, ty))

    # ------------------------------------------------------------------
    # UI panels
    # ------------------------------------------------------------------

    def _layout_buttons(self) -> None:
        w, h = 60, 36
        x = self.viewport.width - w - 16
        actions = [("+", "zoom_in"), ("-", "zoom_out"), ("Home", "reset_view"), ("Find", "toggle_search")]
        self._buttons = [
            (pygame.Rect(x, 16 + i * (h + 8), w, h), label, action)
            for i, (label, action) in enumerate(actions)
        ]

    def _draw_buttons(self, surface: pygame.Surface) -> None:
        mx, my = pygame.mouse.get_pos()
        for rect, label, _ in self._buttons:
            hovered = rect.collidepoint(mx, my)
            pygame.draw.rect(surface, (55, 65, 81) if hovered else (31, 41, 55), rect, border_radius=18)
            text = self.font_button.render(label, True, WHITE)
            surface.blit(text, text.get_rect(center=rect.center))

    def _panel(self, surface: pygame.Surface, x: int, y: int, w: int, h: int) -> None:
        bg = pygame.Surface((w, h), pygame.SRCALPHA)
        bg.fill(PANEL_BG)
        surface.blit(bg, (x, y))
        pygame.draw.rect(surface, PANEL_BORDER, (x, y, w, h), 1, border_radius=6)

    def _draw_search(self, surface: pygame.Surface) -> None:
        x, y, w = 16, 16, 280
        line_height = 26
        results = self.interaction.search_results
        h = 56 + len(results) * line_height
        self._panel(surface, x, y, w, h)

        box = pygame.Rect(x + 10, y + 10, w - 20, 32)
        pygame.draw.rect(surface, (55, 65, 81), box, border_radius=4)
        term = self.interaction.search_term
        text = self.font_info.render(term or "Search star systems...", True, WHITE if term else DIM_GREY)
        surface.blit(text, (box.x + 8, box.y + 8))

        mx, my = pygame.mouse.get_pos()
        for i, node in enumerate(results):
            row = pygame.Rect(x + 10, y + 48 + i * line_height, w - 20, line_height)
            if row.collidepoint(mx, my):
                pygame.draw.rect(surface, (75, 85, 99), row)
            label = f"{node.name} ({node.degree} connections)"
            surface.blit(self.font_info.render(label, True, LIGHT_GREY), (row.x + 6, row.y + 5))
            self._search_rows.append((row, node.id))

    def _draw_system_panel(self, surface: pygame.Surface, node: StarNode) -> None:
        """Top-left panel with details of the selected system."""
        lines: list[tuple[str, tuple[int, int, int]]] = [
            (f"System ID: {node.id}", LIGHT_GREY),
            (f"Connections: {node.degree}", LIGHT_GREY),
        ]
        if node.has_colony:
            lines.append((f"Total Population: {node.population:.2f} million", WHITE))
            lines.append(("Colonies:", AMBER))
            for colony in node.colonies:
                body = f" ({colony.body_name})" if colony.body_name else ""
                owner = f" [{colony.controlled_by}]" if colony.controlled_by else ""
                lines.append((f"  {colony.name}{body}: {colony.population:.2f} million{owner}", LIGHT_GREY))
        lines.append(("Connected to:", AMBER))
        for neighbor in self.network.neighbors(node.id):
            pop = f" (Pop: {neighbor.population:.1f})" if neighbor.has_colony else ""
            lines.append((f"  {neighbor.name}{pop}", LIGHT_GREY))

        line_height = 22
        w = 340
        h = 48 + len(lines) * line_height
        x, y = 16, 16
        self._panel(surface, x, y, w, h)
        surface.blit(self.font_title.render(node.name, True, AMBER), (x + 12, y + 12))
        for i, (line, color) in enumerate(lines):
            surface.blit(self.font_info.render(line, True, color), (x + 12, y + 42 + i * line_height))

    def _draw_tooltip(self, surface: pygame.Surface, node: StarNode) -> None:
        text = node.name
        if node.has_colony:
            text += f" - Population: {node.population:.1f} million - Colonies: {len(node.colonies)}"
        surf = self.font_info.render(text, True, WHITE)
        sx, sy = self.viewport.to_screen(node.x, node.y)
        w, h = surf.get_width() + 16, surf.get_height() + 10
        tx = min(sx, surface.get_width() - w - 10)
        ty = max(10, sy - 30 - h)
        self._panel(surface, int(tx), int(ty), w, h)
        surface.blit(surf, (tx + 8, ty + 5))
