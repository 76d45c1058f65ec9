"""Full-screen status messages: loading, empty map, extraction failure."""

from __future__ import annotations

import pygame

from ..constants import AMBER, CYAN, LIGHT_GREY, RED_ALERT
from ..states import AppState

_MESSAGES: dict[AppState, tuple[str, str, tuple[int, int, int]]] = {
    AppState.LOADING: (
        "Loading Data",
        "Extracting system connections and population data from database",
        CYAN,
    ),
    AppState.NO_SYSTEMS: (
        "No star systems found",
        "The selected race has not surveyed any systems in this game.",
        AMBER,
    ),
    AppState.ERROR: (
        "Error",
        "Failed to extract data from database.",
        RED_ALERT,
    ),
}


class StatusScreen:
    """Centered title, message and key hints for a non-map state."""

    def __init__(self, state: AppState, detail: str = "") -> None:
        self.state = state
        self.detail = detail
        self.font_title = pygame.font.Font(None, 56)
        self.font_body = pygame.font.Font(None, 28)
        self.font_hint = pygame.font.Font(None, 22)
        self.timer = 0.0

    def update(self, dt: float) -> None:
        self.timer += dt

    def draw(self, surface: pygame.Surface) -> None:
        title, body, color = _MESSAGES[self.state]
        cx = surface.get_width() // 2
        cy = surface.get_height() // 2

        if self.state == AppState.LOADING:
            body += "." * (int(self.timer * 2) % 4)

        title_surf = self.font_title.render(title, True, color)
        surface.blit(title_surf, title_surf.get_rect(center=(cx, cy - 40)))

        body_surf = self.font_body.render(body, True, LIGHT_GREY)
        surface.blit(body_surf, body_surf.get_rect(center=(cx, cy + 10)))

        if self.detail:
            detail_surf = self.font_hint.render(self.detail, True, LIGHT_GREY)
            detail_surf.set_alpha(150)
            surface.blit(detail_surf, detail_surf.get_rect(center=(cx, cy + 45)))

        if self.state != AppState.LOADING:
            hint = self.font_hint.render("F5 — Reload    ESC — Quit", True, LIGHT_GREY)
            surface.blit(hint, hint.get_rect(center=(cx, cy + 90)))
