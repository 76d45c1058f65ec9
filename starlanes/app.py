"""Starlanes — main application module (state router)."""

from __future__ import annotations

import logging
from collections.abc import Callable
from concurrent.futures import Future, ThreadPoolExecutor

import pygame

from .constants import BACKGROUND, FPS, SCREEN_HEIGHT, SCREEN_WIDTH, TITLE
from .models.session import MapData, MapSession
from .models.viewport import Viewport
from .screens.star_map import StarMapScreen
from .screens.status import StatusScreen
from .states import AppState

logger = logging.getLogger(__name__)


class App:
    """Owns the window and routes events between the map and status screens.

    ``loader`` is called on a worker thread and must return the resolved
    map input; everything else runs on the pygame thread.
    """

    def __init__(
        self,
        loader: Callable[[], MapData],
        width: int = SCREEN_WIDTH,
        height: int = SCREEN_HEIGHT,
        on_loaded: Callable[[MapData], None] | None = None,
    ) -> None:
        pygame.init()
        self.screen = pygame.display.set_mode((width, height), pygame.RESIZABLE)
        pygame.display.set_caption(TITLE)
        self.clock = pygame.time.Clock()
        self.running = True

        self.loader = loader
        self.on_loaded = on_loaded
        self.session = MapSession()
        self.viewport = Viewport(width, height)
        self._executor = ThreadPoolExecutor(max_workers=1)
        self._pending: list[tuple[int, Future]] = []

        self.state = AppState.LOADING
        self.status_screen = StatusScreen(AppState.LOADING)
        self.star_map_screen: StarMapScreen | None = None

        self.reload()

    @property
    def window_size(self) -> tuple[int, int]:
        return self.viewport.width, self.viewport.height

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    def reload(self) -> None:
        """Request fresh map data; any in-flight request becomes stale."""
        token = self.session.begin()
        logger.info("Loading map data (request %d)", token)
        self._pending.append((token, self._executor.submit(self.loader)))
        self._set_status(AppState.LOADING)

    def _poll_loads(self) -> None:
        still_pending = []
        for token, future in self._pending:
            if not future.done():
                still_pending.append((token, future))
                continue
            if not self.session.is_current(token):
                logger.debug("Dropping result of superseded request %d", token)
                continue
            self._finish_load(token, future)
        self._pending = still_pending

    def _finish_load(self, token: int, future: Future) -> None:
        try:
            data = future.result()
        except Exception as exc:
            # Upstream failures are reported as one generic error state
            logger.exception("Map data extraction failed")
            self._set_status(AppState.ERROR, str(exc))
            return

        layout = self.session.commit(token, data)
        if layout is None:
            return
        if not layout.network.nodes:
            self._set_status(AppState.NO_SYSTEMS)
            return

        self.viewport.reset()
        self.star_map_screen = StarMapScreen(layout, self.viewport)
        self.state = AppState.STAR_MAP
        if self.on_loaded is not None:
            self.on_loaded(data)

    def _set_status(self, state: AppState, detail: str = "") -> None:
        self.state = state
        self.status_screen = StatusScreen(state, detail)

    # ------------------------------------------------------------------
    # Main loop
    # ------------------------------------------------------------------

    def run(self) -> None:
        try:
            while self.running:
                dt = self.clock.tick(FPS) / 1000.0
                self._handle_events()
                self._update(dt)
                self._draw()
        finally:
            self._executor.shutdown(wait=False, cancel_futures=True)
            pygame.quit()

    def _handle_events(self) -> None:
        for event in pygame.event.get():
            if event.type == pygame.QUIT:
                self.running = False
                return

            if event.type == pygame.VIDEORESIZE:
                self.viewport.resize(event.w, event.h)

            if self.state == AppState.STAR_MAP and self.star_map_screen:
                if (
                    event.type == pygame.KEYDOWN
                    and event.key == pygame.K_ESCAPE
                    and not self.star_map_screen.interaction.search_visible
                ):
                    self.running = False
                    return
                self.star_map_screen.handle_events(event)
            elif event.type == pygame.KEYDOWN:
                if event.key == pygame.K_ESCAPE:
                    self.running = False
                    return
                if event.key == pygame.K_F5 and self.state != AppState.LOADING:
                    self.reload()

    def _update(self, dt: float) -> None:
        self._poll_loads()

        if self.state == AppState.STAR_MAP and self.star_map_screen:
            self.star_map_screen.update(dt)
            if self.star_map_screen.reload_requested:
                self.star_map_screen.reload_requested = False
                self.reload()
        else:
            self.status_screen.update(dt)

    def _draw(self) -> None:
        self.screen.fill(BACKGROUND)

        if self.state == AppState.STAR_MAP and self.star_map_screen:
            self.star_map_screen.draw(self.screen)
        else:
            self.status_screen.draw(self.screen)

        pygame.display.flip()
