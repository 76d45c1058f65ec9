"""Pan/zoom transform for the star map."""

from __future__ import annotations

from ..constants import MAX_SCALE, MIN_SCALE, SCREEN_HEIGHT, SCREEN_WIDTH


class Viewport:
    """Pan offset and zoom factor mapping model space onto the screen.

    A model point ``(mx, my)`` is drawn at
    ``(width / 2 + x + mx * scale, height / 2 + y + my * scale)``, so the
    identity transform shows the model origin at the viewport centre.
    """

    def __init__(self, width: int = SCREEN_WIDTH, height: int = SCREEN_HEIGHT) -> None:
        self.width = width
        self.height = height
        self.x = 0.0
        self.y = 0.0
        self.scale = 1.0
        self.min_scale = MIN_SCALE
        self.max_scale = MAX_SCALE

        self._dragging = False
        self._drag_last: tuple[float, float] = (0.0, 0.0)

    @property
    def center(self) -> tuple[float, float]:
        return self.width / 2, self.height / 2

    @property
    def dragging(self) -> bool:
        return self._dragging

    def resize(self, width: int, height: int) -> None:
        self.width = width
        self.height = height

    # ------------------------------------------------------------------
    # Coordinate conversion
    # ------------------------------------------------------------------

    def to_screen(self, mx: float, my: float) -> tuple[float, float]:
        cx, cy = self.center
        return cx + self.x + mx * self.scale, cy + self.y + my * self.scale

    def to_model(self, sx: float, sy: float) -> tuple[float, float]:
        cx, cy = self.center
        return (sx - cx - self.x) / self.scale, (sy - cy - self.y) / self.scale

    # ------------------------------------------------------------------
    # Zoom
    # ------------------------------------------------------------------

    def zoom_at(self, sx: float, sy: float, delta: float) -> bool:
        """Zoom by ``delta`` keeping the model point under ``(sx, sy)`` fixed.

        Returns False, leaving the transform untouched, when the new scale
        would fall outside the allowed range.
        """
        new_scale = self.scale * delta
        if new_scale < self.min_scale or new_scale > self.max_scale:
            return False
        cx, cy = self.center
        px, py = sx - cx, sy - cy
        self.x = px - (px - self.x) * delta
        self.y = py - (py - self.y) * delta
        self.scale = new_scale
        return True

    def zoom_centered(self, delta: float) -> bool:
        cx, cy = self.center
        return self.zoom_at(cx, cy, delta)

    # ------------------------------------------------------------------
    # Pan
    # ------------------------------------------------------------------

    def begin_drag(self, sx: float, sy: float) -> None:
        self._dragging = True
        self._drag_last = (sx, sy)

    def drag_to(self, sx: float, sy: float) -> None:
        if not self._dragging:
            return
        lx, ly = self._drag_last
        self.pan(sx - lx, sy - ly)
        self._drag_last = (sx, sy)

    def end_drag(self) -> None:
        self._dragging = False

    def pan(self, dx: float, dy: float) -> None:
        self.x += dx
        self.y += dy

    # ------------------------------------------------------------------
    # Commands
    # ------------------------------------------------------------------

    def reset(self) -> None:
        self.x = 0.0
        self.y = 0.0
        self.scale = 1.0
        self._dragging = False

    def center_on(self, mx: float, my: float) -> None:
        """Pan so the model point ``(mx, my)`` lands on the viewport centre."""
        self.x = -mx * self.scale
        self.y = -my * self.scale
