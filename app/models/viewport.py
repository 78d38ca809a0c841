"""
ViewportData - pan and zoom of the editing canvas.

This module contains no Qt dependencies. The viewport is passed to the
operations that need it instead of living in global state.
"""

from dataclasses import dataclass

from .geometry import GRID_SIZE, viewport_to_world, world_from_viewport

ZOOM_MIN = 0.2
ZOOM_MAX = 4.0
ZOOM_STEP_IN = 1.1
ZOOM_STEP_OUT = 0.9


def clamp_zoom(zoom: float) -> float:
    """Limit a zoom factor to [ZOOM_MIN, ZOOM_MAX]. NaN maps to ZOOM_MIN."""
    return min(ZOOM_MAX, max(ZOOM_MIN, zoom))


@dataclass
class ViewportData:
    """Pan offset (viewport pixels) and zoom factor."""

    pan_x: float = 0.0
    pan_y: float = 0.0
    zoom: float = 1.0

    @property
    def pan(self) -> tuple[float, float]:
        return (self.pan_x, self.pan_y)

    def set_pan(self, x: float, y: float) -> None:
        self.pan_x = x
        self.pan_y = y

    def zoom_by_wheel(self, delta_y: float) -> float:
        """
        Apply one wheel step.

        Scrolling up (negative delta_y) zooms in. The result is clamped
        to [ZOOM_MIN, ZOOM_MAX].
        """
        factor = ZOOM_STEP_IN if -delta_y > 0 else ZOOM_STEP_OUT
        self.zoom = clamp_zoom(self.zoom * factor)
        return self.zoom

    def to_world(self, point: tuple[float, float], grid_size: float = GRID_SIZE) -> tuple[float, float]:
        """Snapped world position of a viewport point."""
        return world_from_viewport(point, self.pan, self.zoom, grid_size)

    def to_world_unsnapped(self, point: tuple[float, float]) -> tuple[float, float]:
        return viewport_to_world(point, self.pan, self.zoom)
