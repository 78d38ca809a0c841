"""
Geometry helpers - grid snapping, rotation and pin position resolution.

This module contains no Qt dependencies. Points are (x, y) tuples in
world coordinates unless stated otherwise.
"""

import math
from typing import Iterable, Optional

GRID_SIZE = 10

# Maximum Manhattan distance (world units) for a click to land on a pin
HIT_TOLERANCE = 8


def snap(value: float, grid_size: float = GRID_SIZE) -> float:
    """
    Round a coordinate to the nearest multiple of grid_size.

    Ties are rounded up (toward positive infinity), so snap(5) == 10
    and snap(-5) == 0.
    """
    return math.floor(value / grid_size + 0.5) * grid_size


def snap_point(point: tuple[float, float], grid_size: float = GRID_SIZE) -> tuple[float, float]:
    """Snap both coordinates of a point."""
    return (snap(point[0], grid_size), snap(point[1], grid_size))


def rotate(point: tuple[float, float], degrees: float) -> tuple[float, float]:
    """Rotate a point about the origin by the given angle in degrees."""
    rad = math.radians(degrees)
    cos_a = math.cos(rad)
    sin_a = math.sin(rad)
    x, y = point
    return (x * cos_a - y * sin_a, x * sin_a + y * cos_a)


def pin_absolute_position(component, pin) -> tuple[float, float]:
    """
    Resolve a pin's world position.

    The pin's local offset is rotated by the component rotation and then
    translated by the component position. Every consumer that needs to know
    where a pin sits (wire segments, hit-testing, previews) goes through here.
    """
    dx, dy = rotate((pin.x, pin.y), component.rotation)
    return (component.x + dx, component.y + dy)


def viewport_to_world(point: tuple[float, float], pan: tuple[float, float], zoom: float) -> tuple[float, float]:
    """Invert the viewport transform: (point - pan) / zoom. Not snapped."""
    return ((point[0] - pan[0]) / zoom, (point[1] - pan[1]) / zoom)


def world_from_viewport(
    point: tuple[float, float],
    pan: tuple[float, float],
    zoom: float,
    grid_size: float = GRID_SIZE,
) -> tuple[float, float]:
    """Convert a viewport point to a snapped world point."""
    return snap_point(viewport_to_world(point, pan, zoom), grid_size)


def drag_delta(start: tuple[float, float], current: tuple[float, float], zoom: float) -> tuple[float, float]:
    """
    World-space offset between two viewport points.

    Not snapped: snapping happens when the resulting position is committed.
    """
    return ((current[0] - start[0]) / zoom, (current[1] - start[1]) / zoom)


def hit_test_pin(
    components: Iterable,
    point: tuple[float, float],
    tolerance: float = HIT_TOLERANCE,
) -> Optional[tuple[str, str]]:
    """
    Find the pin under a world point.

    Components are checked in order, then their pins in order; the first
    pin within `tolerance` (Manhattan distance) wins.

    Returns:
        (component_id, pin_id) of the hit pin, or None.
    """
    for component in components:
        for pin in component.pins:
            px, py = pin_absolute_position(component, pin)
            if abs(px - point[0]) + abs(py - point[1]) <= tolerance:
                return (component.id, pin.id)
    return None
