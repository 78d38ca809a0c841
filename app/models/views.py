"""
Read-only projections of a DesignModel for side panels.

This module contains no Qt dependencies.
"""

from collections import Counter
from typing import Iterable, Optional

from .component import ComponentData, ComponentKind
from .netlist import NetData


def bill_of_materials(components: Iterable[ComponentData]) -> list[tuple[ComponentKind, int]]:
    """
    Count components per kind.

    Returns:
        List of (kind, quantity) in order of each kind's first appearance.
    """
    counts = Counter(c.kind for c in components)
    return list(counts.items())


def selection_properties(design, component_id: Optional[str]) -> Optional[dict]:
    """Properties shown for the selected component, or None if nothing valid is selected."""
    if component_id is None:
        return None
    component = design.components.get(component_id)
    if component is None:
        return None
    return {
        "id": component.id,
        "kind": component.kind.value,
        "label": component.label,
        "x": component.x,
        "y": component.y,
        "rotation": component.rotation,
        "pins": [pin.name for pin in component.pins],
    }


def describe_pin(design, component_id: str, pin_id: str) -> str:
    """Human-readable 'LABEL.PIN' name; unresolvable parts show as '?'."""
    component = design.components.get(component_id)
    if component is None:
        return "?.?"
    pin = component.get_pin(pin_id)
    return f"{component.label}.{pin.name if pin else '?'}"


def describe_net(net: NetData, design) -> list[str]:
    return [describe_pin(design, ref.component_id, ref.pin_id) for ref in net.pins]
