"""
DesignModel - Central data store for schematic state.

This module contains no Qt dependencies. It holds the components and
wires of a design, keeps wire references consistent when components
are deleted, and implements the two-click wire routing transitions.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional

from .component import DESIGNATORS, ComponentData, ComponentKind
from .geometry import GRID_SIZE, pin_absolute_position, snap
from .netlist import NetData, extract_nets
from .wire import PinRef, WireData

WIRE_PREFIX = "W"


class RouteState(Enum):
    """Wire routing state, derived from the wire list."""

    IDLE = "idle"
    PENDING = "pending"


class CompleteResult(Enum):
    """Outcome of DesignModel.complete_wire()."""

    NOTHING_OPEN = "nothing_open"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


@dataclass
class DesignModel:
    """
    Central data store holding all design state.

    Components are kept in insertion order keyed by id; wires are an
    ordered list. Operations that reference an unknown id do nothing.
    """

    components: dict[str, ComponentData] = field(default_factory=dict)
    wires: list[WireData] = field(default_factory=list)
    id_counter: dict[str, int] = field(default_factory=dict)
    grid_size: float = GRID_SIZE

    # --- Id generation ---

    def _next_id(self, prefix: str, taken) -> str:
        count = self.id_counter.get(prefix, 0)
        while True:
            count += 1
            candidate = f"{prefix}{count}"
            if candidate not in taken:
                break
        self.id_counter[prefix] = count
        return candidate

    def next_component_id(self, kind: ComponentKind) -> str:
        """Generate the next free designator for a kind (R1, R2, C1, ...)."""
        return self._next_id(DESIGNATORS[kind], self.components)

    def next_wire_id(self) -> str:
        """Generate the next free wire id (W1, W2, ...)."""
        return self._next_id(WIRE_PREFIX, {w.id for w in self.wires})

    # --- Component operations ---

    def add_component(self, kind: ComponentKind, x: float, y: float) -> ComponentData:
        """Create a component at the snapped position and append it."""
        kind = ComponentKind(kind)
        component = ComponentData.create(
            kind,
            self.next_component_id(kind),
            snap(x, self.grid_size),
            snap(y, self.grid_size),
        )
        self.components[component.id] = component
        return component

    def delete_component(self, component_id: str) -> list[WireData]:
        """
        Remove a component together with every wire that references it.

        Open wires are removed as well as completed ones.

        Returns:
            The wires that were removed (empty if the id is unknown).
        """
        if component_id not in self.components:
            return []
        del self.components[component_id]
        removed = [w for w in self.wires if w.connects_component(component_id)]
        self.wires = [w for w in self.wires if not w.connects_component(component_id)]
        return removed

    def set_position(self, component_id: str, x: float, y: float) -> Optional[ComponentData]:
        """Place a component at a snapped absolute position."""
        component = self.components.get(component_id)
        if component is None:
            return None
        component.x = snap(x, self.grid_size)
        component.y = snap(y, self.grid_size)
        return component

    def move_component(self, component_id: str, dx: float, dy: float) -> Optional[ComponentData]:
        """Translate a component by (dx, dy) and snap the result."""
        component = self.components.get(component_id)
        if component is None:
            return None
        return self.set_position(component_id, component.x + dx, component.y + dy)

    def rotate_component(self, component_id: str) -> Optional[ComponentData]:
        """Rotate a component by 90 degrees. Pin offsets are not touched."""
        component = self.components.get(component_id)
        if component is None:
            return None
        component.rotation = (component.rotation + 90) % 360
        return component

    def relabel_component(self, component_id: str, text: str) -> Optional[ComponentData]:
        """Replace a component's label. Any text is accepted, including ''."""
        component = self.components.get(component_id)
        if component is None:
            return None
        component.label = text
        return component

    # --- Wire routing ---

    def open_wire(self) -> Optional[WireData]:
        """
        Return the pending wire: the most recently added wire that has a
        start but no end. None when idle.
        """
        for wire in reversed(self.wires):
            if wire.end is None and wire.start is not None:
                return wire
        return None

    def route_state(self) -> RouteState:
        return RouteState.PENDING if self.open_wire() is not None else RouteState.IDLE

    def begin_wire(self, component_id: str, pin_id: str) -> WireData:
        """
        Start a wire at the given pin.

        The pin reference is not validated. Calling this while a wire is
        already pending appends a second open wire; completion always
        targets the most recent one.
        """
        wire = WireData(id=self.next_wire_id(), start=PinRef(component_id, pin_id))
        self.wires.append(wire)
        return wire

    def complete_wire(self, component_id: str, pin_id: str) -> tuple[CompleteResult, Optional[WireData]]:
        """
        Finish the pending wire at the given pin.

        Clicking the pin the wire started from discards the wire instead,
        so no wire ever starts and ends on the same pin.

        Returns:
            (result, wire) where wire is the completed or discarded wire,
            or None when nothing was open.
        """
        ref = PinRef(component_id, pin_id)
        for index in range(len(self.wires) - 1, -1, -1):
            wire = self.wires[index]
            if wire.end is None and wire.start is not None:
                if wire.start == ref:
                    del self.wires[index]
                    return CompleteResult.CANCELLED, wire
                wire.end = ref
                return CompleteResult.COMPLETED, wire
        return CompleteResult.NOTHING_OPEN, None

    def remove_wire(self, wire_id: str) -> Optional[WireData]:
        """Remove a wire by id."""
        for index, wire in enumerate(self.wires):
            if wire.id == wire_id:
                del self.wires[index]
                return wire
        return None

    # --- Queries ---

    def resolve_pin_position(self, component_id: str, pin_id: str) -> Optional[tuple[float, float]]:
        """World position of a pin, or None if the reference is dangling."""
        component = self.components.get(component_id)
        if component is None:
            return None
        pin = component.get_pin(pin_id)
        if pin is None:
            return None
        return pin_absolute_position(component, pin)

    def wire_segment(self, wire: WireData) -> Optional[tuple[tuple[float, float], tuple[float, float]]]:
        """
        Return the (start, end) world points of a completed wire.

        Open wires and wires with a dangling end have no segment.
        """
        if not wire.is_complete():
            return None
        a = self.resolve_pin_position(*wire.start)
        b = self.resolve_pin_position(*wire.end)
        if a is None or b is None:
            return None
        return (a, b)

    def nets(self) -> list[NetData]:
        """Compute the current netlist from the wire list."""
        return extract_nets(self.wires)

    # --- Design operations ---

    def clear(self) -> None:
        """Clear all design data."""
        self.components.clear()
        self.wires.clear()
        self.id_counter.clear()

    def replace_with(self, other: "DesignModel") -> None:
        """Take over another model's contents, keeping this object's identity."""
        self.components = other.components
        self.wires = other.wires
        self.id_counter = other.id_counter

    # --- Serialization ---

    def to_dict(self) -> dict:
        """Serialize design to the exchange format."""
        return {
            "components": [c.to_dict() for c in self.components.values()],
            "wires": [w.to_dict() for w in self.wires],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "DesignModel":
        """
        Deserialize design from the exchange format.

        The data is expected to have passed validate_design_data().
        """
        model = cls()
        for comp_data in data.get("components", []):
            component = ComponentData.from_dict(comp_data)
            model.components[component.id] = component
        for wire_data in data.get("wires", []):
            model.wires.append(WireData.from_dict(wire_data))
        return model

    def __eq__(self, other) -> bool:
        if not isinstance(other, DesignModel):
            return NotImplemented
        return self.to_dict() == other.to_dict()
