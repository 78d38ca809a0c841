"""
ComponentData - Pure Python data model for schematic parts.

This module contains no Qt dependencies. Positions are world coordinates
and pin offsets are local coordinates relative to the component origin.

Component kinds use the short wire names as canonical identifiers:
'resistor', 'capacitor', 'ic', 'power', 'ground', 'led'
"""

from dataclasses import dataclass, field
from enum import Enum

from .geometry import pin_absolute_position
from .pin import PinData


class ComponentKind(str, Enum):
    """Closed set of part kinds available in the palette."""

    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    IC = "ic"
    POWER = "power"
    GROUND = "ground"
    LED = "led"


# Palette order
COMPONENT_KINDS = [
    ComponentKind.RESISTOR,
    ComponentKind.CAPACITOR,
    ComponentKind.LED,
    ComponentKind.IC,
    ComponentKind.POWER,
    ComponentKind.GROUND,
]

# Pin layout per kind: (name, local_x, local_y) in pin order
PIN_TEMPLATES: dict[ComponentKind, tuple[tuple[str, float, float], ...]] = {
    ComponentKind.RESISTOR: (("1", -20, 0), ("2", 20, 0)),
    ComponentKind.CAPACITOR: (("+", -20, 0), ("-", 20, 0)),
    ComponentKind.LED: (("A", -20, 0), ("K", 20, 0)),
    ComponentKind.POWER: (("+V", 0, -20),),
    ComponentKind.GROUND: (("GND", 0, 20),),
    ComponentKind.IC: (
        ("1", -30, -20),
        ("2", -30, 0),
        ("3", -30, 20),
        ("4", 30, -20),
        ("5", 30, 0),
        ("6", 30, 20),
    ),
}

# Reference designator prefixes used for generated ids and default labels
DESIGNATORS: dict[ComponentKind, str] = {
    ComponentKind.RESISTOR: "R",
    ComponentKind.CAPACITOR: "C",
    ComponentKind.LED: "D",
    ComponentKind.IC: "U",
    ComponentKind.POWER: "PWR",
    ComponentKind.GROUND: "GND",
}


def build_pins(kind: ComponentKind, component_id: str) -> tuple[PinData, ...]:
    """
    Instantiate the pin template for a kind.

    Pin ids are derived from the component id, so they are unique across
    the design as long as component ids are.
    """
    return tuple(
        PinData(id=f"{component_id}.p{index}", name=name, x=x, y=y)
        for index, (name, x, y) in enumerate(PIN_TEMPLATES[kind], start=1)
    )


@dataclass
class ComponentData:
    """
    Pure Python data class representing a placed part.

    The pin list is fixed at creation; only position, rotation and label
    change afterwards.
    """

    id: str
    kind: ComponentKind
    x: float
    y: float
    rotation: float = 0  # degrees
    label: str = ""
    pins: tuple[PinData, ...] = field(default_factory=tuple)

    @classmethod
    def create(cls, kind: ComponentKind, component_id: str, x: float, y: float) -> "ComponentData":
        """
        Create a component with its kind's default pins.

        The default label is the component id (its designator, e.g. "R1"),
        not the upper-cased kind name.
        """
        return cls(
            id=component_id,
            kind=kind,
            x=x,
            y=y,
            label=component_id,
            pins=build_pins(kind, component_id),
        )

    @property
    def position(self) -> tuple[float, float]:
        return (self.x, self.y)

    def get_pin(self, pin_id: str):
        """Return the pin with the given id, or None."""
        for pin in self.pins:
            if pin.id == pin_id:
                return pin
        return None

    def get_pin_positions(self) -> list[tuple[float, float]]:
        """Return world positions of all pins, in pin order."""
        return [pin_absolute_position(self, pin) for pin in self.pins]

    def to_dict(self) -> dict:
        """Serialize component to dictionary."""
        return {
            "id": self.id,
            "kind": self.kind.value,
            "x": self.x,
            "y": self.y,
            "rotation": self.rotation,
            "label": self.label,
            "pins": [pin.to_dict() for pin in self.pins],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ComponentData":
        """
        Deserialize component from dictionary.

        Pins are taken from the data as stored, not regenerated from the
        kind template, so ids survive a round trip.
        """
        return cls(
            id=data["id"],
            kind=ComponentKind(data["kind"]),
            x=data["x"],
            y=data["y"],
            rotation=data.get("rotation", 0),
            label=data.get("label", ""),
            pins=tuple(PinData.from_dict(p) for p in data.get("pins", [])),
        )

    def __repr__(self) -> str:
        return (
            f"ComponentData(id={self.id!r}, kind={self.kind.value!r}, "
            f"label={self.label!r}, pos=({self.x}, {self.y}), rot={self.rotation})"
        )
