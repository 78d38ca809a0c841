"""
WireData - Pure Python data model for schematic wires.

This module contains no Qt dependencies. A wire joins two pin
references; while it is being drawn its "to" end is still unset.
"""

from dataclasses import dataclass
from typing import NamedTuple, Optional


class PinRef(NamedTuple):
    """A (component_id, pin_id) pair identifying one pin in a design."""

    component_id: str
    pin_id: str

    def to_dict(self) -> dict:
        return {"componentId": self.component_id, "pinId": self.pin_id}

    @classmethod
    def from_dict(cls, data: Optional[dict]) -> Optional["PinRef"]:
        if data is None:
            return None
        return cls(data["componentId"], data["pinId"])


@dataclass
class WireData:
    """
    Pure Python data class representing a wire between two pins.

    A wire is open while `end` is None. Both ends being None is invalid.
    """

    id: str
    start: Optional[PinRef] = None
    end: Optional[PinRef] = None

    def is_open(self) -> bool:
        """True while the wire has no end pin yet."""
        return self.end is None

    def is_complete(self) -> bool:
        """True when both ends reference a pin."""
        return self.start is not None and self.end is not None

    def get_endpoints(self) -> list[PinRef]:
        """Return the pin references that are set, start first."""
        return [ref for ref in (self.start, self.end) if ref is not None]

    def connects_component(self, component_id: str) -> bool:
        """Check if either end of this wire references the given component."""
        return any(ref.component_id == component_id for ref in self.get_endpoints())

    def connects_pin(self, ref: PinRef) -> bool:
        """Check if either end of this wire is the given pin."""
        return ref in self.get_endpoints()

    def to_dict(self) -> dict:
        """
        Serialize wire to dictionary.

        Unset ends are written as null.
        """
        return {
            "id": self.id,
            "from": self.start.to_dict() if self.start else None,
            "to": self.end.to_dict() if self.end else None,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "WireData":
        """Deserialize wire from dictionary."""
        return cls(
            id=data["id"],
            start=PinRef.from_dict(data.get("from")),
            end=PinRef.from_dict(data.get("to")),
        )

    def __repr__(self) -> str:
        def fmt(ref):
            return f"{ref.component_id}[{ref.pin_id}]" if ref else "-"

        return f"WireData({self.id}: {fmt(self.start)} -> {fmt(self.end)})"
