"""
PinData - Pure Python data model for component terminals.

This module contains no Qt dependencies.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class PinData:
    """
    A named terminal on a component.

    x and y are the offset from the owning component's local origin,
    before rotation. Pins are immutable once their component exists.
    """

    id: str
    name: str
    x: float
    y: float

    def to_dict(self) -> dict:
        """Serialize pin to dictionary."""
        return {"id": self.id, "name": self.name, "x": self.x, "y": self.y}

    @classmethod
    def from_dict(cls, data: dict) -> "PinData":
        """Deserialize pin from dictionary."""
        return cls(id=data["id"], name=data["name"], x=data["x"], y=data["y"])
