"""
Pure Python data models for FluxLite.

This package contains Qt-free data classes that represent the schematic
design, its geometry and the derived netlist.
All models use only Python standard library types (no PyQt6 dependencies).
"""

from .component import (
    COMPONENT_KINDS,
    DESIGNATORS,
    PIN_TEMPLATES,
    ComponentData,
    ComponentKind,
)
from .design import CompleteResult, DesignModel, RouteState
from .netlist import NetData, extract_nets
from .pin import PinData
from .viewport import ViewportData
from .wire import PinRef, WireData

__all__ = [
    "DesignModel",
    "RouteState",
    "CompleteResult",
    "ComponentData",
    "ComponentKind",
    "COMPONENT_KINDS",
    "DESIGNATORS",
    "PIN_TEMPLATES",
    "PinData",
    "PinRef",
    "WireData",
    "NetData",
    "extract_nets",
    "ViewportData",
]
