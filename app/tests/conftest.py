"""
Shared test fixtures for the FluxLite test suite.

All fixtures build pure-Python model objects (no Qt dependencies).
"""

import os
import sys
from pathlib import Path

# Run Qt headless when no display is available.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

# Ensure app/ is on sys.path so bare imports (models, controllers, cli)
# work when running individual test files (e.g., python -m pytest app/tests/unit/test_foo.py).
_app_dir = str(Path(__file__).resolve().parent.parent)
if _app_dir not in sys.path:
    sys.path.insert(0, _app_dir)

import pytest
from models.component import ComponentData, ComponentKind
from models.design import DesignModel
from models.pin import PinData
from models.wire import PinRef, WireData


def make_component(kind, component_id, position=(0.0, 0.0), rotation=0, label=None):
    """Helper to create a ComponentData with its template pins."""
    component = ComponentData.create(ComponentKind(kind), component_id, *position)
    component.rotation = rotation
    if label is not None:
        component.label = label
    return component


def make_wire(wire_id, start, end):
    """Helper to create a WireData from (component_id, pin_id) tuples or None."""
    return WireData(
        id=wire_id,
        start=PinRef(*start) if start else None,
        end=PinRef(*end) if end else None,
    )


def ref(component_id, pin_id):
    return PinRef(component_id, pin_id)


@pytest.fixture
def divider_design():
    """
    PWR1 -- R1 -- R2 -- GND1

    W1: PWR1.p1 -> R1.p1
    W2: R1.p2   -> R2.p1
    W3: R2.p2   -> GND1.p1
    """
    model = DesignModel()
    for comp in (
        make_component("power", "PWR1", (0, -60)),
        make_component("resistor", "R1", (0, 0), rotation=90),
        make_component("resistor", "R2", (0, 60), rotation=90),
        make_component("ground", "GND1", (0, 120)),
    ):
        model.components[comp.id] = comp
    model.wires = [
        make_wire("W1", ("PWR1", "PWR1.p1"), ("R1", "R1.p1")),
        make_wire("W2", ("R1", "R1.p2"), ("R2", "R2.p1")),
        make_wire("W3", ("R2", "R2.p2"), ("GND1", "GND1.p1")),
    ]
    model.id_counter = {"PWR": 1, "R": 2, "GND": 1, "W": 3}
    return model


@pytest.fixture
def divider_data(divider_design):
    """The divider design in exchange format."""
    return divider_design.to_dict()


@pytest.fixture
def custom_pin():
    return PinData(id="x", name="X", x=10, y=-10)
