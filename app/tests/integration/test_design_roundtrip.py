"""Integration tests: editing through the controllers, then export/import.

Builds a design through DesignController (the same path the editor uses),
exchanges it through FileController and share tokens, and checks that the
receiving side sees the same components, wires and nets.
"""

import pytest
from controllers.design_controller import TOOL_PLACE, DesignController
from controllers.file_controller import FileController, decode_share_token
from models.component import ComponentKind
from models.design import DesignModel
from models.viewport import ViewportData


class EventLog:
    """Simple observer that records (event, data) tuples."""

    def __init__(self):
        self.events = []

    def __call__(self, event, data):
        self.events.append((event, data))

    def count(self, event_name):
        return sum(1 for e, _ in self.events if e == event_name)


def _build_led_circuit():
    """PWR1 -> R1 -> D1 -> GND1, placed and wired with pointer input."""
    dc = DesignController()
    viewport = ViewportData(pan_x=0, pan_y=0, zoom=1)
    for kind, point in (
        (ComponentKind.POWER, (0, 0)),
        (ComponentKind.RESISTOR, (100, 0)),
        (ComponentKind.LED, (200, 0)),
        (ComponentKind.GROUND, (300, 0)),
    ):
        dc.set_tool(TOOL_PLACE, kind)
        dc.canvas_clicked(point, viewport)
    dc.set_tool("select")

    for a, b in (
        (("PWR1", "PWR1.p1"), ("R1", "R1.p1")),
        (("R1", "R1.p2"), ("D1", "D1.p1")),
        (("D1", "D1.p2"), ("GND1", "GND1.p1")),
    ):
        dc.pin_clicked(*a)
        dc.pin_clicked(*b)
    return dc


@pytest.fixture
def led_ctrl():
    return _build_led_circuit()


class TestEditing:
    def test_built_through_pointer_input(self, led_ctrl):
        assert list(led_ctrl.model.components) == ["PWR1", "R1", "D1", "GND1"]
        assert [w.id for w in led_ctrl.model.wires] == ["W1", "W2", "W3"]
        assert len(led_ctrl.nets) == 3

    def test_wire_follows_component_after_drag(self, led_ctrl):
        wire = led_ctrl.model.wires[0]
        before = led_ctrl.model.wire_segment(wire)
        led_ctrl.begin_drag("R1", (100, 0), zoom=1)
        led_ctrl.drag_to((100, 50))
        led_ctrl.end_drag()
        after = led_ctrl.model.wire_segment(wire)
        assert after[0] == before[0]
        assert after[1] == (before[1][0], before[1][1] + 50)

    def test_wire_pin_ends_follow_rotation(self, led_ctrl):
        wire = led_ctrl.model.wires[0]
        led_ctrl.rotate_component("R1")
        _, end = led_ctrl.model.wire_segment(wire)
        assert end[0] == pytest.approx(100)
        assert end[1] == pytest.approx(-20)

    def test_deleting_middle_component_splits_nets(self, led_ctrl):
        log = EventLog()
        led_ctrl.add_observer(log)
        led_ctrl.select("D1")
        led_ctrl.delete_selected()
        assert log.count("wire_removed") == 2
        assert log.count("netlist_changed") == 1
        assert len(led_ctrl.nets) == 1
        assert led_ctrl.nets[0].component_ids() == {"PWR1", "R1"}


class TestExchange:
    def test_file_round_trip(self, led_ctrl, tmp_path):
        path = tmp_path / "led.json"
        FileController(design_ctrl=led_ctrl).save_design(path)

        receiver = DesignController()
        log = EventLog()
        receiver.add_observer(log)
        assert FileController(design_ctrl=receiver).import_file(path)
        assert receiver.model == led_ctrl.model
        assert [n.pins for n in receiver.nets] == [n.pins for n in led_ctrl.nets]
        assert log.count("model_loaded") == 1

    def test_share_link_round_trip(self, led_ctrl):
        url = FileController(design_ctrl=led_ctrl).share_link("https://example.test/")
        restored = decode_share_token(url.split("#", 1)[1])
        assert restored == led_ctrl.model

    def test_ids_continue_after_import(self, led_ctrl):
        receiver = DesignController()
        FileController(design_ctrl=receiver).import_design(FileController(design_ctrl=led_ctrl).export_text())
        assert receiver.add_component(ComponentKind.RESISTOR, 0, 0).id == "R2"
        wire = receiver.begin_wire("R2", "R2.p1")
        assert wire.id not in {"W1", "W2", "W3"}

    def test_failed_import_leaves_editor_untouched(self, led_ctrl):
        snapshot = DesignModel.from_dict(led_ctrl.model.to_dict())
        assert not FileController(design_ctrl=led_ctrl).import_design("[]")
        assert led_ctrl.model == snapshot
        assert len(led_ctrl.nets) == 3
