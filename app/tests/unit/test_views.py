"""Tests for BOM, selection properties and net descriptions."""

from models.component import ComponentKind
from models.design import DesignModel
from models.netlist import NetData
from models.viewport import ZOOM_MAX, ZOOM_MIN, ViewportData, clamp_zoom
from models.views import bill_of_materials, describe_net, describe_pin, selection_properties
from tests.conftest import ref


class TestBillOfMaterials:
    def test_empty(self):
        assert bill_of_materials([]) == []

    def test_counts_in_first_appearance_order(self):
        model = DesignModel()
        for kind in ("capacitor", "resistor", "capacitor", "ground", "resistor", "capacitor"):
            model.add_component(kind, 0, 0)
        assert bill_of_materials(model.components.values()) == [
            (ComponentKind.CAPACITOR, 3),
            (ComponentKind.RESISTOR, 2),
            (ComponentKind.GROUND, 1),
        ]

    def test_follows_deletion(self, divider_design):
        divider_design.delete_component("R2")
        assert dict(bill_of_materials(divider_design.components.values()))[ComponentKind.RESISTOR] == 1


class TestSelectionProperties:
    def test_properties(self, divider_design):
        props = selection_properties(divider_design, "R1")
        assert props == {
            "id": "R1",
            "kind": "resistor",
            "label": "R1",
            "x": 0,
            "y": 0,
            "rotation": 90,
            "pins": ["1", "2"],
        }

    def test_nothing_selected(self, divider_design):
        assert selection_properties(divider_design, None) is None

    def test_stale_selection(self, divider_design):
        divider_design.delete_component("R1")
        assert selection_properties(divider_design, "R1") is None


class TestDescribe:
    def test_describe_net_uses_labels(self, divider_design):
        divider_design.relabel_component("R1", "Rtop")
        net = divider_design.nets()[0]
        assert describe_net(net, divider_design) == ["PWR1.+V", "Rtop.1"]

    def test_unresolvable_parts(self, divider_design):
        assert describe_pin(divider_design, "GONE", "x") == "?.?"
        assert describe_pin(divider_design, "R1", "x") == "R1.?"
        net = NetData("N1", (ref("GONE", "x"), ref("R2", "R2.p2")))
        assert describe_net(net, divider_design) == ["?.?", "R2.2"]


class TestViewportData:
    def test_to_world_snaps(self):
        vp = ViewportData(pan_x=20, pan_y=40, zoom=2)
        assert vp.to_world((133, 97)) == (60, 30)

    def test_wheel_up_zooms_in(self):
        vp = ViewportData()
        assert vp.zoom_by_wheel(-100) == 1.1

    def test_wheel_down_zooms_out(self):
        vp = ViewportData()
        assert vp.zoom_by_wheel(100) == 0.9

    def test_clamp_zoom(self):
        assert clamp_zoom(0) == ZOOM_MIN
        assert clamp_zoom(float("nan")) == ZOOM_MIN
        assert clamp_zoom(10) == ZOOM_MAX
        assert clamp_zoom(1.5) == 1.5

    def test_zoom_is_clamped(self):
        vp = ViewportData()
        for _ in range(100):
            vp.zoom_by_wheel(-1)
        assert vp.zoom == ZOOM_MAX
        for _ in range(100):
            vp.zoom_by_wheel(1)
        assert vp.zoom == ZOOM_MIN

    def test_set_pan(self):
        vp = ViewportData()
        vp.set_pan(5, -5)
        assert vp.pan == (5, -5)
