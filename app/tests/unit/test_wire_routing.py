"""Tests for the two-click wire routing transitions on DesignModel."""

import pytest
from models.component import ComponentKind
from models.design import CompleteResult, DesignModel, RouteState
from models.wire import PinRef


@pytest.fixture
def model():
    m = DesignModel()
    m.add_component(ComponentKind.RESISTOR, 0, 0)
    m.add_component(ComponentKind.CAPACITOR, 100, 0)
    m.add_component(ComponentKind.LED, 200, 0)
    return m


class TestBeginWire:
    def test_idle_to_pending(self, model):
        assert model.route_state() is RouteState.IDLE
        wire = model.begin_wire("R1", "R1.p1")
        assert model.route_state() is RouteState.PENDING
        assert wire.start == PinRef("R1", "R1.p1")
        assert wire.end is None
        assert model.wires[-1] is wire

    def test_wire_ids_are_unique(self, model):
        a = model.begin_wire("R1", "R1.p1")
        model.complete_wire("C1", "C1.p1")
        b = model.begin_wire("R1", "R1.p2")
        assert a.id != b.id

    def test_references_are_not_validated(self, model):
        wire = model.begin_wire("nope", "nothing")
        assert model.open_wire() is wire


class TestCompleteWire:
    def test_completes_to_other_pin(self, model):
        model.begin_wire("R1", "R1.p1")
        result, wire = model.complete_wire("C1", "C1.p1")
        assert result is CompleteResult.COMPLETED
        assert wire.end == PinRef("C1", "C1.p1")
        assert model.route_state() is RouteState.IDLE
        assert len(model.wires) == 1

    def test_same_pin_cancels(self, model):
        model.begin_wire("R1", "R1.p1")
        result, wire = model.complete_wire("R1", "R1.p1")
        assert result is CompleteResult.CANCELLED
        assert wire not in model.wires
        assert model.wires == []
        assert model.route_state() is RouteState.IDLE

    def test_other_pin_of_same_component_completes(self, model):
        model.begin_wire("R1", "R1.p1")
        result, _ = model.complete_wire("R1", "R1.p2")
        assert result is CompleteResult.COMPLETED

    def test_same_pin_id_on_other_component_completes(self, model):
        model.begin_wire("R1", "shared")
        result, wire = model.complete_wire("C1", "shared")
        assert result is CompleteResult.COMPLETED
        assert wire.start != wire.end

    def test_nothing_open_is_noop(self, model):
        model.begin_wire("R1", "R1.p1")
        model.complete_wire("C1", "C1.p1")
        before = [w.to_dict() for w in model.wires]
        result, wire = model.complete_wire("D1", "D1.p1")
        assert result is CompleteResult.NOTHING_OPEN
        assert wire is None
        assert [w.to_dict() for w in model.wires] == before

    def test_no_wire_ever_starts_and_ends_on_same_pin(self, model):
        clicks = [("R1", "R1.p1"), ("R1", "R1.p1"), ("C1", "C1.p2"), ("D1", "D1.p1"), ("D1", "D1.p1")]
        for click in clicks:
            if model.open_wire() is None:
                model.begin_wire(*click)
            else:
                model.complete_wire(*click)
        assert all(w.start != w.end for w in model.wires)


class TestMultipleOpenWires:
    """begin_wire while pending is tolerated; completion targets the newest open wire."""

    def test_completion_targets_most_recent_open_wire(self, model):
        first = model.begin_wire("R1", "R1.p1")
        second = model.begin_wire("C1", "C1.p1")
        model.complete_wire("D1", "D1.p1")
        assert second.end == PinRef("D1", "D1.p1")
        assert first.end is None
        assert model.open_wire() is first

    def test_cancel_removes_the_matched_open_wire_only(self, model):
        first = model.begin_wire("R1", "R1.p1")
        second = model.begin_wire("C1", "C1.p1")
        model.complete_wire("D1", "D1.p1")
        # second is now complete and last in the list; first is still open
        result, wire = model.complete_wire("R1", "R1.p1")
        assert result is CompleteResult.CANCELLED
        assert wire is first
        assert model.wires == [second]

    def test_same_pin_of_older_open_wire_completes_newer(self, model):
        first = model.begin_wire("R1", "R1.p1")
        second = model.begin_wire("C1", "C1.p1")
        result, wire = model.complete_wire("R1", "R1.p1")
        assert result is CompleteResult.COMPLETED
        assert wire is second
        assert first.end is None

    def test_deterministic_for_identical_sequences(self):
        def run():
            m = DesignModel()
            m.begin_wire("A", "a")
            m.begin_wire("B", "b")
            m.complete_wire("C", "c")
            m.complete_wire("A", "a")
            return [w.to_dict() for w in m.wires]

        assert run() == run()


class TestRemoveWire:
    def test_remove_by_id(self, model):
        wire = model.begin_wire("R1", "R1.p1")
        assert model.remove_wire(wire.id) is wire
        assert model.wires == []

    def test_remove_unknown(self, model):
        assert model.remove_wire("W404") is None
