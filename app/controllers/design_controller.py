"""
DesignController - Orchestrates component, wire and selection operations.

This module contains no Qt dependencies. It manages the DesignModel,
tracks the active tool, the selection and any drag in progress, and
notifies views of changes through an observer pattern.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Optional

from models.component import ComponentData, ComponentKind
from models.design import CompleteResult, DesignModel
from models.geometry import drag_delta, hit_test_pin
from models.netlist import NetData
from models.viewport import ViewportData, clamp_zoom
from models.views import bill_of_materials, selection_properties
from models.wire import WireData

logger = logging.getLogger(__name__)

TOOL_SELECT = "select"
TOOL_PLACE = "place"
TOOL_WIRE = "wire"

# Distance moved by one arrow-key nudge
NUDGE_STEP = 10


@dataclass(frozen=True)
class ToolMode:
    """Active editing tool. `kind` is only set for the place tool."""

    name: str = TOOL_SELECT
    kind: Optional[ComponentKind] = None


@dataclass
class DragSession:
    """Reference state captured when a component drag starts."""

    component_id: str
    pointer_start: tuple[float, float]
    origin: tuple[float, float]
    zoom: float


class DesignController:
    """
    Controller for design editing operations.

    Manages the DesignModel and notifies registered observers when
    the model changes. Views register callbacks to stay in sync.

    Observer events:
        component_added (ComponentData) - A new component was added
        component_removed (str) - A component was removed (by ID)
        component_moved (ComponentData) - A component was moved
        component_rotated (ComponentData) - A component was rotated
        component_relabeled (ComponentData) - A component's label changed
        wire_started (WireData) - An open wire was created
        wire_completed (WireData) - The pending wire got its end pin
        wire_cancelled (WireData) - The pending wire was discarded
        wire_removed (WireData) - A wire was removed
        netlist_changed (list[NetData]) - Nets were recomputed
        selection_changed (str | None) - Selected component changed
        tool_changed (ToolMode) - Active tool changed
        design_cleared (None) - The entire design was cleared
        model_loaded (None) - Design replaced from file or share token
        notice (str) - Transient message for the user
    """

    def __init__(self, model: Optional[DesignModel] = None):
        self.model = model or DesignModel()
        self._observers: list[Callable[[str, Any], None]] = []
        self.tool = ToolMode()
        self.selected_id: Optional[str] = None
        self._drag: Optional[DragSession] = None
        self.nets: list[NetData] = self.model.nets()

    def add_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Register a callback for model change events."""
        if callback not in self._observers:
            self._observers.append(callback)

    def remove_observer(self, callback: Callable[[str, Any], None]) -> None:
        """Unregister a previously registered callback."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify(self, event: str, data: Any) -> None:
        """Notify all observers of a model change."""
        for observer in self._observers:
            try:
                observer(event, data)
            except (TypeError, AttributeError, RuntimeError) as e:
                logger.error("Error notifying observer: %s", e)

    def _wires_changed(self) -> None:
        """Recompute the netlist after any change to the wire list."""
        self.nets = self.model.nets()
        self._notify("netlist_changed", self.nets)

    def notify_notice(self, message: str) -> None:
        """Send a transient user-facing message to observers."""
        self._notify("notice", message)

    # --- Component operations ---

    def add_component(self, kind: ComponentKind, x: float, y: float) -> ComponentData:
        """Create and add a new component at the snapped position."""
        component = self.model.add_component(kind, x, y)
        self._notify("component_added", component)
        return component

    def remove_component(self, component_id: str) -> None:
        """Remove a component and every wire attached to it."""
        if component_id not in self.model.components:
            logger.debug("remove_component: unknown id %s", component_id)
            return
        if self._drag is not None and self._drag.component_id == component_id:
            self._drag = None
        removed = self.model.delete_component(component_id)
        for wire in removed:
            self._notify("wire_removed", wire)
        self._notify("component_removed", component_id)
        if self.selected_id == component_id:
            self.select(None)
        if removed:
            self._wires_changed()

    def move_component(self, component_id: str, dx: float, dy: float) -> None:
        """Translate a component by (dx, dy); the result is snapped."""
        component = self.model.move_component(component_id, dx, dy)
        if component is not None:
            self._notify("component_moved", component)

    def set_component_position(self, component_id: str, x: float, y: float) -> None:
        """Move a component to an absolute (snapped) position."""
        component = self.model.set_position(component_id, x, y)
        if component is not None:
            self._notify("component_moved", component)

    def rotate_component(self, component_id: str) -> None:
        """Rotate a component 90 degrees."""
        component = self.model.rotate_component(component_id)
        if component is not None:
            self._notify("component_rotated", component)

    def relabel_component(self, component_id: str, text: str) -> None:
        """Replace a component's label."""
        component = self.model.relabel_component(component_id, text)
        if component is not None:
            self._notify("component_relabeled", component)

    # --- Wire operations ---

    def begin_wire(self, component_id: str, pin_id: str) -> WireData:
        """Start a new open wire at a pin."""
        wire = self.model.begin_wire(component_id, pin_id)
        self._notify("wire_started", wire)
        return wire

    def complete_wire(self, component_id: str, pin_id: str) -> CompleteResult:
        """Finish (or cancel, on the start pin) the pending wire."""
        result, wire = self.model.complete_wire(component_id, pin_id)
        if result is CompleteResult.COMPLETED:
            self._notify("wire_completed", wire)
            self._wires_changed()
        elif result is CompleteResult.CANCELLED:
            self._notify("wire_cancelled", wire)
        else:
            logger.debug("complete_wire: no open wire")
        return result

    def remove_wire(self, wire_id: str) -> None:
        """Remove a wire by id."""
        wire = self.model.remove_wire(wire_id)
        if wire is None:
            return
        self._notify("wire_removed", wire)
        if wire.is_complete():
            self._wires_changed()

    # --- Tools and pointer input ---

    def set_tool(self, name: str, kind: Optional[ComponentKind] = None) -> None:
        """Switch the active tool."""
        if name == TOOL_PLACE:
            if kind is None:
                raise ValueError("The place tool needs a component kind.")
            tool = ToolMode(TOOL_PLACE, ComponentKind(kind))
        elif name in (TOOL_SELECT, TOOL_WIRE):
            tool = ToolMode(name)
        else:
            raise ValueError(f"Unknown tool '{name}'.")
        if tool != self.tool:
            self.tool = tool
            self._notify("tool_changed", tool)

    def pin_clicked(self, component_id: str, pin_id: str) -> None:
        """
        Handle a click on a pin.

        Outside the wire tool the click starts a wire and switches to the
        wire tool; inside it the click completes the wire and switches back
        to select.
        """
        if self.tool.name == TOOL_WIRE:
            self.complete_wire(component_id, pin_id)
            self.set_tool(TOOL_SELECT)
        else:
            self.begin_wire(component_id, pin_id)
            self.set_tool(TOOL_WIRE)

    def canvas_clicked(self, point: tuple[float, float], viewport: ViewportData) -> Optional[ComponentData]:
        """
        Handle a left click on the canvas at a viewport point.

        With the place tool a component is added there. Otherwise a pin
        under the pointer is treated as a pin click; a click on empty
        canvas clears the selection.
        """
        world = viewport.to_world(point, self.model.grid_size)
        if self.tool.name == TOOL_PLACE:
            return self.add_component(self.tool.kind, *world)

        hit = hit_test_pin(self.model.components.values(), viewport.to_world_unsnapped(point))
        if hit is not None:
            self.pin_clicked(*hit)
        else:
            self.select(None)
        return None

    # --- Selection ---

    def select(self, component_id: Optional[str]) -> None:
        """Select a component (or clear the selection with None)."""
        if component_id is not None and component_id not in self.model.components:
            component_id = None
        if component_id != self.selected_id:
            self.selected_id = component_id
            self._notify("selection_changed", component_id)

    def delete_selected(self) -> None:
        if self.selected_id is not None:
            self.remove_component(self.selected_id)

    def rotate_selected(self) -> None:
        if self.selected_id is not None:
            self.rotate_component(self.selected_id)

    def nudge_selected(self, dx_steps: int, dy_steps: int) -> None:
        """Move the selection by whole nudge steps (arrow keys)."""
        if self.selected_id is not None:
            self.move_component(self.selected_id, dx_steps * NUDGE_STEP, dy_steps * NUDGE_STEP)

    def relabel_selected(self, text: str) -> None:
        if self.selected_id is not None:
            self.relabel_component(self.selected_id, text)

    def selection_properties(self) -> Optional[dict]:
        """Properties of the selected component, or None."""
        return selection_properties(self.model, self.selected_id)

    # --- Dragging ---

    def begin_drag(self, component_id: str, pointer: tuple[float, float], zoom: float) -> bool:
        """
        Start dragging a component from a viewport pointer position.

        Selects the component. Returns False (and does nothing) for an
        unknown id or outside the select tool. The zoom is clamped to the
        viewport zoom range.
        """
        component = self.model.components.get(component_id)
        if component is None or self.tool.name != TOOL_SELECT:
            return False
        self.select(component_id)
        self._drag = DragSession(component_id, pointer, component.position, clamp_zoom(zoom))
        return True

    def drag_to(self, pointer: tuple[float, float]) -> None:
        """
        Move the dragged component to follow the pointer.

        The offset is measured from the drag start, divided by zoom and
        only snapped when the new position is committed.
        """
        if self._drag is None:
            return
        dx, dy = drag_delta(self._drag.pointer_start, pointer, self._drag.zoom)
        ox, oy = self._drag.origin
        self.set_component_position(self._drag.component_id, ox + dx, oy + dy)

    def end_drag(self) -> None:
        self._drag = None

    def cancel_drag(self) -> None:
        """Abort the drag and put the component back where it started."""
        if self._drag is None:
            return
        drag, self._drag = self._drag, None
        self.set_component_position(drag.component_id, *drag.origin)

    def is_dragging(self) -> bool:
        return self._drag is not None

    # --- Design operations ---

    def bill_of_materials(self) -> list[tuple[ComponentKind, int]]:
        return bill_of_materials(self.model.components.values())

    def clear_design(self) -> None:
        """Clear the entire design."""
        self.model.clear()
        self._drag = None
        self.select(None)
        self._notify("design_cleared", None)
        self._wires_changed()

    def replace_design(self, new_model: DesignModel) -> None:
        """
        Swap in a loaded design in place (preserving the model reference
        so views stay connected).
        """
        self.model.replace_with(new_model)
        self._drag = None
        self.select(None)
        self._notify("model_loaded", None)
        self._wires_changed()
