"""
SessionController - Keeps the working design in durable storage.

The design is stored as JSON text in QSettings. Saves are debounced:
every change restarts a single-shot QTimer and the store is only
written once editing pauses.
"""

import json
import logging
from typing import Any, Optional

from PyQt6.QtCore import QSettings, QTimer

from controllers.file_controller import decode_share_token, parse_design
from models.design import DesignModel

logger = logging.getLogger(__name__)

SETTINGS_ORG = "FluxLite"
SETTINGS_APP = "FluxLite"
SESSION_KEY = "session/design"
SAVE_DEBOUNCE_MS = 300

# Observer events that change the persisted design
PERSISTED_EVENTS = frozenset(
    {
        "component_added",
        "component_removed",
        "component_moved",
        "component_rotated",
        "component_relabeled",
        "wire_started",
        "wire_completed",
        "wire_cancelled",
        "wire_removed",
        "design_cleared",
        "model_loaded",
    }
)

SOURCE_SHARE = "share"
SOURCE_STORED = "stored"
SOURCE_EMPTY = "empty"


class SessionController:
    """
    Loads the design on start and saves it after changes.

    Registers itself as an observer of the DesignController; the view
    layer only has to call restore() at start-up and flush() on close.
    """

    def __init__(self, design_ctrl, settings: Optional[QSettings] = None,
                 debounce_ms: int = SAVE_DEBOUNCE_MS):
        self.design_ctrl = design_ctrl
        self._settings = settings
        self._debounce_ms = debounce_ms
        self._save_timer: Optional[QTimer] = None
        design_ctrl.add_observer(self._on_design_event)

    @property
    def settings(self) -> QSettings:
        if self._settings is None:
            self._settings = QSettings(SETTINGS_ORG, SETTINGS_APP)
        return self._settings

    def _on_design_event(self, event: str, data: Any) -> None:
        if event in PERSISTED_EVENTS:
            self.schedule_save()

    def schedule_save(self) -> None:
        """(Re)start the debounce timer. The timer is created once and reused."""
        if self._save_timer is None:
            self._save_timer = QTimer()
            self._save_timer.setSingleShot(True)
            self._save_timer.timeout.connect(self._on_save_timeout)
        self._save_timer.start(self._debounce_ms)

    def is_save_pending(self) -> bool:
        return self._save_timer is not None and self._save_timer.isActive()

    def _on_save_timeout(self) -> None:
        self.save_now()

    def save_now(self) -> None:
        """Write the current design to the store immediately."""
        text = json.dumps(self.design_ctrl.model.to_dict(), separators=(",", ":"))
        self.settings.setValue(SESSION_KEY, text)
        self.settings.sync()
        if self.settings.status() != QSettings.Status.NoError:
            logger.warning("Session save failed: %s", self.settings.status())

    def flush(self) -> None:
        """Write any pending save now (call before closing)."""
        if self.is_save_pending():
            self._save_timer.stop()
            self.save_now()

    def stored_design(self) -> Optional[DesignModel]:
        """
        Read the stored design.

        Returns None if nothing is stored or the stored text is invalid.
        """
        text = self.settings.value(SESSION_KEY, "", type=str)
        if not text:
            return None
        try:
            return parse_design(text)
        except ValueError as e:
            logger.warning("Ignoring invalid stored session: %s", e)
            return None

    def clear_stored(self) -> None:
        self.settings.remove(SESSION_KEY)
        self.settings.sync()

    def restore(self, share_token: Optional[str] = None) -> str:
        """
        Load the start-up design.

        A valid share token wins over the stored session; with neither
        the current (empty) design is kept.

        Returns:
            Which source was used: "share", "stored" or "empty".
        """
        design = decode_share_token(share_token)
        if design is not None:
            self.design_ctrl.replace_design(design)
            return SOURCE_SHARE

        design = self.stored_design()
        if design is not None:
            self.design_ctrl.replace_design(design)
            return SOURCE_STORED

        return SOURCE_EMPTY
