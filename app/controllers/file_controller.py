"""
FileController - Handles design import/export and share tokens.

File dialog interaction is the responsibility of the view layer.
Designs are exchanged as JSON; share tokens are the same JSON encoded
as base64 so they fit in a URL fragment.
"""

import base64
import binascii
import json
import logging
import math
from pathlib import Path
from typing import Optional, Union

from models.component import ComponentKind
from models.design import DesignModel

logger = logging.getLogger(__name__)

DEFAULT_EXPORT_NAME = "design.json"

_KIND_VALUES = {kind.value for kind in ComponentKind}


def _is_number(value) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    try:
        return math.isfinite(value)
    except OverflowError:
        # ints too large to convert to float
        return False


def _validate_pin_ref(ref, where: str) -> None:
    if ref is None:
        return
    if not isinstance(ref, dict):
        raise ValueError(f"{where} must be an object or null.")
    for key in ("componentId", "pinId"):
        if not isinstance(ref.get(key), str):
            raise ValueError(f"{where} is missing string field '{key}'.")


def validate_design_data(data) -> None:
    """
    Validate the JSON structure of a design before loading.

    Raises ValueError with a descriptive message if anything is wrong.
    Wire endpoints are not checked against the component list; a wire
    that points at a missing pin simply does not resolve.
    """
    if not isinstance(data, dict):
        raise ValueError("File does not contain a valid design object.")

    if "components" not in data or not isinstance(data["components"], list):
        raise ValueError("Missing or invalid 'components' list.")
    if "wires" not in data or not isinstance(data["wires"], list):
        raise ValueError("Missing or invalid 'wires' list.")

    comp_ids = set()
    for i, comp in enumerate(data["components"]):
        if not isinstance(comp, dict):
            raise ValueError(f"Component #{i + 1} is not an object.")
        for key in ("id", "kind", "x", "y", "pins"):
            if key not in comp:
                raise ValueError(f"Component #{i + 1} is missing required field '{key}'.")
        comp_id = comp["id"]
        if not isinstance(comp_id, str):
            raise ValueError(f"Component #{i + 1} id must be a string.")
        if comp_id in comp_ids:
            raise ValueError(f"Duplicate component id '{comp_id}'.")
        comp_ids.add(comp_id)
        if not isinstance(comp["kind"], str) or comp["kind"] not in _KIND_VALUES:
            raise ValueError(f"Component '{comp_id}' has unknown kind '{comp['kind']}'.")
        if not _is_number(comp["x"]) or not _is_number(comp["y"]):
            raise ValueError(f"Component '{comp_id}' position values must be finite and numeric.")
        if "rotation" in comp and not _is_number(comp["rotation"]):
            raise ValueError(f"Component '{comp_id}' rotation must be finite and numeric.")
        if "label" in comp and not isinstance(comp["label"], str):
            raise ValueError(f"Component '{comp_id}' label must be a string.")
        if not isinstance(comp["pins"], list):
            raise ValueError(f"Component '{comp_id}' has an invalid 'pins' list.")

        pin_ids = set()
        for j, pin in enumerate(comp["pins"]):
            if not isinstance(pin, dict):
                raise ValueError(f"Pin #{j + 1} of '{comp_id}' is not an object.")
            for key in ("id", "name", "x", "y"):
                if key not in pin:
                    raise ValueError(f"Pin #{j + 1} of '{comp_id}' is missing required field '{key}'.")
            if not isinstance(pin["id"], str) or not isinstance(pin["name"], str):
                raise ValueError(f"Pin #{j + 1} of '{comp_id}' id and name must be strings.")
            if not _is_number(pin["x"]) or not _is_number(pin["y"]):
                raise ValueError(f"Pin '{pin['id']}' of '{comp_id}' offset values must be finite and numeric.")
            if pin["id"] in pin_ids:
                raise ValueError(f"Duplicate pin id '{pin['id']}' in component '{comp_id}'.")
            pin_ids.add(pin["id"])

    wire_ids = set()
    for i, wire in enumerate(data["wires"]):
        if not isinstance(wire, dict):
            raise ValueError(f"Wire #{i + 1} is not an object.")
        if not isinstance(wire.get("id"), str):
            raise ValueError(f"Wire #{i + 1} is missing string field 'id'.")
        if wire["id"] in wire_ids:
            raise ValueError(f"Duplicate wire id '{wire['id']}'.")
        wire_ids.add(wire["id"])
        _validate_pin_ref(wire.get("from"), f"Wire '{wire['id']}' 'from'")
        _validate_pin_ref(wire.get("to"), f"Wire '{wire['id']}' 'to'")
        if wire.get("from") is None and wire.get("to") is None:
            raise ValueError(f"Wire '{wire['id']}' has no endpoints.")


def parse_design(text: Union[str, bytes]) -> DesignModel:
    """
    Parse and validate design JSON.

    Raises:
        json.JSONDecodeError: If the text is not valid JSON.
        ValueError: If the structure is invalid (also for undecodable bytes
            and for nesting too deep to decode).
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as e:
            raise ValueError(f"File is not UTF-8 text: {e}") from e
    try:
        data = json.loads(text)
    except RecursionError as e:
        raise ValueError("Design JSON is nested too deeply.") from e
    validate_design_data(data)
    return DesignModel.from_dict(data)


def export_design(model: DesignModel) -> str:
    """Serialize a design as indented JSON text."""
    return json.dumps(model.to_dict(), indent=2)


def encode_share_token(model: DesignModel) -> str:
    """Encode a design as a base64 token for a URL fragment."""
    compact = json.dumps(model.to_dict(), separators=(",", ":"), ensure_ascii=False)
    return base64.b64encode(compact.encode("utf-8")).decode("ascii")


def decode_share_token(token: Optional[str]) -> Optional[DesignModel]:
    """
    Decode a share token back into a design.

    A leading '#' is ignored. Returns None for an empty, malformed or
    invalid token; never raises.
    """
    if not token:
        return None
    token = token.lstrip("#").strip()
    if not token:
        return None
    try:
        raw = base64.b64decode(token, validate=True)
        return parse_design(raw)
    except (binascii.Error, ValueError) as e:
        logger.debug("Rejected share token: %s", e)
        return None


def share_url(model: DesignModel, base_url: str) -> str:
    """Build a link that carries the design in its fragment."""
    return f"{base_url.split('#', 1)[0]}#{encode_share_token(model)}"


class FileController:
    """
    Manages design file I/O and share links.

    Strict operations (load_design) raise on bad input. The import_*
    operations are used by the views: they never raise, leave the
    current design untouched on failure and report a notice instead.
    """

    def __init__(self, model: Optional[DesignModel] = None, design_ctrl=None):
        if design_ctrl is not None and model is None:
            model = design_ctrl.model
        self.model = model or DesignModel()
        self.design_ctrl = design_ctrl  # For observer notifications
        self.current_file: Optional[Path] = None

    def _notice(self, message: str) -> None:
        if self.design_ctrl:
            self.design_ctrl.notify_notice(message)

    def _install(self, new_model: DesignModel) -> None:
        """Replace the current design in place (preserving the reference)."""
        if self.design_ctrl:
            self.design_ctrl.replace_design(new_model)
        else:
            self.model.replace_with(new_model)

    def new_design(self) -> None:
        """Clear the design and reset file state."""
        if self.design_ctrl:
            self.design_ctrl.clear_design()
        else:
            self.model.clear()
        self.current_file = None

    def export_text(self) -> str:
        return export_design(self.model)

    def save_design(self, filepath) -> None:
        """
        Save design to a JSON file.

        Raises:
            OSError: If the file cannot be written.
        """
        filepath = Path(filepath)
        filepath.write_text(self.export_text(), encoding="utf-8")
        self.current_file = filepath
        logger.info("Saved design to %s", filepath)

    def load_design(self, filepath) -> None:
        """
        Load design from a JSON file.

        Validates the whole file before touching the current design.

        Raises:
            json.JSONDecodeError: If file is not valid JSON.
            ValueError: If file structure is invalid.
            OSError: If the file cannot be read.
        """
        filepath = Path(filepath)
        new_model = parse_design(filepath.read_bytes())
        self._install(new_model)
        self.current_file = filepath
        logger.info("Loaded design from %s", filepath)

    def import_design(self, source: Union[str, bytes]) -> bool:
        """
        Import a design from text or bytes supplied by the user.

        Returns:
            True on success. On failure the prior design is kept and an
            "Invalid file" notice is sent.
        """
        try:
            new_model = parse_design(source)
        except (json.JSONDecodeError, ValueError) as e:
            logger.warning("Rejected design import: %s", e)
            self._notice("Invalid file")
            return False
        self._install(new_model)
        self._notice("Design imported")
        return True

    def import_file(self, filepath) -> bool:
        """Import a design file without raising (see import_design)."""
        try:
            data = Path(filepath).read_bytes()
        except OSError as e:
            logger.warning("Could not read %s: %s", filepath, e)
            self._notice("Invalid file")
            return False
        return self.import_design(data)

    def share_link(self, base_url: str) -> str:
        """Build a share URL for the current design."""
        url = share_url(self.model, base_url)
        self._notice("Share link copied")
        return url

    def import_share_token(self, token: Optional[str]) -> bool:
        """
        Replace the design with one decoded from a share token.

        Returns False (and keeps the current design) for a bad token.
        """
        new_model = decode_share_token(token)
        if new_model is None:
            return False
        self._install(new_model)
        return True

    def has_file(self) -> bool:
        """Return whether a current file path is set (for quick-save)."""
        return self.current_file is not None

    def get_window_title(self, base: str = "FluxLite") -> str:
        """Get window title based on current file."""
        if self.current_file:
            return f"{base} - {self.current_file.name}"
        return base
