"""
Controllers for FluxLite.

This package contains controller classes that orchestrate operations
between models and views using an observer pattern. Only the session
controller touches Qt (QSettings/QTimer).
"""

from .design_controller import DesignController, ToolMode
from .file_controller import (
    FileController,
    decode_share_token,
    encode_share_token,
    validate_design_data,
)

__all__ = [
    "DesignController",
    "ToolMode",
    "FileController",
    "validate_design_data",
    "encode_share_token",
    "decode_share_token",
]
