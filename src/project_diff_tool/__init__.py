"""
project-diff-tool: Delta-based diff and merge for tree-shaped project documents.
"""

__version__ = "0.1.0"

from project_diff_tool.core.delta import (
    Delta,
    DeltaDiff,
    Diff,
    Snapshot,
    TrackedItem,
)
from project_diff_tool.core.diff_logic import DiffLogic, create_diff_logic
from project_diff_tool.core.serialized import SerializedData

__all__ = [
    "Delta",
    "DeltaDiff",
    "Diff",
    "Snapshot",
    "TrackedItem",
    "DiffLogic",
    "create_diff_logic",
    "SerializedData",
]
