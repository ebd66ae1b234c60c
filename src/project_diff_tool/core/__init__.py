"""Core logic for diff and merge operations."""

from project_diff_tool.core.serialized import SerializedData
from project_diff_tool.core.delta import (
    Delta,
    DeltaDescription,
    DeltaDiff,
    Diff,
    DiffStatus,
    DiffSummary,
    Snapshot,
    TrackedItem,
)
from project_diff_tool.core.registry import (
    DEFAULT_REGISTRY,
    DeltaRegistry,
    ScalarDeltaType,
    create_default_registry,
)
from project_diff_tool.core.merge_helpers import DeltaFamily
from project_diff_tool.core.diff_logic import (
    AutomationTrackDiffLogic,
    DiffLogic,
    PianoTrackDiffLogic,
    ProjectInfoDiffLogic,
    ProjectTimelineDiffLogic,
    create_diff_logic,
)
from project_diff_tool.core.loader import (
    SnapshotLoader,
    load_snapshot,
)
from project_diff_tool.core.writer import (
    SnapshotWriter,
    write_snapshot,
)

__all__ = [
    "SerializedData",
    "Delta",
    "DeltaDescription",
    "DeltaDiff",
    "Diff",
    "DiffStatus",
    "DiffSummary",
    "Snapshot",
    "TrackedItem",
    "DEFAULT_REGISTRY",
    "DeltaRegistry",
    "ScalarDeltaType",
    "create_default_registry",
    "DeltaFamily",
    "AutomationTrackDiffLogic",
    "DiffLogic",
    "PianoTrackDiffLogic",
    "ProjectInfoDiffLogic",
    "ProjectTimelineDiffLogic",
    "create_diff_logic",
    "SnapshotLoader",
    "load_snapshot",
    "SnapshotWriter",
    "write_snapshot",
]
