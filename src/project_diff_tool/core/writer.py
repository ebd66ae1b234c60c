"""
Snapshot file writer for diff and merge results.
"""

from pathlib import Path
from typing import Any, Union

import yaml

from project_diff_tool.core.delta import TrackedItem


class SnapshotWriter:
    """
    Writes tracked items to YAML snapshot files.

    Output is deterministic: the same item always produces the same bytes.
    """

    def __init__(self, include_empty: bool = True):
        """
        Initialize the writer.

        Args:
            include_empty: Whether to write deltas whose payload is invalid
        """
        self._include_empty = include_empty

    def to_data(self, item: TrackedItem) -> dict[str, Any]:
        deltas = []
        for delta, payload in item.iter_deltas():
            if not payload.is_valid() and not self._include_empty:
                continue
            deltas.append({
                "type": delta.type,
                "description": delta.description.text,
                "count": delta.change_count,
                "data": payload.to_dict() if payload.is_valid() else None,
            })
        return {"type": item.identity_type(), "deltas": deltas}

    def dumps(self, item: TrackedItem) -> str:
        return yaml.safe_dump(
            self.to_data(item),
            sort_keys=False,
            allow_unicode=True,
            default_flow_style=False,
        )

    def write(self, item: TrackedItem, output_path: Union[str, Path]) -> None:
        Path(output_path).write_text(self.dumps(item), encoding="utf-8")


def write_snapshot(item: TrackedItem, output_path: Union[str, Path]) -> None:
    """
    Convenience function to write a snapshot or diff.

    Args:
        item: The snapshot or diff to write
        output_path: Path to write the result
    """
    SnapshotWriter().write(item, output_path)
