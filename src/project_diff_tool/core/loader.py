"""
Snapshot file loader.

Reads a YAML snapshot file into a Snapshot:

    type: pianoTrack
    deltas:
      - type: trackPath
        description: path changed
        count: null
        data: {type: trackPath, attributes: {path: Piano}, children: []}
"""

import logging
from pathlib import Path
from typing import Any, Union

import yaml

from project_diff_tool.core.delta import Delta, DeltaDescription, DeltaDiff, Snapshot
from project_diff_tool.core.serialized import SerializedData

logger = logging.getLogger(__name__)


class SnapshotLoader:
    """Loads snapshot files and converts them to Snapshot objects."""

    def load(self, file_path: Union[str, Path]) -> Snapshot:
        """
        Load a snapshot file.

        Args:
            file_path: Path to the YAML snapshot

        Returns:
            Snapshot with the file's deltas, in file order

        Raises:
            ValueError: if the file is not a snapshot
        """
        text = Path(file_path).read_text(encoding="utf-8")
        return self.loads(text, source=str(file_path))

    def loads(self, text: str, source: str = "<string>") -> Snapshot:
        data = yaml.safe_load(text)
        if not isinstance(data, dict):
            raise ValueError(f"{source}: expected a mapping at top level")

        item_type = data.get("type")
        if not item_type:
            raise ValueError(f"{source}: missing item type")

        raw_deltas = data.get("deltas") or []
        if not isinstance(raw_deltas, list):
            raise ValueError(f"{source}: 'deltas' must be a list")

        deltas = []
        for entry in raw_deltas:
            delta_diff = self._parse_delta(entry)
            if delta_diff is None:
                logger.warning(f"{source}: skipping malformed delta entry {entry!r}")
                continue
            deltas.append(delta_diff)

        logger.debug(f"Loaded {len(deltas)} deltas of {item_type} from {source}")
        return Snapshot(str(item_type), deltas)

    def _parse_delta(self, entry: Any) -> Union[DeltaDiff, None]:
        if not isinstance(entry, dict) or not entry.get("type"):
            return None

        count = entry.get("count")
        if count is not None:
            try:
                count = int(count)
            except (TypeError, ValueError):
                count = None

        delta = Delta(
            type=str(entry["type"]),
            description=DeltaDescription(str(entry.get("description") or ""), count),
        )
        return DeltaDiff(delta, SerializedData.from_dict(entry.get("data")))


def load_snapshot(file_path: Union[str, Path]) -> Snapshot:
    """
    Convenience function to load a snapshot file.

    Args:
        file_path: Path to the snapshot file

    Returns:
        The loaded Snapshot
    """
    loader = SnapshotLoader()
    return loader.load(file_path)
