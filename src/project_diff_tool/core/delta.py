"""
Delta data model: typed change records, their payloads and containers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterator, Optional

from project_diff_tool.core.serialized import SerializedData
from project_diff_tool.utils.naming import format_description


class DiffStatus(Enum):
    """What a delta does to the item it belongs to."""
    UNCHANGED = "unchanged"
    ADDED = "added"
    REMOVED = "removed"
    MODIFIED = "modified"


@dataclass(frozen=True)
class DeltaDescription:
    """Human-readable description, optionally carrying a change count."""
    text: str
    count: Optional[int] = None

    def format(self) -> str:
        return format_description(self.text, self.count)

    def __str__(self) -> str:
        return self.format()


@dataclass(frozen=True)
class Delta:
    """An immutable, typed change record. Carries no payload."""
    type: str
    description: DeltaDescription

    @classmethod
    def create(cls, type_tag: str, text: str, count: Optional[int] = None) -> "Delta":
        return cls(type=type_tag, description=DeltaDescription(text, count))

    @property
    def change_count(self) -> Optional[int]:
        return self.description.count

    def has_type(self, type_tag: str) -> bool:
        return self.type == type_tag

    def __repr__(self) -> str:
        return f"Delta({self.type}, {self.description.format()!r})"


@dataclass
class DeltaDiff:
    """A delta paired with its payload tree."""
    delta: Delta
    payload: SerializedData = field(default_factory=SerializedData)


class TrackedItem(ABC):
    """A versionable document node exposing its current deltas."""

    @abstractmethod
    def delta_count(self) -> int:
        ...

    @abstractmethod
    def delta_at(self, index: int) -> Delta:
        ...

    @abstractmethod
    def delta_payload_at(self, index: int) -> SerializedData:
        ...

    @abstractmethod
    def delta_has_default_payload(self, index: int) -> bool:
        ...

    @abstractmethod
    def identity_type(self) -> str:
        ...

    def iter_deltas(self) -> Iterator[tuple[Delta, SerializedData]]:
        for i in range(self.delta_count()):
            yield self.delta_at(i), self.delta_payload_at(i)

    def find_delta(self, type_tag: str) -> Optional[int]:
        """Index of the first delta of the given type, if any."""
        for i in range(self.delta_count()):
            if self.delta_at(i).has_type(type_tag):
                return i
        return None


class Snapshot(TrackedItem):
    """
    An in-memory tracked item: an ordered list of (delta, payload) pairs.

    Payloads handed out by delta_payload_at are the stored trees; callers
    copy before modifying.
    """

    def __init__(
        self,
        item_type: str,
        deltas: Optional[list[DeltaDiff]] = None,
    ):
        self._type = item_type
        self._deltas: list[DeltaDiff] = list(deltas or [])

    @classmethod
    def from_pairs(
        cls,
        item_type: str,
        pairs: list[tuple[Delta, SerializedData]],
    ) -> "Snapshot":
        return cls(item_type, [DeltaDiff(d, p) for d, p in pairs])

    def identity_type(self) -> str:
        return self._type

    def delta_count(self) -> int:
        return len(self._deltas)

    def delta_at(self, index: int) -> Delta:
        return self._deltas[index].delta

    def delta_payload_at(self, index: int) -> SerializedData:
        return self._deltas[index].payload

    def delta_has_default_payload(self, index: int) -> bool:
        payload = self._deltas[index].payload
        return not payload.is_valid() or payload.is_empty()

    @property
    def deltas(self) -> list[DeltaDiff]:
        return self._deltas

    def get_payload(self, type_tag: str) -> SerializedData:
        """Payload of the first delta with the given type, or an invalid tree."""
        index = self.find_delta(type_tag)
        if index is None:
            return SerializedData()
        return self._deltas[index].payload

    def reset_state_to(self, diff: "Diff") -> None:
        """Take over the diff's deltas as this item's delta storage."""
        self._deltas = diff.release_deltas()

    def is_equivalent_to(self, other: TrackedItem) -> bool:
        """Same type and, per delta type, equivalent payloads."""
        if self._type != other.identity_type():
            return False
        if self.delta_count() != other.delta_count():
            return False
        for delta, payload in self.iter_deltas():
            index = other.find_delta(delta.type)
            if index is None:
                return False
            if not payload.is_equivalent_to(other.delta_payload_at(index)):
                return False
        return True

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._type!r}, deltas={len(self._deltas)})"


class Diff(Snapshot):
    """
    Ordered collection of delta diffs produced by diffing or merging.

    A diff is itself a tracked item, so it can be fed back into a
    DiffLogic as the changes side of a merge.
    """

    def __init__(self, target: TrackedItem):
        super().__init__(target.identity_type())

    def apply_delta(self, delta: Delta, payload: SerializedData) -> None:
        self._deltas.append(DeltaDiff(delta, payload))

    def apply_delta_diff(self, delta_diff: DeltaDiff) -> None:
        self._deltas.append(delta_diff)

    def apply_deltas(self, delta_diffs: list[DeltaDiff]) -> None:
        self._deltas.extend(delta_diffs)

    def has_anything(self) -> bool:
        return bool(self._deltas)

    def release_deltas(self) -> list[DeltaDiff]:
        """Hand off the delta list; the diff is empty afterwards."""
        deltas, self._deltas = self._deltas, []
        return deltas

    def to_snapshot(self) -> Snapshot:
        return Snapshot(self._type, self.release_deltas())


@dataclass
class DiffSummary:
    """Summary statistics for a diff."""
    added_records: int = 0
    removed_records: int = 0
    changed_records: int = 0
    changed_properties: int = 0

    @property
    def total(self) -> int:
        return (
            self.added_records
            + self.removed_records
            + self.changed_records
            + self.changed_properties
        )
