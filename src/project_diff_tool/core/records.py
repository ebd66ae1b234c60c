"""
Identity-keyed records stored in event sequences and patterns.

Two records are the same record iff their ids match; every other field
is a tracked value that may change between revisions.
"""

import logging
from dataclasses import dataclass, field, fields
from typing import Any, Callable, ClassVar, Iterable, Type, TypeVar

from project_diff_tool.core.keys import Attributes, Records
from project_diff_tool.core.serialized import SerializedData

logger = logging.getLogger(__name__)

R = TypeVar("R", bound="IdentityRecord")


def _parse_bool(value: Any) -> bool:
    """Read a flag stored as a bool, a number or a "true"/"false" string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return value != 0
    if isinstance(value, str):
        text = value.strip().lower()
        if text in ("true", "yes", "1"):
            return True
        if text in ("false", "no", "0", ""):
            return False
    raise ValueError(f"not a boolean: {value!r}")


def _attr(key: str, convert: Callable[[Any], Any], default: Any) -> Any:
    """Declare a dataclass field persisted under the given attribute name."""
    return field(default=default, metadata={"key": key, "convert": convert})


@dataclass(frozen=True)
class IdentityRecord:
    """Base for all id-keyed records."""

    TAG: ClassVar[str] = ""

    id: str = _attr(Attributes.ID, str, "")
    beat: float = _attr(Attributes.BEAT, float, 0.0)

    @property
    def sort_key(self) -> tuple[float, str]:
        return (self.beat, self.id)

    def has_changed_from(self, other: "IdentityRecord") -> bool:
        """Whether any tracked field differs from a same-id record."""
        return any(
            getattr(self, f.name) != getattr(other, f.name)
            for f in fields(self)
            if f.name != "id"
        )

    def serialize(self) -> SerializedData:
        tree = SerializedData(self.TAG)
        for f in fields(self):
            tree.set_property(f.metadata["key"], getattr(self, f.name))
        return tree

    @classmethod
    def deserialize(cls: Type[R], tree: SerializedData) -> R:
        """
        Read a record from its tree node.

        Missing or unparsable attributes fall back to field defaults.
        Undeclared attributes are dropped and take no part in change
        detection.
        """
        values = {}
        for f in fields(cls):
            key = f.metadata["key"]
            if not tree.has_property(key):
                continue
            raw = tree.get_property(key)
            try:
                values[f.name] = f.metadata["convert"](raw)
            except (TypeError, ValueError):
                logger.warning(
                    f"Bad {key!r} value {raw!r} in {cls.TAG} record, using default"
                )
        return cls(**values)


@dataclass(frozen=True)
class AutomationEvent(IdentityRecord):
    """A point on an automation curve."""

    TAG: ClassVar[str] = Records.AUTOMATION_EVENT

    curvature: float = _attr(Attributes.CURVE, float, 0.5)
    controller_value: float = _attr(Attributes.VALUE, float, 0.0)


@dataclass(frozen=True)
class Note(IdentityRecord):
    TAG: ClassVar[str] = Records.NOTE

    key: int = _attr(Attributes.KEY, int, 0)
    length: float = _attr(Attributes.LENGTH, float, 1.0)
    velocity: float = _attr(Attributes.VOLUME, float, 0.5)


@dataclass(frozen=True)
class Clip(IdentityRecord):
    """An instance of a track's pattern placed on the timeline."""

    TAG: ClassVar[str] = Records.CLIP

    key: int = _attr(Attributes.KEY, int, 0)
    velocity: float = _attr(Attributes.VOLUME, float, 1.0)
    mute: bool = _attr(Attributes.MUTE, _parse_bool, False)
    solo: bool = _attr(Attributes.SOLO, _parse_bool, False)


@dataclass(frozen=True)
class AnnotationEvent(IdentityRecord):
    TAG: ClassVar[str] = Records.ANNOTATION

    description: str = _attr(Attributes.TEXT, str, "")
    colour: str = _attr(Attributes.COLOUR, str, "")
    length: float = _attr(Attributes.LENGTH, float, 0.0)


@dataclass(frozen=True)
class TimeSignatureEvent(IdentityRecord):
    TAG: ClassVar[str] = Records.TIME_SIGNATURE

    numerator: int = _attr(Attributes.NUMERATOR, int, 4)
    denominator: int = _attr(Attributes.DENOMINATOR, int, 4)


@dataclass(frozen=True)
class KeySignatureEvent(IdentityRecord):
    TAG: ClassVar[str] = Records.KEY_SIGNATURE

    root_key: int = _attr(Attributes.ROOT_KEY, int, 0)
    scale: str = _attr(Attributes.SCALE, str, "")


def deserialize_records(tree: SerializedData, record_type: Type[R]) -> list[R]:
    """
    Read all records of one kind from a sequence tree, sorted by beat.

    An invalid tree is an empty sequence.
    """
    if not tree.is_valid():
        return []
    records = [
        record_type.deserialize(child)
        for child in tree.iter_children_with_type(record_type.TAG)
    ]
    records.sort(key=lambda r: r.sort_key)
    return records


def serialize_records(records: Iterable[IdentityRecord], tag: str) -> SerializedData:
    """Write records as children of a new tree, sorted by beat then id."""
    tree = SerializedData(tag)
    for record in sorted(records, key=lambda r: r.sort_key):
        tree.append_child(record.serialize())
    return tree
