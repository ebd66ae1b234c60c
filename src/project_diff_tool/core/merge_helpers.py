"""
Merge and diff primitives shared by every DiffLogic.

Scalar properties (path, colour, instrument, controller, time signature,
project info fields) are atomic and merge last-write-wins. Record
collections (events, notes, clips, ...) are reconciled by record id.

All functions are pure: inputs are never modified and every returned
tree is a fresh copy.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Iterable, Type

from project_diff_tool.core.delta import Delta, DeltaDiff
from project_diff_tool.core.keys import (
    ProjectInfoDeltas,
    TimeSignatureDeltas,
    TrackDeltas,
)
from project_diff_tool.core.records import (
    IdentityRecord,
    deserialize_records,
    serialize_records,
)
from project_diff_tool.core.serialized import SerializedData

logger = logging.getLogger(__name__)

ScalarMerge = Callable[[SerializedData, SerializedData], SerializedData]
ScalarDiff = Callable[[SerializedData, SerializedData], DeltaDiff]


# === Scalar properties ===

def merge_scalar(state: SerializedData, changes: SerializedData) -> SerializedData:
    """Last write wins: the changes side replaces state entirely."""
    return changes.create_copy()


def make_scalar_diff(type_tag: str, description: str) -> ScalarDiff:
    """Build a diff function emitting one delta with a copy of changes."""

    def create_diff(state: SerializedData, changes: SerializedData) -> DeltaDiff:
        return DeltaDiff(Delta.create(type_tag, description), changes.create_copy())

    create_diff.__name__ = f"create_{type_tag}_diff"
    return create_diff


merge_path = merge_scalar
merge_colour = merge_scalar
merge_instrument = merge_scalar
merge_controller = merge_scalar
merge_time_signature = merge_scalar
merge_project_info = merge_scalar

create_path_diff = make_scalar_diff(TrackDeltas.PATH, "path changed")
create_colour_diff = make_scalar_diff(TrackDeltas.COLOUR, "colour changed")
create_instrument_diff = make_scalar_diff(TrackDeltas.INSTRUMENT, "instrument changed")
create_controller_diff = make_scalar_diff(TrackDeltas.CONTROLLER, "controller changed")
create_time_signature_diff = make_scalar_diff(
    TimeSignatureDeltas.TIME_SIGNATURES_CHANGED, "time signature changed"
)
create_title_diff = make_scalar_diff(ProjectInfoDeltas.TITLE, "title changed")
create_author_diff = make_scalar_diff(ProjectInfoDeltas.AUTHOR, "author changed")
create_description_diff = make_scalar_diff(
    ProjectInfoDeltas.DESCRIPTION, "description changed"
)
create_license_diff = make_scalar_diff(ProjectInfoDeltas.LICENSE, "license changed")
create_temperament_diff = make_scalar_diff(
    ProjectInfoDeltas.TEMPERAMENT, "temperament changed"
)


# === Record collections ===

@dataclass(frozen=True)
class DeltaFamily:
    """
    A group of delta types describing one id-keyed collection.

    The merged head state of a family is always stored under `added`.
    """
    name: str
    record_type: Type[IdentityRecord]
    added: str
    removed: str
    changed: str
    noun: str

    @property
    def tags(self) -> tuple[str, str, str]:
        return (self.added, self.removed, self.changed)

    def contains(self, delta: Delta) -> bool:
        return delta.type in self.tags


def _index_by_id(records: Iterable[IdentityRecord]) -> dict[str, IdentityRecord]:
    """Index records by id, keeping the first of any duplicates."""
    index: dict[str, IdentityRecord] = {}
    for record in records:
        index.setdefault(record.id, record)
    return index


def _load_pair(
    state: SerializedData,
    changes: SerializedData,
    family: DeltaFamily,
) -> tuple[dict[str, IdentityRecord], dict[str, IdentityRecord]]:
    return (
        _index_by_id(deserialize_records(state, family.record_type)),
        _index_by_id(deserialize_records(changes, family.record_type)),
    )


def merge_records_added(
    state: SerializedData,
    changes: SerializedData,
    family: DeltaFamily,
) -> SerializedData:
    """State's records plus every changes record with an unknown id."""
    state_records, changes_records = _load_pair(state, changes, family)

    result = dict(state_records)
    for record_id, record in changes_records.items():
        result.setdefault(record_id, record)

    return serialize_records(result.values(), family.added)


def merge_records_removed(
    state: SerializedData,
    changes: SerializedData,
    family: DeltaFamily,
) -> SerializedData:
    """State's records except those listed in changes."""
    state_records, changes_records = _load_pair(state, changes, family)

    result = [
        record for record_id, record in state_records.items()
        if record_id not in changes_records
    ]

    return serialize_records(result, family.added)


def merge_records_changed(
    state: SerializedData,
    changes: SerializedData,
    family: DeltaFamily,
) -> SerializedData:
    """State's records, each replaced by its same-id changes record."""
    state_records, changes_records = _load_pair(state, changes, family)

    result = [
        changes_records.get(record_id, record)
        for record_id, record in state_records.items()
    ]

    # Tolerated: a change for a record the state doesn't have
    missing = changes_records.keys() - state_records.keys()
    if missing:
        logger.warning(
            f"{len(missing)} changed {family.noun} not found in state, skipped"
        )

    return serialize_records(result, family.added)


def merge_family_delta(
    state: SerializedData,
    changes_delta: Delta,
    changes: SerializedData,
    family: DeltaFamily,
) -> SerializedData:
    """Apply one family delta onto a merged collection."""
    if changes_delta.has_type(family.added):
        return merge_records_added(state, changes, family)
    if changes_delta.has_type(family.removed):
        return merge_records_removed(state, changes, family)
    if changes_delta.has_type(family.changed):
        return merge_records_changed(state, changes, family)
    raise ValueError(f"{changes_delta.type!r} is not a {family.name} delta")


def _serialize_group(
    records: list[IdentityRecord],
    template: str,
    type_tag: str,
) -> DeltaDiff:
    return DeltaDiff(
        Delta.create(type_tag, template, len(records)),
        serialize_records(records, type_tag),
    )


def create_records_diffs(
    state: SerializedData,
    changes: SerializedData,
    family: DeltaFamily,
) -> list[DeltaDiff]:
    """
    Three-way diff of two record collections.

    Emits up to three deltas, in order: added, removed, changed. Empty
    groups are skipped. Changed records carry the changes-side values.
    """
    state_records, changes_records = _load_pair(state, changes, family)

    removed = []
    changed = []
    for record_id, record in state_records.items():
        other = changes_records.get(record_id)
        if other is None:
            removed.append(record)
        elif other.has_changed_from(record):
            changed.append(other)

    added = [
        record for record_id, record in changes_records.items()
        if record_id not in state_records
    ]

    result = []
    if added:
        result.append(_serialize_group(added, f"added {{x}} {family.noun}", family.added))
    if removed:
        result.append(_serialize_group(removed, f"removed {{x}} {family.noun}", family.removed))
    if changed:
        result.append(_serialize_group(changed, f"changed {{x}} {family.noun}", family.changed))

    logger.debug(
        f"{family.name}: {len(added)} added, {len(removed)} removed, "
        f"{len(changed)} changed"
    )
    return result
