"""
Registry of known delta types.

Maps every delta type tag to the functions that diff and merge it.
Adding a delta type is a single register_scalar / register_family call.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from project_diff_tool.core.delta import DiffStatus, DiffSummary, TrackedItem
from project_diff_tool.core.keys import (
    AnnotationDeltas,
    AutoSequenceDeltas,
    KeySignatureDeltas,
    PatternDeltas,
    PianoSequenceDeltas,
    ProjectInfoDeltas,
    TimelineTimeSignatureDeltas,
    TimeSignatureDeltas,
    TrackDeltas,
)
from project_diff_tool.core.merge_helpers import (
    DeltaFamily,
    ScalarDiff,
    ScalarMerge,
    create_author_diff,
    create_colour_diff,
    create_controller_diff,
    create_description_diff,
    create_instrument_diff,
    create_license_diff,
    create_path_diff,
    create_temperament_diff,
    create_time_signature_diff,
    create_title_diff,
    merge_colour,
    merge_controller,
    merge_instrument,
    merge_path,
    merge_project_info,
    merge_time_signature,
)
from project_diff_tool.core.records import (
    AnnotationEvent,
    AutomationEvent,
    Clip,
    KeySignatureEvent,
    Note,
    TimeSignatureEvent,
)
from project_diff_tool.core.serialized import SerializedData

PayloadMatch = Callable[[SerializedData, SerializedData], bool]


def payloads_match(state: SerializedData, changes: SerializedData) -> bool:
    return state.is_equivalent_to(changes)


@dataclass(frozen=True)
class ScalarDeltaType:
    """An atomic property merged last-write-wins."""
    tag: str
    create_diff: ScalarDiff
    merge: ScalarMerge
    matches: PayloadMatch = payloads_match


AUTOMATION_EVENTS = DeltaFamily(
    name="automation events",
    record_type=AutomationEvent,
    added=AutoSequenceDeltas.EVENTS_ADDED,
    removed=AutoSequenceDeltas.EVENTS_REMOVED,
    changed=AutoSequenceDeltas.EVENTS_CHANGED,
    noun="events",
)

NOTES = DeltaFamily(
    name="notes",
    record_type=Note,
    added=PianoSequenceDeltas.NOTES_ADDED,
    removed=PianoSequenceDeltas.NOTES_REMOVED,
    changed=PianoSequenceDeltas.NOTES_CHANGED,
    noun="notes",
)

CLIPS = DeltaFamily(
    name="clips",
    record_type=Clip,
    added=PatternDeltas.CLIPS_ADDED,
    removed=PatternDeltas.CLIPS_REMOVED,
    changed=PatternDeltas.CLIPS_CHANGED,
    noun="clips",
)

ANNOTATIONS = DeltaFamily(
    name="annotations",
    record_type=AnnotationEvent,
    added=AnnotationDeltas.ANNOTATIONS_ADDED,
    removed=AnnotationDeltas.ANNOTATIONS_REMOVED,
    changed=AnnotationDeltas.ANNOTATIONS_CHANGED,
    noun="annotations",
)

TIMELINE_TIME_SIGNATURES = DeltaFamily(
    name="time signatures",
    record_type=TimeSignatureEvent,
    added=TimelineTimeSignatureDeltas.TIME_SIGNATURES_ADDED,
    removed=TimelineTimeSignatureDeltas.TIME_SIGNATURES_REMOVED,
    changed=TimelineTimeSignatureDeltas.TIME_SIGNATURES_CHANGED,
    noun="time signatures",
)

KEY_SIGNATURES = DeltaFamily(
    name="key signatures",
    record_type=KeySignatureEvent,
    added=KeySignatureDeltas.KEY_SIGNATURES_ADDED,
    removed=KeySignatureDeltas.KEY_SIGNATURES_REMOVED,
    changed=KeySignatureDeltas.KEY_SIGNATURES_CHANGED,
    noun="key signatures",
)


class DeltaRegistry:
    """Lookup of scalar delta types and record families by tag."""

    def __init__(self):
        self._scalars: dict[str, ScalarDeltaType] = {}
        self._families: dict[str, DeltaFamily] = {}

    def register_scalar(
        self,
        tag: str,
        create_diff: ScalarDiff,
        merge: ScalarMerge,
        matches: PayloadMatch = payloads_match,
    ) -> ScalarDeltaType:
        if tag in self._scalars or tag in self._families:
            raise ValueError(f"Delta type already registered: {tag}")
        scalar = ScalarDeltaType(tag, create_diff, merge, matches)
        self._scalars[tag] = scalar
        return scalar

    def register_family(self, family: DeltaFamily) -> DeltaFamily:
        for tag in family.tags:
            if tag in self._scalars or tag in self._families:
                raise ValueError(f"Delta type already registered: {tag}")
        for tag in family.tags:
            self._families[tag] = family
        return family

    def get_scalar(self, tag: str) -> Optional[ScalarDeltaType]:
        return self._scalars.get(tag)

    def get_family(self, tag: str) -> Optional[DeltaFamily]:
        return self._families.get(tag)

    def is_known(self, tag: str) -> bool:
        return tag in self._scalars or tag in self._families

    def status_for(self, tag: str) -> DiffStatus:
        """What a delta of this type does, for display."""
        family = self._families.get(tag)
        if family is None:
            return DiffStatus.MODIFIED if tag in self._scalars else DiffStatus.UNCHANGED
        if tag == family.added:
            return DiffStatus.ADDED
        if tag == family.removed:
            return DiffStatus.REMOVED
        return DiffStatus.MODIFIED

    def summarize(self, item: TrackedItem) -> DiffSummary:
        """Count changed records and properties in a diff."""
        summary = DiffSummary()
        for delta, payload in item.iter_deltas():
            family = self._families.get(delta.type)
            if family is None:
                if delta.type in self._scalars:
                    summary.changed_properties += 1
                continue

            count = delta.change_count
            if count is None:
                count = sum(1 for _ in payload.iter_children_with_type(family.record_type.TAG))

            status = self.status_for(delta.type)
            if status == DiffStatus.ADDED:
                summary.added_records += count
            elif status == DiffStatus.REMOVED:
                summary.removed_records += count
            else:
                summary.changed_records += count
        return summary


def create_default_registry() -> DeltaRegistry:
    registry = DeltaRegistry()

    registry.register_scalar(TrackDeltas.PATH, create_path_diff, merge_path)
    registry.register_scalar(TrackDeltas.COLOUR, create_colour_diff, merge_colour)
    registry.register_scalar(TrackDeltas.INSTRUMENT, create_instrument_diff, merge_instrument)
    registry.register_scalar(TrackDeltas.CONTROLLER, create_controller_diff, merge_controller)
    registry.register_scalar(
        TimeSignatureDeltas.TIME_SIGNATURES_CHANGED,
        create_time_signature_diff,
        merge_time_signature,
    )

    registry.register_scalar(ProjectInfoDeltas.TITLE, create_title_diff, merge_project_info)
    registry.register_scalar(ProjectInfoDeltas.AUTHOR, create_author_diff, merge_project_info)
    registry.register_scalar(
        ProjectInfoDeltas.DESCRIPTION, create_description_diff, merge_project_info
    )
    registry.register_scalar(ProjectInfoDeltas.LICENSE, create_license_diff, merge_project_info)
    registry.register_scalar(
        ProjectInfoDeltas.TEMPERAMENT, create_temperament_diff, merge_project_info
    )

    for family in (
        AUTOMATION_EVENTS,
        NOTES,
        CLIPS,
        ANNOTATIONS,
        TIMELINE_TIME_SIGNATURES,
        KEY_SIGNATURES,
    ):
        registry.register_family(family)

    return registry


DEFAULT_REGISTRY = create_default_registry()
