"""
Diff and merge strategies, one per kind of tracked document node.

A DiffLogic is bound to a target item. create_diff(state) describes how
the target differs from an older state; create_merged_item(state)
applies the target (a set of changes) onto a state and yields the new
head state.
"""

import logging
from typing import ClassVar, Optional

from project_diff_tool.core.delta import Delta, Diff, TrackedItem
from project_diff_tool.core.keys import (
    HEAD_STATE_DELTA,
    Core,
    ProjectInfoDeltas,
    TimeSignatureDeltas,
    TrackDeltas,
)
from project_diff_tool.core.merge_helpers import (
    DeltaFamily,
    create_records_diffs,
    merge_family_delta,
    merge_scalar,
)
from project_diff_tool.core.registry import (
    ANNOTATIONS,
    AUTOMATION_EVENTS,
    CLIPS,
    DEFAULT_REGISTRY,
    KEY_SIGNATURES,
    NOTES,
    TIMELINE_TIME_SIGNATURES,
    DeltaRegistry,
    ScalarDeltaType,
    payloads_match,
)
from project_diff_tool.core.serialized import SerializedData

logger = logging.getLogger(__name__)

DeltaPair = tuple[Delta, SerializedData]


class DiffLogic:
    """
    Schema-driven diff/merge for one node kind.

    Subclasses only declare which delta types they understand:

    - SCALAR_TYPES: atomic properties, merged last-write-wins
    - FAMILIES: id-keyed record collections
    - REQUIRED_SCALARS / REQUIRED_FAMILIES: types the current schema
      requires; synthesized on merge when the state predates them
    """

    TYPE: ClassVar[str] = ""
    SCALAR_TYPES: ClassVar[tuple[str, ...]] = ()
    FAMILIES: ClassVar[tuple[DeltaFamily, ...]] = ()
    REQUIRED_SCALARS: ClassVar[tuple[str, ...]] = ()
    REQUIRED_FAMILIES: ClassVar[tuple[DeltaFamily, ...]] = ()

    def __init__(self, target: TrackedItem, registry: Optional[DeltaRegistry] = None):
        self.target = target
        self._registry = registry or DEFAULT_REGISTRY

    def get_type(self) -> str:
        return self.TYPE

    def _scalar_for(self, tag: str) -> Optional[ScalarDeltaType]:
        if tag not in self.SCALAR_TYPES:
            return None
        return self._registry.get_scalar(tag)

    def _family_for(self, delta: Delta) -> Optional[DeltaFamily]:
        for family in self.FAMILIES:
            if family.contains(delta):
                return family
        return None

    # === Diff ===

    def create_diff(self, state: TrackedItem) -> Diff:
        """
        Describe how the target differs from the given state.

        Only the target's head-state deltas are diffed: scalars of known
        types and the `added` delta of each known family. Anything else
        is skipped.
        """
        diff = Diff(self.target)

        for i in range(self.target.delta_count()):
            my_delta = self.target.delta_at(i)
            my_data = self.target.delta_payload_at(i)

            scalar = self._scalar_for(my_delta.type)
            family = None
            if scalar is None:
                family = self._family_for(my_delta)
                if family is None or not my_delta.has_type(family.added):
                    logger.debug(f"{self.TYPE}: skipping {my_delta.type} in diff")
                    continue

            state_index = state.find_delta(my_delta.type)
            found_in_state = state_index is not None
            state_data = (
                state.delta_payload_at(state_index) if found_in_state
                else SerializedData()
            )

            matches = scalar.matches if scalar else payloads_match
            data_has_changed = found_in_state and not matches(state_data, my_data)
            has_default_data = self.target.delta_has_default_payload(i)

            if not ((not found_in_state and not has_default_data) or data_has_changed):
                continue

            if scalar is not None:
                diff.apply_delta_diff(scalar.create_diff(state_data, my_data))
            else:
                diff.apply_deltas(create_records_diffs(state_data, my_data, family))

        logger.debug(f"{self.TYPE}: diff has {diff.delta_count()} deltas")
        return diff

    # === Merge ===

    def create_merged_item(self, state: TrackedItem) -> Diff:
        """
        Apply the target's changes onto the given state.

        Every state delta ends up in the result: merged with same-type
        target deltas, or carried over unchanged when the target has
        none. Record families are emitted once each, in the `added`
        shape, no matter how many deltas of the family either side has.
        """
        diff = Diff(self.target)
        target_deltas = list(self.target.iter_deltas())
        merged_families: set[str] = set()

        for state_delta, state_data in state.iter_deltas():
            family = self._family_for(state_delta)
            if family is not None:
                if family.name not in merged_families:
                    merged_families.add(family.name)
                    self._merge_family(diff, state, family, target_deltas)
                continue

            matching = [
                (delta, data) for delta, data in target_deltas
                if delta.type == state_delta.type
            ]

            if not matching:
                logger.debug(f"{self.TYPE}: carrying over {state_delta.type}")
                diff.apply_delta(_copy_delta(state_delta), state_data.create_copy())
                continue

            scalar = self._scalar_for(state_delta.type)
            if scalar is None:
                logger.debug(
                    f"{self.TYPE}: no handler for {state_delta.type}, "
                    "taking the incoming value"
                )
            merge = scalar.merge if scalar else merge_scalar

            merged_data = state_data
            for target_delta, target_data in matching:
                merged_data = merge(merged_data, target_data)

            last_delta = matching[-1][0]
            diff.apply_delta(_copy_delta(last_delta), merged_data)

        self._add_missing_required_deltas(diff, state, target_deltas)
        return diff

    def _merge_family(
        self,
        diff: Diff,
        state: TrackedItem,
        family: DeltaFamily,
        target_deltas: list[DeltaPair],
    ) -> None:
        """Fold all state and target deltas of one family into one delta."""
        state_family = [
            (delta, data) for delta, data in state.iter_deltas()
            if family.contains(delta)
        ]
        target_family = [
            (delta, data) for delta, data in target_deltas
            if family.contains(delta)
        ]

        if not target_family:
            logger.debug(f"{self.TYPE}: carrying over {family.name}")
            for delta, data in state_family:
                diff.apply_delta(_copy_delta(delta), data.create_copy())
            return

        merged_data = SerializedData(family.added)
        for delta, data in state_family + target_family:
            merged_data = merge_family_delta(merged_data, delta, data, family)

        diff.apply_delta(Delta.create(family.added, HEAD_STATE_DELTA), merged_data)

    def _add_missing_required_deltas(
        self,
        diff: Diff,
        state: TrackedItem,
        target_deltas: list[DeltaPair],
    ) -> None:
        """
        Synthesize required deltas the state has never had.

        Happens for items created under an older schema. The missing
        type is merged from an empty value and whatever the target has.
        """
        for tag in self.REQUIRED_SCALARS:
            if state.find_delta(tag) is not None:
                continue

            scalar = self._scalar_for(tag)
            merge = scalar.merge if scalar else merge_scalar
            merged_data = SerializedData(tag)
            for delta, data in target_deltas:
                if delta.has_type(tag):
                    merged_data = merge(merged_data, data)

            logger.debug(f"{self.TYPE}: state has no {tag}, synthesizing")
            diff.apply_delta(Delta.create(tag, HEAD_STATE_DELTA), merged_data)

        for family in self.REQUIRED_FAMILIES:
            if any(family.contains(delta) for delta, _ in state.iter_deltas()):
                continue

            merged_data = SerializedData(family.added)
            for delta, data in target_deltas:
                if family.contains(delta):
                    merged_data = merge_family_delta(merged_data, delta, data, family)

            logger.debug(f"{self.TYPE}: state has no {family.name}, synthesizing")
            diff.apply_delta(Delta.create(family.added, HEAD_STATE_DELTA), merged_data)


def _copy_delta(delta: Delta) -> Delta:
    return Delta(delta.type, delta.description)


# === Node kinds ===

_TRACK_SCALARS = (
    TrackDeltas.PATH,
    TrackDeltas.COLOUR,
    TrackDeltas.INSTRUMENT,
    TimeSignatureDeltas.TIME_SIGNATURES_CHANGED,
)


class AutomationTrackDiffLogic(DiffLogic):
    """Automation track: controller number plus a sequence of curve points."""

    TYPE = Core.AUTOMATION_TRACK
    SCALAR_TYPES = _TRACK_SCALARS + (TrackDeltas.CONTROLLER,)
    FAMILIES = (AUTOMATION_EVENTS, CLIPS)
    REQUIRED_SCALARS = (TimeSignatureDeltas.TIME_SIGNATURES_CHANGED,)
    REQUIRED_FAMILIES = (CLIPS,)


class PianoTrackDiffLogic(DiffLogic):
    TYPE = Core.PIANO_TRACK
    SCALAR_TYPES = _TRACK_SCALARS
    FAMILIES = (NOTES, CLIPS)
    REQUIRED_SCALARS = (TimeSignatureDeltas.TIME_SIGNATURES_CHANGED,)
    REQUIRED_FAMILIES = (CLIPS,)


class ProjectTimelineDiffLogic(DiffLogic):
    """Project timeline: annotations, time signatures and key signatures."""

    TYPE = Core.PROJECT_TIMELINE
    FAMILIES = (ANNOTATIONS, TIMELINE_TIME_SIGNATURES, KEY_SIGNATURES)
    REQUIRED_FAMILIES = (KEY_SIGNATURES,)


class ProjectInfoDiffLogic(DiffLogic):
    TYPE = Core.PROJECT_INFO
    SCALAR_TYPES = (
        ProjectInfoDeltas.TITLE,
        ProjectInfoDeltas.AUTHOR,
        ProjectInfoDeltas.DESCRIPTION,
        ProjectInfoDeltas.LICENSE,
        ProjectInfoDeltas.TEMPERAMENT,
    )
    REQUIRED_SCALARS = (ProjectInfoDeltas.TEMPERAMENT,)


DIFF_LOGICS: dict[str, type[DiffLogic]] = {
    logic.TYPE: logic
    for logic in (
        AutomationTrackDiffLogic,
        PianoTrackDiffLogic,
        ProjectTimelineDiffLogic,
        ProjectInfoDiffLogic,
    )
}


def create_diff_logic(
    target: TrackedItem,
    registry: Optional[DeltaRegistry] = None,
) -> DiffLogic:
    """
    Create the DiffLogic matching the target's node kind.

    Raises:
        ValueError: if the node kind is not supported
    """
    logic_class = DIFF_LOGICS.get(target.identity_type())
    if logic_class is None:
        raise ValueError(f"No diff logic for item type: {target.identity_type()}")
    return logic_class(target, registry)
