"""
Tests for the delta type registry.
"""

import pytest

from project_diff_tool.core.delta import Delta, DiffStatus, Snapshot
from project_diff_tool.core.diff_logic import PianoTrackDiffLogic
from project_diff_tool.core.keys import (
    AutoSequenceDeltas,
    Core,
    PianoSequenceDeltas,
    TrackDeltas,
)
from project_diff_tool.core.merge_helpers import make_scalar_diff, merge_scalar
from project_diff_tool.core.records import Note, serialize_records
from project_diff_tool.core.registry import (
    DEFAULT_REGISTRY,
    NOTES,
    create_default_registry,
)
from project_diff_tool.core.serialized import SerializedData


class TestLookup:
    def test_scalars_and_families(self):
        assert DEFAULT_REGISTRY.get_scalar(TrackDeltas.PATH) is not None
        assert DEFAULT_REGISTRY.get_family(PianoSequenceDeltas.NOTES_REMOVED) is NOTES
        assert DEFAULT_REGISTRY.get_scalar(PianoSequenceDeltas.NOTES_ADDED) is None
        assert not DEFAULT_REGISTRY.is_known("trackMidiChannel")

    def test_duplicate_registration(self):
        registry = create_default_registry()
        with pytest.raises(ValueError):
            registry.register_scalar(TrackDeltas.PATH, make_scalar_diff(TrackDeltas.PATH, "x"), merge_scalar)
        with pytest.raises(ValueError):
            registry.register_family(NOTES)

    def test_status(self):
        assert DEFAULT_REGISTRY.status_for(AutoSequenceDeltas.EVENTS_ADDED) == DiffStatus.ADDED
        assert DEFAULT_REGISTRY.status_for(AutoSequenceDeltas.EVENTS_REMOVED) == DiffStatus.REMOVED
        assert DEFAULT_REGISTRY.status_for(AutoSequenceDeltas.EVENTS_CHANGED) == DiffStatus.MODIFIED
        assert DEFAULT_REGISTRY.status_for(TrackDeltas.COLOUR) == DiffStatus.MODIFIED
        assert DEFAULT_REGISTRY.status_for("unknown") == DiffStatus.UNCHANGED


class TestCustomRegistration:
    def test_new_scalar_is_one_registration(self):
        registry = create_default_registry()
        registry.register_scalar(
            "trackMidiChannel",
            make_scalar_diff("trackMidiChannel", "channel changed"),
            merge_scalar,
        )

        class ChannelAwarePianoLogic(PianoTrackDiffLogic):
            SCALAR_TYPES = PianoTrackDiffLogic.SCALAR_TYPES + ("trackMidiChannel",)

        state = Snapshot.from_pairs(Core.PIANO_TRACK, [
            (Delta.create("trackMidiChannel", "x"), SerializedData("trackMidiChannel", {"channel": 1})),
        ])
        changes = Snapshot.from_pairs(Core.PIANO_TRACK, [
            (Delta.create("trackMidiChannel", "x"), SerializedData("trackMidiChannel", {"channel": 2})),
        ])

        diff = ChannelAwarePianoLogic(changes, registry).create_diff(state)

        assert diff.delta_count() == 1
        assert diff.delta_at(0).description.format() == "channel changed"


class TestSummary:
    def test_counts(self):
        diff = Snapshot.from_pairs(Core.PIANO_TRACK, [
            (Delta.create(TrackDeltas.PATH, "path changed"), SerializedData(TrackDeltas.PATH, {"path": "B"})),
            (
                Delta.create(PianoSequenceDeltas.NOTES_ADDED, "added {x} notes", 2),
                serialize_records([Note(id="a"), Note(id="b")], PianoSequenceDeltas.NOTES_ADDED),
            ),
            (
                Delta.create(PianoSequenceDeltas.NOTES_REMOVED, "removed notes"),
                serialize_records([Note(id="c")], PianoSequenceDeltas.NOTES_REMOVED),
            ),
        ])

        summary = DEFAULT_REGISTRY.summarize(diff)

        assert summary.added_records == 2
        assert summary.removed_records == 1
        assert summary.changed_records == 0
        assert summary.changed_properties == 1
        assert summary.total == 4
