"""
Tests for identity-keyed records.
"""

import logging

from project_diff_tool.core.keys import AutoSequenceDeltas, Records
from project_diff_tool.core.records import (
    AutomationEvent,
    Clip,
    Note,
    TimeSignatureEvent,
    deserialize_records,
    serialize_records,
)
from project_diff_tool.core.serialized import SerializedData


class TestAutomationEvent:
    def test_defaults(self):
        event = AutomationEvent(id="1")
        assert event.beat == 0.0
        assert event.curvature == 0.5
        assert event.controller_value == 0.0

    def test_serialize(self):
        tree = AutomationEvent(id="1", beat=2.0, curvature=0.3, controller_value=0.8).serialize()
        assert tree.has_type(Records.AUTOMATION_EVENT)
        assert tree.attributes == {"id": "1", "beat": 2.0, "curve": 0.3, "value": 0.8}

    def test_deserialize(self):
        tree = SerializedData(Records.AUTOMATION_EVENT, {"id": "7", "beat": "1.5", "value": 1})
        event = AutomationEvent.deserialize(tree)
        assert event == AutomationEvent(id="7", beat=1.5, controller_value=1.0)

    def test_bad_attribute_falls_back(self, caplog):
        tree = SerializedData(Records.AUTOMATION_EVENT, {"id": "7", "beat": "soon"})
        with caplog.at_level(logging.WARNING):
            event = AutomationEvent.deserialize(tree)
        assert event.beat == 0.0
        assert "beat" in caplog.text

    def test_undeclared_attributes_are_dropped(self):
        tree = SerializedData(Records.AUTOMATION_EVENT, {"id": "7", "beat": 1.0, "channel": 3})
        event = AutomationEvent.deserialize(tree)

        assert event == AutomationEvent(id="7", beat=1.0)
        assert not event.serialize().has_property("channel")


class TestClipFlags:
    def test_string_flags(self):
        tree = SerializedData(Records.CLIP, {"id": "c", "mute": "false", "solo": "True"})
        clip = Clip.deserialize(tree)
        assert clip.mute is False
        assert clip.solo is True

    def test_numeric_flags(self):
        clip = Clip.deserialize(SerializedData(Records.CLIP, {"id": "c", "mute": 1, "solo": 0}))
        assert clip.mute is True
        assert clip.solo is False

    def test_unreadable_flag_falls_back(self, caplog):
        tree = SerializedData(Records.CLIP, {"id": "c", "mute": "sometimes"})
        with caplog.at_level(logging.WARNING):
            clip = Clip.deserialize(tree)
        assert clip.mute is False
        assert "mute" in caplog.text


class TestChangeDetection:
    def test_same_values(self):
        a = Note(id="1", beat=0.0, key=60)
        b = Note(id="1", beat=0, key=60)
        assert not a.has_changed_from(b)

    def test_each_tracked_field(self):
        base = AutomationEvent(id="1", beat=1.0, curvature=0.5, controller_value=0.2)
        assert AutomationEvent(id="1", beat=2.0, curvature=0.5, controller_value=0.2).has_changed_from(base)
        assert AutomationEvent(id="1", beat=1.0, curvature=0.9, controller_value=0.2).has_changed_from(base)
        assert AutomationEvent(id="1", beat=1.0, curvature=0.5, controller_value=0.7).has_changed_from(base)

    def test_clip_flags(self):
        assert Clip(id="c", mute=True).has_changed_from(Clip(id="c"))


class TestSequences:
    def test_serialize_sorts_by_beat_then_id(self):
        tree = serialize_records(
            [Note(id="b", beat=1.0), Note(id="z", beat=0.0), Note(id="a", beat=1.0)],
            "notesAdded",
        )
        assert [c.get_property("id") for c in tree.children] == ["z", "a", "b"]

    def test_deserialize_ignores_other_tags(self):
        tree = SerializedData(AutoSequenceDeltas.EVENTS_ADDED)
        tree.append_child(AutomationEvent(id="1", beat=3.0).serialize())
        tree.append_child(TimeSignatureEvent(id="ts").serialize())
        tree.append_child(AutomationEvent(id="2", beat=1.0).serialize())

        events = deserialize_records(tree, AutomationEvent)
        assert [e.id for e in events] == ["2", "1"]

    def test_invalid_tree_is_empty(self):
        assert deserialize_records(SerializedData(), Note) == []
