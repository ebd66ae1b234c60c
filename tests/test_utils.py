"""
Tests for naming, symbol and logging utilities.
"""

import logging

import pytest

from project_diff_tool.utils.colors import DIFF_SYMBOLS
from project_diff_tool.utils.log_handler import MemoryLogHandler, setup_logging
from project_diff_tool.utils.naming import format_description, nicify_delta_type


class TestNicifyDeltaType:
    @pytest.mark.parametrize("tag, expected", [
        ("eventsAdded", "Events Added"),
        ("trackColour", "Track Colour"),
        ("timeSignaturesChangedOnTimeline", "Time Signatures Changed On Timeline"),
        ("MIDIChannel", "MIDI Channel"),
        ("", ""),
    ])
    def test_names(self, tag, expected):
        assert nicify_delta_type(tag) == expected


class TestFormatDescription:
    def test_with_count(self):
        assert format_description("added {x} events", 3) == "added 3 events"

    def test_without_count(self):
        assert format_description("path changed") == "path changed"


class TestSymbols:
    def test_symbols(self):
        assert DIFF_SYMBOLS["added"] == "+"
        assert DIFF_SYMBOLS["unchanged"] == ""


class TestMemoryLogHandler:
    def make_record(self, level: int, name: str = "project_diff_tool.core.diff_logic") -> logging.LogRecord:
        return logging.LogRecord(name, level, __file__, 1, "merged %d deltas", (3,), None)

    def test_captures_and_filters(self):
        handler = MemoryLogHandler(max_records=10)
        handler.emit(self.make_record(logging.DEBUG))
        handler.emit(self.make_record(logging.WARNING, "project_diff_tool.core.loader"))

        assert len(handler.get_records()) == 2
        assert len(handler.get_records(min_level=logging.WARNING)) == 1
        assert len(handler.get_records(logger_filter="loader")) == 1
        assert handler.get_records()[0].message == "merged 3 deltas"

    def test_ring_buffer(self):
        handler = MemoryLogHandler(max_records=2)
        for _ in range(5):
            handler.emit(self.make_record(logging.INFO))
        assert len(handler.get_records()) == 2

    def test_clear(self):
        handler = MemoryLogHandler()
        handler.emit(self.make_record(logging.INFO))
        handler.clear()
        assert handler.get_records() == []

    def test_format(self):
        handler = MemoryLogHandler()
        handler.emit(self.make_record(logging.INFO))
        text = handler.get_records()[0].format(show_timestamp=False)
        assert text == "[INFO] core.diff_logic merged 3 deltas"


class TestSetupLogging:
    def test_single_memory_handler(self):
        first = setup_logging(logging.DEBUG, console=False)
        second = setup_logging(logging.DEBUG, console=False)

        package_logger = logging.getLogger("project_diff_tool")
        memory_handlers = [h for h in package_logger.handlers if isinstance(h, MemoryLogHandler)]

        assert first is second
        assert memory_handlers == [first]
