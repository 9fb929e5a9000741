# tests/test_complaints.py
"""
Tests for the complaint model, output formats and sinks.
"""

import io
import json
import threading
from dataclasses import FrozenInstanceError

import pytest

from jsbastard.complaints import (
    MESSAGES,
    Complaint,
    ComplaintCollector,
    StreamSink,
)


class TestComplaint:

    @pytest.mark.parametrize("rule,message", [
        ("closureRequired", "The script must be inside a closure"),
        ("namedFunction", "Do not declare named functions"),
        ("varNotFirst", "Variable declarations must be at the top of functions"),
        ("multilineVar", "Variable declaration spans more than one line"),
        ("emptyStatement", "Empty statement"),
    ])
    def test_canonical_messages(self, rule, message):
        complaint = Complaint.for_rule(rule, 3, 4)
        assert complaint.message == message
        assert complaint.rule == rule
        assert (complaint.line, complaint.column) == (3, 4)

    def test_every_rule_has_a_message(self):
        assert len(MESSAGES) == 5

    def test_core_complaints_have_no_filename(self):
        assert Complaint.for_rule("emptyStatement", 1, 0).filename == ""

    def test_with_filename_returns_new_complaint(self):
        original = Complaint.for_rule("emptyStatement", 1, 0)
        tagged = original.with_filename("a.js")
        assert tagged.filename == "a.js"
        assert original.filename == ""

    def test_frozen(self):
        complaint = Complaint.for_rule("emptyStatement", 1, 0)
        with pytest.raises(FrozenInstanceError):
            complaint.line = 2

    def test_text_format(self):
        complaint = Complaint.for_rule("emptyStatement", 12, 3).with_filename("src/a.js")
        assert complaint.format() == "src/a.js:12:3: Empty statement"
        assert str(complaint) == complaint.format()

    def test_json_format(self):
        complaint = Complaint.for_rule("varNotFirst", 2, 4).with_filename("a.js")
        assert json.loads(complaint.to_json_str()) == {
            "file": "a.js",
            "line": 2,
            "column": 4,
            "rule": "varNotFirst",
            "message": "Variable declarations must be at the top of functions",
        }


class TestComplaintCollector:

    def test_records_in_order(self):
        collector = ComplaintCollector()
        collector(Complaint.for_rule("emptyStatement", 1, 0))
        collector(Complaint.for_rule("namedFunction", 2, 0))
        assert len(collector) == 2
        assert collector.rules == ["emptyStatement", "namedFunction"]
        assert collector.messages == ["Empty statement", "Do not declare named functions"]
        assert [c.line for c in collector] == [1, 2]


class TestStreamSink:

    def test_text_lines(self):
        out = io.StringIO()
        sink = StreamSink(out)
        sink(Complaint.for_rule("emptyStatement", 1, 2).with_filename("a.js"))
        sink(Complaint.for_rule("namedFunction", 3, 4).with_filename("b.js"))
        assert out.getvalue().splitlines() == [
            "a.js:1:2: Empty statement",
            "b.js:3:4: Do not declare named functions",
        ]
        assert sink.count == 2

    def test_json_lines(self):
        out = io.StringIO()
        sink = StreamSink(out, fmt="json")
        sink(Complaint.for_rule("multilineVar", 5, 8).with_filename("a.js"))
        record = json.loads(out.getvalue())
        assert record["rule"] == "multilineVar"
        assert record["line"] == 5

    def test_flushes_every_complaint(self):
        class Recorder(io.StringIO):
            flushes = 0

            def flush(self):
                Recorder.flushes += 1
                super().flush()

        sink = StreamSink(Recorder())
        sink(Complaint.for_rule("emptyStatement", 1, 0))
        sink(Complaint.for_rule("emptyStatement", 2, 0))
        assert Recorder.flushes == 2

    def test_unknown_format(self):
        with pytest.raises(ValueError):
            StreamSink(io.StringIO(), fmt="xml")

    def test_concurrent_delivery_keeps_lines_whole(self):
        out = io.StringIO()
        sink = StreamSink(out)

        def deliver(name):
            for line in range(1, 201):
                sink(Complaint.for_rule("emptyStatement", line, 0).with_filename(name))

        threads = [threading.Thread(target=deliver, args=(f"f{i}.js",)) for i in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        lines = out.getvalue().splitlines()
        assert len(lines) == 800
        assert all(line.endswith(": Empty statement") for line in lines)
        assert sink.count == 800
