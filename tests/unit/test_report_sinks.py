import io
import json
import re

import pytest

from scanotron.reporting.events import EventLevel, ReportEvent, ReportMode
from scanotron.reporting.factory import ReportSinkFactory
from scanotron.reporting.human_sink import BANNER, PREFIXES, HumanReportSink
from scanotron.reporting.machine_sink import MachineReportSink

FIXED_TIME = "2026-01-01T00:00:00+00:00"

EVENTS = [
    ReportEvent(EventLevel.STEP, "Running pdfbrrr to analyze the PDF", {"step": 1}),
    ReportEvent(
        EventLevel.INFO,
        "Invoking pdfbrrr...",
        {"executable": "/tools/pdfbrrr", "model": "default", "endpoint": "default"},
    ),
    ReportEvent(EventLevel.SUCCESS, "Pattern extracted: 1-2,3", {"pattern": "1-2,3", "source": "pdfbrrr"}),
    ReportEvent(EventLevel.SUCCESS, "Pattern saved to: /docs/Überblick.brrr"),
    ReportEvent(EventLevel.WARNING, "Could not save pattern file: \"read-only\""),
    ReportEvent(
        EventLevel.INFO,
        "split-happens completed",
        {"filesCreated": 2, "totalPages": None, "createdFiles": ["a 1.pdf", "b.pdf"]},
    ),
    ReportEvent(EventLevel.ERROR, "split-happens failed to process the PDF.", {"exitCode": 2, "error": "bad page"}),
    ReportEvent(
        EventLevel.SUMMARY,
        "Processing Complete",
        {
            "Input PDF": "/docs/doc.pdf",
            "Pattern": "1-2,3",
            "Output Directory": "/docs/doc",
            "Total Pages": None,
            "Files Created": 2,
        },
    ),
]


def _render_human(event: ReportEvent) -> str:
    stream = io.StringIO()
    HumanReportSink(stream=stream).emit(event)
    return stream.getvalue()


def _render_machine(event: ReportEvent) -> str:
    stream = io.StringIO()
    MachineReportSink(stream=stream, clock=lambda: FIXED_TIME).emit(event)
    return stream.getvalue()


def _fields_from_human(level: EventLevel, text: str) -> tuple[str, dict[str, object]]:
    lines = text.splitlines()
    if level is EventLevel.STEP:
        match = re.fullmatch(r"Step (\d+): (.*)", lines[2])
        assert match is not None
        return match.group(2), {"step": int(match.group(1))}
    if level is EventLevel.SUMMARY:
        payload: dict[str, object] = {}
        for line in lines[4:]:
            if line:
                key, _, value = line.partition(": ")
                payload[key] = value
        return lines[2], payload
    message = lines[0][len(PREFIXES[level]):]
    payload = json.loads("\n".join(lines[1:])) if len(lines) > 1 else {}
    return message, payload


def _as_summary_text(value: object) -> object:
    return value if isinstance(value, str) else json.dumps(value)


class TestHumanRendering:
    def test_info_is_plain_message(self) -> None:
        assert _render_human(ReportEvent(EventLevel.INFO, "hello")) == "hello\n"

    def test_level_prefixes(self) -> None:
        assert _render_human(ReportEvent(EventLevel.WARNING, "careful")).startswith("⚠️  careful")
        assert _render_human(ReportEvent(EventLevel.ERROR, "broken")).startswith("❌ broken")
        assert _render_human(ReportEvent(EventLevel.SUCCESS, "done")) == "done\n"

    def test_payload_is_indented_below_message(self) -> None:
        text = _render_human(ReportEvent(EventLevel.INFO, "msg", {"pattern": "1-2"}))

        assert text.splitlines() == ["msg", "{", '  "pattern": "1-2"', "}"]

    def test_step_banner(self) -> None:
        text = _render_human(ReportEvent(EventLevel.STEP, "Using cached pattern", {"step": 1}))

        assert text.splitlines() == ["", BANNER, "Step 1: Using cached pattern", BANNER]

    def test_summary_block(self) -> None:
        text = _render_human(
            ReportEvent(EventLevel.SUMMARY, "Processing Complete", {"Pattern": "1-2", "Files Created": 3})
        )

        assert text.splitlines() == [
            "",
            BANNER,
            "Processing Complete",
            BANNER,
            "Pattern: 1-2",
            "Files Created: 3",
            "",
        ]

    def test_passthrough_prints_line(self) -> None:
        stream = io.StringIO()

        HumanReportSink(stream=stream).passthrough("Splitting 3 pages")

        assert stream.getvalue() == "Splitting 3 pages\n"


class TestMachineRendering:
    def test_single_json_line(self) -> None:
        text = _render_machine(ReportEvent(EventLevel.INFO, "msg", {"pattern": "1-2"}))

        assert text.count("\n") == 1
        assert json.loads(text) == {
            "timestamp": FIXED_TIME,
            "level": "INFO",
            "message": "msg",
            "data": {"pattern": "1-2"},
        }

    def test_empty_payload_is_null(self) -> None:
        assert json.loads(_render_machine(ReportEvent(EventLevel.SUCCESS, "ok")))["data"] is None

    def test_newlines_and_non_ascii_stay_on_one_line(self) -> None:
        message = "pdfbrrr warnings:\nÜberblick ⚠ \"quoted\"\ttab"

        text = _render_machine(ReportEvent(EventLevel.WARNING, message))

        assert text.count("\n") == 1
        assert text.isascii()
        assert json.loads(text)["message"] == message

    def test_step_number_in_data(self) -> None:
        entry = json.loads(_render_machine(ReportEvent(EventLevel.STEP, "Split", {"step": 2})))

        assert entry["level"] == "STEP"
        assert entry["message"] == "Split"
        assert entry["data"] == {"step": 2}

    def test_passthrough_is_suppressed(self) -> None:
        stream = io.StringIO()

        MachineReportSink(stream=stream).passthrough("Splitting 3 pages")

        assert stream.getvalue() == ""

    def test_default_timestamp_is_iso_utc(self) -> None:
        stream = io.StringIO()

        MachineReportSink(stream=stream).emit(ReportEvent(EventLevel.INFO, "x"))

        assert json.loads(stream.getvalue())["timestamp"].endswith("+00:00")


class TestModeParity:
    @pytest.mark.parametrize("event", EVENTS, ids=[e.level.value for e in EVENTS])
    def test_same_message_and_payload_in_both_modes(self, event: ReportEvent) -> None:
        entry = json.loads(_render_machine(event))
        human_message, human_payload = _fields_from_human(event.level, _render_human(event))
        machine_payload = entry["data"] or {}

        assert human_message == entry["message"] == event.message
        assert entry["level"] == event.level.value
        if event.level is EventLevel.SUMMARY:
            assert human_payload == {k: _as_summary_text(v) for k, v in machine_payload.items()}
        else:
            assert human_payload == machine_payload

    def test_sequence_renders_one_machine_line_per_event(self) -> None:
        stream = io.StringIO()
        sink = MachineReportSink(stream=stream, clock=lambda: FIXED_TIME)

        for event in EVENTS:
            sink.emit(event)

        lines = stream.getvalue().splitlines()
        assert len(lines) == len(EVENTS)
        assert [json.loads(line)["message"] for line in lines] == [e.message for e in EVENTS]


class TestConvenienceMethods:
    def test_step_builds_step_event(self) -> None:
        stream = io.StringIO()
        sink = MachineReportSink(stream=stream, clock=lambda: FIXED_TIME)

        sink.step(2, "Running split-happens to split the PDF")

        entry = json.loads(stream.getvalue())
        assert entry["data"] == {"step": 2}

    def test_error_with_payload(self) -> None:
        stream = io.StringIO()
        sink = MachineReportSink(stream=stream, clock=lambda: FIXED_TIME)

        sink.error("boom", {"exception": "RuntimeError"})

        entry = json.loads(stream.getvalue())
        assert entry["level"] == "ERROR"
        assert entry["data"] == {"exception": "RuntimeError"}


class TestReportSinkFactory:
    def test_creates_human_sink(self) -> None:
        assert isinstance(ReportSinkFactory.create(ReportMode.HUMAN), HumanReportSink)

    def test_creates_machine_sink(self) -> None:
        assert isinstance(ReportSinkFactory.create(ReportMode.MACHINE), MachineReportSink)

    def test_passes_stream(self) -> None:
        stream = io.StringIO()

        ReportSinkFactory.create(ReportMode.HUMAN, stream=stream).info("hi")

        assert stream.getvalue() == "hi\n"

    def test_raises_for_unknown_mode(self) -> None:
        with pytest.raises(ValueError, match="Unknown report mode"):
            ReportSinkFactory.create("xml")  # type: ignore[arg-type]
