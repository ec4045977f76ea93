from pathlib import Path

import pytest

from scanotron.reporting.base import BaseReportSink
from scanotron.reporting.events import ReportEvent


class RecordingSink(BaseReportSink):
    """Report sink that keeps events and passthrough lines in memory."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[ReportEvent] = []
        self.passthrough_lines: list[str] = []

    def emit(self, event: ReportEvent) -> None:
        self.events.append(event)

    def passthrough(self, line: str) -> None:
        self.passthrough_lines.append(line)

    def messages(self) -> list[str]:
        return [event.message for event in self.events]


@pytest.fixture()
def recording_sink() -> RecordingSink:
    return RecordingSink()


@pytest.fixture()
def document(tmp_path: Path) -> Path:
    """A placeholder input document; its contents are never read."""
    path = tmp_path / "doc.pdf"
    path.write_bytes(b"%PDF-1.7 fake")
    return path


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "LOG_LEVEL",
        "TOOLS_DIR",
        "BUILD_TARGET",
        "EXTRACTOR_TOOL",
        "EXTRACTOR_PROMPT",
        "EXTRACTOR_PATH",
        "SPLITTER_TOOL",
        "SPLITTER_PATH",
        "CACHE_EXTENSION",
        "API_KEY",
    ):
        monkeypatch.delenv(name, raising=False)
