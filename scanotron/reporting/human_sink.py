import json

from scanotron.reporting.base import BaseReportSink
from scanotron.reporting.events import EventLevel, ReportEvent

BANNER = "=" * 80

PREFIXES: dict[EventLevel, str] = {
    EventLevel.INFO: "",
    EventLevel.SUCCESS: "",
    EventLevel.WARNING: "⚠️  ",
    EventLevel.ERROR: "❌ ",
}


def format_value(value: object) -> str:
    """Render a summary value; non-strings use their JSON form."""
    if isinstance(value, str):
        return value
    return json.dumps(value, ensure_ascii=False, default=str)


class HumanReportSink(BaseReportSink):
    """Renders events as console text with banners and indented payloads."""

    def emit(self, event: ReportEvent) -> None:
        if event.level is EventLevel.STEP:
            self._render_step(event)
        elif event.level is EventLevel.SUMMARY:
            self._render_summary(event)
        else:
            self._write(f"{PREFIXES[event.level]}{event.message}")
            if event.payload:
                dump = json.dumps(dict(event.payload), indent=2, ensure_ascii=False, default=str)
                for line in dump.splitlines():
                    self._write(line)

    def passthrough(self, line: str) -> None:
        self._write(line)

    def _render_step(self, event: ReportEvent) -> None:
        self._write()
        self._write(BANNER)
        self._write(f"Step {event.payload.get('step')}: {event.message}")
        self._write(BANNER)

    def _render_summary(self, event: ReportEvent) -> None:
        self._write()
        self._write(BANNER)
        self._write(event.message)
        self._write(BANNER)
        for key, value in event.payload.items():
            self._write(f"{key}: {format_value(value)}")
        self._write()
