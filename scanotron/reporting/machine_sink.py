import json
from collections.abc import Callable
from datetime import datetime, timezone
from typing import TextIO

from scanotron.reporting.base import BaseReportSink
from scanotron.reporting.events import ReportEvent


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat()


class MachineReportSink(BaseReportSink):
    """Renders each event as one self-contained JSON line.

    Output is ASCII-escaped, so messages with newlines or non-ASCII text stay
    on a single line and decode back to the original string.
    """

    def __init__(
        self,
        stream: TextIO | None = None,
        clock: Callable[[], str] = utc_timestamp,
    ) -> None:
        super().__init__(stream)
        self._clock = clock

    def emit(self, event: ReportEvent) -> None:
        entry = {
            "timestamp": self._clock(),
            "level": event.level.value,
            "message": event.message,
            "data": dict(event.payload) if event.payload else None,
        }
        self._write(json.dumps(entry, ensure_ascii=True, default=str))

    def passthrough(self, line: str) -> None:
        """Raw tool output is not part of the machine stream."""
