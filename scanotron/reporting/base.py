import sys
from abc import ABC, abstractmethod
from collections.abc import Mapping
from typing import TextIO

from scanotron.reporting.events import EventLevel, ReportEvent


class BaseReportSink(ABC):
    """Contract for report renderers writing to standard output."""

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream

    @abstractmethod
    def emit(self, event: ReportEvent) -> None:
        """Render one event to the output stream."""

    @abstractmethod
    def passthrough(self, line: str) -> None:
        """Forward a raw line of external tool output, if the mode shows it."""

    def info(self, message: str, payload: Mapping[str, object] | None = None) -> None:
        self.emit(ReportEvent(EventLevel.INFO, message, dict(payload or {})))

    def success(self, message: str, payload: Mapping[str, object] | None = None) -> None:
        self.emit(ReportEvent(EventLevel.SUCCESS, message, dict(payload or {})))

    def warning(self, message: str, payload: Mapping[str, object] | None = None) -> None:
        self.emit(ReportEvent(EventLevel.WARNING, message, dict(payload or {})))

    def error(self, message: str, payload: Mapping[str, object] | None = None) -> None:
        self.emit(ReportEvent(EventLevel.ERROR, message, dict(payload or {})))

    def step(self, number: int, title: str) -> None:
        self.emit(ReportEvent(EventLevel.STEP, title, {"step": number}))

    def summary(self, title: str, payload: Mapping[str, object]) -> None:
        self.emit(ReportEvent(EventLevel.SUMMARY, title, dict(payload)))

    def _write(self, line: str = "") -> None:
        stream = self._stream if self._stream is not None else sys.stdout
        print(line, file=stream, flush=True)
