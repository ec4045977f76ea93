from typing import TextIO

from scanotron.reporting.base import BaseReportSink
from scanotron.reporting.events import ReportMode
from scanotron.reporting.human_sink import HumanReportSink
from scanotron.reporting.machine_sink import MachineReportSink


class ReportSinkFactory:
    """Creates the report sink for the selected mode."""

    SINKS: dict[ReportMode, type[BaseReportSink]] = {
        ReportMode.HUMAN: HumanReportSink,
        ReportMode.MACHINE: MachineReportSink,
    }

    @classmethod
    def create(cls, mode: ReportMode, stream: TextIO | None = None) -> BaseReportSink:
        sink_cls = cls.SINKS.get(mode)
        if sink_cls is None:
            raise ValueError(f"Unknown report mode '{mode}'. Choose from: {list(cls.SINKS)}")
        return sink_cls(stream=stream)
