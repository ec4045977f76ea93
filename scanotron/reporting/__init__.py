from scanotron.reporting.base import BaseReportSink
from scanotron.reporting.events import EventLevel, ReportEvent, ReportMode
from scanotron.reporting.factory import ReportSinkFactory

__all__ = ["BaseReportSink", "EventLevel", "ReportEvent", "ReportMode", "ReportSinkFactory"]
