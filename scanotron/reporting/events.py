from collections.abc import Mapping
from dataclasses import dataclass, field
from enum import Enum


class ReportMode(str, Enum):
    """How report events are rendered for the whole run."""

    HUMAN = "human"
    MACHINE = "machine"


class EventLevel(str, Enum):
    INFO = "INFO"
    SUCCESS = "SUCCESS"
    WARNING = "WARNING"
    ERROR = "ERROR"
    STEP = "STEP"
    SUMMARY = "SUMMARY"


@dataclass(frozen=True)
class ReportEvent:
    """A single structured observation emitted during a pipeline run.

    Both render strategies consume the same message and payload; only the
    formatting differs.
    """

    level: EventLevel
    message: str
    payload: Mapping[str, object] = field(default_factory=dict)
