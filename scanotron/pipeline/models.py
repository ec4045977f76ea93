from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from scanotron.parsing.models import SplitOutcome
from scanotron.reporting.events import ReportMode


class PipelineState(str, Enum):
    START = "start"
    RESOLVE_OUTPUT_DIR = "resolve_output_dir"
    CACHE_LOOKUP = "cache_lookup"
    CACHE_HIT = "cache_hit"
    EXTRACT_PATTERN = "extract_pattern"
    PERSIST_PATTERN = "persist_pattern"
    SPLIT_DOCUMENT = "split_document"
    SUCCESS = "success"
    FAILURE = "failure"


@dataclass(frozen=True)
class PipelineRequest:
    """Immutable input for one pipeline run."""

    document: Path
    output_dir: Path | None = None
    model: str | None = None
    endpoint: str | None = None
    api_key: str | None = None
    force: bool = False
    mode: ReportMode = ReportMode.HUMAN


@dataclass(slots=True)
class PipelineContext:
    """Working state carried through the pipeline steps."""

    request: PipelineRequest
    state: PipelineState = PipelineState.START
    output_dir: Path | None = None
    cache_path: Path | None = None
    pattern: str | None = None
    split_outcome: SplitOutcome | None = None


def default_output_dir(document: Path) -> Path:
    """``/a/b/doc.pdf`` -> ``/a/b/doc``."""
    absolute = document.absolute()
    return absolute.parent / absolute.stem
