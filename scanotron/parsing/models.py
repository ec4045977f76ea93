from dataclasses import dataclass, field


@dataclass(frozen=True)
class CreatedFile:
    """A file reported as written by the splitting tool."""

    name: str
    group_info: str = ""


@dataclass(frozen=True)
class OutputLine:
    """One non-blank stdout line, either a created-file record or diagnostics."""

    text: str
    created: CreatedFile | None = None


@dataclass
class SplitOutcome:
    """Structured result of the split stage."""

    success: bool
    created_files: list[CreatedFile] = field(default_factory=list)
    lines: list[OutputLine] = field(default_factory=list)
    total_pages: int | None = None

    @property
    def files_created(self) -> int:
        return len(self.created_files)
