from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True)
class ToolInvocation:
    """One completed external tool run with its captured output."""

    executable: Path
    args: list[str] = field(default_factory=list)
    working_directory: Path | None = None
    stdout: str = ""
    stderr: str = ""
    exit_code: int = 0

    @property
    def succeeded(self) -> bool:
        return self.exit_code == 0


@dataclass(frozen=True)
class LocatedTool:
    """Resolved executable plus the project directory it was found under."""

    name: str
    executable: Path
    project_dir: Path
