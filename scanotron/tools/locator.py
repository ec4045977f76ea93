import sys
from pathlib import Path

from scanotron.config.settings import Settings
from scanotron.logging.logger import Log
from scanotron.tools.models import LocatedTool


class ExecutableLocator:
    """Finds the built binary of a sibling tool project.

    Candidates are checked in order: Release build, Debug build and, on
    Windows, the ``.exe`` variants of both. When nothing exists the last
    candidate is returned so the launch fails with the OS error for a
    concrete path.
    """

    CONFIGURATIONS = ("Release", "Debug")

    def __init__(
        self,
        tools_dir: Path,
        build_target: str,
        overrides: dict[str, Path] | None = None,
        platform: str | None = None,
    ) -> None:
        self._tools_dir = tools_dir
        self._build_target = build_target
        self._overrides = dict(overrides or {})
        self._platform = platform if platform is not None else sys.platform

    def candidates(self, tool_name: str) -> list[Path]:
        """Ordered list of paths where the tool binary may live."""
        bin_dir = self.project_dir(tool_name) / "bin"
        paths = [
            bin_dir / configuration / self._build_target / tool_name
            for configuration in self.CONFIGURATIONS
        ]
        if self._platform.startswith("win"):
            paths.extend(path.with_name(f"{path.name}.exe") for path in list(paths))
        return paths

    def project_dir(self, tool_name: str) -> Path:
        return self._tools_dir / tool_name

    def locate(self, tool_name: str) -> LocatedTool:
        """Resolve ``tool_name`` to an executable path."""
        override = self._overrides.get(tool_name)
        if override is not None:
            Log.debug(f"Using configured path for {tool_name}: {override}")
            return LocatedTool(tool_name, override, self.project_dir(tool_name))

        candidates = self.candidates(tool_name)
        for candidate in candidates:
            if candidate.is_file():
                Log.debug(f"Located {tool_name} at {candidate}")
                return LocatedTool(tool_name, candidate, self.project_dir(tool_name))

        fallback = candidates[-1]
        Log.debug(f"No build of {tool_name} found, falling back to {fallback}")
        return LocatedTool(tool_name, fallback, self.project_dir(tool_name))


def build_locator(settings: Settings) -> ExecutableLocator:
    """Build an ExecutableLocator honouring per-tool path overrides."""
    overrides: dict[str, Path] = {}
    if settings.extractor_path is not None:
        overrides[settings.extractor_tool] = settings.extractor_path
    if settings.splitter_path is not None:
        overrides[settings.splitter_tool] = settings.splitter_path
    return ExecutableLocator(
        tools_dir=settings.tools_dir,
        build_target=settings.build_target,
        overrides=overrides,
    )
