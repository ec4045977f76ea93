import subprocess
from pathlib import Path

from scanotron.logging.logger import Log
from scanotron.tools.exceptions import ToolLaunchError
from scanotron.tools.models import ToolInvocation


class ProcessRunner:
    """Runs an external command to completion and captures both streams."""

    def run(
        self,
        executable: Path,
        args: list[str],
        working_directory: Path | None = None,
    ) -> ToolInvocation:
        """Run ``executable`` with ``args`` and wait for it to exit.

        The exit code is returned as-is; interpreting it is up to the caller.

        Raises:
            ToolLaunchError: if the process could not be started.
        """
        cwd = working_directory if working_directory and working_directory.is_dir() else None
        Log.debug(f"Launching {executable} with {len(args)} args (cwd={cwd})")
        try:
            completed = subprocess.run(
                [str(executable), *args],
                cwd=cwd,
                capture_output=True,
                text=True,
                encoding="utf-8",
                errors="replace",
                check=False,
            )
        except OSError as exc:
            raise ToolLaunchError(f"Could not start {executable}: {exc}") from exc

        Log.debug(f"{executable.name} exited with code {completed.returncode}")
        return ToolInvocation(
            executable=executable,
            args=list(args),
            working_directory=cwd,
            stdout=completed.stdout or "",
            stderr=completed.stderr or "",
            exit_code=completed.returncode,
        )
