from pathlib import Path

from scanotron.cache.exceptions import CacheWriteError
from scanotron.logging.logger import Log


class PatternCache:
    """Stores the extracted pattern in a sidecar file next to the document.

    ``/docs/report.pdf`` is cached in ``/docs/report.brrr`` (for the default
    extension). Entries are never deleted here.
    """

    def __init__(self, extension: str = ".brrr") -> None:
        if not extension.startswith("."):
            extension = f".{extension}"
        self._extension = extension

    def path_for(self, document: Path) -> Path:
        return document.with_suffix(self._extension)

    def exists(self, document: Path) -> bool:
        return self.path_for(document).is_file()

    def read(self, document: Path) -> str | None:
        """Return the cached pattern, trimmed, or None if there is no entry."""
        path = self.path_for(document)
        if not path.is_file():
            return None
        pattern = path.read_text(encoding="utf-8").strip()
        Log.debug(f"Read cached pattern from {path}")
        return pattern

    def write(self, document: Path, pattern: str) -> Path:
        """Persist ``pattern`` for ``document`` and return the sidecar path.

        Raises:
            CacheWriteError: if the file cannot be written.
        """
        path = self.path_for(document)
        try:
            path.write_text(pattern, encoding="utf-8")
        except OSError as exc:
            raise CacheWriteError(f"Could not save pattern file: {exc}") from exc
        Log.debug(f"Wrote pattern to {path}")
        return path
