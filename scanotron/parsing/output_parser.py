"""Parsers for the textual output of the extraction and splitting tools.

The splitting tool reports each written file on its own line::

    Created: /out/doc 1.pdf with pages [1]

Everything between ``Created:`` and `` with`` is the file path; the rest of
the line is free-form group info. This marker contract is the only coupling
to the tool's output format and is kept in this module.
"""

from scanotron.parsing.exceptions import EmptyPatternError
from scanotron.parsing.models import CreatedFile, OutputLine, SplitOutcome

CREATED_MARKER = "Created:"
GROUP_SEPARATOR = " with"


def parse_pattern(stdout: str, tool_name: str = "pdfbrrr") -> str:
    """Return the trimmed extraction output as the pattern.

    Raises:
        EmptyPatternError: if nothing but whitespace was printed.
    """
    pattern = stdout.strip()
    if not pattern:
        raise EmptyPatternError(f"{tool_name} did not return a valid pattern.")
    return pattern


def parse_created_line(line: str) -> CreatedFile | None:
    """Parse a ``Created:`` line, or return None if the marker is absent."""
    if CREATED_MARKER not in line:
        return None
    remainder = line.split(CREATED_MARKER, 1)[1]
    path, _, group_info = remainder.partition(GROUP_SEPARATOR)
    return CreatedFile(name=_base_name(path.strip()), group_info=group_info.strip())


def parse_split_output(stdout: str, exit_code: int) -> SplitOutcome:
    """Scan splitter stdout line by line into a SplitOutcome.

    Success is decided by the exit code alone; parsed counts never override it.
    """
    outcome = SplitOutcome(success=exit_code == 0)
    for raw_line in stdout.splitlines():
        if not raw_line.strip():
            continue
        created = parse_created_line(raw_line)
        if created is not None:
            outcome.created_files.append(created)
        outcome.lines.append(OutputLine(text=raw_line.strip(), created=created))
    return outcome


def _base_name(path: str) -> str:
    return path.replace("\\", "/").rsplit("/", 1)[-1]
