class OutputParseError(Exception):
    """Base exception for errors interpreting external tool output."""


class EmptyPatternError(OutputParseError):
    """Raised when the extraction tool produced no pattern."""
