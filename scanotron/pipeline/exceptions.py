class PipelineError(Exception):
    """Base exception for all pipeline errors."""


class InputNotFoundError(PipelineError):
    """Raised when the input document does not exist."""


class StageFailedError(PipelineError):
    """Raised when an external tool stage exits unsuccessfully."""

    def __init__(self, message: str, exit_code: int | None = None, stderr: str = "") -> None:
        super().__init__(message)
        self.exit_code = exit_code
        self.stderr = stderr
