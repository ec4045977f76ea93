class ToolError(Exception):
    """Base exception for all external tool errors."""


class ToolLaunchError(ToolError):
    """Raised when an external tool process cannot be started at all."""
