import logging
import sys


class Log:
    """Diagnostic logging for the pipeline, kept on stderr away from report output."""

    _logger: logging.Logger = logging.getLogger("scanotron")

    @classmethod
    def configure(cls, log_level: str) -> None:
        """Set the level and attach a single stderr handler."""
        cls._logger.setLevel(log_level.upper())
        if not cls._logger.handlers:
            handler = logging.StreamHandler(sys.stderr)
            handler.setFormatter(
                logging.Formatter("%(asctime)s [%(levelname)s] %(message)s")
            )
            cls._logger.addHandler(handler)

    @classmethod
    def error(cls, message: str) -> None:
        cls._logger.error(message)

    @classmethod
    def debug(cls, message: str) -> None:
        cls._logger.debug(message)
