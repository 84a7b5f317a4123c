"""Logging utilities and status reporters."""

import logging
import sys
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO


SUCCESS = 25
logging.addLevelName(SUCCESS, "SUCCESS")


def setup_logging(
    level: int = logging.INFO,
    format_str: Optional[str] = None
) -> logging.Logger:
    """
    Setup logging for combine-prs.

    Args:
        level: Logging level (default: INFO)
        format_str: Custom format string

    Returns:
        Configured logger
    """
    if format_str is None:
        format_str = "[%(asctime)s] %(levelname)s - %(message)s"

    logging.basicConfig(
        level=level,
        format=format_str,
        handlers=[
            logging.StreamHandler(sys.stdout)
        ]
    )

    logger = logging.getLogger("combine_prs")
    logger.setLevel(level)

    return logger


def get_logger(name: str = "combine_prs") -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


class LogReporter:
    """
    Reports combine progress through the standard logging machinery.

    `group` brackets the processing of one PR; exceptions raised inside the
    block propagate unchanged.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or get_logger()

    def info(self, message: str) -> None:
        self.logger.info(message)

    def success(self, message: str) -> None:
        self.logger.log(SUCCESS, message)

    def warning(self, message: str) -> None:
        self.logger.warning(message)

    def error(self, message: str) -> None:
        self.logger.error(message)

    @contextmanager
    def group(self, name: str) -> Iterator[None]:
        self.logger.info(f"▶ {name}")
        try:
            yield
        finally:
            self.logger.debug(f"◀ {name}")


class ActionsReporter(LogReporter):
    """
    Reports through GitHub Actions workflow commands.

    Warnings and errors become annotations, groups become collapsible log
    sections in the job output.
    """

    def __init__(self, stream: Optional[TextIO] = None, logger: Optional[logging.Logger] = None):
        super().__init__(logger)
        self.stream = stream or sys.stdout

    def _command(self, command: str, message: str = "") -> None:
        self.stream.write(f"::{command}::{_escape_data(message)}\n")
        self.stream.flush()

    def info(self, message: str) -> None:
        self.stream.write(f"{message}\n")
        self.stream.flush()

    def success(self, message: str) -> None:
        self.info(message)

    def warning(self, message: str) -> None:
        self._command("warning", message)

    def error(self, message: str) -> None:
        self._command("error", message)

    @contextmanager
    def group(self, name: str) -> Iterator[None]:
        self._command("group", name)
        try:
            yield
        finally:
            self._command("endgroup")


def _escape_data(value: str) -> str:
    # Workflow command data must keep to one line
    return value.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")
