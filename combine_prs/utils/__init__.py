"""Utility functions."""

from .logging import (
    SUCCESS,
    setup_logging,
    get_logger,
    LogReporter,
    ActionsReporter,
)

__all__ = [
    "SUCCESS",
    "setup_logging",
    "get_logger",
    "LogReporter",
    "ActionsReporter",
]
