"""Combine orchestration.

This module provides:
- PRCombiner: Drives selection, application, push and the combined PR
- combine_prs_sync: Blocking entry point around PRCombiner.combine
"""

from .orchestrator import (
    PRCombiner,
    combine_prs_sync,
    build_pr_title,
    build_pr_body,
)

__all__ = [
    "PRCombiner",
    "combine_prs_sync",
    "build_pr_title",
    "build_pr_body",
]
