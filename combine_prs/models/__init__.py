"""Data models for combining PRs."""

from .pull import (
    Target,
    PullRequestSummary,
    CommitFile,
    LastCommit,
    CandidatePR,
)
from .combine import (
    CherryPickStatus,
    CherryPickResult,
    CombineResult,
)

__all__ = [
    "Target",
    "PullRequestSummary",
    "CommitFile",
    "LastCommit",
    "CandidatePR",
    "CherryPickStatus",
    "CherryPickResult",
    "CombineResult",
]
