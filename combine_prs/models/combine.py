"""Data models for a combine run."""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .pull import CandidatePR


class CherryPickStatus(Enum):
    """Outcome of replaying a commit onto the combination branch."""
    APPLIED = "applied"      # Commit is now on the branch
    CONFLICT = "conflict"    # Stopped on conflicts, needs fallback
    FAILED = "failed"        # Any other failure


@dataclass
class CherryPickResult:
    """Tagged cherry-pick outcome."""
    status: CherryPickStatus
    detail: str = ""

    @property
    def applied(self) -> bool:
        return self.status == CherryPickStatus.APPLIED

    @property
    def conflicted(self) -> bool:
        return self.status == CherryPickStatus.CONFLICT


@dataclass
class CombineResult:
    """Accumulated result of combining PRs into one branch."""
    changelog: str = ""
    combined: List[CandidatePR] = field(default_factory=list)
    dropped: List[Tuple[CandidatePR, str]] = field(default_factory=list)
    pr_url: Optional[str] = None

    def record_combined(self, pr: CandidatePR) -> None:
        self.changelog += pr.changelog_line
        self.combined.append(pr)

    def record_dropped(self, pr: CandidatePR, error: str) -> None:
        self.dropped.append((pr, error))

    @property
    def combined_numbers(self) -> List[int]:
        return [pr.number for pr in self.combined]
