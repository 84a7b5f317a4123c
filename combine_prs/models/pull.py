"""Data models for pull requests and their commits."""

from dataclasses import dataclass, field
from typing import List, Optional


@dataclass(frozen=True)
class Target:
    """Repository being operated on."""
    owner: str
    repo: str

    @classmethod
    def parse(cls, value: str) -> "Target":
        """Parse an "owner/repo" string."""
        parts = (value or "").strip().split("/")
        if len(parts) != 2 or not all(parts):
            raise ValueError(f"Invalid repository {value!r}, expected owner/repo")
        return cls(owner=parts[0], repo=parts[1])

    @property
    def full_name(self) -> str:
        return f"{self.owner}/{self.repo}"

    def __str__(self) -> str:
        return self.full_name


@dataclass
class PullRequestSummary:
    """An open pull request as returned by the listing endpoint."""
    number: int
    title: str
    head_ref: str
    head_sha: str = ""
    labels: List[str] = field(default_factory=list)


@dataclass
class CommitFile:
    """A file touched by a commit."""
    filename: str
    patch: Optional[str] = None  # Unified diff, absent for binary or huge files


@dataclass
class LastCommit:
    """Head commit of a pull request."""
    sha: str
    message: str
    author_name: str = ""
    author_email: str = ""
    files: List[CommitFile] = field(default_factory=list)


@dataclass(frozen=True)
class CandidatePR:
    """A pull request eligible for combination."""
    ref: str
    number: int
    title: str
    last_commit: LastCommit
    short_commit_message: str
    pkg: str
    from_version: str
    to_version: str
    manager: str  # e.g. npm_and_yarn

    @property
    def changelog_line(self) -> str:
        return f"* #{self.number} {self.title}\n"
