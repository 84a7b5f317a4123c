"""GitHub API wrapper for combining PRs."""

import os
from typing import List, Optional

from github import Auth, Github
from github.Repository import Repository

from ..models import CommitFile, LastCommit, PullRequestSummary, Target


class GitHubTool:
    """
    GitHub API wrapper for the combine workflow.

    Handles:
    - Listing open PRs and their check-runs
    - Fetching head commit details
    - Opening the combined PR and closing superseded ones

    Paginated listings are always drained before they are returned.
    """

    def __init__(
        self,
        target: Target,
        token: Optional[str] = None,
        gh: Optional[Github] = None,
    ):
        """
        Initialize GitHub tool.

        Args:
            target: Repository to operate on
            token: GitHub token (defaults to GITHUB_TOKEN env var)
            gh: Pre-built client, used instead of creating one from the token
        """
        self.target = target
        if gh is None:
            token = token or os.environ.get("GITHUB_TOKEN")
            if not token:
                raise ValueError("GitHub token required. Set GITHUB_TOKEN env var or pass token parameter.")
            gh = Github(auth=Auth.Token(token))

        self.gh = gh
        self._repo: Optional[Repository] = None

    @property
    def repo(self) -> Repository:
        """Get the repository object (cached)."""
        if self._repo is None:
            self._repo = self.gh.get_repo(self.target.full_name)
        return self._repo

    def list_open_pulls(self) -> List[PullRequestSummary]:
        """List every open pull request in API order."""
        return [
            PullRequestSummary(
                number=pull.number,
                title=pull.title,
                head_ref=pull.head.ref,
                head_sha=pull.head.sha,
                labels=[label.name for label in pull.labels],
            )
            for pull in list(self.repo.get_pulls(state="open"))
        ]

    def get_check_conclusions(self, ref: str) -> List[Optional[str]]:
        """
        Get the conclusion of every check-run on a commit.

        Args:
            ref: Commit SHA or branch name

        Returns:
            Conclusions, None for runs that have not completed
        """
        commit = self.repo.get_commit(ref)
        return [run.conclusion for run in list(commit.get_check_runs())]

    def get_commit(self, ref: str) -> LastCommit:
        """Fetch a commit with its author and changed files."""
        commit = self.repo.get_commit(ref)
        author = commit.commit.author

        return LastCommit(
            sha=commit.sha,
            message=commit.commit.message,
            author_name=(author.name if author else "") or "",
            author_email=(author.email if author else "") or "",
            files=[
                CommitFile(filename=f.filename, patch=f.patch)
                for f in commit.files
            ],
        )

    def create_pull(self, title: str, body: str, head: str, base: str) -> str:
        """
        Open a pull request.

        Returns:
            URL of the new pull request
        """
        pull = self.repo.create_pull(title=title, body=body, head=head, base=base)
        return pull.html_url

    def close_pull(self, number: int) -> None:
        """Close a pull request without merging it."""
        self.repo.get_pull(number).edit(state="closed")

    def get_clone_url(self, https: bool = False) -> str:
        """Get the SSH (default) or HTTPS clone URL of the repository."""
        return self.repo.clone_url if https else self.repo.ssh_url
