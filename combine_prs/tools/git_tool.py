"""Git subprocess wrapper for the local clone."""

import re
import subprocess
from pathlib import Path
from typing import List, Optional, Union

from ..errors import GitCommandError
from ..models import CherryPickResult, CherryPickStatus
from ..utils import get_logger


class GitTool:
    """
    Runs git commands against one working tree.

    Every command is passed as an argument list; nothing goes through a shell.
    Failed commands raise GitCommandError unless noted otherwise.
    """

    def __init__(self, work_dir: Optional[Union[str, Path]] = None):
        """
        Initialize git tool.

        Args:
            work_dir: Root of the working tree (defaults to the current directory)
        """
        self.work_dir = Path(work_dir) if work_dir else Path.cwd()
        self.logger = get_logger()

    def run(self, *args: str, check: bool = True) -> subprocess.CompletedProcess:
        """
        Run `git <args>` in the working tree.

        Args:
            args: Arguments after `git`
            check: Raise GitCommandError on a non-zero exit

        Returns:
            The completed process with text stdout/stderr
        """
        command = ["git", *args]
        self.logger.debug(f"$ {_redact(' '.join(command))}")

        result = subprocess.run(
            command,
            cwd=self.work_dir,
            capture_output=True,
            text=True,
        )

        if check and result.returncode != 0:
            raise GitCommandError([_redact(part) for part in command], result.returncode, result.stderr)
        return result

    def clone(self, url: str) -> None:
        """Clone `url` into the (empty) working tree directory."""
        self.run("clone", url, str(self.work_dir))

    def configure_identity(self, name: str, email: str) -> None:
        self.run("config", "user.name", name)
        self.run("config", "user.email", email)

    def create_branch(self, name: str, start_point: str) -> None:
        self.run("branch", name, start_point)

    def checkout(self, name: str) -> None:
        self.run("checkout", name)

    def fetch_all(self) -> None:
        self.run("fetch", "--all")

    def cherry_pick(self, sha: str) -> CherryPickResult:
        """
        Replay a commit onto the current branch.

        A failed cherry-pick is always aborted so the tree is back at the
        pre-attempt state. Conflicts are told apart from other failures by
        the presence of unmerged paths in the index, not by the error text.

        Args:
            sha: Commit to replay

        Returns:
            APPLIED, CONFLICT, or FAILED with git's error output
        """
        result = self.run("cherry-pick", sha, check=False)
        if result.returncode == 0:
            return CherryPickResult(CherryPickStatus.APPLIED)

        conflicted = bool(self.unmerged_paths())
        self.cherry_pick_abort()

        if conflicted:
            return CherryPickResult(CherryPickStatus.CONFLICT, detail=result.stdout.strip())
        return CherryPickResult(
            CherryPickStatus.FAILED,
            detail=(result.stderr or result.stdout).strip(),
        )

    def cherry_pick_abort(self) -> None:
        # Nothing to abort is not an error
        self.run("cherry-pick", "--abort", check=False)

    def unmerged_paths(self) -> List[str]:
        result = self.run("diff", "--name-only", "--diff-filter=U", check=False)
        return _split_lines(result.stdout)

    def diff_name_only(self) -> List[str]:
        """Paths with unstaged changes, relative to the repository root."""
        return _split_lines(self.run("diff", "--name-only").stdout)

    def reset_hard(self) -> None:
        self.run("reset", "--hard")

    def add_all(self) -> None:
        self.run("add", ".")

    def commit(self, message: str, author_name: str, author_email: str) -> None:
        self.run("commit", "--author", f"{author_name} <{author_email}>", "-m", message)

    def push(self, branch: str, remote: str = "origin") -> None:
        self.run("push", remote, branch)


_CREDENTIALS_PATTERN = re.compile(r"(https?://)[^/@\s]+@")


def _redact(text: str) -> str:
    return _CREDENTIALS_PATTERN.sub(r"\1***@", text)


def _split_lines(output: str) -> List[str]:
    return [line.strip() for line in (output or "").splitlines() if line.strip()]
