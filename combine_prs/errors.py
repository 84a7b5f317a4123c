"""Exceptions raised while combining pull requests."""

from typing import List


class CombineError(Exception):
    """Base class for combine-prs errors."""


class ConfigurationError(CombineError):
    """Invocation is missing a token, a target or has a malformed input."""


class GitCommandError(CombineError):
    """A git subprocess exited with a non-zero status."""

    def __init__(self, command: List[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = (stderr or "").strip()
        message = f"`{' '.join(command)}` exited with {returncode}"
        if self.stderr:
            message += f": {self.stderr}"
        super().__init__(message)


class FallbackError(CombineError):
    """The manual version bump could not be applied."""


class UnsupportedManagerError(FallbackError):
    """No fallback strategy is registered for a package manager."""

    def __init__(self, manager: str):
        self.manager = manager
        super().__init__(f"Cannot manually apply update for package manager {manager}.")


class CherryPickError(CombineError):
    """A cherry-pick failed for a reason other than a conflict."""

    def __init__(self, sha: str, detail: str = ""):
        self.sha = sha
        self.detail = detail
        super().__init__(f"Cherry-pick of {sha} failed: {detail}" if detail else f"Cherry-pick of {sha} failed.")
