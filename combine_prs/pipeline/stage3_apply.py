"""Stage 3: Change application - Put each PR's change on the combination branch."""

import asyncio

from ..config import FALLBACK_AUTHOR_EMAIL, FALLBACK_AUTHOR_NAME
from ..errors import GitCommandError, UnsupportedManagerError
from ..models import CandidatePR, CherryPickResult
from ..tools import GitTool
from ..utils import LogReporter
from .fallbacks import get_fallback


async def cherry_pick_pr(git: GitTool, pr: CandidatePR, reporter: LogReporter) -> CherryPickResult:
    """
    Replay the PR's head commit onto the current branch.

    Returns:
        The tagged outcome; on CONFLICT or FAILED the cherry-pick has
        already been aborted
    """
    reporter.info(f"Cherry-picking {pr.pkg} from {pr.from_version} to {pr.to_version}.")
    return await asyncio.to_thread(git.cherry_pick, pr.last_commit.sha)


async def apply_version_bump(git: GitTool, pr: CandidatePR, reporter: LogReporter) -> None:
    """
    Reconstruct the PR's version bump by hand and commit it.

    Used after a cherry-pick conflict. The commit reuses the PR's short
    commit message and the original author, or the github-actions identity
    when the author is unknown. A failure leaves the working tree reset.

    Raises:
        UnsupportedManagerError: If no fallback exists for the PR's manager
        FallbackError: If the bump could not be reconstructed
        GitCommandError: If staging or committing fails
    """
    reporter.info(
        f"Manually applying version bump for {pr.pkg} from {pr.from_version} "
        f"to {pr.to_version} with {pr.manager}."
    )

    strategy = get_fallback(pr.manager)
    if strategy is None:
        raise UnsupportedManagerError(pr.manager)

    author_name = pr.last_commit.author_name or FALLBACK_AUTHOR_NAME
    author_email = pr.last_commit.author_email or FALLBACK_AUTHOR_EMAIL

    def apply() -> None:
        strategy(pr, git, reporter)
        git.add_all()
        git.commit(pr.short_commit_message, author_name, author_email)

    try:
        await asyncio.to_thread(apply)
    except Exception:
        _discard_changes(git, reporter)
        raise


def _discard_changes(git: GitTool, reporter: LogReporter) -> None:
    try:
        git.reset_hard()
    except GitCommandError as e:
        reporter.warning(f"Could not reset working tree: {e}")
