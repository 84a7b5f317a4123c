"""Stage 1: Repository preparation - Create and check out the combination branch."""

import asyncio

from ..tools import GitTool
from ..utils import get_logger


async def prepare_repository(git: GitTool, base_branch: str, combine_branch_name: str) -> None:
    """
    Create the combination branch from the base branch and check it out.

    Also fetches every remote so that the head commits of the PRs can be
    cherry-picked by SHA. Any failure aborts the run; an existing branch
    with the same name is not reused.

    Args:
        git: Git tool bound to the local clone
        base_branch: Branch to fork from
        combine_branch_name: Branch to create

    Raises:
        GitCommandError: If any git command fails
    """
    logger = get_logger()
    logger.debug(f"Creating {combine_branch_name} from {base_branch}")

    await asyncio.to_thread(git.create_branch, combine_branch_name, base_branch)
    await asyncio.to_thread(git.checkout, combine_branch_name)
    await asyncio.to_thread(git.fetch_all)
