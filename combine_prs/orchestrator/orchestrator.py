"""Main orchestrator for combining dependency PRs."""

import asyncio
from typing import List, Optional

from ..config import CombineOptions
from ..errors import CherryPickError
from ..models import CandidatePR, CombineResult
from ..pipeline import (
    apply_version_bump,
    cherry_pick_pr,
    prepare_repository,
    select_combinable_prs,
)
from ..tools import GitHubTool, GitTool
from ..utils import LogReporter, get_logger


PR_BODY_HEADER = "This PR was created by combine-prs by combining the following PRs:\n\n"


def build_pr_title(include_label: str) -> str:
    if include_label:
        return f"Update combined {include_label} dependencies"
    return "Update combined dependencies"


def build_pr_body(changelog: str) -> str:
    return PR_BODY_HEADER + changelog


class PRCombiner:
    """
    Combines eligible dependency PRs of one repository into a single PR.

    Flow:
    - Create the combination branch
    - Cherry-pick each eligible PR, falling back to a manual version bump on conflict
    - Push the branch and open the combined PR, unless no PR was combined
    - Optionally close the PRs that were combined

    A PR that cannot be applied is dropped and the run continues. Only
    repository preparation, push and opening the combined PR abort the run.

    When every PR was dropped or none was eligible, the branch is still
    pushed but no combined PR is opened; GitHub refuses a PR without commits.
    """

    def __init__(
        self,
        github: GitHubTool,
        git: GitTool,
        options: Optional[CombineOptions] = None,
        reporter: Optional[LogReporter] = None,
    ):
        """
        Initialize PR combiner.

        Args:
            github: GitHub tool for the target repository
            git: Git tool bound to a clone of the target repository
            options: Combine options
            reporter: Progress sink (defaults to logging)
        """
        self.github = github
        self.git = git
        self.options = options or CombineOptions()
        self.reporter = reporter or LogReporter()
        self.logger = get_logger()

    async def combine(self) -> CombineResult:
        """
        Run a full combine.

        Returns:
            CombineResult with the changelog and the combined PRs
        """
        options = self.options
        result = CombineResult()

        self.reporter.info("Setting up repository for committing.")
        await prepare_repository(self.git, options.base_branch, options.combine_branch_name)

        self.reporter.info(f"Combining PRs in repo {self.github.target}.")

        async for pr in select_combinable_prs(self.github, options, self.reporter):
            with self.reporter.group(f"Updating {pr.pkg} from {pr.from_version} to {pr.to_version}."):
                await self._combine_one(pr, result)

        self.logger.debug(
            f"Combined {len(result.combined)} PRs, dropped {len(result.dropped)}"
        )
        await asyncio.to_thread(self.git.push, options.combine_branch_name)

        if not options.open_pr:
            return result

        if not result.combined:
            self.reporter.warning("No PRs were combined. Not opening a combined PR.")
            return result

        result.pr_url = await asyncio.to_thread(
            self.github.create_pull,
            title=build_pr_title(options.include_label),
            body=build_pr_body(result.changelog),
            head=options.combine_branch_name,
            base=options.base_branch,
        )
        self.reporter.success(f"Successfully opened PR {result.pr_url}")

        if options.close_once_combined:
            await self._close_combined(result.combined)

        return result

    async def _combine_one(self, pr: CandidatePR, result: CombineResult) -> None:
        try:
            outcome = await cherry_pick_pr(self.git, pr, self.reporter)

            if outcome.conflicted:
                self.reporter.warning(f"Cherry-pick for {pr.pkg} failed due to conflict.")
                await apply_version_bump(self.git, pr, self.reporter)
            elif not outcome.applied:
                raise CherryPickError(pr.last_commit.sha, outcome.detail)

        except Exception as e:
            self.reporter.error(f"Failed to apply \"{pr.title}\" due to error:\n\n{e}")
            result.record_dropped(pr, str(e))
            return

        self.reporter.success(
            f"Successfully updated {pr.pkg} from {pr.from_version} to {pr.to_version}."
        )
        result.record_combined(pr)

    async def _close_combined(self, prs: List[CandidatePR]) -> None:
        for pr in prs:
            try:
                await asyncio.to_thread(self.github.close_pull, pr.number)
            except Exception as e:
                self.reporter.error(f"Failed to close \"{pr.title}\" due to error:\n\n{e}")

    async def dry_run(self) -> List[CandidatePR]:
        """
        List the PRs that would be combined, without touching the clone.

        Returns:
            Eligible PRs in processing order
        """
        return [pr async for pr in select_combinable_prs(self.github, self.options, self.reporter)]


# Synchronous wrapper
def combine_prs_sync(
    github: GitHubTool,
    git: GitTool,
    options: Optional[CombineOptions] = None,
    reporter: Optional[LogReporter] = None,
) -> CombineResult:
    """Synchronous wrapper for PRCombiner.combine."""
    return asyncio.run(PRCombiner(github, git, options, reporter).combine())
