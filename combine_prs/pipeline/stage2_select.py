"""Stage 2: PR selection - Find the open PRs that can be combined."""

import asyncio
import re
from typing import AsyncIterator, Optional

from ..config import CombineOptions
from ..models import CandidatePR, PullRequestSummary
from ..tools import GitHubTool
from ..utils import LogReporter


PR_TITLE_PATTERN = re.compile(
    r'bump ([\w.\-@/]+) from ([\w.\-]+) to ([\w.\-]+)',
    re.IGNORECASE,
)


def parse_bump_title(title: str) -> Optional[re.Match]:
    """Match a "Bump <pkg> from <a> to <b>" title anywhere in the string."""
    return PR_TITLE_PATTERN.search(title or "")


def extract_manager(ref: str, branch_prefix: str) -> Optional[str]:
    """
    Extract the package manager from a dependency bot branch name.

    The manager is the path segment right after the bot namespace, the
    first segment of `branch_prefix`, so narrower prefixes such as
    `dependabot/` or `dependabot/npm_and_yarn` still resolve it.

    `dependabot/npm_and_yarn/lodash-4.17.21` -> `npm_and_yarn`
    """
    namespace = branch_prefix.split("/")[0]
    match = re.match(rf'{re.escape(namespace)}/([\w-]+)', ref)
    return match.group(1) if match else None


def checks_pass(conclusions, allow_skipped: bool) -> bool:
    """
    Check every check-run conclusion against the green policy.

    No check-runs at all counts as passing: some bots only report legacy
    commit statuses.
    """
    accepted = {"success", "skipped"} if allow_skipped else {"success"}
    return all(conclusion in accepted for conclusion in conclusions)


async def select_combinable_prs(
    github: GitHubTool,
    options: CombineOptions,
    reporter: LogReporter,
) -> AsyncIterator[CandidatePR]:
    """
    Yield the open PRs eligible for combination, in API order.

    Check-runs and commit details are fetched lazily, one PR at a time.
    Rejected PRs are reported as warnings and skipped.

    Args:
        github: GitHub tool for the target repository
        options: Eligibility options
        reporter: Sink for skip messages

    Yields:
        CandidatePR for each eligible pull request
    """
    pulls = await asyncio.to_thread(github.list_open_pulls)

    for pull in pulls:
        candidate = await _evaluate(github, pull, options, reporter)
        if candidate is not None:
            yield candidate


async def _evaluate(
    github: GitHubTool,
    pull: PullRequestSummary,
    options: CombineOptions,
    reporter: LogReporter,
) -> Optional[CandidatePR]:
    ref = pull.head_ref

    if not ref.startswith(options.branch_prefix):
        reporter.warning(f"{ref} does not start with {options.branch_prefix}. Not combining.")
        return None

    if options.must_be_green:
        conclusions = await asyncio.to_thread(github.get_check_conclusions, pull.head_sha or ref)
        if not checks_pass(conclusions, options.allow_skipped):
            reporter.warning(f"Checks for {ref} are not all successful. Not combining.")
            return None

    if options.ignore_label and options.ignore_label in pull.labels:
        reporter.warning(f"{ref} has label {options.ignore_label}. Not combining.")
        return None

    if options.include_label and options.include_label not in pull.labels:
        reporter.warning(f"{ref} doesn't have label {options.include_label}. Not combining.")
        return None

    title_match = parse_bump_title(pull.title)
    if title_match is None:
        reporter.warning(f"Failed to extract version bump info from PR title: {pull.title}")
        return None

    last_commit = await asyncio.to_thread(github.get_commit, pull.head_sha or ref)

    manager = extract_manager(ref, options.branch_prefix)
    if not manager:
        reporter.warning(f"Failed to extract package manager from {ref}")
        return None

    pkg, from_version, to_version = title_match.groups()

    return CandidatePR(
        ref=ref,
        number=pull.number,
        title=pull.title,
        last_commit=last_commit,
        short_commit_message=title_match.group(0),
        pkg=pkg,
        from_version=from_version,
        to_version=to_version,
        manager=manager,
    )
