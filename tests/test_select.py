"""Tests for PR selection.

- Given-When-Then structure
- GitHub replaced by an in-memory fake
"""

import asyncio

from combine_prs.config import CombineOptions
from combine_prs.pipeline import (
    checks_pass,
    extract_manager,
    parse_bump_title,
    select_combinable_prs,
)

from .fakes import FakeGitHub, RecordingReporter, make_pull


LODASH_TITLE = "Bump lodash from 4.17.20 to 4.17.21"
LODASH_REF = "dependabot/npm_and_yarn/lodash-4.17.21"


def select(github, options=None, reporter=None):
    reporter = reporter or RecordingReporter()

    async def collect():
        return [pr async for pr in select_combinable_prs(github, options or CombineOptions(), reporter)]

    return asyncio.run(collect())


class TestSelectCombinablePRs:
    """Tests for eligibility filtering and metadata extraction."""

    def test_extracts_bump_metadata(self):
        """Given a Dependabot npm PR, should yield its package, versions and manager."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(7, LODASH_TITLE, LODASH_REF), checks=["success"])

        # When
        prs = select(github)

        # Then
        assert len(prs) == 1
        pr = prs[0]
        assert pr.number == 7
        assert pr.ref == LODASH_REF
        assert pr.pkg == "lodash"
        assert pr.from_version == "4.17.20"
        assert pr.to_version == "4.17.21"
        assert pr.manager == "npm_and_yarn"
        assert pr.short_commit_message == LODASH_TITLE
        assert pr.last_commit.sha == "sha7"

    def test_rejects_ref_without_prefix(self):
        """Given a PR from a human branch, should never yield it."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, "feature/lodash"))
        reporter = RecordingReporter()

        # When
        prs = select(github, reporter=reporter)

        # Then
        assert prs == []
        assert github.check_requests == []
        assert "feature/lodash does not start with dependabot. Not combining." in reporter.of("warning")

    def test_custom_branch_prefix(self):
        """Given a renovate prefix, should select renovate branches and extract their manager."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, "renovate/npm_and_yarn/lodash"))
        github.add(make_pull(2, LODASH_TITLE, LODASH_REF))

        # When
        prs = select(github, CombineOptions(branch_prefix="renovate"))

        # Then
        assert [pr.number for pr in prs] == [1]
        assert prs[0].manager == "npm_and_yarn"

    def test_ignore_label_wins_over_green_checks(self):
        """Given a green PR with the ignore label, should skip it."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, LODASH_REF, labels=["nocombine"]), checks=["success"])

        # When
        prs = select(github)

        # Then
        assert prs == []

    def test_include_label_required_when_set(self):
        """Given an include label, should only yield PRs carrying it."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, LODASH_REF, labels=["dependencies"]))
        github.add(make_pull(2, "Bump react from 17.0.1 to 17.0.2", "dependabot/npm_and_yarn/react-17.0.2",
                             labels=["security"]))

        # When
        prs = select(github, CombineOptions(include_label="security"))

        # Then
        assert [pr.number for pr in prs] == [2]

    def test_rejects_non_bump_title_before_fetching_commit(self):
        """Given an unrecognized title, should skip it without fetching commit detail."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, "Update lodash requirement to ^4.17.21", LODASH_REF))
        reporter = RecordingReporter()

        # When
        prs = select(github, reporter=reporter)

        # Then
        assert prs == []
        assert github.commit_requests == []
        assert any("Failed to extract version bump info" in w for w in reporter.of("warning"))

    def test_rejects_ref_without_manager(self):
        """Given a prefixed ref with no manager segment, should skip it."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, "dependabot-lodash"))
        reporter = RecordingReporter()

        # When
        prs = select(github, reporter=reporter)

        # Then
        assert prs == []
        assert "Failed to extract package manager from dependabot-lodash" in reporter.of("warning")

    def test_narrower_prefix_keeps_manager(self):
        """Given a prefix below the bot namespace, should still extract the manager."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, LODASH_REF))

        # When
        trailing = select(github, CombineOptions(branch_prefix="dependabot/"))
        npm_only = select(github, CombineOptions(branch_prefix="dependabot/npm_and_yarn"))

        # Then
        assert [(pr.number, pr.manager) for pr in trailing] == [(1, "npm_and_yarn")]
        assert [(pr.number, pr.manager) for pr in npm_only] == [(1, "npm_and_yarn")]

    def test_keeps_listing_order(self):
        """Given several eligible PRs, should yield them in API order."""
        # Given
        github = FakeGitHub()
        for number in (5, 2, 9):
            github.add(make_pull(number, f"Bump pkg{number} from 1.0.0 to 1.0.1",
                                 f"dependabot/npm_and_yarn/pkg{number}-1.0.1"))

        # When
        prs = select(github)

        # Then
        assert [pr.number for pr in prs] == [5, 2, 9]


class TestCheckPolicy:
    """Tests for the must-be-green gate."""

    def test_failed_check_rejects(self):
        """Given a failing check-run, should not yield the PR."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, LODASH_REF), checks=["success", "failure"])

        # Then
        assert select(github) == []

    def test_skipped_check_rejects_by_default(self):
        """Given a skipped check-run and allow_skipped off, should not yield the PR."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, LODASH_REF), checks=["success", "skipped"])

        # Then
        assert select(github) == []

    def test_skipped_check_accepted_when_allowed(self):
        """Given a skipped check-run and allow_skipped on, should yield the PR."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, LODASH_REF), checks=["success", "skipped"])

        # When
        prs = select(github, CombineOptions(allow_skipped=True))

        # Then
        assert [pr.number for pr in prs] == [1]

    def test_no_check_runs_is_green(self):
        """Given a PR with zero check-runs, should yield it."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, LODASH_REF), checks=[])

        # When
        prs = select(github)

        # Then
        assert [pr.number for pr in prs] == [1]
        assert github.check_requests == ["sha1"]

    def test_checks_not_fetched_when_green_not_required(self):
        """Given must_be_green off, should yield a failing PR without fetching checks."""
        # Given
        github = FakeGitHub()
        github.add(make_pull(1, LODASH_TITLE, LODASH_REF), checks=["failure"])

        # When
        prs = select(github, CombineOptions(must_be_green=False))

        # Then
        assert [pr.number for pr in prs] == [1]
        assert github.check_requests == []

    def test_pending_check_rejects(self):
        """Given a check-run without a conclusion yet, should treat it as not green."""
        assert checks_pass([None], allow_skipped=True) is False


class TestParsing:
    """Tests for title and ref parsing helpers."""

    def test_title_is_case_insensitive_and_searched(self):
        match = parse_bump_title("chore(deps): bump @types/node from 14.14.31 to 14.14.35")
        assert match is not None
        assert match.groups() == ("@types/node", "14.14.31", "14.14.35")
        assert match.group(0) == "bump @types/node from 14.14.31 to 14.14.35"

    def test_title_without_bump(self):
        assert parse_bump_title("Update README") is None

    def test_manager_from_ref(self):
        assert extract_manager("dependabot/github_actions/actions/checkout-4", "dependabot") == "github_actions"
        assert extract_manager("dependabot/npm_and_yarn/lodash-4.17.21", "dependabot") == "npm_and_yarn"
        assert extract_manager("dependabot", "dependabot") is None

    def test_manager_with_narrower_prefix(self):
        assert extract_manager("dependabot/npm_and_yarn/lodash-4.17.21", "dependabot/") == "npm_and_yarn"
        assert extract_manager("dependabot/npm_and_yarn/lodash-4.17.21", "dependabot/npm_and_yarn") == "npm_and_yarn"
