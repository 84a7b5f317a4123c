"""Tests for reporters."""

import io
import logging

import pytest

from combine_prs.utils import SUCCESS, ActionsReporter, LogReporter


class TestLogReporter:
    """Tests for the logging-backed reporter."""

    def test_levels(self, caplog):
        """Given each kind of event, should log it at the matching level."""
        # Given
        reporter = LogReporter(logging.getLogger("combine_prs.test"))

        # When
        with caplog.at_level(logging.DEBUG, logger="combine_prs.test"):
            reporter.info("info")
            reporter.success("done")
            reporter.warning("careful")
            reporter.error("broken")

        # Then
        assert [r.levelno for r in caplog.records] == [logging.INFO, SUCCESS, logging.WARNING, logging.ERROR]
        assert caplog.records[1].levelname == "SUCCESS"

    def test_group_propagates_errors(self):
        """Given a failing body, should let the exception escape the group."""
        reporter = LogReporter()
        with pytest.raises(ValueError):
            with reporter.group("Updating lodash"):
                raise ValueError("boom")


class TestActionsReporter:
    """Tests for workflow command output."""

    def test_workflow_commands(self):
        """Given events inside a group, should emit Actions workflow commands."""
        # Given
        stream = io.StringIO()
        reporter = ActionsReporter(stream=stream)

        # When
        with reporter.group("Updating lodash from 4.17.20 to 4.17.21."):
            reporter.info("Cherry-picking lodash")
            reporter.warning("Cherry-pick for lodash failed due to conflict.")
            reporter.error("Failed to apply \"Bump lodash\" due to error:\n\nboom")

        # Then
        assert stream.getvalue().splitlines() == [
            "::group::Updating lodash from 4.17.20 to 4.17.21.",
            "Cherry-picking lodash",
            "::warning::Cherry-pick for lodash failed due to conflict.",
            "::error::Failed to apply \"Bump lodash\" due to error:%0A%0Aboom",
            "::endgroup::",
        ]

    def test_group_closed_on_error(self):
        stream = io.StringIO()
        reporter = ActionsReporter(stream=stream)

        with pytest.raises(RuntimeError):
            with reporter.group("g"):
                raise RuntimeError("x")

        assert stream.getvalue().endswith("::endgroup::\n")
