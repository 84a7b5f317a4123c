#!/usr/bin/env python3
"""
combine-prs - Main Entry Point

Combines open dependency bot PRs (Dependabot by default) into a single
branch and opens one PR for all of them.

Usage:
    combine-prs combine owner/repo [owner/repo ...]
    combine-prs action      # inside a GitHub Actions job
    combine-prs init [PATH] [--install-from SOURCE]

Or via GitHub Actions (see `combine-prs init`)
"""

import argparse
import asyncio
import os
import sys
import tempfile
from pathlib import Path
from typing import List

from .config import (
    FALLBACK_AUTHOR_EMAIL,
    FALLBACK_AUTHOR_NAME,
    CombineOptions,
    resolve_token,
)
from .errors import ConfigurationError
from .models import Target
from .orchestrator import PRCombiner
from .tools import GitHubTool, GitTool
from .utils import ActionsReporter, LogReporter, get_logger, setup_logging


def options_from_args(args) -> CombineOptions:
    """Build combine options from parsed command line flags."""
    return CombineOptions(
        base_branch=args.base_branch,
        combine_branch_name=args.combine_branch_name,
        must_be_green=args.must_be_green,
        allow_skipped=args.allow_skipped,
        branch_prefix=args.branch_prefix,
        include_label=args.include_label,
        ignore_label=args.ignore_label,
        open_pr=args.open_pr,
        close_once_combined=args.close_once_combined,
    )


def resolve_targets(values: List[str]) -> List[Target]:
    """
    Parse owner/repo targets, falling back to GITHUB_REPOSITORY.

    Raises:
        ConfigurationError: If no valid target is given
    """
    if not values:
        repository = os.environ.get("GITHUB_REPOSITORY", "")
        if not repository:
            raise ConfigurationError(
                "Repository required. Pass owner/repo or set GITHUB_REPOSITORY env var"
            )
        values = [repository]

    try:
        return [Target.parse(value) for value in values]
    except ValueError as e:
        raise ConfigurationError(str(e)) from e


def authenticated_url(url: str, token: str) -> str:
    """Embed a token into an HTTPS clone URL."""
    if not url.startswith("https://"):
        return url
    return url.replace("https://", f"https://x-access-token:{token}@", 1)


async def combine_target(
    target: Target,
    token: str,
    options: CombineOptions,
    reporter: LogReporter,
    https: bool = False,
) -> None:
    """Clone one repository into a temporary directory and combine its PRs."""
    github = GitHubTool(target, token=token)

    with tempfile.TemporaryDirectory(prefix="cpd-") as tmp_dir:
        url = github.get_clone_url(https=https)
        if https:
            url = authenticated_url(url, token)

        reporter.info(f"Cloning repository {target} into {tmp_dir}.")
        git = GitTool(tmp_dir)
        git.clone(url)

        result = await PRCombiner(github, git, options, reporter).combine()

    reporter.success(
        f"Successfully combined {len(result.combined)} PRs in {target}."
    )


async def dry_run_target(target: Target, token: str, options: CombineOptions, reporter: LogReporter) -> None:
    """Print the PRs of one repository that would be combined."""
    github = GitHubTool(target, token=token)
    candidates = await PRCombiner(github, GitTool(), options, reporter).dry_run()

    print(f"\n=== {target}: {len(candidates)} combinable PRs ===")
    for pr in candidates:
        print(f"  #{pr.number} {pr.pkg} {pr.from_version} -> {pr.to_version} ({pr.manager})")


def cmd_init(args):
    """Handle 'init' subcommand."""
    from .cli import init_repository

    target = Path(args.path) if args.path else Path.cwd()
    success = init_repository(target, install_source=args.install_from)
    sys.exit(0 if success else 1)


def cmd_combine(args):
    """Handle 'combine' subcommand."""
    import logging
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    logger = get_logger()
    reporter = LogReporter(logger)

    try:
        options = options_from_args(args)
        token = resolve_token(args.github_token, prompt=sys.stdin.isatty())
        targets = resolve_targets(args.targets)
    except ConfigurationError as e:
        logger.error(str(e))
        sys.exit(1)

    failed = []

    for target in targets:
        try:
            if args.dry_run:
                asyncio.run(dry_run_target(target, token, options, reporter))
            elif args.targets:
                asyncio.run(combine_target(target, token, options, reporter, https=args.https))
            else:
                # GITHUB_REPOSITORY with the current checkout as the clone
                github = GitHubTool(target, token=token)
                asyncio.run(PRCombiner(github, GitTool(), options, reporter).combine())
        except KeyboardInterrupt:
            logger.warning("Interrupted, cleaning up")
            sys.exit(130)
        except Exception as e:
            logger.exception(f"Failed to combine PRs in {target} with error: {e}")
            failed.append(target)

    sys.exit(1 if failed else 0)


def cmd_action(args):
    """Handle 'action' subcommand (GitHub Actions mode)."""
    import logging
    setup_logging(level=logging.DEBUG if args.debug else logging.INFO)
    reporter = ActionsReporter()

    try:
        options = CombineOptions.from_env()
        token = os.environ.get("INPUT_GITHUBTOKEN") or os.environ.get("GITHUB_TOKEN")
        if not token:
            raise ConfigurationError("Input required and not supplied: githubToken")
        target = resolve_targets([])[0]

        git = GitTool()
        git.configure_identity(FALLBACK_AUTHOR_NAME, FALLBACK_AUTHOR_EMAIL)

        github = GitHubTool(target, token=token)
        asyncio.run(PRCombiner(github, git, options, reporter).combine())
    except Exception as e:
        reporter.error(f"Unhandled error: {e}")
        sys.exit(1)

    sys.exit(0)


def add_option_flags(parser: argparse.ArgumentParser) -> None:
    """Flags mapping one to one onto CombineOptions."""
    defaults = CombineOptions()

    parser.add_argument(
        "--base-branch",
        type=str,
        default=defaults.base_branch,
        help=f"Branch to fork from and merge into (default: {defaults.base_branch})"
    )
    parser.add_argument(
        "--combine-branch-name",
        type=str,
        default=defaults.combine_branch_name,
        help=f"Name of the branch to combine PRs into (default: {defaults.combine_branch_name})"
    )
    parser.add_argument(
        "--no-must-be-green",
        dest="must_be_green",
        action="store_false",
        help="Also combine PRs whose checks are not all successful"
    )
    parser.add_argument(
        "--allow-skipped",
        action="store_true",
        help="Treat skipped checks as successful"
    )
    parser.add_argument(
        "--branch-prefix",
        type=str,
        default=defaults.branch_prefix,
        help=f"Head branch prefix of combinable PRs (default: {defaults.branch_prefix})"
    )
    parser.add_argument(
        "--include-label",
        type=str,
        default=defaults.include_label,
        help="Only combine PRs carrying this label"
    )
    parser.add_argument(
        "--ignore-label",
        type=str,
        default=defaults.ignore_label,
        help=f"Never combine PRs carrying this label (default: {defaults.ignore_label})"
    )
    parser.add_argument(
        "--no-open-pr",
        dest="open_pr",
        action="store_false",
        help="Push the combined branch without opening a PR"
    )
    parser.add_argument(
        "--close-once-combined",
        action="store_true",
        help="Close the combined PRs after opening the combined PR"
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Combine dependency bot PRs into a single PR"
    )
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # init command
    init_parser = subparsers.add_parser("init", help="Add a combine-prs workflow to a repository")
    init_parser.add_argument(
        "path",
        nargs="?",
        help="Target repository path (default: current directory)"
    )
    init_parser.add_argument(
        "--install-from",
        type=str,
        default=".",
        help="pip install source used by the workflow, e.g. git+https://host/org/combine-prs (default: the checked-out repository)"
    )

    # combine command
    combine_parser = subparsers.add_parser("combine", help="Combine PRs of one or more repositories")
    combine_parser.add_argument(
        "targets",
        nargs="*",
        metavar="owner/repo",
        help="Repositories to combine PRs in (default: GITHUB_REPOSITORY and the current checkout)"
    )
    combine_parser.add_argument(
        "--github-token",
        type=str,
        help="GitHub API token (default: GITHUB_TOKEN env var, then a prompt)"
    )
    combine_parser.add_argument(
        "--https",
        action="store_true",
        help="Clone over HTTPS with the token instead of SSH"
    )
    combine_parser.add_argument(
        "--dry-run",
        action="store_true",
        help="List combinable PRs without changing anything"
    )
    combine_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )
    add_option_flags(combine_parser)

    # action command
    action_parser = subparsers.add_parser(
        "action",
        help="Run inside GitHub Actions, reading INPUT_* variables"
    )
    action_parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug logging"
    )

    return parser


def main():
    """CLI entry point."""
    parser = build_parser()
    args = parser.parse_args()

    # Route to subcommand
    if args.command == "init":
        cmd_init(args)
    elif args.command == "combine":
        cmd_combine(args)
    elif args.command == "action":
        cmd_action(args)
    else:
        # No subcommand - show help
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
