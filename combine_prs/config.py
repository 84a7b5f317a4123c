"""Configuration for combine-prs."""

from dataclasses import dataclass
from typing import Optional
import os

from .errors import ConfigurationError


DEFAULT_BASE_BRANCH = "main"
DEFAULT_COMBINE_BRANCH_NAME = "combine-prs"
DEFAULT_BRANCH_PREFIX = "dependabot"
DEFAULT_IGNORE_LABEL = "nocombine"

# Identity used for commits whose original author is unknown
FALLBACK_AUTHOR_NAME = "github-actions"
FALLBACK_AUTHOR_EMAIL = "github-actions@github.com"

_TRUE_VALUES = ("true", "True", "TRUE")
_FALSE_VALUES = ("false", "False", "FALSE")


def parse_bool_input(name: str, value: str) -> bool:
    """
    Parse a boolean action input the way GitHub Actions toolkits do.

    Args:
        name: Input name, used in the error message
        value: Raw input value

    Returns:
        Parsed boolean

    Raises:
        ConfigurationError: If the value is not a recognized boolean
    """
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    raise ConfigurationError(
        f"Input does not meet YAML 1.2 \"Core Schema\" specification: {name}\n"
        "Support boolean input list: `true | True | TRUE | false | False | FALSE`"
    )


@dataclass
class CombineOptions:
    """Options controlling which PRs are combined and what happens afterwards."""

    # Branches
    base_branch: str = DEFAULT_BASE_BRANCH
    combine_branch_name: str = DEFAULT_COMBINE_BRANCH_NAME

    # Check status policy
    must_be_green: bool = True
    allow_skipped: bool = False   # Only consulted when must_be_green is set

    # Eligibility
    branch_prefix: str = DEFAULT_BRANCH_PREFIX
    include_label: str = ""       # Empty means no label is required
    ignore_label: str = DEFAULT_IGNORE_LABEL

    # Outgoing PR
    open_pr: bool = True
    close_once_combined: bool = False

    @classmethod
    def from_env(cls) -> "CombineOptions":
        """Create options from GitHub Actions inputs (INPUT_* variables)."""
        defaults = cls()

        def text(name: str, default: str) -> str:
            value = os.environ.get(f"INPUT_{name.upper()}")
            return default if value is None else value.strip()

        def flag(name: str, default: bool) -> bool:
            value = os.environ.get(f"INPUT_{name.upper()}", "").strip()
            if not value:
                return default
            return parse_bool_input(name, value)

        return cls(
            base_branch=text("baseBranch", defaults.base_branch) or defaults.base_branch,
            combine_branch_name=(
                text("combineBranchName", defaults.combine_branch_name)
                or defaults.combine_branch_name
            ),
            must_be_green=flag("mustBeGreen", defaults.must_be_green),
            allow_skipped=flag("allowSkipped", defaults.allow_skipped),
            branch_prefix=text("branchPrefix", defaults.branch_prefix) or defaults.branch_prefix,
            include_label=text("includeLabel", defaults.include_label),
            ignore_label=text("ignoreLabel", defaults.ignore_label),
            open_pr=flag("openPR", defaults.open_pr),
            close_once_combined=flag("closeOnceCombined", defaults.close_once_combined),
        )


def resolve_token(explicit: Optional[str] = None, prompt: bool = True) -> str:
    """
    Resolve the GitHub token from a flag, the environment or a prompt.

    Args:
        explicit: Token passed on the command line
        prompt: Ask interactively when no token is found

    Returns:
        The token

    Raises:
        ConfigurationError: If no token could be obtained
    """
    token = explicit or os.environ.get("GITHUB_TOKEN")
    if not token and prompt:
        import getpass
        token = getpass.getpass("Enter your GitHub token: ")
    if not token:
        raise ConfigurationError(
            "No GitHub token found. Pass --github-token or set GITHUB_TOKEN."
        )
    return token


# Default configuration
DEFAULT_OPTIONS = CombineOptions()
