"""Tools for talking to GitHub and the local clone."""

from .github_tool import GitHubTool
from .git_tool import GitTool
from .diff_parser import parse_patch, extract_line_change, LineChange

__all__ = [
    "GitHubTool",
    "GitTool",
    "parse_patch",
    "extract_line_change",
    "LineChange",
]
