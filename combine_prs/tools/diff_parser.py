"""Unified diff parsing utilities."""

from dataclasses import dataclass, field
from typing import List, Optional
import re


HUNK_HEADER_PATTERN = re.compile(r'^@@ -(\d+)(?:,(\d+))? \+(\d+)(?:,(\d+))? @@(.*)$')


@dataclass
class Hunk:
    """A single hunk of a file patch."""
    old_start: int
    new_start: int
    removed: List[str] = field(default_factory=list)
    added: List[str] = field(default_factory=list)


@dataclass
class LineChange:
    """One removed line and the line that replaced it."""
    removed: str
    added: str


def parse_patch(patch: str) -> List[Hunk]:
    """
    Parse the patch of a single file into hunks.

    Accepts both GitHub API patches (starting at the first `@@` header) and
    git output that still carries `---`/`+++` file headers.

    Args:
        patch: Unified diff for one file

    Returns:
        Hunks with their removed and added lines, prefixes stripped
    """
    if not patch or not patch.strip():
        return []

    hunks: List[Hunk] = []
    current: Optional[Hunk] = None

    for line in patch.split('\n'):
        header = HUNK_HEADER_PATTERN.match(line)
        if header:
            current = Hunk(old_start=int(header.group(1)), new_start=int(header.group(3)))
            hunks.append(current)
            continue

        if current is None:
            # File headers and anything else before the first hunk
            continue

        if line.startswith('-'):
            current.removed.append(line[1:])
        elif line.startswith('+'):
            current.added.append(line[1:])

    return hunks


def extract_line_change(patch: str) -> Optional[LineChange]:
    """
    Extract the first removed line and the first added line of a patch.

    Only single-line replacements are understood: when a manifest bumps a
    version string in several places, just the first pair is returned.

    Returns:
        The change, or None when either side is missing or blank
    """
    hunks = parse_patch(patch)
    removed = [line for hunk in hunks for line in hunk.removed]
    added = [line for hunk in hunks for line in hunk.added]

    if not removed or not added or not removed[0] or not added[0]:
        return None
    return LineChange(removed=removed[0], added=added[0])
