"""Manual version bump strategies, one per package manager.

A strategy rewrites the working tree so that it contains the PR's version
bump; committing is left to the caller. Supporting a new ecosystem means
registering a strategy for its manager identifier.
"""

import subprocess
from pathlib import Path, PurePosixPath
from typing import Callable, Dict, List, Optional

from ..errors import FallbackError
from ..models import CandidatePR, CommitFile
from ..tools import GitTool, extract_line_change
from ..utils import LogReporter


FallbackStrategy = Callable[[CandidatePR, GitTool, LogReporter], None]
CommandRunner = Callable[..., subprocess.CompletedProcess]

_REGISTRY: Dict[str, FallbackStrategy] = {}


def register_fallback(manager: str, strategy: FallbackStrategy) -> None:
    """Register the fallback for a package manager, replacing any existing one."""
    _REGISTRY[manager] = strategy


def get_fallback(manager: str) -> Optional[FallbackStrategy]:
    return _REGISTRY.get(manager)


def registered_managers() -> List[str]:
    return sorted(_REGISTRY)


def apply_patch_to_file(work_dir: Path, file: CommitFile) -> None:
    """
    Replay a one-line manifest change by literal substitution.

    Raises:
        FallbackError: If the patch has no usable line pair, or the removed
            line is no longer present in the file
    """
    change = extract_line_change(file.patch or "")
    if change is None:
        raise FallbackError(f"Could not extract from or to from patch for {file.filename}.")

    path = work_dir / file.filename
    if not path.exists():
        raise FallbackError(f"{file.filename} does not exist in the working tree.")

    content = path.read_text(encoding="utf-8")
    if change.removed not in content:
        raise FallbackError(f"{file.filename} no longer contains {change.removed.strip()!r}.")

    path.write_text(content.replace(change.removed, change.added, 1), encoding="utf-8")


class NpmAndYarnFallback:
    """
    Bump a dependency in package.json and regenerate its lockfile.

    `package-lock.json` is refreshed with `npm install`, `yarn.lock` with
    `yarn`. A manifest without either lockfile is committed as edited.
    """

    MANIFEST = "package.json"
    LOCKFILES = (
        ("package-lock.json", ["npm", "install"]),
        ("yarn.lock", ["yarn"]),
    )

    def __init__(self, runner: CommandRunner = subprocess.run):
        self.runner = runner

    def __call__(self, pr: CandidatePR, git: GitTool, reporter: LogReporter) -> None:
        manifest = next(
            (f for f in pr.last_commit.files if self.MANIFEST in f.filename),
            None,
        )
        if manifest is None or not manifest.filename or not manifest.patch:
            raise FallbackError(f"Change not found for {self.MANIFEST} for {pr.pkg}.")

        apply_patch_to_file(git.work_dir, manifest)

        directory = PurePosixPath(manifest.filename).parent
        for lockfile, command in self.LOCKFILES:
            if not (git.work_dir / directory / lockfile).exists():
                continue

            reporter.info(f"Updating {lockfile}")
            self._regenerate(git, command, directory)
            self._verify_updated(git, str(directory / lockfile))
            break

    def _regenerate(self, git: GitTool, command: List[str], directory: PurePosixPath) -> None:
        try:
            result = self.runner(
                command,
                cwd=git.work_dir / directory,
                capture_output=True,
                text=True,
            )
        except OSError as e:
            git.reset_hard()
            raise FallbackError(f"Failed to run {' '.join(command)}: {e}") from e

        if result.returncode != 0:
            git.reset_hard()
            raise FallbackError(
                f"`{' '.join(command)}` exited with {result.returncode}: {(result.stderr or '').strip()}"
            )

    def _verify_updated(self, git: GitTool, lockfile: str) -> None:
        if lockfile not in git.diff_name_only():
            git.reset_hard()
            raise FallbackError(f"Failed to update {lockfile}")


register_fallback("npm_and_yarn", NpmAndYarnFallback())
