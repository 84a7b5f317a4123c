"""Initialize combine-prs in a repository."""

from pathlib import Path
from typing import Optional


WORKFLOW_TEMPLATE = '''name: Combine dependency PRs

on:
  schedule:
    - cron: "0 6 * * 1"
  workflow_dispatch:

permissions:
  contents: write
  pull-requests: write
  checks: read

jobs:
  combine:
    name: Combine PRs
    runs-on: ubuntu-latest

    steps:
      - uses: actions/checkout@v4
        with:
          fetch-depth: 0

      - uses: actions/setup-python@v5
        with:
          python-version: "3.12"

      - uses: actions/setup-node@v4

      - name: Install combine-prs
        run: pip install "%(install_source)s"

      - name: Combine PRs
        env:
          INPUT_GITHUBTOKEN: ${{ secrets.GITHUB_TOKEN }}
          INPUT_BASEBRANCH: ${{ github.event.repository.default_branch }}
          INPUT_MUSTBEGREEN: "true"
          INPUT_BRANCHPREFIX: dependabot
          INPUT_IGNORELABEL: nocombine
          INPUT_OPENPR: "true"
        run: combine-prs action
'''


def render_workflow(install_source: str) -> str:
    return WORKFLOW_TEMPLATE % {"install_source": install_source}


def init_repository(target_dir: Optional[Path] = None, install_source: str = ".") -> bool:
    """
    Initialize combine-prs in a repository.

    `install_source` is what the workflow passes to `pip install`: a
    `git+https://...` URL of this project, or `.` when the project lives in
    the target repository itself.

    Creates:
      - .github/workflows/combine-prs.yml

    Returns:
        False if the target is not a git repository
    """
    target = target_dir or Path.cwd()

    # Check if git repo
    if not (target / ".git").exists():
        print(f"Error: {target} is not a git repository")
        return False

    workflow_dir = target / ".github" / "workflows"
    workflow_dir.mkdir(parents=True, exist_ok=True)

    workflow_file = workflow_dir / "combine-prs.yml"
    if workflow_file.exists():
        print(f"Already exists: {workflow_file}")
        print("\nAlready configured. No changes needed.")
        return True

    workflow_file.write_text(render_workflow(install_source))
    print(f"Created: {workflow_file}")

    print("\nNext steps:")
    print("  1. git add . && git commit -m 'Add combine-prs workflow'")
    print("  2. git push")
    print("  3. Allow Actions to create pull requests (Settings → Actions → General)")

    return True


if __name__ == "__main__":
    init_repository()
