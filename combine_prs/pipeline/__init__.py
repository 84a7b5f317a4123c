"""Pipeline stages for combining PRs."""

from .stage1_prepare import prepare_repository
from .stage2_select import (
    select_combinable_prs,
    parse_bump_title,
    extract_manager,
    checks_pass,
)
from .stage3_apply import cherry_pick_pr, apply_version_bump
from .fallbacks import (
    NpmAndYarnFallback,
    register_fallback,
    get_fallback,
    registered_managers,
)

__all__ = [
    "prepare_repository",
    "select_combinable_prs",
    "parse_bump_title",
    "extract_manager",
    "checks_pass",
    "cherry_pick_pr",
    "apply_version_bump",
    "NpmAndYarnFallback",
    "register_fallback",
    "get_fallback",
    "registered_managers",
]
