"""combine-prs: merge dependency bot PRs into one combined PR."""

from .config import CombineOptions
from .models import CandidatePR, CombineResult, Target
from .orchestrator import PRCombiner, combine_prs_sync

__version__ = "0.1.0"

__all__ = [
    "CombineOptions",
    "CandidatePR",
    "CombineResult",
    "Target",
    "PRCombiner",
    "combine_prs_sync",
]
