"""Engine Layer - Query Resolution

This module provides the resolution engine:
- ResolutionOrchestrator: ordered provider fallback with a short-lived cache
- Scoring: candidate filtering and ranking
- Result types: Candidate, ScoredCandidate, ResolvedResult
"""

from .orchestrator import ResolutionOrchestrator
from .result import ACCEPTABLE_SCORE_FLOOR, Candidate, ResolvedResult, ScoredCandidate
from .scoring import is_acceptable, is_frame_friendly, rank_candidates, score

__all__ = [
    "ResolutionOrchestrator",
    "Candidate",
    "ScoredCandidate",
    "ResolvedResult",
    "ACCEPTABLE_SCORE_FLOOR",
    "score",
    "is_acceptable",
    "is_frame_friendly",
    "rank_candidates",
]
