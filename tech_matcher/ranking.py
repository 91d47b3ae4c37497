# tech_matcher/ranking.py
from __future__ import annotations

import logging
from typing import Any, Iterable, List, Optional, Tuple

from tech_matcher.config import Scoring
from tech_matcher.filtering import DEFAULT_MAX_JOBS_PER_DAY, capacity_of, filter_candidates
from tech_matcher.models import JobRequirements, MatchResult, Recommendation, TechnicianProfile
from tech_matcher.scoring import ScoreBreakdown, score_breakdown

logger = logging.getLogger(__name__)


def _scored_candidates(
    technicians: Iterable[Any],
    requirements: Any,
    policy: Optional[Scoring],
    default_max_jobs_per_day: int,
) -> List[Tuple[TechnicianProfile, ScoreBreakdown]]:
    req = JobRequirements.coerce(requirements)
    candidates = filter_candidates(technicians, default_max_jobs_per_day)

    scored = [
        (tech, score_breakdown(tech, req.required_skills, req.service_area, req.complexity, policy))
        for tech in candidates
    ]

    # best score first; equal scores fall back to id order so output is reproducible
    scored.sort(key=lambda pair: (-pair[1].total, pair[0].id))

    logger.debug(
        "Ranked %d candidates for skills=%s area=%s complexity=%s",
        len(scored),
        list(req.required_skills),
        req.service_area,
        req.complexity.value,
    )
    return scored


def rank_candidates(
    technicians: Iterable[Any],
    requirements: Any,
    policy: Optional[Scoring] = None,
    default_max_jobs_per_day: int = DEFAULT_MAX_JOBS_PER_DAY,
) -> List[MatchResult]:
    """
    Filter, score and order technicians for one job.
    Returns an empty list when nobody survives filtering.
    """
    scored = _scored_candidates(technicians, requirements, policy, default_max_jobs_per_day)
    return [
        MatchResult(technician_id=tech.id, score=breakdown.total, rank=i)
        for i, (tech, breakdown) in enumerate(scored, start=1)
    ]


def recommend_assignments(
    technicians: Iterable[Any],
    requirements: Any,
    max_results: int = 10,
    policy: Optional[Scoring] = None,
    default_max_jobs_per_day: int = DEFAULT_MAX_JOBS_PER_DAY,
) -> List[Recommendation]:
    """
    Same ordering as rank_candidates, enriched with the per-factor breakdown
    and skill coverage, truncated to the top `max_results`.
    """
    scored = _scored_candidates(technicians, requirements, policy, default_max_jobs_per_day)

    out: List[Recommendation] = []
    for i, (tech, breakdown) in enumerate(scored[: max(0, max_results)], start=1):
        out.append(
            Recommendation(
                technician_id=tech.id,
                score=breakdown.total,
                rank=i,
                display_name=tech.display_name,
                level=tech.level,
                availability=tech.availability_status,
                current_workload=tech.workload,
                capacity=capacity_of(tech, default_max_jobs_per_day),
                has_required_skills=breakdown.has_required_skills,
                matching_skills=breakdown.matching_skills,
                missing_skills=breakdown.missing_skills,
                factors={k.value: v for k, v in breakdown.components.items()},
            )
        )
    return out
