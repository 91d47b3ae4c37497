# tech_matcher/scoring.py
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional

from tech_matcher.config import Scoring
from tech_matcher.models import (
    AvailabilityStatus,
    JobComplexity,
    TechnicianLevel,
    TechnicianProfile,
)
from tech_matcher.utils import as_tag_list, normalize_tag


class Factor(str, Enum):
    SKILL_COVERAGE = "skill_coverage"
    PRIMARY_SPECIALIZATION = "primary_specialization"
    SERVICE_AREA = "service_area"
    AVAILABILITY = "availability"
    EXPERIENCE = "experience"
    RATING = "rating"
    FIRST_TIME_FIX = "first_time_fix"
    WORKLOAD = "workload"


@dataclass
class ScoreBreakdown:
    total: float
    matching_skills: List[str]
    missing_skills: List[str]
    components: Dict[Factor, float] = field(default_factory=dict)

    @property
    def has_required_skills(self) -> bool:
        return not self.missing_skills


_DEFAULT_POLICY = Scoring()


def _experience_points(tech: TechnicianProfile, complexity: JobComplexity, policy: Scoring) -> float:
    if not complexity.demands_experience:
        return 0.0
    w, t = policy.weights, policy.thresholds
    if tech.level.at_least(TechnicianLevel.SENIOR) or tech.years_of_experience >= t.experienced_years:
        return w.experienced
    if not tech.level.at_least(TechnicianLevel.TECHNICIAN):
        return w.inexperienced
    return 0.0


def _availability_points(tech: TechnicianProfile, policy: Scoring) -> float:
    w = policy.weights
    status = tech.availability_status
    if status == AvailabilityStatus.AVAILABLE:
        return w.available
    if status == AvailabilityStatus.EMERGENCY:
        return w.emergency
    if status == AvailabilityStatus.BUSY:
        return w.busy
    return 0.0


def score_breakdown(
    technician: Any,
    required_skills: Iterable[str],
    service_area: str,
    complexity: Any,
    policy: Optional[Scoring] = None,
) -> ScoreBreakdown:
    """
    Additive point score for one technician against one job, with every
    factor's contribution kept so callers can explain the ranking.

    Never raises on malformed field values: they were already degraded to
    conservative defaults when the profile was built.
    """
    policy = policy or _DEFAULT_POLICY
    w, t = policy.weights, policy.thresholds

    tech = TechnicianProfile.from_record(technician)
    required = as_tag_list(required_skills)
    area = normalize_tag(service_area)
    complexity = JobComplexity.parse(complexity, default=JobComplexity.MODERATE)

    matching = [s for s in required if s in tech.skills]
    missing = [s for s in required if s not in tech.skills]

    components: Dict[Factor, float] = {}

    # empty requirement list contributes nothing
    coverage = (len(matching) / len(required)) if required else 0.0
    components[Factor.SKILL_COVERAGE] = coverage * w.skill_coverage

    components[Factor.PRIMARY_SPECIALIZATION] = (
        w.primary_specialization
        if tech.primary_specialization and tech.primary_specialization in required
        else 0.0
    )

    components[Factor.SERVICE_AREA] = (
        w.service_area_match if area and area in tech.service_areas else w.service_area_miss
    )

    components[Factor.AVAILABILITY] = _availability_points(tech, policy)
    components[Factor.EXPERIENCE] = _experience_points(tech, complexity, policy)

    components[Factor.RATING] = w.high_rating if tech.average_rating >= t.high_rating else 0.0
    components[Factor.FIRST_TIME_FIX] = (
        w.high_first_time_fix if tech.first_time_fix_rate >= t.high_first_time_fix else 0.0
    )

    components[Factor.WORKLOAD] = w.idle if tech.workload == 0 else 0.0

    total = round(sum(components.values()), 2)

    return ScoreBreakdown(
        total=total,
        matching_skills=matching,
        missing_skills=missing,
        components={k: round(v, 4) for k, v in components.items()},
    )


def calculate_match_score(
    technician: Any,
    required_skills: Iterable[str],
    service_area: str,
    complexity: Any,
    policy: Optional[Scoring] = None,
) -> float:
    return score_breakdown(technician, required_skills, service_area, complexity, policy).total
