# tech_matcher/filtering.py
import logging
from typing import Any, Iterable, List, Mapping

from tech_matcher.errors import InvalidInputError
from tech_matcher.models import AvailabilityStatus, TechnicianProfile

logger = logging.getLogger(__name__)

DEFAULT_MAX_JOBS_PER_DAY = 8


def ensure_roster(technicians: Any) -> List[TechnicianProfile]:
    """
    Coerce a caller-supplied roster into profiles.
    Anything that is not a list/tuple/set of records is a caller bug.
    """
    if isinstance(technicians, (str, bytes, Mapping)) or not isinstance(technicians, Iterable):
        raise InvalidInputError(f"Technician roster must be a collection (got {type(technicians).__name__})")
    return [TechnicianProfile.from_record(t) for t in technicians]


def capacity_of(tech: TechnicianProfile, default_max_jobs_per_day: int = DEFAULT_MAX_JOBS_PER_DAY) -> int:
    if tech.max_jobs_per_day is None:
        return default_max_jobs_per_day
    return tech.max_jobs_per_day


def is_at_capacity(tech: TechnicianProfile, default_max_jobs_per_day: int = DEFAULT_MAX_JOBS_PER_DAY) -> bool:
    return tech.workload >= capacity_of(tech, default_max_jobs_per_day)


def filter_candidates(
    technicians: Iterable[Any],
    default_max_jobs_per_day: int = DEFAULT_MAX_JOBS_PER_DAY,
) -> List[TechnicianProfile]:
    """
    Drop technicians who structurally cannot take a job: offline, or already
    holding as many jobs as their daily capacity. Skills and area are scored,
    not filtered. Input order is preserved.
    """
    roster = ensure_roster(technicians)

    out: List[TechnicianProfile] = []
    for tech in roster:
        if tech.availability_status == AvailabilityStatus.OFFLINE:
            continue
        if is_at_capacity(tech, default_max_jobs_per_day):
            continue
        out.append(tech)

    if len(out) != len(roster):
        logger.debug("Filtered candidates: %d -> %d", len(roster), len(out))
    return out
