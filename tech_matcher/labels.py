# tech_matcher/labels.py
"""
Display strings for dispatch screens and reports.

Scoring never imports this module: the score contract carries enum tags
only, and this is where tags turn into something a person reads.
"""
from typing import List

from tech_matcher.models import AvailabilityStatus, JobComplexity, JobRequirements, Recommendation, Skill, TechnicianLevel

SKILL_LABELS = {
    Skill.AC_INSTALLATION: "AC Installation",
    Skill.AC_REPAIR: "AC Repair",
    Skill.REFRIGERATION: "Refrigeration",
    Skill.ELECTRICAL: "Electrical Systems",
    Skill.PREVENTIVE_MAINTENANCE: "Preventive Maintenance",
    Skill.EMERGENCY_SERVICE: "Emergency Service",
    Skill.COMMERCIAL_SYSTEMS: "Commercial Systems",
    Skill.RESIDENTIAL_SYSTEMS: "Residential Systems",
    Skill.DUCTWORK: "Ductwork",
    Skill.HVAC_CONTROLS: "HVAC Controls",
    Skill.DIAGNOSTICS: "Diagnostics",
    Skill.WELDING: "Welding & Fabrication",
}

LEVEL_LABELS = {
    TechnicianLevel.TRAINEE: "Trainee",
    TechnicianLevel.JUNIOR: "Junior Technician",
    TechnicianLevel.TECHNICIAN: "Technician",
    TechnicianLevel.SENIOR: "Senior Technician",
    TechnicianLevel.LEAD: "Lead Technician",
    TechnicianLevel.SUPERVISOR: "Supervisor",
}

COMPLEXITY_LABELS = {
    JobComplexity.SIMPLE: "Simple",
    JobComplexity.MODERATE: "Moderate",
    JobComplexity.COMPLEX: "Complex",
    JobComplexity.EXPERT: "Expert Level",
}


def skill_label(tag: str) -> str:
    skill = Skill.parse(tag, default=None)
    if skill is not None:
        return SKILL_LABELS[skill]
    # unknown tag from storage
    return tag.replace("_", " ").title()


def level_label(level: TechnicianLevel) -> str:
    return LEVEL_LABELS.get(level, str(level.value).title())


def complexity_label(complexity: JobComplexity) -> str:
    return COMPLEXITY_LABELS.get(complexity, str(complexity.value).title())


def explain(rec: Recommendation, requirements: JobRequirements) -> List[str]:
    reasons: List[str] = []

    required = len(requirements.required_skills)
    if rec.matching_skills:
        reasons.append(f"Has {len(rec.matching_skills)}/{required} required skills")
    if rec.missing_skills:
        reasons.append("Missing " + ", ".join(skill_label(s) for s in rec.missing_skills))
    if rec.factors.get("service_area", 0) > 0:
        reasons.append(f"Covers {requirements.service_area}")
    if rec.availability == AvailabilityStatus.AVAILABLE:
        reasons.append("Available now")
    elif rec.availability == AvailabilityStatus.EMERGENCY:
        reasons.append("Emergency call-outs only")
    if rec.current_workload < rec.capacity:
        reasons.append(f"Capacity: {rec.current_workload}/{rec.capacity} jobs")

    return reasons
