from tech_matcher.filtering import filter_candidates
from tech_matcher.models import JobRequirements, MatchResult, Recommendation, TechnicianProfile
from tech_matcher.ranking import rank_candidates, recommend_assignments
from tech_matcher.scoring import calculate_match_score, score_breakdown

__all__ = [
    "JobRequirements",
    "MatchResult",
    "Recommendation",
    "TechnicianProfile",
    "calculate_match_score",
    "filter_candidates",
    "rank_candidates",
    "recommend_assignments",
    "score_breakdown",
]
