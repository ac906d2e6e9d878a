"""
Models module - internal data structures used by the core services.

Difference from schemas:
- Models: what the analyzer / matcher compute and persist
- Schemas: API contract (what client sends/receives)
"""

from placement_portal.models.analysis import ResumeAnalysis, SkillScore
from placement_portal.models.eligibility import (
    EligibilityResult,
    JobCriteria,
    JobMatchResult,
    StudentProfile,
)

__all__ = [
    "ResumeAnalysis",
    "SkillScore",
    "EligibilityResult",
    "JobCriteria",
    "JobMatchResult",
    "StudentProfile",
]
