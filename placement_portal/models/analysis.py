"""
Resume analysis models.

Stored verbatim (camelCase keys) on the resume document, so the
shape must stay stable:

{
    "skillScores": {"react": {"frequency": 2, "projectCount": 1,
                              "internshipMonths": 0, "totalScore": 3}, ...},
    "roleScores": {"full-stack": 3, "frontend": 3, ...},
    "bestRoles": ["full-stack", "frontend"],
    "analyzedAt": "2024-08-01T10:00:00Z"
}
"""

from datetime import datetime
from typing import Dict, List

from pydantic import BaseModel, ConfigDict, Field, computed_field
from pydantic.alias_generators import to_camel


class SkillScore(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    frequency: int = 0
    project_count: int = 0
    internship_months: int = 0

    @computed_field(alias="totalScore")
    @property
    def total_score(self) -> int:
        # 2 points per month of internship
        return self.frequency + self.project_count + self.internship_months * 2


class ResumeAnalysis(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    skill_scores: Dict[str, SkillScore] = Field(default_factory=dict)
    role_scores: Dict[str, int] = Field(default_factory=dict)
    best_roles: List[str] = Field(default_factory=list)
    analyzed_at: datetime

    def to_document(self) -> dict:
        """JSON-safe dict for MongoDB / blob storage."""
        return self.model_dump(by_alias=True, mode="json")
