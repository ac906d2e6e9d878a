"""
Eligibility models - the slices of student and job data the matcher reads.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class StudentProfile(BaseModel):
    cgpa: Optional[float] = None
    branch: Optional[str] = None


class JobCriteria(BaseModel):
    """
    Eligibility + role fields of a job posting.

    branch is the raw branch spec: "any", empty, or "CSE, ECE, ...".
    """

    min_cgpa: Optional[float] = None
    branch: Optional[str] = None
    suitable_roles: List[str] = Field(default_factory=list)


class EligibilityResult(BaseModel):
    eligible: bool
    reasons: List[str] = Field(default_factory=list)


class JobMatchResult(BaseModel):
    """
    Listing-path result.

    jobs holds the caller's own job objects, in result order.
    matched_count is 0 when skill matching found nothing and the
    plain eligible list was returned.
    """

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    jobs: List[Any] = Field(default_factory=list)
    total_jobs: int = 0
    matched_count: int = 0
