"""
Job Matching Service - eligibility filter + skill-fit ranking.

PURPOSE:
1. Apply-time gate: can this student apply to this job?
2. Listing view: which jobs should this student see, best fit first?

Both paths use ONE eligibility predicate (check_eligibility).

ELIGIBILITY POLICY (per field):
- CGPA:   job has no minimum        -> pass
          student CGPA unknown      -> FAIL (cannot verify)
          student CGPA < minimum    -> fail
- Branch: job branch empty / "any"  -> pass
          student branch unknown    -> PASS (not enough data to reject)
          otherwise                 -> student branch must be in the
                                       comma-separated list (case-insensitive)

Unknown CGPA fails closed while unknown branch fails open.

SKILL-FIT RANKING (listing only, never gates):
- Jobs whose suitable_roles share a role with the resume's bestRoles
  are "matched" and returned first-choice.
- No match, no analysis, or a broken analysis document -> the plain
  eligible list. Ranking problems never hide an eligible job.
"""

import logging
from typing import Any, Callable, List, Optional, Sequence, Set, Union

from pydantic import ValidationError

from placement_portal.core.skill_config import SkillConfig, get_skill_config
from placement_portal.models.analysis import ResumeAnalysis
from placement_portal.models.eligibility import (
    EligibilityResult,
    JobCriteria,
    JobMatchResult,
    StudentProfile,
)
from placement_portal.services.resume_analyzer import analyze_resume
from placement_portal.services.role_tagger import detect_job_roles

logger = logging.getLogger(__name__)

ANY_BRANCH = "any"

AnalysisInput = Union[ResumeAnalysis, dict, None]

# A listing strategy returns (jobs, matched_count) or None to pass
ListingStrategy = Callable[[List[Any], Optional[ResumeAnalysis]], Optional[tuple]]


# ============================================================
# ELIGIBILITY
# ============================================================

def parse_branch_spec(branch_spec: Optional[str]) -> Optional[Set[str]]:
    """
    Parse a job's branch field.

    Returns:
        None if unrestricted (missing, blank, or "any"),
        else the set of allowed branches, lower-cased
    """
    if branch_spec is None:
        return None
    spec = branch_spec.strip()
    if not spec or spec.lower() == ANY_BRANCH:
        return None
    allowed = {b.strip().lower() for b in spec.split(",") if b.strip()}
    return allowed or None


def check_cgpa(student: StudentProfile, job: JobCriteria) -> Optional[str]:
    """Return a failure reason, or None if the CGPA check passes."""
    if job.min_cgpa is None:
        return None
    if student.cgpa is None:
        return f"CGPA not provided; this job requires a minimum CGPA of {job.min_cgpa}"
    if student.cgpa < job.min_cgpa:
        return f"CGPA {student.cgpa} is below the required minimum of {job.min_cgpa}"
    return None


def check_branch(student: StudentProfile, job: JobCriteria) -> Optional[str]:
    """Return a failure reason, or None if the branch check passes."""
    allowed = parse_branch_spec(job.branch)
    if allowed is None:
        return None
    branch = (student.branch or "").strip().lower()
    if not branch:
        return None
    if branch not in allowed:
        return f"Branch '{student.branch.strip()}' is not eligible (allowed: {job.branch.strip()})"
    return None


ELIGIBILITY_CHECKS = [check_cgpa, check_branch]


def check_eligibility(student: StudentProfile, job: JobCriteria) -> EligibilityResult:
    """Run every check and collect all failure reasons."""
    reasons = []
    for check in ELIGIBILITY_CHECKS:
        reason = check(student, job)
        if reason:
            reasons.append(reason)
    return EligibilityResult(eligible=not reasons, reasons=reasons)


def filter_eligible_jobs(student: StudentProfile, jobs: Sequence[Any]) -> List[Any]:
    """Keep jobs the student is eligible for, preserving order."""
    return [job for job in jobs if check_eligibility(student, job).eligible]


# ============================================================
# SKILL-FIT RANKING
# ============================================================

def load_analysis(analysis: AnalysisInput) -> Optional[ResumeAnalysis]:
    """
    Accept a ResumeAnalysis or the raw stored document.

    Raises:
        ValidationError / TypeError for malformed documents
    """
    if analysis is None or isinstance(analysis, ResumeAnalysis):
        return analysis
    if not analysis:
        return None
    return ResumeAnalysis.model_validate(analysis)


def rank_by_role_fit(jobs: Sequence[Any], best_roles: List[str]) -> List[Any]:
    """
    Jobs sharing at least one role with best_roles, best fit first.

    Order: best (lowest) bestRoles index of a shared role, then more
    shared roles, then original position.
    """
    role_rank = {role: index for index, role in enumerate(best_roles)}
    scored = []
    for position, job in enumerate(jobs):
        shared = [role for role in (job.suitable_roles or []) if role in role_rank]
        if not shared:
            continue
        top = min(role_rank[role] for role in shared)
        scored.append((top, -len(set(shared)), position, job))
    scored.sort(key=lambda item: item[:3])
    return [item[3] for item in scored]


def skill_matched_jobs(eligible: List[Any], analysis: Optional[ResumeAnalysis]) -> Optional[tuple]:
    if analysis is None or not analysis.best_roles:
        return None
    matched = rank_by_role_fit(eligible, analysis.best_roles)
    if not matched:
        return None
    return matched, len(matched)


def all_eligible_jobs(eligible: List[Any], analysis: Optional[ResumeAnalysis]) -> Optional[tuple]:
    return list(eligible), 0


LISTING_STRATEGIES: List[ListingStrategy] = [skill_matched_jobs, all_eligible_jobs]


def match_jobs(
    student: StudentProfile,
    jobs: Sequence[Any],
    analysis: AnalysisInput = None,
) -> JobMatchResult:
    """
    Listing path: eligibility filter, then skill-fit ranking.

    Args:
        student: The student's CGPA/branch
        jobs: Job pool; each job exposes min_cgpa, branch, suitable_roles
        analysis: ResumeAnalysis or stored analysis document (optional)

    Returns:
        JobMatchResult(jobs, total_jobs, matched_count)
    """
    eligible = filter_eligible_jobs(student, jobs)

    try:
        resume_analysis = load_analysis(analysis)
        for strategy in LISTING_STRATEGIES:
            outcome = strategy(eligible, resume_analysis)
            if outcome is not None:
                ranked, matched_count = outcome
                return JobMatchResult(
                    jobs=ranked, total_jobs=len(ranked), matched_count=matched_count
                )
    except (ValidationError, TypeError, ValueError, AttributeError) as e:
        logger.warning("Skill-fit ranking skipped, using eligible list: %s", e)

    return JobMatchResult(jobs=eligible, total_jobs=len(eligible), matched_count=0)


# ============================================================
# SERVICE WRAPPER (used by routes)
# ============================================================

class JobMatchingService:
    """
    Binds the core functions to a SkillConfig for the HTTP layer.

    One object serves the three write/read points:
    - resume upload  -> analyze_resume
    - job create     -> tag_job
    - apply / list   -> check / list_jobs_for_student
    """

    def __init__(self, config: SkillConfig):
        self.config = config

    def analyze_resume(self, text: str) -> ResumeAnalysis:
        analysis = analyze_resume(text, self.config)
        logger.info("Resume analyzed, best roles: %s", analysis.best_roles)
        return analysis

    def tag_job(self, requirements: List[str]) -> List[str]:
        return detect_job_roles(requirements, self.config)

    def check(self, student: StudentProfile, job: JobCriteria) -> EligibilityResult:
        return check_eligibility(student, job)

    def list_jobs_for_student(
        self,
        student: StudentProfile,
        jobs: Sequence[Any],
        analysis: AnalysisInput = None,
    ) -> JobMatchResult:
        result = match_jobs(student, jobs, analysis)
        logger.info(
            "Job listing: returning %d of %d jobs, %d skill-matched",
            result.total_jobs, len(jobs), result.matched_count,
        )
        return result


def get_matching_service() -> JobMatchingService:
    """Get matching service instance."""
    return JobMatchingService(get_skill_config())
