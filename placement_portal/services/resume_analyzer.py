"""
Resume Analyzer - rule-based skill scoring and role categorization.

PURPOSE:
Turn plain resume text (already extracted from PDF/DOCX) into a
ResumeAnalysis: per-skill scores + the best-fit role categories.

HOW IT WORKS:
1. Token pass: every token that EXACTLY equals a synonym bumps
   that skill's frequency.
2. Line pass: lines that look like projects or internships give
   extra credit to skills whose synonyms appear as SUBSTRINGS
   (project descriptions glue skill names into compound words).
3. totalScore = frequency + projectCount + internshipMonths * 2
4. roleScores = sum of totalScore over each role's skills
5. bestRoles = top 3 roles with a nonzero score

The analyzer is total: any string (empty, garbled, non-English)
gives a valid result, worst case all zeros and no best roles.
Default-role fallback is the caller's decision (see role_tagger).
"""

import re
from datetime import datetime, timezone
from typing import Dict, List

from placement_portal.core.skill_config import SkillConfig
from placement_portal.models.analysis import ResumeAnalysis, SkillScore

TOP_ROLE_COUNT = 3

_TOKEN_SPLIT = re.compile(r"\W+")

# One alternation so "6 months" is not also counted as "6 mo"
_DURATION_PATTERN = re.compile(
    r"(\d+)\s*(years?|yrs?|months?|mos?)\b",
    re.IGNORECASE,
)


def tokenize(text: str) -> List[str]:
    """Lower-cased tokens split on any non-word run."""
    return [t for t in _TOKEN_SPLIT.split(text.lower()) if t]


def extract_duration_months(line: str) -> int:
    """
    Sum every duration mentioned in a line, in months.

    "6 months" -> 6, "2 years" -> 24, "1 yr 3 mos" -> 15
    """
    total = 0
    for number, unit in _DURATION_PATTERN.findall(line):
        months = int(number)
        if unit.lower().startswith("y"):
            months *= 12
        total += months
    return total


def synonym_hits(line: str, config: SkillConfig) -> Dict[str, int]:
    """Per skill, how many of its synonyms occur in the (lower-cased) line."""
    hits = {}
    for skill in config.skills:
        count = sum(1 for synonym in skill.synonyms if synonym in line)
        if count:
            hits[skill.name] = count
    return hits


def skills_in_line(line: str, config: SkillConfig) -> List[str]:
    """Skills with at least one synonym contained in the (lower-cased) line."""
    return [
        skill.name
        for skill in config.skills
        if any(synonym in line for synonym in skill.synonyms)
    ]


def score_skills(text: str, config: SkillConfig) -> Dict[str, SkillScore]:
    """Compute a SkillScore for every skill in the taxonomy."""
    frequency = {name: 0 for name in config.skill_names}
    project_count = {name: 0 for name in config.skill_names}
    internship_months = {name: 0 for name in config.skill_names}

    for token in tokenize(text):
        skill = config.canonical_skill(token)
        if skill:
            frequency[skill] += 1

    for line in text.splitlines():
        lower_line = line.lower()

        if any(marker in lower_line for marker in config.project_markers):
            # one point per matching synonym
            for skill, hits in synonym_hits(lower_line, config).items():
                project_count[skill] += hits

        if any(marker in lower_line for marker in config.experience_markers):
            duration = extract_duration_months(line)
            if duration > 0:
                # Same duration credited to every skill on the line
                for skill in skills_in_line(lower_line, config):
                    internship_months[skill] += duration

    return {
        name: SkillScore(
            frequency=frequency[name],
            project_count=project_count[name],
            internship_months=internship_months[name],
        )
        for name in config.skill_names
    }


def score_roles(skill_scores: Dict[str, SkillScore], config: SkillConfig) -> Dict[str, int]:
    """Sum constituent skill totals per role, in role order."""
    role_scores = {}
    for role in config.roles:
        role_scores[role.name] = sum(
            skill_scores[s].total_score for s in role.skills if s in skill_scores
        )
    return role_scores


def pick_best_roles(role_scores: Dict[str, int], limit: int = TOP_ROLE_COUNT) -> List[str]:
    """Top roles by score; sorted() is stable so ties keep role order."""
    ranked = sorted(role_scores.items(), key=lambda item: item[1], reverse=True)
    return [role for role, score in ranked[:limit] if score > 0]


def analyze_resume(text: str, config: SkillConfig) -> ResumeAnalysis:
    """
    Analyze resume text.

    Args:
        text: Plain resume text (may be empty)
        config: Skill taxonomy + role table

    Returns:
        ResumeAnalysis with analyzed_at set to now (UTC)
    """
    text = text or ""
    skill_scores = score_skills(text, config)
    role_scores = score_roles(skill_scores, config)

    return ResumeAnalysis(
        skill_scores=skill_scores,
        role_scores=role_scores,
        best_roles=pick_best_roles(role_scores),
        analyzed_at=datetime.now(timezone.utc),
    )
