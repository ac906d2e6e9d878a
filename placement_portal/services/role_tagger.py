"""
Job Role Auto-Tagger - assign suitable role tags to a job posting.

Runs ONCE when a job is created (and again if its requirements change).
The result is stored on the job as suitable_roles and later compared
with a student's bestRoles by the matching service.

MATCHING RULE:
A requirement hits a role keyword when either string contains the other:
- "react.js developer" contains "react"   -> hit
- "js" is contained by "javascript"       -> hit
Every hit adds 1 to the role's score.

FALLBACK CHAIN (tried in order, first non-empty answer wins):
1. strict   - roles scoring >= 1, best first
2. lenient  - any role scoring > 0
3. default  - [config.default_role]
"""

import logging
from typing import Callable, Dict, Iterable, List, Optional, Union

from placement_portal.core.skill_config import SkillConfig

logger = logging.getLogger(__name__)

STRICT_THRESHOLD = 1

RoleStrategy = Callable[[Dict[str, int], SkillConfig], Optional[List[str]]]


def normalize_requirements(requirements: Union[str, Iterable[str], None]) -> List[str]:
    """
    Accept requirements as a list or a comma-separated string.
    Blank entries are dropped; original casing is kept for display.
    """
    if not requirements:
        return []
    if isinstance(requirements, str):
        requirements = requirements.split(",")
    return [str(r).strip() for r in requirements if r and str(r).strip()]


def score_requirement_roles(requirements: Iterable[str], config: SkillConfig) -> Dict[str, int]:
    """Per-role hit counts in role order. Roles without hits are left out."""
    role_scores = {role.name: 0 for role in config.roles}
    for requirement in requirements:
        requirement = requirement.lower().strip()
        if not requirement:
            continue
        for role in config.roles:
            for keyword in role.keywords:
                if keyword in requirement or requirement in keyword:
                    role_scores[role.name] += 1
    return {role: score for role, score in role_scores.items() if score > 0}


def strict_roles(role_scores: Dict[str, int], config: SkillConfig) -> Optional[List[str]]:
    qualified = [(role, score) for role, score in role_scores.items() if score >= STRICT_THRESHOLD]
    if not qualified:
        return None
    qualified.sort(key=lambda item: item[1], reverse=True)
    return [role for role, _ in qualified]


def lenient_roles(role_scores: Dict[str, int], config: SkillConfig) -> Optional[List[str]]:
    # Scores are whole hits, so after strict_roles this tier only answers
    # when a stricter threshold or a custom chain declined.
    weak = [role for role, score in role_scores.items() if score > 0]
    return weak or None


def default_roles(role_scores: Dict[str, int], config: SkillConfig) -> Optional[List[str]]:
    return [config.default_role]


ROLE_STRATEGIES: List[RoleStrategy] = [strict_roles, lenient_roles, default_roles]


def detect_job_roles(
    requirements: Iterable[str],
    config: SkillConfig,
    strategies: Optional[List[RoleStrategy]] = None,
) -> List[str]:
    """
    Tag a job's requirement list with suitable roles, best match first.

    Args:
        requirements: Short requirement strings, e.g. ["React", "Node.js"]
        config: Skill taxonomy + role table
        strategies: Fallback chain override (tests)

    Returns:
        Ordered, duplicate-free list of role names (never empty with
        the default chain)
    """
    role_scores = score_requirement_roles(requirements, config)
    logger.debug("Role scores for requirements: %s", role_scores)

    for strategy in strategies or ROLE_STRATEGIES:
        roles = strategy(role_scores, config)
        if roles:
            # dict.fromkeys keeps first occurrence order
            return list(dict.fromkeys(roles))
    return []
