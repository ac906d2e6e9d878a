"""
Skill Configuration - the skill taxonomy and role definitions.

Both tables are read-only and built ONCE at startup:
- SkillDefinition: canonical skill -> surface-form synonyms
- RoleDefinition: role -> canonical skills (resume scoring)
                        + tagging keywords (job requirement tagging)

Core functions never read a global table. They receive a SkillConfig
argument, so tests can pass small fixture configs.

ORDER MATTERS:
- Skill order is the tie-break when a token matches several skills.
- Role order is the tie-break when roles have equal scores.
"""

from functools import lru_cache
from typing import Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, field_validator, model_validator

from placement_portal.core.config import get_settings


class SkillDefinition(BaseModel):
    """A canonical skill and the surface forms that map to it."""

    model_config = ConfigDict(frozen=True)

    name: str
    synonyms: Tuple[str, ...]

    @field_validator("synonyms")
    @classmethod
    def normalize_synonyms(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        cleaned = tuple(s.lower().strip() for s in value if s and s.strip())
        if not cleaned:
            raise ValueError("a skill needs at least one synonym")
        return cleaned


class RoleDefinition(BaseModel):
    """
    A job-family tag.

    skills: canonical skill names summed into the role's resume score.
    keywords: free-text fragments matched against job requirements.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    skills: Tuple[str, ...]
    keywords: Tuple[str, ...] = ()

    @field_validator("keywords")
    @classmethod
    def normalize_keywords(cls, value: Tuple[str, ...]) -> Tuple[str, ...]:
        return tuple(k.lower().strip() for k in value if k and k.strip())


class SkillConfig(BaseModel):
    """Immutable skill taxonomy + role table shared by all core services."""

    model_config = ConfigDict(frozen=True)

    skills: Tuple[SkillDefinition, ...]
    roles: Tuple[RoleDefinition, ...]
    default_role: str = "full-stack"
    project_markers: Tuple[str, ...] = ("project", "built", "developed")
    experience_markers: Tuple[str, ...] = ("intern", "work experience", "employment")

    @model_validator(mode="after")
    def check_tables(self) -> "SkillConfig":
        skill_names = [s.name for s in self.skills]
        if len(set(skill_names)) != len(skill_names):
            raise ValueError("duplicate canonical skill names in taxonomy")

        role_names = [r.name for r in self.roles]
        if len(set(role_names)) != len(role_names):
            raise ValueError("duplicate role names in role definitions")

        known = set(skill_names)
        for role in self.roles:
            if not role.skills:
                raise ValueError(f"role '{role.name}' has no skills")
            unknown = [s for s in role.skills if s not in known]
            if unknown:
                raise ValueError(f"role '{role.name}' references unknown skills: {unknown}")

        if self.default_role not in role_names:
            raise ValueError(f"default role '{self.default_role}' is not a defined role")
        return self

    @property
    def skill_names(self) -> List[str]:
        return [s.name for s in self.skills]

    @property
    def role_names(self) -> List[str]:
        return [r.name for r in self.roles]

    def canonical_skill(self, token: str) -> Optional[str]:
        """
        Map an exact surface form to its canonical skill.
        First skill in taxonomy order wins if synonyms overlap.
        """
        for skill in self.skills:
            if token in skill.synonyms:
                return skill.name
        return None

    def overlapping_synonyms(self) -> Dict[str, List[str]]:
        """Synonyms claimed by more than one skill (should be empty)."""
        owners: Dict[str, List[str]] = {}
        for skill in self.skills:
            for synonym in skill.synonyms:
                owners.setdefault(synonym, []).append(skill.name)
        return {syn: names for syn, names in owners.items() if len(names) > 1}


# ============================================================
# DEFAULT TABLES
# ============================================================

DEFAULT_SKILLS: List[Tuple[str, Tuple[str, ...]]] = [
    # Frontend
    ("react", ("react", "reactjs", "react.js")),
    ("javascript", ("javascript", "js", "es6", "ecmascript")),
    ("html", ("html", "html5")),
    ("css", ("css", "css3", "sass", "scss")),
    # Backend
    ("nodejs", ("node", "nodejs", "node.js", "express")),
    ("python", ("python", "py", "django", "flask")),
    ("java", ("java", "spring", "j2ee")),
    ("php", ("php", "laravel", "symfony")),
    # Database
    ("mongodb", ("mongodb", "mongo")),
    ("sql", ("sql", "mysql", "postgresql", "oracle")),
    # Mobile
    ("react-native", ("react-native", "react native")),
    ("flutter", ("flutter", "dart")),
    # DevOps
    ("docker", ("docker", "container")),
    ("aws", ("aws", "amazon web services", "ec2", "s3")),
    # Data Science
    ("machine-learning", ("machine learning", "ml", "ai", "artificial intelligence")),
]

DEFAULT_ROLES: List[Tuple[str, Tuple[str, ...], Tuple[str, ...]]] = [
    (
        "full-stack",
        ("react", "javascript", "nodejs", "html", "css", "mongodb", "sql"),
        ("react", "javascript", "nodejs", "html", "css", "mongodb", "sql",
         "express", "nextjs", "typescript"),
    ),
    (
        "frontend",
        ("react", "javascript", "html", "css"),
        ("react", "javascript", "html", "css", "vue", "angular", "sass",
         "bootstrap", "tailwind"),
    ),
    (
        "backend",
        ("nodejs", "python", "java", "sql", "mongodb", "php"),
        ("nodejs", "python", "java", "sql", "mongodb", "php", "express",
         "django", "spring", "flask", "backend"),
    ),
    (
        "data-scientist",
        ("python", "machine-learning", "sql"),
        ("python", "machine learning", "ml", "ai", "artificial intelligence",
         "tensorflow", "pytorch", "data science", "r", "statistics"),
    ),
    (
        "devops",
        ("docker", "aws", "nodejs"),
        ("docker", "aws", "kubernetes", "jenkins", "ci/cd", "azure", "linux", "nginx"),
    ),
    (
        "mobile",
        ("react-native", "flutter", "javascript"),
        ("react-native", "flutter", "android", "ios", "swift", "kotlin"),
    ),
]


def build_skill_config(default_role: str = "full-stack") -> SkillConfig:
    """Build the standard taxonomy and role table."""
    return SkillConfig(
        skills=tuple(SkillDefinition(name=name, synonyms=syns) for name, syns in DEFAULT_SKILLS),
        roles=tuple(
            RoleDefinition(name=name, skills=skills, keywords=keywords)
            for name, skills, keywords in DEFAULT_ROLES
        ),
        default_role=default_role,
    )


@lru_cache()
def get_skill_config() -> SkillConfig:
    """Process-wide config, built once from settings."""
    return build_skill_config(default_role=get_settings().default_role)
