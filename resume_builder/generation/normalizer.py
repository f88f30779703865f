"""Skill-header normalizer.

Maps free-text skill category labels onto the eleven canonical keys using an
ordered rule table. Rules are evaluated top to bottom and the first matching
rule wins, so the order of ``SKILL_HEADER_RULES`` is significant: for example
"Database Management" must reach ``database_management`` before the generic
"management" pattern of ``project_program_management`` sees it.

Labels that match no rule are dropped; there is no catch-all category.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable, Mapping, Sequence
from typing import NamedTuple

from resume_builder.document.models import SkillSet
from resume_builder.document.skills import CANONICAL_SKILL_KEYS, is_canonical_skill_key

logger = logging.getLogger(__name__)


class SkillHeaderRule(NamedTuple):
    """A set of patterns that routes matching labels to one canonical key."""

    key: str
    patterns: tuple[re.Pattern[str], ...]

    def matches(self, label: str) -> bool:
        return any(pattern.search(label) for pattern in self.patterns)


def _rule(key: str, *patterns: str) -> SkillHeaderRule:
    if key not in CANONICAL_SKILL_KEYS:
        raise ValueError(f"Unknown canonical skill key: {key}")
    return SkillHeaderRule(key, tuple(re.compile(p) for p in patterns))


SKILL_HEADER_RULES: tuple[SkillHeaderRule, ...] = (
    _rule(
        "programming_languages",
        r"\bprogramming\b",
        r"\blanguages?\b",
        r"\bcoding\b",
        r"\bscripting\b",
    ),
    _rule(
        "frontend_technologies",
        r"\bfront ?end\b",
        r"\bui\b",
        r"\bux\b",
        r"\bweb\b",
        r"\bclient side\b",
    ),
    _rule(
        "backend_technologies",
        r"\bback ?end\b",
        r"\bserver\b",
        r"\bapis?\b",
        r"\bframeworks?\b",
    ),
    _rule(
        "database_management",
        r"\bdata ?bases?\b",
        r"\bdbm?s?\b",
        r"\bsql\b",
        r"\bstorage\b",
    ),
    _rule(
        "project_program_management",
        r"\bproject\b",
        r"\bprogram\b",
        r"\bpm\b",
        r"\bagile\b",
        r"\bscrum\b",
        r"\bmanagement\b",
    ),
    _rule(
        "business_analysis_documentation",
        r"\bbusiness\b",
        r"\banalysis\b",
        r"\brequirements?\b",
        r"\bdocumentation\b",
    ),
    _rule(
        "data_reporting_tools",
        r"\breporting\b",
        r"\bbi\b",
        r"\banalytics\b",
        r"\bvisuali[sz]ation\b",
        r"\bdata\b",
    ),
    _rule(
        "collaboration_communication",
        r"\bcollaborat",
        r"\bcommunicat",
        r"\bsoft skills?\b",
        r"\binterpersonal\b",
        r"\bleadership\b",
    ),
    _rule(
        "testing_quality_assurance",
        r"\btest",
        r"\bqa\b",
        r"\bquality\b",
    ),
    _rule(
        "version_control_cloud",
        r"\bversion control\b",
        r"\bgit\b",
        r"\bcloud\b",
        r"\bdevops\b",
        r"\bci cd\b",
        r"\binfrastructure\b",
    ),
    _rule(
        "tools_methodologies",
        r"\btools?\b",
        r"\bmethodolog",
        r"\bplatforms?\b",
        r"\bsoftware\b",
        r"\btechnolog",
        r"\btechnical\b",
    ),
)


def _normalize_label(label: str) -> str:
    """Lower-case and collapse separators so "Front-End_Tools" reads "front end tools"."""
    label = re.sub(r"[\s_\-/&,.:+]+", " ", label.lower())
    return label.strip()


def match_skill_header(
    label: str, rules: Sequence[SkillHeaderRule] = SKILL_HEADER_RULES
) -> str | None:
    """Return the canonical key for ``label``, or None if no rule matches.

    A label that already is a canonical key maps to itself.
    """
    if is_canonical_skill_key(label):
        return label
    normalized = _normalize_label(label)
    for rule in rules:
        if rule.matches(normalized):
            return rule.key
    return None


def _labels(values: object) -> list[str]:
    if values is None:
        return []
    if isinstance(values, str):
        values = values.split(",")
    if not isinstance(values, Iterable):
        values = [values]
    return [str(v).strip() for v in values if v is not None and str(v).strip()]


def _append_unique(target: list[str], labels: Iterable[str]) -> None:
    seen = {label.lower() for label in target}
    for label in labels:
        if label.lower() not in seen:
            target.append(label)
            seen.add(label.lower())


def normalize_skill_headers(
    raw: Mapping[str, object] | SkillSet | None,
    rules: Sequence[SkillHeaderRule] = SKILL_HEADER_RULES,
) -> SkillSet:
    """Fold arbitrary skill categories into the eleven canonical keys.

    Each canonical key is seeded from the incoming field of exactly that name.
    Every other incoming key is routed by the first matching rule and its
    labels are appended to that key; keys matching no rule are dropped.

    Args:
        raw: Category label -> labels (a list or a comma-separated string).
        rules: Ordered rule table (first match wins).

    Returns:
        A SkillSet, which always has exactly the canonical keys.
    """
    if raw is None:
        return SkillSet()
    if isinstance(raw, SkillSet):
        return raw

    buckets: dict[str, list[str]] = {key: [] for key in CANONICAL_SKILL_KEYS}
    for key in CANONICAL_SKILL_KEYS:
        if key in raw:
            _append_unique(buckets[key], _labels(raw[key]))

    for label, values in raw.items():
        if is_canonical_skill_key(label):
            continue
        key = match_skill_header(str(label), rules)
        if key is None:
            logger.debug(f"Dropping skill category {label!r}: no canonical match")
            continue
        _append_unique(buckets[key], _labels(values))

    return SkillSet.model_validate(buckets)


COMMON_SKILLS: tuple[str, ...] = (
    "JavaScript",
    "Python",
    "Java",
    "React",
    "Node.js",
    "SQL",
    "AWS",
    "Docker",
    "Kubernetes",
    "Git",
    "Agile",
    "Scrum",
    "REST API",
    "GraphQL",
    "TypeScript",
    "Angular",
    "Vue.js",
    "MongoDB",
    "PostgreSQL",
    "Redis",
    "Kafka",
    "Microservices",
    "CI/CD",
    "Jenkins",
    "Terraform",
    "Ansible",
    "Linux",
    "Machine Learning",
    "Data Analysis",
    "Project Management",
    "Leadership",
    "Communication",
    "Problem Solving",
    "Team Collaboration",
    "Analytical Skills",
    "Creativity",
)

MAX_SUGGESTED_SKILLS = 10


def _skill_pattern(skill: str) -> re.Pattern[str]:
    # Whole-term match, so "Java" does not fire on "JavaScript"
    return re.compile(rf"(?<![\w.]){re.escape(skill)}(?![\w])", re.IGNORECASE)


_SKILL_PATTERNS = tuple((skill, _skill_pattern(skill)) for skill in COMMON_SKILLS)


def suggest_skills(
    job_description: str,
    limit: int = MAX_SUGGESTED_SKILLS,
) -> list[str]:
    """Suggest target skills named in a job description.

    Args:
        job_description: Free text of the target role.
        limit: Maximum number of skills returned.

    Returns:
        Matching entries of ``COMMON_SKILLS``, in that list's order.
    """
    if not job_description:
        return []
    found = [skill for skill, pattern in _SKILL_PATTERNS if pattern.search(job_description)]
    logger.debug(f"Suggested {len(found)} skills from job description")
    return found[:limit]
