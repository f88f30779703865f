"""Generated-content handling: generator output, merge, and skill normalizer."""

from resume_builder.generation.merge import (
    MergeOutcome,
    MergeResult,
    assign_entries,
    merge_generated_content,
    strip_organization_clause,
)
from resume_builder.generation.models import GeneratorResult, SkillBullets
from resume_builder.generation.normalizer import (
    COMMON_SKILLS,
    SKILL_HEADER_RULES,
    SkillHeaderRule,
    match_skill_header,
    normalize_skill_headers,
    suggest_skills,
)

__all__ = [
    "GeneratorResult",
    "SkillBullets",
    "MergeOutcome",
    "MergeResult",
    "merge_generated_content",
    "assign_entries",
    "strip_organization_clause",
    "SkillHeaderRule",
    "SKILL_HEADER_RULES",
    "match_skill_header",
    "normalize_skill_headers",
    "COMMON_SKILLS",
    "suggest_skills",
]
