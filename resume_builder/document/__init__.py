"""Canonical resume document model."""

from resume_builder.document.models import (
    Bullet,
    BulletId,
    Certification,
    Credential,
    Document,
    Identity,
    Origin,
    Position,
    Project,
    SkillSet,
    new_bullet_id,
)
from resume_builder.document.skills import (
    CANONICAL_SKILL_KEYS,
    SKILL_CATEGORY_TITLES,
    is_canonical_skill_key,
)

__all__ = [
    "Document",
    "Identity",
    "Position",
    "Project",
    "Credential",
    "Certification",
    "SkillSet",
    "Bullet",
    "BulletId",
    "Origin",
    "new_bullet_id",
    "CANONICAL_SKILL_KEYS",
    "SKILL_CATEGORY_TITLES",
    "is_canonical_skill_key",
]
