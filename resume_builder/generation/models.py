"""Data models for Content Generator output."""

from __future__ import annotations

from typing import Any

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, field_validator


class SkillBullets(BaseModel):
    """Generated bullet statements for one requested skill."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    skill: str = Field(
        default="",
        description="Skill label that motivated these bullets",
        validation_alias=AliasChoices("skill", "category"),
    )
    bullets: tuple[str, ...] = Field(
        default=(), description="Bullet texts in generator order"
    )

    @field_validator("skill", mode="before")
    @classmethod
    def coerce_skill(cls, v: object) -> str:
        return "" if v is None else str(v).strip()

    @field_validator("bullets", mode="before")
    @classmethod
    def coerce_bullets(cls, v: object) -> object:
        """Accept plain strings or ``{"text": ...}`` objects; drop blanks."""
        if v is None:
            return ()
        if isinstance(v, str):
            v = [v]
        if not isinstance(v, (list, tuple)):
            return v
        texts: list[str] = []
        for item in v:
            if item is None:
                continue
            if isinstance(item, dict):
                item = item.get("text") or item.get("bullet") or ""
            text = str(item).strip()
            if text:
                texts.append(text)
        return tuple(texts)


class GeneratorResult(BaseModel):
    """Output of the Content Generator.

    Accepts the camelCase wire names (``bulletsBySkill``, ``suggestedSkills``,
    ``coverLetter``) as well as snake_case.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bullets_by_skill: tuple[SkillBullets, ...] = Field(
        default=(),
        description="Generated bullets grouped by skill",
        validation_alias=AliasChoices("bulletsBySkill", "bullets_by_skill", "newBullets"),
    )
    suggested_skills: tuple[str, ...] = Field(
        default=(),
        description="Skills the generator picked out of the job description",
        validation_alias=AliasChoices("suggestedSkills", "suggested_skills"),
    )
    cover_letter: str = Field(
        default="",
        description="Generated cover letter body",
        validation_alias=AliasChoices("coverLetter", "cover_letter"),
    )

    @field_validator("suggested_skills", mode="before")
    @classmethod
    def coerce_suggested_skills(cls, v: object) -> object:
        if v is None:
            return ()
        if isinstance(v, str):
            v = v.split(",")
        if not isinstance(v, (list, tuple)):
            return v
        return tuple(str(s).strip() for s in v if s is not None and str(s).strip())

    @field_validator("cover_letter", mode="before")
    @classmethod
    def coerce_cover_letter(cls, v: object) -> str:
        return "" if v is None else str(v).strip()

    def pairs(self) -> list[tuple[str, str]]:
        """Flatten into (skill, text) pairs, preserving group and bullet order."""
        return [
            (group.skill, text) for group in self.bullets_by_skill for text in group.bullets
        ]

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the wire names."""
        return {
            "bulletsBySkill": [
                {"skill": group.skill, "bullets": list(group.bullets)}
                for group in self.bullets_by_skill
            ],
            "suggestedSkills": list(self.suggested_skills),
            "coverLetter": self.cover_letter,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> GeneratorResult:
        """Deserialize from dictionary."""
        return cls.model_validate(data)
