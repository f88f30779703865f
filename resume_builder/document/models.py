"""Data models for the resume document.

Contains immutable Pydantic models for:
- Document: the root aggregate owned by a session
- Identity: name, headline and contact channels
- Position / Project / Credential: entries in the document lists
- Bullet: a toggle-able statement with a stable id and provenance
- SkillSet: the eleven canonical skill categories
"""

from __future__ import annotations

import uuid
from collections.abc import Iterator
from enum import Enum
from typing import Any, NewType

from pydantic import (
    AliasChoices,
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from resume_builder.document.skills import CANONICAL_SKILL_KEYS

BulletId = NewType("BulletId", str)


def new_bullet_id() -> BulletId:
    """Generate a fresh bullet id."""
    return BulletId(uuid.uuid4().hex)


class Origin(str, Enum):
    """Provenance of a bullet."""

    ORIGINAL = "original"
    AI = "ai"
    USER = "user"


class _DocumentModel(BaseModel):
    """Base for all document models: immutable, whitespace-trimmed text."""

    model_config = ConfigDict(
        frozen=True,
        str_strip_whitespace=True,
        populate_by_name=True,
    )

    @field_validator("*", mode="before")
    @classmethod
    def none_text_is_empty(cls, v: object, info: ValidationInfo) -> object:
        """Absent text is the empty string, never None."""
        if v is None and info.field_name is not None:
            if cls.model_fields[info.field_name].annotation is str:
                return ""
        return v


def _coerce_labels(v: object) -> object:
    """Accept a comma-separated string or a sequence; drop blank labels."""
    if v is None:
        return ()
    if isinstance(v, str):
        v = v.split(",")
    if isinstance(v, (list, tuple)):
        return tuple(
            str(item).strip() for item in v if item is not None and str(item).strip()
        )
    return v


class Identity(_DocumentModel):
    """Name, headline and contact channels."""

    name: str = ""
    title: str = ""
    phone: str = ""
    email: str = ""
    linkedin: str = Field(
        default="", validation_alias=AliasChoices("linkedin", "linkedin_url")
    )
    portfolio: str = Field(
        default="", validation_alias=AliasChoices("portfolio", "website")
    )
    github: str = Field(
        default="", validation_alias=AliasChoices("github", "github_url")
    )

    def contact_channels(self) -> list[tuple[str, str]]:
        """Return non-blank (channel, value) pairs in display order."""
        channels = [
            ("phone", self.phone),
            ("email", self.email),
            ("linkedin", self.linkedin),
            ("portfolio", self.portfolio),
            ("github", self.github),
        ]
        return [(channel, value) for channel, value in channels if value]


class Bullet(_DocumentModel):
    """One toggle-able statement within an entry."""

    id: BulletId = Field(default_factory=new_bullet_id)
    text: str = ""
    enabled: bool = True
    origin: Origin = Origin.USER
    category: str | None = None

    @model_validator(mode="before")
    @classmethod
    def apply_origin_defaults(cls, data: object) -> object:
        if isinstance(data, str):
            return {"text": data}
        if isinstance(data, dict) and "enabled" not in data:
            # Generated bullets wait for review before they are shown
            if data.get("origin") == Origin.AI:
                return {**data, "enabled": False}
        return data

    @field_validator("category", mode="before")
    @classmethod
    def blank_category_is_none(cls, v: object) -> object:
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @model_validator(mode="after")
    def enabled_bullet_has_text(self) -> Bullet:
        if self.enabled and not self.text:
            raise ValueError("an enabled bullet must have non-empty text")
        return self


class Position(_DocumentModel):
    """A job (or the volunteer role)."""

    title: str = Field(
        default="", validation_alias=AliasChoices("title", "job_title", "role")
    )
    organization: str = Field(
        default="", validation_alias=AliasChoices("organization", "company")
    )
    location: str = ""
    dates: str = Field(
        default="", validation_alias=AliasChoices("dates", "date_range")
    )
    bullets: tuple[Bullet, ...] = ()
    technologies: tuple[str, ...] = Field(
        default=(), validation_alias=AliasChoices("technologies", "tech_stack")
    )

    @field_validator("technologies", mode="before")
    @classmethod
    def coerce_technologies(cls, v: object) -> object:
        return _coerce_labels(v)

    def has_header(self) -> bool:
        return bool(self.title or self.organization or self.dates)


class Project(_DocumentModel):
    """A project entry."""

    name: str = Field(default="", validation_alias=AliasChoices("name", "title"))
    organization: str = ""
    location: str = ""
    dates: str = ""
    link: str = ""
    bullets: tuple[Bullet, ...] = ()


class Credential(_DocumentModel):
    """An education entry."""

    degree: str = ""
    institution: str = ""
    location: str = ""
    dates: str = Field(
        default="", validation_alias=AliasChoices("dates", "graduation_date", "date")
    )
    gpa: str = ""
    coursework: str = ""


class Certification(_DocumentModel):
    """A certification label with an optional link."""

    label: str = Field(default="", validation_alias=AliasChoices("label", "name"))
    link: str = Field(default="", validation_alias=AliasChoices("link", "url"))

    @model_validator(mode="before")
    @classmethod
    def coerce_from_string(cls, data: object) -> object:
        if isinstance(data, str):
            return {"label": data}
        return data


class SkillSet(_DocumentModel):
    """Skill labels grouped under the eleven canonical categories.

    Unknown categories are rejected, so a SkillSet always has exactly the
    canonical keys.
    """

    model_config = ConfigDict(extra="forbid")

    programming_languages: tuple[str, ...] = ()
    frontend_technologies: tuple[str, ...] = ()
    backend_technologies: tuple[str, ...] = ()
    database_management: tuple[str, ...] = ()
    project_program_management: tuple[str, ...] = ()
    business_analysis_documentation: tuple[str, ...] = ()
    data_reporting_tools: tuple[str, ...] = ()
    collaboration_communication: tuple[str, ...] = ()
    testing_quality_assurance: tuple[str, ...] = ()
    tools_methodologies: tuple[str, ...] = ()
    version_control_cloud: tuple[str, ...] = ()

    @field_validator(*CANONICAL_SKILL_KEYS, mode="before")
    @classmethod
    def coerce_labels(cls, v: object) -> object:
        return _coerce_labels(v)

    def keys(self) -> tuple[str, ...]:
        return CANONICAL_SKILL_KEYS

    def items(self) -> list[tuple[str, tuple[str, ...]]]:
        """Return (key, labels) pairs in canonical order."""
        return [(key, getattr(self, key)) for key in CANONICAL_SKILL_KEYS]

    def get(self, key: str) -> tuple[str, ...]:
        if key not in CANONICAL_SKILL_KEYS:
            raise KeyError(key)
        return getattr(self, key)

    def with_labels(self, key: str, labels: list[str] | tuple[str, ...]) -> SkillSet:
        """Return a copy with ``key`` replaced by ``labels``."""
        if key not in CANONICAL_SKILL_KEYS:
            raise KeyError(key)
        data = self.model_dump()
        data[key] = labels
        return SkillSet.model_validate(data)

    def is_empty(self) -> bool:
        return not any(labels for _, labels in self.items())


class Document(_DocumentModel):
    """The canonical resume document.

    A Document is an immutable value. Edits produce a new Document; see
    ``resume_builder.editing.engine.apply``.
    """

    identity: Identity = Field(default_factory=Identity)
    summary: str = ""
    experience: tuple[Position, ...] = ()
    education: tuple[Credential, ...] = ()
    skills: SkillSet = Field(default_factory=SkillSet)
    projects: tuple[Project, ...] = ()
    certifications: tuple[Certification, ...] = ()
    volunteer: Position | None = None
    cover_letter: str = Field(
        default="", validation_alias=AliasChoices("cover_letter", "coverLetter")
    )

    @model_validator(mode="after")
    def bullet_ids_are_unique(self) -> Document:
        seen: set[str] = set()
        for path, entry in self.bullet_entries():
            for bullet in entry.bullets:
                if bullet.id in seen:
                    raise ValueError(f"duplicate bullet id {bullet.id!r} in {path}")
                seen.add(bullet.id)
        return self

    @classmethod
    def empty(cls) -> Document:
        """Create the empty document a session starts with."""
        return cls()

    def bullet_entries(self) -> Iterator[tuple[str, Position | Project]]:
        """Yield (entry path, entry) for every entry that carries bullets."""
        for index, position in enumerate(self.experience):
            yield f"experience.{index}", position
        for index, project in enumerate(self.projects):
            yield f"projects.{index}", project
        if self.volunteer is not None:
            yield "volunteer", self.volunteer

    def organizations(self) -> list[str]:
        """Experience organizations, in document order, without blanks."""
        return [p.organization for p in self.experience if p.organization]

    def has_content(self) -> bool:
        """Return True if there is anything worth rendering."""
        return bool(
            self.identity.name
            or self.summary
            or self.experience
            or self.education
            or self.projects
            or self.certifications
            or self.volunteer is not None
            or not self.skills.is_empty()
        )

    def to_dict(self) -> dict[str, Any]:
        """Serialize to dictionary."""
        return self.model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Document:
        """Deserialize from dictionary."""
        return cls.model_validate(data)
