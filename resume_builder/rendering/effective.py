"""Effective Document projection shared by both renderers.

The effective document is the Document with every disabled bullet removed and
every blank entry filtered out, arranged into sections in the fixed priority
order. Renderers consume only this view, which is what keeps the typeset and
paginated outputs in agreement about content.
"""

from __future__ import annotations

from dataclasses import dataclass

from resume_builder.document.models import (
    Bullet,
    Credential,
    Document,
    Position,
    Project,
)
from resume_builder.document.skills import SKILL_CATEGORY_TITLES

SECTION_ORDER = (
    "summary",
    "experience",
    "skills",
    "projects",
    "volunteer",
    "certifications",
    "education",
)

SECTION_TITLES = {
    "summary": "Summary",
    "experience": "Experience",
    "skills": "Technical Skills",
    "projects": "Projects",
    "volunteer": "Volunteer Experience",
    "certifications": "Certifications",
    "education": "Education",
}

PLACEHOLDER_TEXT = "No resume content available"


@dataclass(frozen=True)
class EffectiveEntry:
    """One renderable entry: a header row plus bulleted body."""

    title: str
    subtitle: str = ""
    dates: str = ""
    link: str = ""
    bullets: tuple[str, ...] = ()
    details: tuple[str, ...] = ()


@dataclass(frozen=True)
class SkillLine:
    """A skill category heading with its non-blank labels."""

    title: str
    labels: tuple[str, ...]


@dataclass(frozen=True)
class EffectiveSection:
    """A non-empty section in display order."""

    key: str
    title: str
    text: str = ""
    entries: tuple[EffectiveEntry, ...] = ()
    skills: tuple[SkillLine, ...] = ()


@dataclass(frozen=True)
class EffectiveDocument:
    """Filtered, ordered view of a Document used for rendering."""

    name: str
    title: str
    contacts: tuple[tuple[str, str], ...]
    sections: tuple[EffectiveSection, ...]

    @property
    def is_empty(self) -> bool:
        """True when there is nothing to render but the placeholder."""
        return not self.name and not self.sections

    def section(self, key: str) -> EffectiveSection | None:
        for section in self.sections:
            if section.key == key:
                return section
        return None

    def bullet_texts(self) -> list[str]:
        """All emitted bullet texts in display order."""
        return [
            text
            for section in self.sections
            for entry in section.entries
            for text in entry.bullets
        ]


def _enabled_texts(bullets: tuple[Bullet, ...]) -> tuple[str, ...]:
    return tuple(b.text for b in bullets if b.enabled and b.text.strip())


def _join(*parts: str, separator: str = ", ") -> str:
    return separator.join(part for part in parts if part)


def _position_entry(position: Position | None) -> EffectiveEntry | None:
    # A position with no title, organization or dates is not rendered at all
    if position is None or not position.has_header():
        return None
    details = ()
    if position.technologies:
        details = ("Technologies: " + ", ".join(position.technologies),)
    return EffectiveEntry(
        title=position.title,
        subtitle=_join(position.organization, position.location, separator=" -- "),
        dates=position.dates,
        bullets=_enabled_texts(position.bullets),
        details=details,
    )


def _project_entry(project: Project) -> EffectiveEntry | None:
    if not (project.name or project.organization or project.dates):
        return None
    return EffectiveEntry(
        title=project.name,
        subtitle=_join(project.organization, project.location, separator=" -- "),
        dates=project.dates,
        link=project.link,
        bullets=_enabled_texts(project.bullets),
    )


def _credential_entry(credential: Credential) -> EffectiveEntry | None:
    if not (credential.degree or credential.institution or credential.dates):
        return None
    details = []
    if credential.gpa:
        details.append(f"GPA: {credential.gpa}")
    if credential.coursework:
        details.append(f"Coursework: {credential.coursework}")
    return EffectiveEntry(
        title=credential.degree,
        subtitle=_join(credential.institution, credential.location),
        dates=credential.dates,
        details=tuple(details),
    )


def _entries(items, build) -> tuple[EffectiveEntry, ...]:
    return tuple(entry for entry in (build(item) for item in items) if entry is not None)


def effective_document(document: Document) -> EffectiveDocument:
    """Project a Document into its effective, render-ready form.

    Args:
        document: The document to project.

    Returns:
        The filtered view with sections in priority order.
    """
    built: dict[str, EffectiveSection] = {}

    if document.summary:
        built["summary"] = EffectiveSection(
            "summary", SECTION_TITLES["summary"], text=document.summary
        )

    experience = _entries(document.experience, _position_entry)
    if experience:
        built["experience"] = EffectiveSection(
            "experience", SECTION_TITLES["experience"], entries=experience
        )

    # Empty categories are omitted from display only; the model keeps the key
    skills = tuple(
        SkillLine(SKILL_CATEGORY_TITLES[key], labels)
        for key, labels in document.skills.items()
        if labels
    )
    if skills:
        built["skills"] = EffectiveSection("skills", SECTION_TITLES["skills"], skills=skills)

    projects = _entries(document.projects, _project_entry)
    if projects:
        built["projects"] = EffectiveSection(
            "projects", SECTION_TITLES["projects"], entries=projects
        )

    volunteer = _position_entry(document.volunteer)
    if volunteer is not None:
        built["volunteer"] = EffectiveSection(
            "volunteer", SECTION_TITLES["volunteer"], entries=(volunteer,)
        )

    certifications = tuple(
        EffectiveEntry(title=c.label, link=c.link) for c in document.certifications if c.label
    )
    if certifications:
        built["certifications"] = EffectiveSection(
            "certifications", SECTION_TITLES["certifications"], entries=certifications
        )

    education = _entries(document.education, _credential_entry)
    if education:
        built["education"] = EffectiveSection(
            "education", SECTION_TITLES["education"], entries=education
        )

    return EffectiveDocument(
        name=document.identity.name,
        title=document.identity.title,
        contacts=tuple(document.identity.contact_channels()),
        sections=tuple(built[key] for key in SECTION_ORDER if key in built),
    )
