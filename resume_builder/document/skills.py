"""Canonical skill categories.

The resume document always carries exactly these eleven categories, in this
order. Display titles are used by both renderers.
"""

from __future__ import annotations

CANONICAL_SKILL_KEYS: tuple[str, ...] = (
    "programming_languages",
    "frontend_technologies",
    "backend_technologies",
    "database_management",
    "project_program_management",
    "business_analysis_documentation",
    "data_reporting_tools",
    "collaboration_communication",
    "testing_quality_assurance",
    "tools_methodologies",
    "version_control_cloud",
)

SKILL_CATEGORY_TITLES: dict[str, str] = {
    "programming_languages": "Programming Languages",
    "frontend_technologies": "Frontend Technologies",
    "backend_technologies": "Backend Technologies",
    "database_management": "Database Management",
    "project_program_management": "Project & Program Management",
    "business_analysis_documentation": "Business Analysis & Documentation",
    "data_reporting_tools": "Data & Reporting Tools",
    "collaboration_communication": "Collaboration & Communication",
    "testing_quality_assurance": "Testing & Quality Assurance",
    "tools_methodologies": "Tools & Methodologies",
    "version_control_cloud": "Version Control & Cloud",
}


def is_canonical_skill_key(key: str) -> bool:
    """Return True if ``key`` is one of the eleven canonical category keys."""
    return key in SKILL_CATEGORY_TITLES
