"""Convert Resume Parser output into a Document.

The parser emits a flat JSON shape (``name``, ``contact``, ``technical_skills``,
``responsibilities``...). This module maps it onto the document model, folds
free-form skill categories into the canonical keys and tags every bullet as
``original``.
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from resume_builder.document.models import Document, Origin
from resume_builder.generation.normalizer import normalize_skill_headers

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = (
    "name",
    "contact",
    "summary",
    "experience",
    "technical_skills",
    "education",
)


class SchemaViolationError(ValueError):
    """Raised when parser output does not match the required shape."""

    def __init__(self, message: str, missing_fields: tuple[str, ...] = ()):
        super().__init__(message)
        self.missing_fields = missing_fields


def _text(value: Any) -> str:
    return "" if value is None else str(value).strip()


def _bullets(responsibilities: Any) -> list[dict[str, Any]]:
    if responsibilities is None:
        return []
    if isinstance(responsibilities, str):
        responsibilities = [responsibilities]
    if not isinstance(responsibilities, (list, tuple)):
        raise SchemaViolationError("responsibilities must be a list of strings")
    bullets = []
    for item in responsibilities:
        if isinstance(item, dict):
            item = item.get("text") or item.get("bullet")
        elif isinstance(item, (list, tuple)):
            raise SchemaViolationError("responsibilities must be a list of strings")
        text = _text(item)
        if text:
            bullets.append({"text": text, "origin": Origin.ORIGINAL.value})
    return bullets


def _objects(data: dict[str, Any], key: str) -> list[dict[str, Any]]:
    value = data.get(key) or []
    if not isinstance(value, list) or not all(isinstance(v, dict) for v in value):
        raise SchemaViolationError(f"'{key}' must be a list of objects")
    return value


def _position(raw: dict[str, Any]) -> dict[str, Any]:
    return {
        "title": raw.get("title") or raw.get("job_title") or raw.get("role"),
        "organization": raw.get("company") or raw.get("organization"),
        "location": raw.get("location"),
        "dates": raw.get("dates") or raw.get("date_range"),
        "bullets": _bullets(raw.get("responsibilities", raw.get("bullets"))),
        "technologies": raw.get("technologies") or raw.get("tech_stack"),
    }


def _volunteer(raw: Any) -> dict[str, Any] | None:
    if not raw:
        return None
    if not isinstance(raw, dict):
        raise SchemaViolationError("'volunteer' must be an object")
    position = _position(raw)
    if not (
        _text(position["title"])
        or _text(position["organization"])
        or _text(position["dates"])
        or position["bullets"]
    ):
        return None
    return position


def document_from_parser_output(data: Any) -> Document:
    """Build a Document from Resume Parser output.

    Args:
        data: Parsed JSON payload from the Resume Parser.

    Returns:
        A new Document with canonical skills and ``original`` bullets.

    Raises:
        SchemaViolationError: If the payload is not an object, a required
            top-level field is missing, or a field has the wrong shape.
    """
    if not isinstance(data, dict):
        raise SchemaViolationError("Parser output must be a JSON object")

    missing = tuple(field for field in REQUIRED_FIELDS if field not in data)
    if missing:
        raise SchemaViolationError(
            f"Parser output is missing required fields: {', '.join(missing)}",
            missing_fields=missing,
        )

    contact = data.get("contact") or {}
    if not isinstance(contact, dict):
        raise SchemaViolationError("'contact' must be an object")

    raw_skills = data.get("technical_skills") or {}
    if not isinstance(raw_skills, dict):
        raise SchemaViolationError("'technical_skills' must be an object")

    payload = {
        "identity": {
            "name": data.get("name"),
            "title": data.get("title"),
            "phone": contact.get("phone"),
            "email": contact.get("email"),
            "linkedin": contact.get("linkedin"),
            "portfolio": contact.get("portfolio"),
            "github": contact.get("github"),
        },
        "summary": data.get("summary"),
        "experience": [_position(p) for p in _objects(data, "experience")],
        "education": _objects(data, "education"),
        "skills": normalize_skill_headers(raw_skills),
        "projects": [
            {
                "name": p.get("name") or p.get("title"),
                "organization": p.get("organization"),
                "location": p.get("location"),
                "dates": p.get("dates"),
                "link": p.get("link") or p.get("url"),
                "bullets": _bullets(p.get("responsibilities", p.get("bullets"))),
            }
            for p in _objects(data, "projects")
        ],
        "certifications": data.get("certifications") or [],
        "volunteer": _volunteer(data.get("volunteer")),
    }

    try:
        document = Document.model_validate(payload)
    except ValidationError as e:
        raise SchemaViolationError(f"Parser output is malformed: {e}") from e

    logger.info(
        f"Imported resume for {document.identity.name or '<unnamed>'}: "
        f"{len(document.experience)} positions, {len(document.education)} credentials"
    )
    return document
