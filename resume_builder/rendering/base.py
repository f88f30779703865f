"""Shared pieces of the render pipeline."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import Any

from jinja2 import ChoiceLoader, Environment, FileSystemLoader

from resume_builder.config.settings import Settings

PACKAGE_TEMPLATE_DIR = Path(__file__).parent / "templates"


@dataclass
class RenderResult:
    """Result of writing a rendered artifact to disk."""

    success: bool
    file_path: str | None = None
    error: str | None = None
    rendered_at: datetime = field(default_factory=datetime.now)


def create_environment(settings: Settings, **options: Any) -> Environment:
    """Create a Jinja2 environment for the configured templates.

    Templates in ``settings.template_dir`` take precedence; anything missing
    there falls back to the packaged templates.
    """
    loaders = []
    if settings.template_dir is not None and settings.template_dir.exists():
        loaders.append(FileSystemLoader(str(settings.template_dir)))
    loaders.append(FileSystemLoader(str(PACKAGE_TEMPLATE_DIR)))

    env = Environment(loader=ChoiceLoader(loaders), **options)
    env.filters["absolute_url"] = absolute_url
    return env


def absolute_url(link: str) -> str:
    """Prefix scheme-less links with https://."""
    if not link or re.match(r"^[a-zA-Z][a-zA-Z0-9+.-]*:", link):
        return link
    return f"https://{link}"


def output_stem(name: str) -> str:
    """File name stem derived from the candidate's name.

    >>> output_stem("Ada  Lovelace")
    'ada_lovelace'
    >>> output_stem("")
    'resume'
    """
    cleaned = re.sub(r"[^\w\s-]", "", name).strip()
    if not cleaned:
        return "resume"
    return re.sub(r"\s+", "_", cleaned).lower()
