"""Render pipeline: effective document, LaTeX source and paginated PDF."""

from resume_builder.rendering.base import RenderResult, output_stem
from resume_builder.rendering.effective import (
    PLACEHOLDER_TEXT,
    SECTION_ORDER,
    EffectiveDocument,
    EffectiveEntry,
    EffectiveSection,
    SkillLine,
    effective_document,
)
from resume_builder.rendering.latex import LatexRenderer, escape_latex, escape_latex_url
from resume_builder.rendering.pdf import PaginatedRenderer

__all__ = [
    "RenderResult",
    "output_stem",
    "PLACEHOLDER_TEXT",
    "SECTION_ORDER",
    "EffectiveDocument",
    "EffectiveEntry",
    "EffectiveSection",
    "SkillLine",
    "effective_document",
    "LatexRenderer",
    "escape_latex",
    "escape_latex_url",
    "PaginatedRenderer",
]
