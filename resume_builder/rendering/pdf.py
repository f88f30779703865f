"""Paginated-layout renderer using WeasyPrint.

Renders the effective document into a fixed-size page HTML layout and
rasterizes it to PDF. Also renders the generated cover letter.
"""

from __future__ import annotations

import logging
from datetime import datetime
from pathlib import Path

from weasyprint import HTML

from resume_builder.config.settings import Settings, get_settings
from resume_builder.document.models import Document
from resume_builder.rendering.base import RenderResult, create_environment, output_stem
from resume_builder.rendering.effective import PLACEHOLDER_TEXT, effective_document

logger = logging.getLogger(__name__)


class PaginatedRenderer:
    """PDF renderer for resume documents.

    Uses Jinja2 templates and WeasyPrint to lay out the same content the
    LaTeX renderer selects, on pages of the configured size.
    """

    resume_template = "resume.html"
    cover_letter_template = "cover_letter.html"

    def __init__(self, settings: Settings | None = None):
        """Initialize the renderer.

        Args:
            settings: Optional Settings. Uses global settings if not provided.
        """
        self.settings = settings or get_settings()
        self.jinja_env = create_environment(self.settings, autoescape=True)

    def render_html(self, document: Document) -> str:
        """Render the resume layout to HTML."""
        template = self.jinja_env.get_template(self.resume_template)
        return template.render(
            doc=effective_document(document),
            page_size=self.settings.page_size,
            placeholder=PLACEHOLDER_TEXT,
        )

    def render_cover_letter_html(self, document: Document) -> str:
        """Render the cover letter to HTML, one paragraph per blank-line block."""
        template = self.jinja_env.get_template(self.cover_letter_template)
        paragraphs = [p.strip() for p in document.cover_letter.split("\n\n") if p.strip()]
        return template.render(
            name=document.identity.name,
            contacts=[value for _, value in document.identity.contact_channels()],
            paragraphs=paragraphs,
            date=datetime.now().strftime("%B %d, %Y"),
            page_size=self.settings.page_size,
        )

    def render_pdf(self, document: Document) -> bytes:
        """Render the resume layout to PDF bytes."""
        return HTML(string=self.render_html(document)).write_pdf()

    def _ensure_output_dir(self, output_dir: Path | None) -> Path:
        directory = output_dir or self.settings.output_dir
        directory.mkdir(parents=True, exist_ok=True)
        return directory

    def render_resume(self, document: Document, output_dir: Path | None = None) -> RenderResult:
        """Render the resume to ``<name>.pdf``.

        Returns:
            RenderResult with file path or error.
        """
        try:
            html_content = self.render_html(document)
            output_path = self._ensure_output_dir(output_dir) / (
                f"{output_stem(document.identity.name)}.pdf"
            )

            HTML(string=html_content).write_pdf(str(output_path))

            logger.info(f"Rendered resume to {output_path}")
            return RenderResult(success=True, file_path=str(output_path))

        except Exception as e:
            logger.error(f"Failed to render resume: {e}")
            return RenderResult(success=False, error=str(e))

    def render_cover_letter(
        self, document: Document, output_dir: Path | None = None
    ) -> RenderResult:
        """Render the cover letter to ``<name>_cover_letter.pdf``.

        Returns:
            RenderResult with file path or error.
        """
        if not document.cover_letter:
            return RenderResult(success=False, error="Document has no cover letter")

        try:
            html_content = self.render_cover_letter_html(document)
            output_path = self._ensure_output_dir(output_dir) / (
                f"{output_stem(document.identity.name)}_cover_letter.pdf"
            )

            HTML(string=html_content).write_pdf(str(output_path))

            logger.info(f"Rendered cover letter to {output_path}")
            return RenderResult(success=True, file_path=str(output_path))

        except Exception as e:
            logger.error(f"Failed to render cover letter: {e}")
            return RenderResult(success=False, error=str(e))
