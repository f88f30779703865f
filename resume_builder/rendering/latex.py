r"""Typeset-source renderer.

Produces a complete LaTeX document from the effective document. Every value
inserted into the template is escaped for LaTeX's reserved characters; link
targets inside ``\href`` use the narrower URL escaping hyperref expects.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from resume_builder.config.settings import Settings, get_settings
from resume_builder.document.models import Document
from resume_builder.rendering.base import RenderResult, create_environment, output_stem
from resume_builder.rendering.effective import PLACEHOLDER_TEXT, effective_document

logger = logging.getLogger(__name__)

_LATEX_SPECIALS = {
    "\\": r"\textbackslash{}",
    "&": r"\&",
    "%": r"\%",
    "$": r"\$",
    "#": r"\#",
    "_": r"\_",
    "{": r"\{",
    "}": r"\}",
    "~": r"\~{}",
    "^": r"\^{}",
    "<": r"\textless{}",
    ">": r"\textgreater{}",
}

_LATEX_SPECIALS_RE = re.compile("|".join(re.escape(char) for char in _LATEX_SPECIALS))

_URL_SPECIALS = {"\\": r"\\", "%": r"\%", "#": r"\#"}

_URL_SPECIALS_RE = re.compile("|".join(re.escape(char) for char in _URL_SPECIALS))

_PAPER = {"A4": "a4paper", "letter": "letterpaper"}


def escape_latex(value: object) -> str:
    r"""Escape LaTeX reserved characters in a single pass.

    >>> escape_latex("R&D at 100%")
    'R\\&D at 100\\%'
    >>> escape_latex(None)
    ''
    """
    if value is None:
        return ""
    return _LATEX_SPECIALS_RE.sub(lambda m: _LATEX_SPECIALS[m.group()], str(value))


class LatexSource(str):
    """Text that is already valid LaTeX and must not be escaped again."""


def escape_latex_url(value: object) -> LatexSource:
    r"""Escape a link target for ``\href``.

    hyperref reads the target verbatim apart from ``\``, ``%`` and ``#``, so
    characters such as ``_`` and ``~`` are left as they are.

    >>> escape_latex_url("https://example.com/a_b~c#top")
    'https://example.com/a_b~c\\#top'
    """
    if value is None:
        return LatexSource("")
    return LatexSource(
        _URL_SPECIALS_RE.sub(lambda m: _URL_SPECIALS[m.group()], str(value))
    )


def _finalize(value: object) -> str:
    if isinstance(value, LatexSource):
        return value
    return escape_latex(value)


class LatexRenderer:
    """Renders a Document as LaTeX source."""

    template_name = "resume.tex.j2"

    def __init__(self, settings: Settings | None = None):
        self.settings = settings or get_settings()
        self.jinja_env = create_environment(
            self.settings,
            block_start_string="((*",
            block_end_string="*))",
            variable_start_string="(((",
            variable_end_string=")))",
            comment_start_string="((=",
            comment_end_string="=))",
            trim_blocks=True,
            lstrip_blocks=True,
            autoescape=False,
            finalize=_finalize,
        )
        self.jinja_env.filters["latex_url"] = escape_latex_url

    def render(self, document: Document) -> str:
        """Render the document to LaTeX source.

        A document with no recognizable content renders as a compilable
        placeholder page.
        """
        view = effective_document(document)
        template = self.jinja_env.get_template(self.template_name)
        return template.render(
            doc=view,
            paper=_PAPER[self.settings.page_size],
            pdf_title=view.name or "Resume",
            placeholder=PLACEHOLDER_TEXT,
        )

    def tex_filename(self, document: Document) -> str:
        return f"{output_stem(document.identity.name)}.tex"

    def write(self, document: Document, output_dir: Path | None = None) -> RenderResult:
        """Render and write ``<name>.tex`` into the output directory.

        Returns:
            RenderResult with file path or error.
        """
        try:
            directory = output_dir or self.settings.output_dir
            directory.mkdir(parents=True, exist_ok=True)
            output_path = directory / self.tex_filename(document)
            output_path.write_text(self.render(document), encoding="utf-8")

            logger.info(f"Rendered LaTeX source to {output_path}")
            return RenderResult(success=True, file_path=str(output_path))

        except Exception as e:
            logger.error(f"Failed to write LaTeX source: {e}")
            return RenderResult(success=False, error=str(e))
