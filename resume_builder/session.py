"""Resume session: owner of the single Document value.

Every successful operation replaces the held document wholesale, so readers
never observe a partially updated value. Collaborator calls are awaited
before any replacement happens; a failure leaves the document untouched.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from typing import Any

from resume_builder.document.models import Document
from resume_builder.editing.commands import Command
from resume_builder.editing.engine import apply, apply_all
from resume_builder.generation.collaborators import ContentGenerator, ResumeParser
from resume_builder.generation.merge import MergeResult, merge_generated_content
from resume_builder.generation.models import GeneratorResult
from resume_builder.intake.parser_output import SchemaViolationError, document_from_parser_output

logger = logging.getLogger(__name__)


class ResumeSession:
    """Holds the current Document and routes every change through pure functions."""

    def __init__(self, document: Document | None = None):
        self._document = document if document is not None else Document.empty()

    @property
    def document(self) -> Document:
        return self._document

    def load_parser_output(self, data: Any) -> Document:
        """Replace the document with one built from parser output.

        Raises:
            SchemaViolationError: If the output is malformed. The prior
                document is retained.
        """
        try:
            document = document_from_parser_output(data)
        except SchemaViolationError as e:
            logger.warning(f"Rejected parser output, keeping current document: {e}")
            raise
        self._document = document
        return document

    def apply(self, command: Command) -> Document:
        self._document = apply(self._document, command)
        return self._document

    def apply_all(self, commands: Iterable[Command]) -> Document:
        self._document = apply_all(self._document, commands)
        return self._document

    def merge(self, result: GeneratorResult) -> MergeResult:
        """Fold generated content into the document.

        The caller should check ``MergeResult.outcome``; a nothing-to-merge
        outcome leaves the document unchanged.
        """
        outcome = merge_generated_content(self._document, result)
        self._document = outcome.document
        return outcome

    def start_over(self) -> Document:
        """Discard the document and start from empty."""
        logger.info("Starting over with an empty document")
        self._document = Document.empty()
        return self._document

    async def import_resume_text(self, text: str, parser: ResumeParser) -> Document:
        """Parse free-form resume text and load the result."""
        data = await parser.parse(text)
        return self.load_parser_output(data)

    async def generate_content(
        self,
        job_description: str,
        skills: Sequence[str],
        generator: ContentGenerator,
    ) -> MergeResult:
        """Ask the generator for content targeted at a role and merge it."""
        result = await generator.generate(job_description, skills, self._document)
        return self.merge(result)
