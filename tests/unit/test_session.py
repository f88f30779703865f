"""Unit tests for ResumeSession."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from resume_builder.document.models import Document
from resume_builder.editing.commands import EditBulletText, SetField
from resume_builder.generation.llm import LLMError
from resume_builder.generation.merge import MergeOutcome
from resume_builder.generation.models import GeneratorResult
from resume_builder.intake.parser_output import SchemaViolationError
from resume_builder.session import ResumeSession


class TestSessionLifecycle:
    """Tests for loading, editing and resetting the document."""

    def test_starts_empty(self):
        """Test that a new session holds the empty document."""
        assert ResumeSession().document == Document.empty()

    def test_load_parser_output_replaces_document(self, sample_parser_output):
        """Test that parser output replaces the document wholesale."""
        session = ResumeSession()
        session.apply(SetField(path="summary", value="draft"))

        document = session.load_parser_output(sample_parser_output)

        assert session.document is document
        assert document.identity.name == "Jane Doe"
        assert document.summary == "Backend engineer with 8 years of experience."

    def test_schema_violation_keeps_prior_document(self, sample_document):
        """Test that malformed parser output leaves the document in place."""
        session = ResumeSession(sample_document)
        with pytest.raises(SchemaViolationError):
            session.load_parser_output({"name": "Only a name"})
        assert session.document is sample_document

    def test_apply_replaces_reference(self, sample_document):
        """Test that each command swaps in the new document."""
        session = ResumeSession(sample_document)
        session.apply(EditBulletText(entry_path="experience.0", bullet_id="b1", text=" "))
        assert session.document is not sample_document
        assert len(session.document.experience[0].bullets) == 2
        assert len(sample_document.experience[0].bullets) == 3

    def test_apply_all(self, sample_document):
        """Test that a batch of commands is applied in order."""
        session = ResumeSession(sample_document)
        session.apply_all(
            [SetField(path="identity.name", value="J. Doe"), SetField(path="summary", value="")]
        )
        assert session.document.identity.name == "J. Doe"
        assert session.document.summary == ""

    def test_merge(self, sample_document):
        """Test that merge updates the document and reports the outcome."""
        session = ResumeSession(sample_document)
        outcome = session.merge(
            GeneratorResult.from_dict({"bulletsBySkill": [{"skill": "Go", "bullets": ["G1"]}], "coverLetter": "Hi"})
        )
        assert outcome.outcome is MergeOutcome.MERGED
        assert session.document.cover_letter == "Hi"
        assert session.document.experience[0].bullets[0].text == "G1"

    def test_merge_nothing_to_merge(self):
        """Test that merging into an empty document leaves it unchanged."""
        session = ResumeSession()
        before = session.document
        outcome = session.merge(GeneratorResult.from_dict({"bulletsBySkill": [{"skill": "Go", "bullets": ["G1"]}]}))
        assert outcome.outcome is MergeOutcome.NOTHING_TO_MERGE
        assert session.document is before

    def test_start_over(self, sample_document):
        """Test that start_over discards the document."""
        session = ResumeSession(sample_document)
        assert session.start_over() == Document.empty()
        assert not session.document.has_content()


class TestSessionCollaborators:
    """Tests for the async collaborator calls."""

    @pytest.mark.asyncio
    async def test_import_resume_text(self, sample_parser_output):
        """Test that parsed text is loaded into the session."""
        parser = MagicMock()
        parser.parse = AsyncMock(return_value=sample_parser_output)
        session = ResumeSession()

        document = await session.import_resume_text("resume text", parser)

        parser.parse.assert_awaited_once_with("resume text")
        assert session.document is document
        assert document.experience[0].organization == "Acme Corp"

    @pytest.mark.asyncio
    async def test_import_failure_keeps_document(self, sample_document):
        """Test that a failing parser leaves the document untouched."""
        parser = MagicMock()
        parser.parse = AsyncMock(side_effect=LLMError("timed out"))
        session = ResumeSession(sample_document)

        with pytest.raises(LLMError):
            await session.import_resume_text("resume text", parser)

        assert session.document is sample_document

    @pytest.mark.asyncio
    async def test_generate_content(self, sample_document):
        """Test that generated content is requested and merged."""
        generator = MagicMock()
        generator.generate = AsyncMock(
            return_value=GeneratorResult.from_dict(
                {"bulletsBySkill": [{"skill": "Go", "bullets": ["G1"]}], "coverLetter": "Dear team"}
            )
        )
        session = ResumeSession(sample_document)

        outcome = await session.generate_content("Platform role", ["Go"], generator)

        generator.generate.assert_awaited_once_with("Platform role", ["Go"], sample_document)
        assert outcome.merged
        assert session.document.cover_letter == "Dear team"
