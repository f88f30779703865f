"""Unit tests for the effective document projection."""

from resume_builder.document.models import Document
from resume_builder.editing.commands import ToggleBullet
from resume_builder.editing.engine import apply
from resume_builder.rendering.effective import SECTION_ORDER, effective_document


class TestEffectiveDocument:
    """Tests for filtering and ordering."""

    def test_sections_in_priority_order(self, sample_document):
        """Test that sections follow the fixed priority order."""
        view = effective_document(sample_document)
        keys = [section.key for section in view.sections]
        assert keys == ["summary", "experience", "skills", "projects", "certifications", "education"]
        assert keys == [key for key in SECTION_ORDER if key in keys]

    def test_volunteer_between_projects_and_certifications(self, sample_document):
        """Test that volunteer has its fixed slot."""
        document = sample_document.model_copy(
            update={"volunteer": Document.from_dict({"volunteer": {"title": "Mentor"}}).volunteer}
        )
        keys = [section.key for section in effective_document(document).sections]
        assert keys.index("projects") < keys.index("volunteer") < keys.index("certifications")

    def test_disabled_bullets_are_removed(self, sample_document):
        """Test that only enabled bullets are emitted."""
        document = apply(
            sample_document,
            ToggleBullet(entry_path="experience.0", bullet_id="b2", enabled=False),
        )
        texts = effective_document(document).bullet_texts()
        assert "Cut API latency by 40%" not in texts
        assert "Led migration to Kubernetes" in texts

    def test_position_without_header_is_excluded(self):
        """Test that a position with blank title, organization and dates is dropped."""
        document = Document.from_dict(
            {
                "experience": [
                    {"location": "Remote", "bullets": ["Orphan bullet"]},
                    {"title": "Engineer", "bullets": ["Kept bullet"]},
                ]
            }
        )
        view = effective_document(document)
        assert len(view.section("experience").entries) == 1
        assert view.bullet_texts() == ["Kept bullet"]

    def test_empty_skill_categories_are_omitted(self, sample_document):
        """Test that only categories with labels are displayed."""
        skills = effective_document(sample_document).section("skills").skills
        assert [line.title for line in skills] == ["Programming Languages", "Version Control & Cloud"]
        assert len(sample_document.skills.items()) == 11

    def test_entry_details(self):
        """Test that technologies, GPA and coursework become detail lines."""
        document = Document.from_dict(
            {
                "experience": [{"title": "Engineer", "technologies": ["Go", "SQL"]}],
                "education": [{"degree": "BSc", "gpa": "3.9", "coursework": "Compilers"}],
            }
        )
        view = effective_document(document)
        assert view.section("experience").entries[0].details == ("Technologies: Go, SQL",)
        assert view.section("education").entries[0].details == ("GPA: 3.9", "Coursework: Compilers")

    def test_subtitle_joins_organization_and_location(self, sample_document):
        """Test the entry header text."""
        entry = effective_document(sample_document).section("experience").entries[0]
        assert entry.subtitle == "Acme Corp -- Remote"
        assert entry.dates == "2020 - Present"

    def test_empty_document_is_empty(self):
        """Test that the empty document only yields the placeholder."""
        view = effective_document(Document.empty())
        assert view.is_empty
        assert view.sections == ()

    def test_skills_only_is_not_empty(self):
        """Test that any recognizable content avoids the placeholder."""
        document = Document.from_dict({"skills": {"programming_languages": ["Go"]}})
        assert not effective_document(document).is_empty
