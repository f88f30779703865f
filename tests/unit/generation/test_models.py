"""Unit tests for Content Generator output models."""

from resume_builder.generation.models import GeneratorResult, SkillBullets


class TestSkillBullets:
    """Tests for SkillBullets."""

    def test_accepts_category_alias(self):
        """Test that category is accepted in place of skill."""
        group = SkillBullets.model_validate({"category": " Go ", "bullets": ["a"]})
        assert group.skill == "Go"

    def test_drops_blank_bullets_and_reads_objects(self):
        """Test that bullet objects are read and blanks dropped."""
        group = SkillBullets.model_validate(
            {"skill": "Go", "bullets": [" a ", "", {"text": "b"}, {"bullet": "c"}, None]}
        )
        assert group.bullets == ("a", "b", "c")


class TestGeneratorResult:
    """Tests for GeneratorResult."""

    def test_parses_wire_names(self):
        """Test camelCase input."""
        result = GeneratorResult.from_dict(
            {
                "bulletsBySkill": [{"skill": "Go", "bullets": ["G1", "G2"]}],
                "coverLetter": " Dear team ",
            }
        )
        assert result.cover_letter == "Dear team"
        assert result.pairs() == [("Go", "G1"), ("Go", "G2")]

    def test_parses_snake_case(self):
        """Test snake_case input."""
        result = GeneratorResult.model_validate(
            {"bullets_by_skill": [{"skill": "SQL", "bullets": ["S1"]}], "cover_letter": None}
        )
        assert result.pairs() == [("SQL", "S1")]
        assert result.cover_letter == ""

    def test_pairs_preserve_group_order(self):
        """Test that flattening keeps group then bullet order."""
        result = GeneratorResult.from_dict(
            {
                "bulletsBySkill": [
                    {"skill": "A", "bullets": ["a1", "a2"]},
                    {"skill": "B", "bullets": []},
                    {"skill": "C", "bullets": ["c1"]},
                ]
            }
        )
        assert result.pairs() == [("A", "a1"), ("A", "a2"), ("C", "c1")]

    def test_to_dict_uses_wire_names(self):
        """Test serialization keys."""
        result = GeneratorResult.from_dict({"bulletsBySkill": [{"skill": "Go", "bullets": ["G1"]}]})
        assert result.to_dict() == {
            "bulletsBySkill": [{"skill": "Go", "bullets": ["G1"]}],
            "suggestedSkills": [],
            "coverLetter": "",
        }

    def test_parses_suggested_skills(self):
        """Test that suggestedSkills is read and blanks dropped."""
        result = GeneratorResult.from_dict({"suggestedSkills": ["Go", " ", "SQL "]})
        assert result.suggested_skills == ("Go", "SQL")
        assert GeneratorResult.from_dict({}).suggested_skills == ()
