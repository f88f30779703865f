"""External collaborators: the Resume Parser and the Content Generator.

The core only depends on the two protocols below. The LLM-backed adapters are
one implementation; any object with the same coroutine methods can be passed
to :class:`resume_builder.session.ResumeSession`.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from typing import Any, Protocol

from resume_builder.config.settings import Settings
from resume_builder.document.models import Document
from resume_builder.document.skills import CANONICAL_SKILL_KEYS
from resume_builder.generation.llm import ResumeLLM
from resume_builder.generation.models import GeneratorResult

logger = logging.getLogger(__name__)


class ResumeParser(Protocol):
    """Converts free-form resume text into the parser output shape."""

    async def parse(self, resume_text: str) -> dict[str, Any]: ...


class ContentGenerator(Protocol):
    """Produces candidate bullets per skill and a cover letter."""

    async def generate(
        self,
        job_description: str,
        skills: Sequence[str],
        document: Document,
    ) -> GeneratorResult: ...


PARSER_SYSTEM_PROMPT = """You are a professional resume parser.
Convert the given resume text into JSON following the required schema.
Output ONLY valid JSON: no markdown, no explanations.
If data is missing, use "" or [] (never null)."""

PARSER_SCHEMA = """{
  "name": "Full Name",
  "title": "Professional Title or Headline",
  "contact": {"phone": "", "email": "", "linkedin": "", "portfolio": "", "github": ""},
  "summary": "Professional summary paragraph",
  "experience": [
    {"title": "", "company": "", "location": "", "dates": "MMM YYYY - MMM YYYY",
     "responsibilities": ["Achievement 1"], "technologies": []}
  ],
  "technical_skills": {%s},
  "projects": [{"name": "", "link": "", "dates": "", "responsibilities": []}],
  "certifications": ["Certification 1"],
  "volunteer": {"title": "", "organization": "", "dates": "", "responsibilities": []},
  "education": [
    {"degree": "", "institution": "", "location": "", "graduation_date": "MMM YYYY",
     "gpa": "", "coursework": ""}
  ]
}""" % ", ".join(f'"{key}": []' for key in CANONICAL_SKILL_KEYS)

GENERATOR_SYSTEM_PROMPT = """You are an expert resume writer.
Write achievement-style resume bullets that demonstrate the requested skills for
the target role, using only experience supported by the candidate's resume.
Return ONLY valid JSON of the form:
{"suggestedSkills": ["..."], "bulletsBySkill": [{"skill": "...", "bullets": ["..."]}],
 "coverLetter": "..."}
suggestedSkills lists 5-7 key skills named in the target role."""


class LLMResumeParser:
    """Resume Parser backed by an LLM."""

    def __init__(self, settings: Settings | None = None, llm: ResumeLLM | None = None):
        self.llm = llm or ResumeLLM(settings=settings)

    async def parse(self, resume_text: str) -> dict[str, Any]:
        """Return the raw parser output; validation happens at intake."""
        prompt = (
            f"REQUIRED JSON SCHEMA:\n{PARSER_SCHEMA}\n\n"
            "Map every skill into one of the technical_skills buckets. "
            "Do NOT create other skill buckets.\n\n"
            f"RESUME TEXT:\n{resume_text}"
        )
        logger.info("Parsing resume text with LLM")
        return await self.llm.generate_json(prompt, system_prompt=PARSER_SYSTEM_PROMPT)


class LLMContentGenerator:
    """Content Generator backed by an LLM."""

    def __init__(
        self,
        settings: Settings | None = None,
        llm: ResumeLLM | None = None,
        bullets_per_skill: int = 2,
    ):
        self.llm = llm or ResumeLLM(settings=settings)
        self.bullets_per_skill = bullets_per_skill

    def _build_prompt(
        self, job_description: str, skills: Sequence[str], document: Document
    ) -> str:
        lines = [f"TARGET ROLE:\n{job_description.strip()}", ""]
        lines.append("REQUESTED SKILLS: " + ", ".join(skills))
        lines.append(f"BULLETS PER SKILL: {self.bullets_per_skill}")
        lines.append("")
        lines.append(f"CANDIDATE: {document.identity.name}")
        if document.summary:
            lines.append(f"SUMMARY: {document.summary}")
        for position in document.experience:
            lines.append(f"- {position.title}, {position.organization} ({position.dates})")
            for bullet in position.bullets:
                if bullet.enabled:
                    lines.append(f"  * {bullet.text}")
        return "\n".join(lines)

    async def generate(
        self,
        job_description: str,
        skills: Sequence[str],
        document: Document,
    ) -> GeneratorResult:
        logger.info(f"Generating content for {len(skills)} skills")
        return await self.llm.generate_structured(
            self._build_prompt(job_description, skills, document),
            GeneratorResult,
            system_prompt=GENERATOR_SYSTEM_PROMPT,
        )
