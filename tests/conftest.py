"""Pytest configuration and shared fixtures."""

import os

import pytest

from resume_builder.config.settings import reset_settings
from resume_builder.document.models import Document

# Keys to remove for isolated tests
ENV_KEYS_TO_REMOVE = [
    "RESUME_LOG_LEVEL",
    "RESUME_OUTPUT_DIR",
    "RESUME_TEMPLATE_DIR",
    "RESUME_PAGE_SIZE",
    "RESUME_LLM_PROVIDER",
    "RESUME_LLM_MODEL",
    "RESUME_LLM_API_KEY",
    "RESUME_LLM_BASE_URL",
    "RESUME_LLM_MAX_RETRIES",
    "RESUME_LLM_TIMEOUT",
]


@pytest.fixture
def isolated_env():
    """Remove RESUME_* env vars for isolated testing."""
    saved = {k: os.environ.pop(k, None) for k in ENV_KEYS_TO_REMOVE}
    reset_settings()
    yield
    for k, v in saved.items():
        if v is not None:
            os.environ[k] = v
        elif k in os.environ:
            del os.environ[k]
    reset_settings()


@pytest.fixture
def sample_parser_output() -> dict:
    """Resume Parser output for a two-job candidate."""
    return {
        "name": "Jane Doe",
        "title": "Software Engineer",
        "contact": {
            "phone": "555-0100",
            "email": "jane@example.com",
            "linkedin": "linkedin.com/in/janedoe",
            "portfolio": "",
            "github": "github.com/janedoe",
        },
        "summary": "Backend engineer with 8 years of experience.",
        "experience": [
            {
                "title": "Senior Engineer",
                "company": "Acme Corp",
                "location": "Remote",
                "dates": "Jan 2020 - Present",
                "responsibilities": [
                    "Led migration to Kubernetes",
                    "   ",
                    "Cut API latency by 40%",
                ],
                "technologies": ["Python", "Go"],
            },
            {
                "title": "Engineer",
                "company": "Globex",
                "location": "Austin, TX",
                "dates": "2016 - 2019",
                "responsibilities": ["Built billing pipeline"],
            },
        ],
        "technical_skills": {
            "programming_languages": ["Python", "Go"],
            "Cloud & DevOps": ["AWS", "Docker"],
            "Project Management": ["Scrum"],
            "Hobbies": ["Chess"],
        },
        "certifications": ["AWS Solutions Architect"],
        "volunteer": {"title": "", "organization": "", "dates": "", "responsibilities": []},
        "education": [
            {
                "degree": "BSc Computer Science",
                "institution": "State University",
                "location": "Springfield",
                "graduation_date": "2016",
                "gpa": "3.8",
            }
        ],
    }


@pytest.fixture
def sample_document() -> Document:
    """A populated document with known bullet ids."""
    return Document.from_dict(
        {
            "identity": {
                "name": "Jane Doe",
                "title": "Software Engineer",
                "email": "jane@example.com",
                "phone": "555-0100",
                "github": "github.com/janedoe",
            },
            "summary": "Backend engineer with 8 years of experience.",
            "experience": [
                {
                    "title": "Senior Engineer",
                    "organization": "Acme Corp",
                    "location": "Remote",
                    "dates": "2020 - Present",
                    "bullets": [
                        {"id": "b1", "text": "Led migration to Kubernetes", "origin": "original"},
                        {"id": "b2", "text": "Cut API latency by 40%", "origin": "original"},
                        {"id": "b3", "text": "Mentored four engineers", "origin": "original"},
                    ],
                },
                {
                    "title": "Engineer",
                    "organization": "Globex",
                    "dates": "2016 - 2019",
                    "bullets": [
                        {"id": "b4", "text": "Built billing pipeline", "origin": "original"},
                    ],
                },
            ],
            "education": [
                {"degree": "BSc Computer Science", "institution": "State University", "dates": "2016"}
            ],
            "skills": {
                "programming_languages": ["Python", "Go"],
                "version_control_cloud": ["AWS"],
            },
            "projects": [
                {
                    "name": "resume-kit",
                    "link": "github.com/janedoe/resume-kit",
                    "bullets": [
                        {"id": "p1", "text": "Open source resume toolkit", "origin": "user"},
                    ],
                }
            ],
            "certifications": ["AWS Solutions Architect"],
        }
    )
