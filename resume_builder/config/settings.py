"""Configuration settings for the resume builder.

Settings can be overridden via environment variables prefixed with ``RESUME_``
or through a ``.env`` file.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Example: RESUME_PAGE_SIZE=letter
    """

    model_config = SettingsConfigDict(
        env_prefix="RESUME_",
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = Field(
        default="INFO",
        description="Log level for the package logger",
    )

    # Rendering
    output_dir: Path = Field(
        default=Path("artifacts/resumes"),
        description="Directory for rendered .tex and .pdf files",
    )
    template_dir: Path | None = Field(
        default=None,
        description="Directory overriding the packaged Jinja2 templates",
    )
    page_size: Literal["A4", "letter"] = Field(
        default="A4",
        description="Page size for the paginated layout",
    )

    # LLM collaborators (resume parser, content generator)
    llm_provider: str = Field(
        default="openai",
        description="LLM provider (openai, anthropic, gemini, etc.)",
    )
    llm_model: str = Field(
        default="gpt-4o",
        description="LLM model name",
    )
    llm_api_key: str | None = Field(
        default=None,
        description="API key for LLM provider",
    )
    llm_base_url: str | None = Field(
        default=None,
        description="Base URL for OpenAI-compatible endpoints",
    )
    llm_max_retries: Annotated[int, Field(ge=0)] = Field(
        default=1,
        description="Maximum retry attempts for LLM calls",
    )
    llm_timeout: Annotated[float, Field(gt=0)] = Field(
        default=120.0,
        description="Timeout in seconds for LLM calls",
    )

    @field_validator("log_level", "page_size", mode="before")
    @classmethod
    def normalize_choice(cls, v: object) -> object:
        """Accept case-insensitive log levels and page sizes."""
        if not isinstance(v, str):
            return v
        value = v.strip()
        if value.lower() == "letter":
            return "letter"
        return value.upper()

    @field_validator("output_dir", mode="before")
    @classmethod
    def convert_to_path(cls, v: str | Path) -> Path:
        """Convert string paths to Path objects."""
        if isinstance(v, str):
            return Path(v)
        return v

    @field_validator("template_dir", mode="before")
    @classmethod
    def blank_template_dir_is_unset(cls, v: str | Path | None) -> Path | None:
        if isinstance(v, str):
            return Path(v) if v.strip() else None
        return v


# Singleton instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """Get the settings singleton."""
    global _settings
    if _settings is None:
        _settings = Settings()
    return _settings


def reset_settings() -> None:
    """Reset the settings singleton (useful for testing)."""
    global _settings
    _settings = None
