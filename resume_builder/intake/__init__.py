"""Resume Parser intake: raw parser output to Document."""

from resume_builder.intake.parser_output import (
    REQUIRED_FIELDS,
    SchemaViolationError,
    document_from_parser_output,
)

__all__ = ["REQUIRED_FIELDS", "SchemaViolationError", "document_from_parser_output"]
