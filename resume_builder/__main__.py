"""Command-line entry point for the resume builder."""

import argparse
import asyncio
import json
import sys
from pathlib import Path

import yaml

from resume_builder import __version__
from resume_builder.config.settings import Settings
from resume_builder.document.models import Document
from resume_builder.editing.commands import parse_commands
from resume_builder.generation.llm import LLMError
from resume_builder.generation.merge import MergeOutcome
from resume_builder.generation.models import GeneratorResult
from resume_builder.generation.normalizer import suggest_skills
from resume_builder.session import ResumeSession
from resume_builder.utils.logging import configure_logging

EXIT_NOTHING_TO_MERGE = 2


def _load_data(path: Path) -> object:
    """Load a JSON or YAML file."""
    text = path.read_text(encoding="utf-8")
    if path.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(text)
    return json.loads(text)


def _load_document(path: Path) -> Document:
    data = _load_data(path)
    if not isinstance(data, dict):
        raise ValueError(f"{path} does not contain a document object")
    return Document.from_dict(data)


def _emit(document: Document, out: Path | None) -> None:
    payload = json.dumps(document.to_dict(), indent=2)
    if out is None:
        print(payload)
        return
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(payload + "\n", encoding="utf-8")
    print(f"Wrote: {out}")


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="resume-builder",
        description="Resume builder: structured editing, AI merge and rendering",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m resume_builder import parsed.json -o resume.json
  python -m resume_builder edit resume.json commands.json -o resume.json
  python -m resume_builder render resume.json --tex --pdf
        """,
    )

    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default=None,
        help="Set the log level (overrides settings)",
    )

    subparsers = parser.add_subparsers(
        dest="mode",
        title="modes",
        description="Available commands",
    )

    import_parser = subparsers.add_parser(
        "import",
        help="Build a document from resume parser output (JSON or YAML)",
    )
    import_parser.add_argument("parser_output", type=Path, help="Parser output file")
    import_parser.add_argument("-o", "--out", type=Path, default=None, help="Output document path")

    edit_parser = subparsers.add_parser(
        "edit",
        help="Apply a list of edit commands to a document",
    )
    edit_parser.add_argument("document", type=Path, help="Document file")
    edit_parser.add_argument("commands", type=Path, help="JSON/YAML list of commands")
    edit_parser.add_argument("-o", "--out", type=Path, default=None, help="Output document path")

    merge_parser = subparsers.add_parser(
        "merge",
        help="Merge content generator output into a document",
    )
    merge_parser.add_argument("document", type=Path, help="Document file")
    merge_parser.add_argument("generated", type=Path, help="Generator output file")
    merge_parser.add_argument("-o", "--out", type=Path, default=None, help="Output document path")

    render_parser = subparsers.add_parser(
        "render",
        help="Render a document to LaTeX source and/or PDF",
    )
    render_parser.add_argument("document", type=Path, help="Document file")
    render_parser.add_argument("--tex", action="store_true", help="Write LaTeX source")
    render_parser.add_argument("--pdf", action="store_true", help="Write a PDF")
    render_parser.add_argument(
        "--cover-letter",
        action="store_true",
        help="Also write the cover letter PDF",
    )
    render_parser.add_argument(
        "--out-dir",
        type=Path,
        default=None,
        help="Output directory (defaults to RESUME_OUTPUT_DIR)",
    )

    parse_parser = subparsers.add_parser(
        "parse",
        help="Parse resume text into a document with the configured LLM",
    )
    parse_parser.add_argument("resume_text", type=Path, help="Plain-text resume")
    parse_parser.add_argument("-o", "--out", type=Path, default=None, help="Output document path")

    generate_parser = subparsers.add_parser(
        "generate",
        help="Generate bullets and a cover letter for a role and merge them",
    )
    generate_parser.add_argument("document", type=Path, help="Document file")
    generate_parser.add_argument("--job", type=Path, required=True, help="Job description file")
    generate_parser.add_argument(
        "--skill",
        action="append",
        default=[],
        dest="skills",
        help="Skill to target (repeatable; defaults to skills found in the job description)",
    )
    generate_parser.add_argument("-o", "--out", type=Path, default=None, help="Output document path")

    return parser


def _report_merge(session: ResumeSession, outcome, out: Path | None) -> int:
    if outcome.outcome is MergeOutcome.NOTHING_TO_MERGE:
        print(
            f"Nothing to merge: the document has no experience entries "
            f"({outcome.dropped} generated bullets dropped)",
            file=sys.stderr,
        )
        return EXIT_NOTHING_TO_MERGE
    print(f"Merged {outcome.inserted} generated bullets", file=sys.stderr)
    _emit(session.document, out)
    return 0


def _run(parsed: argparse.Namespace, settings: Settings) -> int:
    if parsed.mode == "import":
        session = ResumeSession()
        session.load_parser_output(_load_data(parsed.parser_output))
        _emit(session.document, parsed.out)
        return 0

    if parsed.mode == "edit":
        session = ResumeSession(_load_document(parsed.document))
        session.apply_all(parse_commands(_load_data(parsed.commands)))
        _emit(session.document, parsed.out)
        return 0

    if parsed.mode == "merge":
        session = ResumeSession(_load_document(parsed.document))
        data = _load_data(parsed.generated)
        if not isinstance(data, dict):
            raise ValueError(f"{parsed.generated} does not contain generator output")
        outcome = session.merge(GeneratorResult.from_dict(data))
        return _report_merge(session, outcome, parsed.out)

    if parsed.mode == "render":
        from resume_builder.rendering.latex import LatexRenderer
        from resume_builder.rendering.pdf import PaginatedRenderer

        document = _load_document(parsed.document)
        write_tex = parsed.tex or not parsed.pdf
        write_pdf = parsed.pdf or not parsed.tex

        results = []
        if write_tex:
            results.append(LatexRenderer(settings=settings).write(document, parsed.out_dir))
        if write_pdf or parsed.cover_letter:
            pdf_renderer = PaginatedRenderer(settings=settings)
            if write_pdf:
                results.append(pdf_renderer.render_resume(document, parsed.out_dir))
            if parsed.cover_letter:
                results.append(pdf_renderer.render_cover_letter(document, parsed.out_dir))

        exit_code = 0
        for result in results:
            if result.success:
                print(f"Wrote: {result.file_path}")
            else:
                print(f"Error: {result.error}", file=sys.stderr)
                exit_code = 1
        return exit_code

    if parsed.mode == "parse":
        from resume_builder.generation.collaborators import LLMResumeParser

        session = ResumeSession()
        text = parsed.resume_text.read_text(encoding="utf-8")
        asyncio.run(session.import_resume_text(text, LLMResumeParser(settings=settings)))
        _emit(session.document, parsed.out)
        return 0

    if parsed.mode == "generate":
        from resume_builder.generation.collaborators import LLMContentGenerator

        job_description = parsed.job.read_text(encoding="utf-8")
        skills = parsed.skills or suggest_skills(job_description)
        if not skills:
            print(
                "No skills found in the job description; provide at least one --skill",
                file=sys.stderr,
            )
            return 1
        if not parsed.skills:
            print(f"Targeting suggested skills: {', '.join(skills)}", file=sys.stderr)
        session = ResumeSession(_load_document(parsed.document))
        outcome = asyncio.run(
            session.generate_content(
                job_description,
                skills,
                LLMContentGenerator(settings=settings),
            )
        )
        return _report_merge(session, outcome, parsed.out)

    return 0


def main(args: list[str] | None = None) -> int:
    """Main entry point for the application.

    Args:
        args: Command line arguments (defaults to sys.argv[1:]).

    Returns:
        Exit code (0 for success, 2 when there was nothing to merge,
        1 for other errors).
    """
    parser = create_parser()
    parsed = parser.parse_args(args)

    # Load settings
    try:
        settings = Settings()
    except Exception as e:
        print(f"Error loading settings: {e}", file=sys.stderr)
        return 1

    # Configure logging
    logger = configure_logging(level=parsed.log_level, settings=settings)

    # If no mode specified, show help
    if parsed.mode is None:
        parser.print_help()
        return 0

    logger.debug(f"resume-builder v{__version__} running {parsed.mode}")

    try:
        return _run(parsed, settings)
    except LLMError as e:
        print(f"LLM error: {e}", file=sys.stderr)
        return 1
    except (OSError, ValueError, yaml.YAMLError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
