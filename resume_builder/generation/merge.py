"""Content merge logic.

Folds Content Generator output into a Document without discarding human
edits: generated bullets are added disabled for review, never replacing
existing bullets, and the cover letter is replaced outright.
"""

from __future__ import annotations

import logging
import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from resume_builder.document.models import Bullet, Document, Origin
from resume_builder.generation.models import GeneratorResult

logger = logging.getLogger(__name__)


class MergeOutcome(str, Enum):
    """Outcome of folding generated content into a document."""

    MERGED = "merged"
    NOTHING_TO_MERGE = "nothing_to_merge"


@dataclass(frozen=True)
class MergeResult:
    """Result of a merge operation.

    Attributes:
        outcome: MERGED, or NOTHING_TO_MERGE when the document has no
            experience entry to receive bullets.
        document: The resulting document (the input itself when nothing merged).
        inserted: Number of generated bullets added.
        dropped: Number of generated bullets that found no destination.
    """

    outcome: MergeOutcome
    document: Document
    inserted: int = 0
    dropped: int = 0

    @property
    def merged(self) -> bool:
        return self.outcome is MergeOutcome.MERGED


def strip_organization_clause(text: str, organizations: Iterable[str]) -> str:
    """Remove a trailing "at <Organization>" clause naming a known organization.

    >>> strip_organization_clause("Built a data lake at Acme Corp.", ["Acme Corp"])
    'Built a data lake.'
    """
    text = text.strip()
    for organization in sorted({o for o in organizations if o}, key=len, reverse=True):
        pattern = rf"[\s,]+at\s+{re.escape(organization)}\s*(?P<period>\.?)$"
        match = re.search(pattern, text, flags=re.IGNORECASE)
        if match:
            return text[: match.start()].rstrip() + match.group("period")
    return text


def assign_entries(total: int, entry_count: int) -> list[int]:
    """Return the target entry index for each of ``total`` generated bullets.

    Bullets are split into consecutive blocks of ``ceil(total / entry_count)``;
    a block index past the last entry is clamped to the last entry.
    """
    if total <= 0 or entry_count <= 0:
        return []
    per_entry = math.ceil(total / entry_count)
    return [min(i // per_entry, entry_count - 1) for i in range(total)]


def merge_generated_content(document: Document, result: GeneratorResult) -> MergeResult:
    """Fold generated bullets and the cover letter into ``document``.

    Generated bullets are distributed over the experience entries in blocks,
    created with ``origin=ai`` and ``enabled=False``, and placed in front of
    each entry's existing bullets (keeping generator order within the block).
    The cover letter replaces any previous one.

    Args:
        document: Current document (left untouched).
        result: Content Generator output.

    Returns:
        MergeResult. When the document has no experience entries the outcome is
        NOTHING_TO_MERGE and the document is returned unchanged.
    """
    organizations = document.organizations()
    pairs = [
        (skill, strip_organization_clause(text, organizations))
        for skill, text in result.pairs()
    ]
    pairs = [(skill, text) for skill, text in pairs if text]

    if not document.experience:
        logger.info(
            f"Nothing to merge: no experience entries for {len(pairs)} generated bullets"
        )
        return MergeResult(
            outcome=MergeOutcome.NOTHING_TO_MERGE,
            document=document,
            dropped=len(pairs),
        )

    generated: list[list[Bullet]] = [[] for _ in document.experience]
    for (skill, text), target in zip(
        pairs, assign_entries(len(pairs), len(document.experience))
    ):
        generated[target].append(
            Bullet(text=text, origin=Origin.AI, enabled=False, category=skill or None)
        )

    experience = tuple(
        position.model_copy(update={"bullets": tuple(new) + position.bullets})
        if new
        else position
        for position, new in zip(document.experience, generated)
    )
    merged = document.model_copy(
        update={"experience": experience, "cover_letter": result.cover_letter}
    )

    logger.info(
        f"Merged {len(pairs)} generated bullets into {len(document.experience)} experience entries"
    )
    return MergeResult(outcome=MergeOutcome.MERGED, document=merged, inserted=len(pairs))
