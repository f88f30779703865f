"""Mutation engine for resume documents.

``apply(document, command)`` is a pure state transition: it never mutates its
input and returns a new Document. Commands that address something that does
not exist (a deleted entry, an unknown bullet id, an out-of-range index) are
no-ops that return the unchanged document, since they routinely arrive from
UI event races.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from functools import reduce
from typing import Any

from pydantic import ValidationError

from resume_builder.document.models import Document
from resume_builder.editing.commands import (
    AddBullet,
    AddEntry,
    Command,
    DeleteBullet,
    DeleteEntry,
    EditBulletText,
    Reorder,
    ReorderBullets,
    SetField,
    ToggleBullet,
)

logger = logging.getLogger(__name__)


class _AddressingFailure(Exception):
    """The command's target does not exist in the current document."""


class _Unchanged(Exception):
    """The command is valid but leaves the document as it is."""


def apply(document: Document, command: Command) -> Document:
    """Apply one edit command and return the resulting document.

    Args:
        document: Current document value (left untouched).
        command: One of the commands in ``resume_builder.editing.commands``.

    Returns:
        A new Document, or ``document`` itself when the command is a no-op.

    Raises:
        TypeError: If ``command`` is not a known command type.
    """
    handler = _HANDLERS.get(type(command))
    if handler is None:
        raise TypeError(f"Unknown command type: {type(command).__name__}")

    data = document.model_dump(mode="json")
    try:
        handler(data, command)
    except _AddressingFailure as e:
        logger.debug(f"Ignoring {command.kind}: {e}")
        return document
    except _Unchanged:
        return document

    try:
        return Document.model_validate(data)
    except ValidationError as e:
        logger.warning(f"Rejected {command.kind} on invalid result: {e}")
        return document


def apply_all(document: Document, commands: Iterable[Command]) -> Document:
    """Apply commands in order."""
    return reduce(apply, commands, document)


# ---------------------------------------------------------------------------
# Path helpers
# ---------------------------------------------------------------------------


def _split_path(path: str) -> list[str | int]:
    parts: list[str | int] = []
    for raw in path.strip().split("."):
        if not raw:
            raise _AddressingFailure(f"malformed path {path!r}")
        if raw.lstrip("-").isdigit():
            parts.append(int(raw))
        else:
            parts.append(raw)
    if "id" in parts:
        raise _AddressingFailure("bullet ids cannot be edited")
    return parts


def _step(node: Any, key: str | int) -> Any:
    if isinstance(node, dict) and isinstance(key, str) and key in node:
        return node[key]
    if isinstance(node, list) and isinstance(key, int) and 0 <= key < len(node):
        return node[key]
    raise _AddressingFailure(f"no element {key!r}")


def _resolve(data: dict[str, Any], parts: list[str | int]) -> Any:
    node: Any = data
    for key in parts:
        node = _step(node, key)
    return node


def _resolve_list(data: dict[str, Any], path: str) -> list[Any]:
    target = _resolve(data, _split_path(path))
    if not isinstance(target, list):
        raise _AddressingFailure(f"{path!r} is not a list")
    return target


def _resolve_entry(data: dict[str, Any], path: str) -> dict[str, Any]:
    entry = _resolve(data, _split_path(path))
    if not isinstance(entry, dict) or not isinstance(entry.get("bullets"), list):
        raise _AddressingFailure(f"{path!r} is not an entry with bullets")
    return entry


def _find_bullet(entry: dict[str, Any], bullet_id: str) -> int:
    for index, bullet in enumerate(entry["bullets"]):
        if bullet.get("id") == bullet_id:
            return index
    raise _AddressingFailure(f"no bullet {bullet_id!r}")


def _move(items: list[Any], from_index: int, to_index: int) -> None:
    size = len(items)
    if not (0 <= from_index < size and 0 <= to_index < size):
        raise _AddressingFailure(f"index out of bounds for list of {size}")
    if from_index == to_index:
        raise _Unchanged()
    items.insert(to_index, items.pop(from_index))


def _without_ids(value: Any) -> Any:
    """Drop bullet ids from a new entry so it receives fresh ones."""
    if isinstance(value, dict):
        return {
            key: _without_ids(item) for key, item in value.items() if key != "id"
        }
    if isinstance(value, (list, tuple)):
        return [_without_ids(item) for item in value]
    return value


# ---------------------------------------------------------------------------
# Handlers
# ---------------------------------------------------------------------------


def _set_field(data: dict[str, Any], command: SetField) -> None:
    parts = _split_path(command.path)
    parent = _resolve(data, parts[:-1])
    key = parts[-1]
    _step(parent, key)
    value = command.value
    if isinstance(value, str):
        value = value.strip()
    parent[key] = _without_ids(value) if isinstance(value, (dict, list)) else value


def _add_entry(data: dict[str, Any], command: AddEntry) -> None:
    target = _resolve_list(data, command.list_path)
    index = len(target) if command.index is None else command.index
    if not 0 <= index <= len(target):
        raise _AddressingFailure(f"insert index {index} out of bounds")
    entry = command.entry
    if isinstance(entry, str):
        entry = entry.strip()
    target.insert(index, _without_ids(entry))


def _delete_entry(data: dict[str, Any], command: DeleteEntry) -> None:
    target = _resolve_list(data, command.list_path)
    if not 0 <= command.index < len(target):
        raise _AddressingFailure(f"delete index {command.index} out of bounds")
    del target[command.index]


def _reorder(data: dict[str, Any], command: Reorder) -> None:
    _move(_resolve_list(data, command.list_path), command.from_index, command.to_index)


def _toggle_bullet(data: dict[str, Any], command: ToggleBullet) -> None:
    entry = _resolve_entry(data, command.entry_path)
    bullet = entry["bullets"][_find_bullet(entry, command.bullet_id)]
    if bullet["enabled"] == command.enabled:
        raise _Unchanged()
    bullet["enabled"] = command.enabled


def _edit_bullet_text(data: dict[str, Any], command: EditBulletText) -> None:
    entry = _resolve_entry(data, command.entry_path)
    index = _find_bullet(entry, command.bullet_id)
    text = command.text.strip()
    if not text:
        del entry["bullets"][index]
        return
    entry["bullets"][index]["text"] = text


def _reorder_bullets(data: dict[str, Any], command: ReorderBullets) -> None:
    entry = _resolve_entry(data, command.entry_path)
    _move(entry["bullets"], command.from_index, command.to_index)


def _add_bullet(data: dict[str, Any], command: AddBullet) -> None:
    entry = _resolve_entry(data, command.entry_path)
    text = command.text.strip()
    if not text:
        raise _Unchanged()
    bullets = entry["bullets"]
    index = len(bullets) if command.index is None else command.index
    if not 0 <= index <= len(bullets):
        raise _AddressingFailure(f"insert index {index} out of bounds")
    bullets.insert(index, {"text": text, "origin": command.origin.value})


def _delete_bullet(data: dict[str, Any], command: DeleteBullet) -> None:
    entry = _resolve_entry(data, command.entry_path)
    del entry["bullets"][_find_bullet(entry, command.bullet_id)]


_HANDLERS: dict[type, Callable[[dict[str, Any], Any], None]] = {
    SetField: _set_field,
    AddEntry: _add_entry,
    DeleteEntry: _delete_entry,
    Reorder: _reorder,
    ToggleBullet: _toggle_bullet,
    EditBulletText: _edit_bullet_text,
    ReorderBullets: _reorder_bullets,
    AddBullet: _add_bullet,
    DeleteBullet: _delete_bullet,
}
