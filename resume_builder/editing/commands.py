"""Edit commands accepted by the mutation engine.

Commands form a closed set discriminated by ``kind``, so a JSON list of
command objects can be parsed with :func:`parse_commands`.

Paths are dotted strings rooted at the document, for example
``identity.name``, ``experience.0.title``, ``skills.tools_methodologies``
or ``volunteer``.
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter

from resume_builder.document.models import Origin


class _Command(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class SetField(_Command):
    """Replace the value at ``path``. Text values are trimmed on commit."""

    kind: Literal["set_field"] = "set_field"
    path: str
    value: Any = None


class AddEntry(_Command):
    """Insert an entry into the list at ``list_path`` (append by default)."""

    kind: Literal["add_entry"] = "add_entry"
    list_path: str
    entry: Any
    index: int | None = None


class DeleteEntry(_Command):
    """Remove exactly one element from the list at ``list_path``."""

    kind: Literal["delete_entry"] = "delete_entry"
    list_path: str
    index: int


class Reorder(_Command):
    """Move one element of the list at ``list_path`` to ``to_index``."""

    kind: Literal["reorder"] = "reorder"
    list_path: str
    from_index: int
    to_index: int


class ToggleBullet(_Command):
    kind: Literal["toggle_bullet"] = "toggle_bullet"
    entry_path: str
    bullet_id: str
    enabled: bool


class EditBulletText(_Command):
    """Replace a bullet's text; blank text removes the bullet."""

    kind: Literal["edit_bullet_text"] = "edit_bullet_text"
    entry_path: str
    bullet_id: str
    text: str


class ReorderBullets(_Command):
    kind: Literal["reorder_bullets"] = "reorder_bullets"
    entry_path: str
    from_index: int
    to_index: int


class AddBullet(_Command):
    """Add a manually written bullet to an entry (appended by default)."""

    kind: Literal["add_bullet"] = "add_bullet"
    entry_path: str
    text: str
    origin: Origin = Origin.USER
    index: int | None = None


class DeleteBullet(_Command):
    """Explicitly remove a bullet, enabled or not."""

    kind: Literal["delete_bullet"] = "delete_bullet"
    entry_path: str
    bullet_id: str


Command = Annotated[
    Union[
        SetField,
        AddEntry,
        DeleteEntry,
        Reorder,
        ToggleBullet,
        EditBulletText,
        ReorderBullets,
        AddBullet,
        DeleteBullet,
    ],
    Field(discriminator="kind"),
]

_command_adapter: TypeAdapter[Command] = TypeAdapter(Command)
_command_list_adapter: TypeAdapter[list[Command]] = TypeAdapter(list[Command])


def parse_command(data: dict[str, Any]) -> Command:
    """Parse one command object (raises ``pydantic.ValidationError``)."""
    return _command_adapter.validate_python(data)


def parse_commands(data: list[dict[str, Any]]) -> list[Command]:
    """Parse a list of command objects (raises ``pydantic.ValidationError``)."""
    return _command_list_adapter.validate_python(data)
