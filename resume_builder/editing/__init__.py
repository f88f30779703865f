"""Edit commands and the pure mutation engine."""

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
    parse_command,
    parse_commands,
)
from resume_builder.editing.engine import apply, apply_all

__all__ = [
    "apply",
    "apply_all",
    "Command",
    "SetField",
    "AddEntry",
    "DeleteEntry",
    "Reorder",
    "ToggleBullet",
    "EditBulletText",
    "ReorderBullets",
    "AddBullet",
    "DeleteBullet",
    "parse_command",
    "parse_commands",
]
