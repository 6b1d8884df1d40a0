"""Note identity and file contents.

Everything here is a pure function of its arguments. Writing the file,
checking for an existing note and indexing it are left to the caller
(see qmdvault.vault.service).
"""

import os
import re
from pathlib import Path
from typing import Any, NamedTuple

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from qmdvault.core.errors import ValidationError
from qmdvault.vault.frontmatter import NoteFrontmatter, NoteSource, build_frontmatter

DEFAULT_NOTES_FOLDER = "notes"
FALLBACK_SLUG = "note"

_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_EDGE_HYPHENS = re.compile(r"^-+|-+$")
_REPEATED_HYPHENS = re.compile(r"-+")


class NoteInput(BaseModel):
    """A request to write a note.

    Accepts the host's ``relativePath`` key as well as ``relative_path``.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    title: str
    body: str
    summary: str | None = None
    tags: list[str] | None = None
    people: list[str] | None = None
    projects: list[str] | None = None
    sources: list[NoteSource] | None = None
    status: str | None = None
    relative_path: str | None = Field(default=None, alias="relativePath")
    overwrite: bool = False


class ResolvedNotePath(NamedTuple):
    """Where a note lives, relative to the vault and absolute."""

    relative_path: str
    full_path: str


def parse_note_input(params: dict[str, Any] | NoteInput) -> NoteInput:
    """Coerce tool or RPC parameters into a NoteInput."""
    if isinstance(params, NoteInput):
        return params
    try:
        return NoteInput.model_validate(params or {})
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid note: {e}") from e


def validate_note(note: NoteInput) -> None:
    """Raise ValidationError if the title or body is blank."""
    if not note.title.strip():
        raise ValidationError("Note title is required")
    if not note.body.strip():
        raise ValidationError("Note body is required")


def slugify(value: str) -> str:
    """
    Turn free text into a lowercase, hyphen-delimited slug.

    Runs of anything outside [a-z0-9] become a single hyphen and edge
    hyphens are dropped. Falls back to "note" when nothing is left.

    Example:
        slugify("  **Hello--World** ")  # "hello-world"
    """
    slug = _NON_ALNUM.sub("-", value.lower())
    slug = _EDGE_HYPHENS.sub("", slug)
    slug = _REPEATED_HYPHENS.sub("-", slug)
    return slug or FALLBACK_SLUG


def resolve_note_path(vault_root: str | Path, note: NoteInput) -> ResolvedNotePath:
    """
    Compute the storage path for a note.

    Args:
        vault_root: Vault root directory
        note: Note request. ``relative_path`` is used verbatim when set,
            otherwise ``notes/<slug>.md``.

    Returns:
        ResolvedNotePath. No filesystem access is made.
    """
    if note.relative_path:
        relative_path = note.relative_path
    else:
        relative_path = f"{DEFAULT_NOTES_FOLDER}/{slugify(note.title)}.md"

    separators = os.sep + (os.altsep or "")
    full_path = os.path.normpath(
        os.path.join(os.fspath(vault_root), relative_path.lstrip(separators))
    )
    return ResolvedNotePath(relative_path, full_path)


def build_note_contents(
    note: NoteInput,
    created: str | None = None,
    updated: str | None = None,
) -> str:
    """
    Assemble frontmatter and body into final file contents.

    The body is stripped and followed by exactly one newline.
    """
    frontmatter = build_frontmatter(
        NoteFrontmatter(
            title=note.title,
            summary=note.summary,
            status=note.status,
            tags=note.tags,
            people=note.people,
            projects=note.projects,
            sources=note.sources,
            created=created,
            updated=updated,
        )
    )
    return f"{frontmatter}{note.body.strip()}\n"


def parse_csv(value: str | None) -> list[str] | None:
    """Split comma-separated input, dropping blanks. None if nothing is left."""
    if not value:
        return None
    values = [entry.strip() for entry in value.split(",")]
    values = [entry for entry in values if entry]
    return values or None
