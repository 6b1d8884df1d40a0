"""Vault module: note identity, frontmatter and storage.

The vault is a directory of markdown notes, each starting with a YAML
frontmatter block. It enables:
- Deterministic note paths from titles (slugs)
- Human-editable notes outside the app (Obsidian, VS Code, git)
- Search through the qmd index
- Optional git sync around every change
"""

from qmdvault.vault.frontmatter import NoteFrontmatter, NoteSource, build_frontmatter
from qmdvault.vault.layout import VAULT_FOLDERS, ensure_vault_structure
from qmdvault.vault.notes import (
    NoteInput,
    ResolvedNotePath,
    build_note_contents,
    parse_csv,
    resolve_note_path,
    slugify,
)

__all__ = [
    "NoteFrontmatter",
    "NoteInput",
    "NoteSource",
    "ResolvedNotePath",
    "VAULT_FOLDERS",
    "build_frontmatter",
    "build_note_contents",
    "ensure_vault_structure",
    "parse_csv",
    "resolve_note_path",
    "slugify",
]
