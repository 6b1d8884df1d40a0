"""Vault service: writes notes and queries the index.

Ties the pure note functions to the filesystem, qmd and git. Each
instance carries its own config; nothing is cached at module level.

Example:
    service = VaultService(normalize_config({"vaultPath": "~/Vault"}))
    service.setup()
    service.add_note(NoteInput(title="Hello", body="First note"))
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Any

from qmdvault.core.errors import NoteExistsError, ValidationError
from qmdvault.core.settings import VaultConfig
from qmdvault.index.qmd import DEFAULT_GET_LINES, QmdClient, QueryMode
from qmdvault.vault.frontmatter import parse_frontmatter, utc_timestamp
from qmdvault.vault.git import GitSync
from qmdvault.vault.layout import ensure_vault_directory, ensure_vault_structure
from qmdvault.vault.notes import (
    NoteInput,
    build_note_contents,
    resolve_note_path,
    validate_note,
)

logger = logging.getLogger(__name__)


class VaultService:
    """Orchestrates note writes, git sync and qmd calls for one vault."""

    def __init__(
        self,
        config: VaultConfig,
        qmd: QmdClient | None = None,
        git: GitSync | None = None,
    ):
        self.config = config
        self.qmd = qmd or QmdClient(config)
        self.git = git or GitSync(config)

    @property
    def root(self) -> Path:
        return self.config.root

    def setup(self) -> None:
        """Prepare the vault directory, qmd and the qmd collection."""
        ensure_vault_directory(self.root)
        self.qmd.ensure_installed()
        self.qmd.ensure_collection()
        logger.info(
            f"Vault ready: path={self.root}, collection={self.config.collection_name}"
        )

    def init(self) -> Path:
        """Create the vault folders and guide."""
        return ensure_vault_structure(self.root)

    def add_note(self, note: NoteInput, embed: bool = False) -> str:
        """
        Write a note into the vault, index it and sync.

        Args:
            note: Note request
            embed: Regenerate embeddings after indexing

        Returns:
            Path of the note relative to the vault root

        Raises:
            ValidationError: If title or body is blank
            NoteExistsError: If the note exists and overwrite is not set
        """
        validate_note(note)
        ensure_vault_structure(self.root)

        self.git.sync_before()

        relative_path, full_path = resolve_note_path(self.root, note)
        target = Path(full_path)

        created = None
        updated = None
        if target.exists():
            if not note.overwrite:
                raise NoteExistsError(relative_path)
            created = self._existing_created(target)
            if created:
                updated = utc_timestamp()

        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(
            build_note_contents(note, created=created, updated=updated),
            encoding="utf-8",
        )
        logger.debug(f"Wrote note {relative_path}")

        self.qmd.update()
        if embed:
            self.qmd.embed()

        self.git.sync_after(f"vault: add {relative_path}")
        return relative_path

    @staticmethod
    def _existing_created(path: Path) -> str | None:
        frontmatter, _ = parse_frontmatter(path.read_text(encoding="utf-8"))
        if not frontmatter:
            return None
        created = frontmatter.get("created")
        if isinstance(created, datetime):
            return utc_timestamp(created)
        return str(created) if created else None

    def query(
        self,
        query: str,
        mode: QueryMode | str = QueryMode.QUERY,
        limit: int | None = None,
        min_score: float | None = None,
        as_json: bool = True,
    ) -> Any:
        """Search the vault through qmd."""
        if not query or not query.strip():
            raise ValidationError("Query is required")
        try:
            mode = QueryMode(mode)
        except ValueError as e:
            raise ValidationError(
                f"Unknown query mode {mode!r}, expected one of: "
                + ", ".join(m.value for m in QueryMode)
            ) from e

        self.git.sync_before()
        return self.qmd.query(
            query, mode=mode, limit=limit, min_score=min_score, as_json=as_json
        )

    def get(self, docid_or_path: str, lines: int = DEFAULT_GET_LINES) -> str:
        """Fetch a document by qmd docid or path."""
        self.git.sync_before()
        return self.qmd.get(docid_or_path, lines=lines)

    def index(self, embed: bool = False) -> None:
        """Refresh the qmd index, optionally re-embedding."""
        self.git.sync_before()
        self.qmd.update()
        if embed:
            self.qmd.embed()

    def embed(self, force: bool = False) -> None:
        self.git.sync_before()
        self.qmd.embed(force=force)

    def status(self) -> str:
        self.git.sync_before()
        return self.qmd.status()

    def __repr__(self) -> str:
        return f"VaultService({self.root})"
