"""Vault layout: folder taxonomy and the vault guide."""

import logging
from pathlib import Path

logger = logging.getLogger(__name__)

VAULT_FOLDERS = ("inbox", "notes", "people", "projects", "concepts", "logs")

GUIDE_FILENAME = "VAULT_GUIDE.md"

VAULT_GUIDE = """\
# Vault Guide

This vault is a local-first knowledge base designed to be searchable and durable.

## Structure

- inbox/ -> quick captures and raw ideas
- notes/ -> evergreen notes and cleaned-up knowledge
- people/ -> bios, conversations, and relationship notes
- projects/ -> project briefs, decision logs, and retrospectives
- concepts/ -> definitions, frameworks, and mental models
- logs/ -> daily notes and activity logs

## Frontmatter Framework

Every note should start with YAML frontmatter.

Required:
- title
- created
- updated

Recommended:
- summary: one sentence for quick scanning
- status: seed | sprout | evergreen | stale
- tags: topical keywords for clustering
- people: names or handles
- projects: related project names
- sources: [{ title, url }]

Example:

---
title: "Decision: Use QMD for search"
summary: "Why the vault uses qmd for embeddings and querying"
status: "evergreen"
created: "2026-01-03T12:00:00.000Z"
updated: "2026-01-03T12:00:00.000Z"
tags:
  - "search"
  - "qmd"
people:
  - "Pedro"
projects:
  - "Vault"
sources:
  - title: "QMD README"
    url: "https://github.com/tobi/qmd"
---

Body starts here.
"""


def ensure_vault_directory(vault_root: Path | str) -> Path:
    """Create the vault root if it does not exist."""
    root = Path(vault_root).expanduser()
    root.mkdir(parents=True, exist_ok=True)
    return root


def ensure_vault_guide(vault_root: Path | str) -> Path:
    """Write VAULT_GUIDE.md unless one is already there."""
    guide_path = Path(vault_root).expanduser() / GUIDE_FILENAME
    if not guide_path.exists():
        guide_path.write_text(VAULT_GUIDE, encoding="utf-8")
        logger.debug(f"Wrote vault guide to {guide_path}")
    return guide_path


def init_vault_structure(vault_root: Path | str) -> None:
    """Create the standard vault folders."""
    root = Path(vault_root).expanduser()
    for folder in VAULT_FOLDERS:
        (root / folder).mkdir(parents=True, exist_ok=True)


def ensure_vault_structure(vault_root: Path | str) -> Path:
    """
    Ensure the vault directory, folders and guide exist.

    Safe to call multiple times.

    Returns:
        Path to vault root
    """
    root = ensure_vault_directory(vault_root)
    init_vault_structure(root)
    ensure_vault_guide(root)
    return root
