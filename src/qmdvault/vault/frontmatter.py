"""YAML frontmatter writing and parsing for vault notes.

Reading goes through python-frontmatter.

Frontmatter is written line by line rather than through yaml.dump so the
field order and quoting stay fixed:

    ---
    title: "Decision Log"
    status: "seed"
    created: "2026-01-03T12:00:00.000Z"
    updated: "2026-01-03T12:00:00.000Z"

    tags:
      - "vault"
    ---
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any

import frontmatter
import yaml
from pydantic import BaseModel, ConfigDict

DELIMITER = "---"


class NoteSource(BaseModel):
    """A cited source: title plus optional URL."""

    model_config = ConfigDict(frozen=True)

    title: str
    url: str | None = None


@dataclass
class NoteFrontmatter:
    """Frontmatter fields for a vault note."""

    title: str
    summary: str | None = None
    status: str | None = None
    tags: Sequence[str] | None = None
    people: Sequence[str] | None = None
    projects: Sequence[str] | None = None
    sources: Sequence[NoteSource] | None = None
    created: str | None = None
    updated: str | None = None


def utc_timestamp(now: datetime | None = None) -> str:
    """Format a timestamp as ISO-8601 UTC with milliseconds, e.g. 2026-01-03T12:00:00.000Z."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def yaml_string(value: str) -> str:
    """Double-quote a scalar, escaping embedded quotes."""
    escaped = value.replace('"', '\\"')
    return f'"{escaped}"'


def normalize_list(values: Iterable[str] | None) -> list[str] | None:
    """Trim entries and drop blanks. Returns None when nothing is left."""
    if values is None:
        return None
    trimmed = [value.strip() for value in values]
    trimmed = [value for value in trimmed if value]
    return trimmed or None


def _yaml_list(key: str, values: Sequence[str] | None) -> list[str]:
    if not values:
        return []
    lines = ["", f"{key}:"]
    lines.extend(f"  - {yaml_string(value)}" for value in values)
    return lines


def _yaml_sources(sources: Sequence[NoteSource] | None) -> list[str]:
    if not sources:
        return []
    lines = ["", "sources:"]
    for source in sources:
        lines.append(f"  - title: {yaml_string(source.title)}")
        if source.url:
            lines.append(f"    url: {yaml_string(source.url)}")
    return lines


def build_frontmatter(fields: NoteFrontmatter) -> str:
    """
    Write frontmatter to a YAML block.

    Args:
        fields: Fields to serialize. ``created`` defaults to now and
            ``updated`` defaults to ``created``.

    Returns:
        YAML block with --- delimiters, ending in a blank line
    """
    created = fields.created or utc_timestamp()
    updated = fields.updated or created

    lines = [DELIMITER, f"title: {yaml_string(fields.title)}"]

    if fields.summary:
        lines.append(f"summary: {yaml_string(fields.summary)}")

    if fields.status:
        lines.append(f"status: {yaml_string(fields.status)}")

    lines.append(f"created: {yaml_string(created)}")
    lines.append(f"updated: {yaml_string(updated)}")

    lines.extend(_yaml_list("tags", normalize_list(fields.tags)))
    lines.extend(_yaml_list("people", normalize_list(fields.people)))
    lines.extend(_yaml_list("projects", normalize_list(fields.projects)))
    lines.extend(_yaml_sources(fields.sources))

    lines.extend([DELIMITER, ""])
    return "\n".join(lines)


def parse_frontmatter(content: str) -> tuple[dict[str, Any] | None, str]:
    """
    Parse YAML frontmatter from note content.

    Args:
        content: Full note content including frontmatter

    Returns:
        (frontmatter, body). The body is stripped. Frontmatter is None when
        the note has no leading block or the block is not a valid YAML
        mapping, in which case the content is returned unchanged.
    """
    try:
        post = frontmatter.loads(content)
    except yaml.YAMLError:
        return None, content

    if not post.metadata:
        return None, content
    return dict(post.metadata), post.content
