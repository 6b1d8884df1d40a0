"""Tests for frontmatter writing and parsing."""

import re
from datetime import datetime, timezone

import pytest
import yaml

from qmdvault.vault.frontmatter import (
    NoteFrontmatter,
    NoteSource,
    build_frontmatter,
    normalize_list,
    parse_frontmatter,
    utc_timestamp,
    yaml_string,
)

CREATED = "2026-01-03T12:00:00.000Z"
ISO_MILLIS = re.compile(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$")


class TestBuildFrontmatter:
    """Tests for build_frontmatter."""

    def test_includes_fields(self):
        """Provided fields appear in the block."""
        frontmatter = build_frontmatter(
            NoteFrontmatter(
                title="Decision Log",
                summary="Why the vault exists",
                tags=["vault", "decisions"],
                people=["Pedro"],
                projects=["Vault"],
                status="seed",
            )
        )

        assert 'title: "Decision Log"' in frontmatter
        assert 'summary: "Why the vault exists"' in frontmatter
        assert "tags:" in frontmatter
        assert "people:" in frontmatter
        assert "projects:" in frontmatter

    def test_exact_layout(self):
        """Field order, blank lines and indentation are fixed."""
        frontmatter = build_frontmatter(
            NoteFrontmatter(
                title="Decision Log",
                summary="Why",
                status="seed",
                tags=["vault", " ", "decisions"],
                people=["Pedro"],
                sources=[
                    NoteSource(title="QMD README", url="https://github.com/tobi/qmd"),
                    NoteSource(title="Notes"),
                ],
                created=CREATED,
            )
        )

        assert frontmatter == "\n".join(
            [
                "---",
                'title: "Decision Log"',
                'summary: "Why"',
                'status: "seed"',
                f'created: "{CREATED}"',
                f'updated: "{CREATED}"',
                "",
                "tags:",
                '  - "vault"',
                '  - "decisions"',
                "",
                "people:",
                '  - "Pedro"',
                "",
                "sources:",
                '  - title: "QMD README"',
                '    url: "https://github.com/tobi/qmd"',
                '  - title: "Notes"',
                "---",
                "",
            ]
        )

    def test_minimal_block(self):
        """Title and timestamps only when nothing else is given."""
        frontmatter = build_frontmatter(NoteFrontmatter(title="Test", created=CREATED))

        assert frontmatter == (
            f'---\ntitle: "Test"\ncreated: "{CREATED}"\nupdated: "{CREATED}"\n---\n'
        )

    def test_delimiters(self):
        """Block opens with --- and has a closing ---."""
        lines = build_frontmatter(NoteFrontmatter(title="T")).split("\n")

        assert lines[0] == "---"
        assert "---" in lines[1:]

    @pytest.mark.parametrize("field", ["tags", "people", "projects"])
    def test_blank_lists_are_omitted(self, field):
        """Lists with only blank entries produce no block."""
        frontmatter = build_frontmatter(
            NoteFrontmatter(title="T", **{field: ["", "   "]})
        )

        assert f"{field}:" not in frontmatter

    @pytest.mark.parametrize("field", ["tags", "people", "projects"])
    def test_lists_are_trimmed(self, field):
        """List entries are trimmed before writing."""
        frontmatter = build_frontmatter(
            NoteFrontmatter(title="T", **{field: ["  padded  "]})
        )

        assert f'{field}:\n  - "padded"' in frontmatter

    def test_empty_sources_omitted(self):
        """An empty sources list produces no block."""
        assert "sources:" not in build_frontmatter(NoteFrontmatter(title="T", sources=[]))

    def test_escapes_quotes(self):
        """Double quotes inside scalars are backslash-escaped."""
        frontmatter = build_frontmatter(
            NoteFrontmatter(title='Say "hi"', tags=['a "b"'], created=CREATED)
        )

        assert 'title: "Say \\"hi\\""' in frontmatter
        assert '  - "a \\"b\\""' in frontmatter

    def test_created_defaults_to_now(self):
        """Created is a UTC timestamp and updated matches it."""
        frontmatter = build_frontmatter(NoteFrontmatter(title="T"))
        data = yaml.safe_load(frontmatter.split("---")[1])

        assert ISO_MILLIS.match(data["created"])
        assert data["updated"] == data["created"]

    def test_explicit_updated(self):
        """Updated can differ from created."""
        frontmatter = build_frontmatter(
            NoteFrontmatter(title="T", created=CREATED, updated="2026-02-01T00:00:00.000Z")
        )

        assert 'updated: "2026-02-01T00:00:00.000Z"' in frontmatter

    def test_output_is_valid_yaml(self):
        """Written block reads back with a YAML parser."""
        frontmatter = build_frontmatter(
            NoteFrontmatter(
                title='Quote "me"',
                tags=["a", "b"],
                sources=[NoteSource(title="S", url="https://example.com")],
                created=CREATED,
            )
        )

        data, body = parse_frontmatter(frontmatter + "Body\n")

        assert data["title"] == 'Quote "me"'
        assert data["tags"] == ["a", "b"]
        assert data["sources"] == [{"title": "S", "url": "https://example.com"}]
        assert data["created"] == CREATED
        assert body == "Body"


class TestHelpers:
    """Tests for frontmatter helpers."""

    def test_yaml_string(self):
        """Scalars are double-quoted."""
        assert yaml_string("plain") == '"plain"'
        assert yaml_string('a"b') == '"a\\"b"'

    @pytest.mark.parametrize(
        "values,expected",
        [
            (None, None),
            ([], None),
            (["", " "], None),
            ([" a ", "", "b"], ["a", "b"]),
        ],
    )
    def test_normalize_list(self, values, expected):
        """Lists are trimmed; empty results become None."""
        assert normalize_list(values) == expected

    def test_utc_timestamp_format(self):
        """Timestamps use millisecond precision and a Z suffix."""
        when = datetime(2026, 1, 3, 12, 0, tzinfo=timezone.utc)

        assert utc_timestamp(when) == CREATED

    def test_utc_timestamp_now(self):
        """Default timestamp is well formed."""
        assert ISO_MILLIS.match(utc_timestamp())


class TestParseFrontmatter:
    """Tests for parse_frontmatter."""

    def test_no_frontmatter(self):
        """Content without a block is returned as body."""
        assert parse_frontmatter("# Heading\n") == (None, "# Heading\n")

    def test_unterminated_block(self):
        """A block without a closing delimiter is not frontmatter."""
        content = "---\ntitle: x\n"

        assert parse_frontmatter(content) == (None, content)

    def test_invalid_yaml(self):
        """Invalid YAML is treated as no frontmatter."""
        content = "---\ninvalid: yaml: [\n---\nbody\n"

        assert parse_frontmatter(content) == (None, content)

    def test_non_mapping(self):
        """A YAML list is not frontmatter."""
        content = "---\n- a\n- b\n---\nbody\n"

        assert parse_frontmatter(content) == (None, content)
