"""qmd-vault: a local markdown vault with structured frontmatter, searchable with qmd."""

__version__ = "0.1.0"
