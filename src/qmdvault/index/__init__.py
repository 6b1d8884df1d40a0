"""Search index integration (qmd)."""

from qmdvault.index.qmd import QmdClient, QueryMode

__all__ = ["QmdClient", "QueryMode"]
