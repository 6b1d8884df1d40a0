"""Agent tools for vault operations."""

from qmdvault.tools.vault_tools import ToolDefinition, VaultTools

__all__ = ["ToolDefinition", "VaultTools"]
