"""qmd-vault core: configuration, errors and process helpers."""

from qmdvault.core.errors import (
    CommandError,
    ConfigError,
    NoteExistsError,
    QmdNotInstalledError,
    ValidationError,
    VaultError,
)
from qmdvault.core.settings import VaultConfig, normalize_config, read_config

__all__ = [
    "CommandError",
    "ConfigError",
    "NoteExistsError",
    "QmdNotInstalledError",
    "ValidationError",
    "VaultConfig",
    "VaultError",
    "normalize_config",
    "read_config",
]
