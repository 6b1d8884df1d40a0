"""Vault configuration: normalization and host config lookup.

The plugin host keeps per-plugin settings under
``plugins.entries.<key>.config``. This module finds the vault's entry,
fills in defaults and returns a frozen VaultConfig.
"""

import logging
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, model_validator
from pydantic import ValidationError as PydanticValidationError

from qmdvault.core.config import VAULT_PATH_ENV
from qmdvault.core.errors import ConfigError

logger = logging.getLogger(__name__)

PLUGIN_ID = "qmd-vault"
PLUGIN_NAME = "QMD Vault"

DEFAULT_COLLECTION_NAME = "vault"
DEFAULT_VAULT_MASK = "**/*.md"
DEFAULT_GIT_BRANCH = "main"

# Entry keys tried in order when reading host config
CONFIG_ENTRY_KEYS = (PLUGIN_ID, "vault", PLUGIN_NAME)

# Host (camelCase) key -> field name
_FIELD_ALIASES = {
    "vaultPath": "vault_path",
    "collectionName": "collection_name",
    "gitRemote": "git_remote",
    "gitBranch": "git_branch",
    "gitSync": "git_sync",
    "gitAutoCommit": "git_auto_commit",
    "autoInstallQmd": "auto_install_qmd",
}

_MISSING_VAULT_PATH = "vaultPath is required in plugin config"


class VaultConfig(BaseModel):
    """Normalized vault configuration.

    Frozen once built. Empty strings for the collection name, branch and
    mask fall back to their defaults; git_sync defaults to whether a remote
    was supplied.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    vault_path: str
    collection_name: str = DEFAULT_COLLECTION_NAME
    git_remote: str | None = None
    git_branch: str = DEFAULT_GIT_BRANCH
    git_sync: bool = False
    git_auto_commit: bool = True
    auto_install_qmd: bool = True
    mask: str = DEFAULT_VAULT_MASK

    @model_validator(mode="before")
    @classmethod
    def _apply_defaults(cls, data: Any) -> Any:
        if not isinstance(data, dict):
            return data
        data = dict(data)
        for key, default in (
            ("collection_name", DEFAULT_COLLECTION_NAME),
            ("git_branch", DEFAULT_GIT_BRANCH),
            ("mask", DEFAULT_VAULT_MASK),
        ):
            if not data.get(key):
                data[key] = default
        if not data.get("git_remote"):
            data["git_remote"] = None
        if data.get("git_sync") is None:
            data["git_sync"] = data["git_remote"] is not None
        for key in ("git_auto_commit", "auto_install_qmd"):
            if data.get(key) is None:
                data[key] = True
        return data

    @property
    def root(self) -> Path:
        """Vault directory with ``~`` expanded."""
        return Path(self.vault_path).expanduser()


def _canonical_keys(raw: Mapping[str, Any]) -> dict[str, Any]:
    return {_FIELD_ALIASES.get(key, key): value for key, value in raw.items()}


def normalize_config(raw: Mapping[str, Any] | None) -> VaultConfig:
    """
    Validate raw plugin config and fill in defaults.

    Args:
        raw: Mapping using host (camelCase) or field (snake_case) keys

    Returns:
        Normalized VaultConfig

    Raises:
        ConfigError: If vaultPath is missing, not a string, or another
            field has the wrong type.
    """
    data = _canonical_keys(raw or {})
    vault_path = data.get("vault_path")
    if not vault_path or not isinstance(vault_path, str):
        raise ConfigError(_MISSING_VAULT_PATH)

    try:
        return VaultConfig.model_validate(data)
    except PydanticValidationError as e:
        raise ConfigError(f"Invalid plugin config: {e}") from e


def lookup_plugin_entry(
    entries: Mapping[str, Any] | None,
    keys: Sequence[str] = CONFIG_ENTRY_KEYS,
) -> dict[str, Any] | None:
    """Return the config of the first entry found under one of ``keys``."""
    if not entries:
        return None
    if not isinstance(entries, Mapping):
        raise ConfigError("plugins.entries must be a mapping")
    for key in keys:
        entry = entries.get(key)
        if isinstance(entry, Mapping) and isinstance(entry.get("config"), Mapping):
            logger.debug(f"Using plugin config entry {key!r}")
            return dict(entry["config"])
    return None


def read_config(
    host_config: Mapping[str, Any] | None,
    env: Mapping[str, str] | None = None,
    overrides: Mapping[str, Any] | None = None,
) -> VaultConfig:
    """
    Build VaultConfig from host config, falling back to the environment.

    Args:
        host_config: Host settings mapping (``plugins.entries`` layout)
        env: Environment mapping consulted for VAULT_PATH
        overrides: Values that win over both (e.g. CLI flags)

    Returns:
        Normalized VaultConfig
    """
    plugins = (host_config or {}).get("plugins") or {}
    if not isinstance(plugins, Mapping):
        raise ConfigError("plugins must be a mapping")
    raw = _canonical_keys(lookup_plugin_entry(plugins.get("entries")) or {})

    vault_path_env = (env or {}).get(VAULT_PATH_ENV)
    if not raw.get("vault_path") and vault_path_env:
        raw["vault_path"] = vault_path_env

    raw.update(_canonical_keys(overrides or {}))
    return normalize_config(raw)


def load_host_config(path: Path | str) -> dict[str, Any]:
    """
    Load host config from a YAML file.

    Returns:
        Parsed mapping. Empty dict if the file does not exist or is empty.

    Raises:
        ConfigError: If the file is not valid YAML or not a mapping.
    """
    config_file = Path(path).expanduser()
    if not config_file.exists():
        logger.debug(f"No host config at {config_file}")
        return {}

    try:
        with open(config_file, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(f"Invalid YAML in {config_file}: {e}")
        raise ConfigError(f"Invalid YAML in {config_file}: {e}") from e

    if raw is None:
        return {}
    if not isinstance(raw, dict):
        logger.error(f"Host config must be a mapping, got {type(raw).__name__}")
        raise ConfigError(
            f"{config_file.name} must be a mapping, got {type(raw).__name__}"
        )
    return raw
