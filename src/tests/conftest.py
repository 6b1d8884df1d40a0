"""Shared test fixtures and configuration."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

import qmdvault.core.process as process
import qmdvault.index.qmd as qmd
from qmdvault.core.settings import normalize_config


@pytest.fixture
def vault_dir(tmp_path):
    """Provide a (not yet created) vault directory."""
    return tmp_path / "vault"


@pytest.fixture
def vault_config(vault_dir):
    """Vault config with defaults and git sync disabled."""
    return normalize_config({"vaultPath": str(vault_dir)})


@pytest.fixture
def git_config(vault_dir):
    """Vault config syncing with a URL remote."""
    return normalize_config(
        {"vaultPath": str(vault_dir), "gitRemote": "git@github.com:me/vault.git"}
    )


@pytest.fixture
def mock_subprocess_run(monkeypatch):
    """Stub subprocess.run used to launch external commands."""
    mock_run = MagicMock()
    mock_run.return_value = MagicMock(returncode=0, stdout="", stderr="")
    monkeypatch.setattr(process.subprocess, "run", mock_run)
    return mock_run


@pytest.fixture
def mock_which(monkeypatch):
    """Stub shutil.which so every binary appears installed."""
    which = MagicMock(side_effect=lambda name: f"/usr/local/bin/{name}")
    monkeypatch.setattr(qmd.shutil, "which", which)
    return which


@pytest.fixture
def sample_host_config(vault_dir):
    """Host config with a vault entry under the plugin id."""
    return {
        "plugins": {
            "entries": {
                "qmd-vault": {
                    "config": {
                        "vaultPath": str(vault_dir),
                        "collectionName": "notes",
                    }
                }
            }
        }
    }
