"""Tests for vault layout helpers."""

from qmdvault.vault.layout import (
    GUIDE_FILENAME,
    VAULT_FOLDERS,
    VAULT_GUIDE,
    ensure_vault_directory,
    ensure_vault_guide,
    ensure_vault_structure,
)


class TestEnsureVaultStructure:
    """Tests for ensure_vault_structure."""

    def test_creates_folders_and_guide(self, vault_dir):
        """All standard folders and the guide are created."""
        root = ensure_vault_structure(vault_dir)

        assert root == vault_dir
        for folder in VAULT_FOLDERS:
            assert (vault_dir / folder).is_dir()
        assert (vault_dir / GUIDE_FILENAME).read_text(encoding="utf-8") == VAULT_GUIDE

    def test_idempotent(self, vault_dir):
        """Running twice is harmless."""
        ensure_vault_structure(vault_dir)
        ensure_vault_structure(vault_dir)

        assert sorted(p.name for p in vault_dir.iterdir() if p.is_dir()) == sorted(
            VAULT_FOLDERS
        )

    def test_keeps_edited_guide(self, vault_dir):
        """An existing guide is not overwritten."""
        vault_dir.mkdir()
        (vault_dir / GUIDE_FILENAME).write_text("my guide", encoding="utf-8")

        ensure_vault_guide(vault_dir)

        assert (vault_dir / GUIDE_FILENAME).read_text(encoding="utf-8") == "my guide"


class TestEnsureVaultDirectory:
    """Tests for ensure_vault_directory."""

    def test_creates_nested_root(self, tmp_path):
        """Missing parents are created."""
        root = ensure_vault_directory(tmp_path / "a" / "b" / "vault")

        assert root.is_dir()

    def test_guide_describes_frontmatter(self):
        """Guide lists the folder taxonomy and required fields."""
        for folder in VAULT_FOLDERS:
            assert f"- {folder}/" in VAULT_GUIDE
        assert "Required:" in VAULT_GUIDE
