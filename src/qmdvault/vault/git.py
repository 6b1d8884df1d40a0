"""Git sync for the vault: pull before changes, commit and push after."""

import logging
from pathlib import Path

from qmdvault.core.config import GIT_BINARY
from qmdvault.core.errors import CommandError
from qmdvault.core.process import run_command
from qmdvault.core.settings import VaultConfig

logger = logging.getLogger(__name__)

DEFAULT_REMOTE = "origin"


def looks_like_remote_url(value: str) -> bool:
    """True if ``value`` is a URL rather than a remote name."""
    return "://" in value or value.endswith(".git") or "@" in value


class GitRepo:
    """Thin wrapper over ``git -C <vault>``."""

    def __init__(self, path: Path | str, git_binary: str = GIT_BINARY):
        self.path = str(Path(path).expanduser())
        self.git_binary = git_binary

    def _git(self, *args: str, check: bool = True):
        return run_command([self.git_binary, "-C", self.path, *args], check=check)

    def is_repo(self) -> bool:
        try:
            result = self._git("rev-parse", "--is-inside-work-tree", check=False)
        except CommandError:
            return False
        return result.returncode == 0

    def init(self) -> None:
        self._git("init")

    def list_remotes(self) -> list[str]:
        try:
            output = self._git("remote").stdout
        except CommandError:
            return []
        return [line.strip() for line in output.splitlines() if line.strip()]

    def add_remote(self, name: str, url: str) -> None:
        self._git("remote", "add", name, url)

    def pull_rebase(self, remote: str, branch: str) -> None:
        self._git("pull", "--rebase", remote, branch)

    def has_changes(self) -> bool:
        return bool(self._git("status", "--porcelain").stdout.strip())

    def stage_all(self) -> None:
        self._git("add", "-A")

    def has_staged_changes(self) -> bool:
        """Exit status 1 from ``diff --cached --quiet`` means something is staged."""
        result = self._git("diff", "--cached", "--quiet", check=False)
        if result.returncode not in (0, 1):
            raise CommandError(
                [self.git_binary, "-C", self.path, "diff", "--cached", "--quiet"],
                result.returncode,
                stdout=result.stdout or "",
                stderr=result.stderr or "",
            )
        return result.returncode == 1

    def commit(self, message: str) -> None:
        self._git("commit", "-m", message)

    def push(self, remote: str, branch: str) -> None:
        self._git("push", remote, branch)

    def __repr__(self) -> str:
        return f"GitRepo({self.path})"


class GitSync:
    """Applies the vault's git settings around a change.

    Every operation is a no-op unless ``git_sync`` is enabled.
    """

    def __init__(self, config: VaultConfig, repo: GitRepo | None = None):
        self.config = config
        self.repo = repo or GitRepo(config.root)

    def ensure_repo(self) -> bool:
        """
        Make sure the vault is a git repository.

        Returns:
            True if the vault is (now) a repository. False when it is not
            and no remote is configured to justify creating one.
        """
        if self.repo.is_repo():
            return True
        remote = self.config.git_remote
        if not remote:
            return False

        self.repo.init()
        logger.info("Initialized git repository for vault.")

        if looks_like_remote_url(remote) and DEFAULT_REMOTE not in self.repo.list_remotes():
            self.repo.add_remote(DEFAULT_REMOTE, remote)
            logger.info("Added origin remote for vault.")

        return True

    def resolve_remote(self) -> str | None:
        """Pick the remote to pull from and push to, if any."""
        remotes = self.repo.list_remotes()
        configured = self.config.git_remote

        if configured and configured in remotes:
            return configured

        if configured and looks_like_remote_url(configured):
            return DEFAULT_REMOTE if DEFAULT_REMOTE in remotes else None

        if DEFAULT_REMOTE in remotes:
            return DEFAULT_REMOTE
        return remotes[0] if remotes else None

    def pull(self) -> None:
        remote = self.resolve_remote()
        if not remote:
            logger.debug("No git remote to pull from")
            return
        self.repo.pull_rebase(remote, self.config.git_branch)

    def commit(self, message: str) -> bool:
        """Stage everything and commit. Returns False if nothing was staged."""
        self.repo.stage_all()
        if not self.repo.has_staged_changes():
            logger.debug("Nothing to commit")
            return False
        self.repo.commit(message)
        return True

    def push(self) -> None:
        remote = self.resolve_remote()
        if not remote:
            logger.debug("No git remote to push to")
            return
        self.repo.push(remote, self.config.git_branch)

    def sync_before(self) -> None:
        """Pull the latest vault state before reading or writing."""
        if not self.config.git_sync:
            return
        if not self.ensure_repo():
            return
        self.pull()

    def sync_after(self, message: str) -> None:
        """Commit (if enabled) and push local changes."""
        if not self.config.git_sync:
            return
        if not self.ensure_repo():
            return
        if not self.repo.has_changes():
            return

        if self.config.git_auto_commit:
            self.commit(message)

        self.push()
