"""Client for the qmd indexing binary.

qmd owns search, embeddings and the index itself; this module only builds
argument lists and decodes output.
"""

import json
import logging
import shutil
from enum import StrEnum
from typing import Any

from qmdvault.core.config import QMD_BINARY, QMD_REPO_URL
from qmdvault.core.errors import CommandError, QmdNotInstalledError
from qmdvault.core.process import run_command
from qmdvault.core.settings import VaultConfig

logger = logging.getLogger(__name__)

DEFAULT_GET_LINES = 200


class QueryMode(StrEnum):
    """qmd search flavours."""

    SEARCH = "search"
    VSEARCH = "vsearch"
    QUERY = "query"


def command_exists(name: str) -> bool:
    """Check whether ``name`` is on PATH."""
    return shutil.which(name) is not None


class QmdClient:
    """Runs qmd commands scoped to the vault's collection."""

    def __init__(self, config: VaultConfig, binary: str = QMD_BINARY):
        self.config = config
        self.binary = binary

    def run(self, *args: str) -> str:
        """Run qmd and return stripped stdout."""
        return run_command([self.binary, *args]).stdout.strip()

    def ensure_installed(self) -> None:
        """
        Install qmd globally via bun or npm if it is missing.

        Raises:
            QmdNotInstalledError: If auto-install is disabled or no
                installer is available.
        """
        if command_exists(self.binary):
            return

        if not self.config.auto_install_qmd:
            raise QmdNotInstalledError(
                "qmd is not installed and autoInstallQmd is disabled"
            )

        for installer in ("bun", "npm"):
            if command_exists(installer):
                logger.info(f"Installing qmd via {installer}...")
                run_command([installer, "install", "-g", QMD_REPO_URL])
                return

        raise QmdNotInstalledError(
            "qmd is not installed and neither bun nor npm were found"
        )

    def ensure_collection(self) -> None:
        """Register the vault as a qmd collection. Already registered is fine."""
        try:
            self.run(
                "collection",
                "add",
                str(self.config.root),
                "--name",
                self.config.collection_name,
                "--mask",
                self.config.mask,
            )
        except CommandError as e:
            # qmd has no dedicated exit code for a duplicate collection
            if "exists" in e.output:
                logger.debug(f"Collection {self.config.collection_name} already exists")
                return
            raise

    def update(self) -> str:
        return self.run("update")

    def embed(self, force: bool = False) -> str:
        args = ["embed"]
        if force:
            args.append("-f")
        return self.run(*args)

    def query(
        self,
        query: str,
        mode: QueryMode | str = QueryMode.QUERY,
        limit: int | None = None,
        min_score: float | None = None,
        as_json: bool = True,
    ) -> Any:
        """
        Search the vault collection.

        Args:
            query: Query text
            mode: search (keyword), vsearch (vector) or query (hybrid)
            limit: Maximum results
            min_score: Drop results scoring below this
            as_json: Request and decode JSON output

        Returns:
            Decoded JSON, or raw text if JSON was not requested or the
            output does not parse.
        """
        mode = QueryMode(mode)
        args = [mode.value, query, "-c", self.config.collection_name]
        if limit:
            args.extend(["-n", str(limit)])
        if min_score is not None:
            args.extend(["--min-score", str(min_score)])
        if as_json:
            args.append("--json")

        output = self.run(*args)
        if not as_json:
            return output

        try:
            return json.loads(output)
        except json.JSONDecodeError:
            logger.debug("qmd output was not JSON, returning raw text")
            return output

    def get(self, docid_or_path: str, lines: int = DEFAULT_GET_LINES) -> str:
        return self.run("get", docid_or_path, "-l", str(lines))

    def status(self) -> str:
        return self.run("status")
