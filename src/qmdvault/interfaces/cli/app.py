"""CLI application for qmd-vault using Rich and Typer."""

import logging
import os
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape

from qmdvault.core.config import CONFIG_FILE, setup_logging
from qmdvault.core.errors import ValidationError, VaultError
from qmdvault.core.settings import load_host_config, read_config
from qmdvault.index.qmd import DEFAULT_GET_LINES, QueryMode
from qmdvault.vault.notes import NoteInput, parse_csv
from qmdvault.vault.service import VaultService

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="qmd-vault",
    help="Local vault management",
    no_args_is_help=True,
)

console = Console()


@dataclass
class CliState:
    """Options shared by every command."""

    config_file: Path
    vault_path: Optional[str] = None


@contextmanager
def _vault_errors() -> Iterator[None]:
    """Print vault errors in red and exit non-zero."""
    try:
        yield
    except VaultError as e:
        logger.debug("Command failed", exc_info=True)
        console.print(f"[red]Error: {escape(str(e))}[/red]", soft_wrap=True)
        raise typer.Exit(1) from e


def _build_service(ctx: typer.Context, setup: bool = True) -> VaultService:
    state: CliState = ctx.obj
    overrides = {"vaultPath": state.vault_path} if state.vault_path else None
    config = read_config(
        load_host_config(state.config_file), dict(os.environ), overrides=overrides
    )
    service = VaultService(config)
    if setup:
        service.setup()
    return service


@app.callback()
def main(
    ctx: typer.Context,
    config: Optional[Path] = typer.Option(
        None,
        "--config",
        "-c",
        help="Host config file (default: ~/.config/qmd-vault/config.yaml or $QMD_VAULT_CONFIG)",
    ),
    vault: Optional[str] = typer.Option(
        None,
        "--vault",
        "-v",
        help="Vault directory (overrides config and $VAULT_PATH)",
    ),
    debug: bool = typer.Option(
        False,
        "--debug",
        "-d",
        help="Enable debug logging",
    ),
):
    """qmd-vault - local markdown vault searchable with qmd."""
    setup_logging("DEBUG" if debug else None)
    ctx.obj = CliState(config_file=config or CONFIG_FILE, vault_path=vault)


@app.command()
def init(ctx: typer.Context):
    """Initialize vault folders and guide."""
    with _vault_errors():
        service = _build_service(ctx, setup=False)
        root = service.init()
    console.print(f"Vault initialized at {root}", soft_wrap=True)


@app.command()
def add(
    ctx: typer.Context,
    title: str = typer.Argument(..., help="Note title"),
    content: Optional[List[str]] = typer.Argument(None, help="Note body"),
    path: Optional[str] = typer.Option(
        None, "--path", "-p", help="Relative path for the note"
    ),
    summary: Optional[str] = typer.Option(
        None, "--summary", "-s", help="One-line summary"
    ),
    tags: Optional[str] = typer.Option(
        None, "--tags", "-t", help="Comma-separated tags"
    ),
    people: Optional[str] = typer.Option(
        None, "--people", "-P", help="Comma-separated people"
    ),
    projects: Optional[str] = typer.Option(
        None, "--projects", "-r", help="Comma-separated projects"
    ),
    status: Optional[str] = typer.Option(
        None, "--status", "-S", help="Note status (seed|sprout|evergreen|stale)"
    ),
    embed: bool = typer.Option(
        False, "--embed", "-e", help="Run qmd embed after writing"
    ),
    overwrite: bool = typer.Option(
        False, "--overwrite", "-o", help="Overwrite existing note"
    ),
):
    """Add a note to the vault."""
    with _vault_errors():
        body = " ".join(content or []).strip()
        if not body:
            raise ValidationError("Note body is required")

        note = NoteInput(
            title=title,
            body=body,
            summary=summary,
            tags=parse_csv(tags),
            people=parse_csv(people),
            projects=parse_csv(projects),
            status=status,
            relative_path=path,
            overwrite=overwrite,
        )
        relative_path = _build_service(ctx).add_note(note, embed=embed)

    console.print(f"Saved {relative_path}", soft_wrap=True)


@app.command()
def query(
    ctx: typer.Context,
    query: str = typer.Argument(..., help="Query text"),
    mode: QueryMode = typer.Option(
        QueryMode.QUERY, "--mode", "-m", help="search | vsearch | query"
    ),
    limit: int = typer.Option(5, "--limit", "-n", help="Limit results"),
    min_score: float = typer.Option(0, "--min-score", help="Minimum score"),
):
    """Query the vault with qmd."""
    with _vault_errors():
        results = _build_service(ctx).query(
            query, mode=mode, limit=limit, min_score=min_score, as_json=False
        )
    console.print(results, markup=False, highlight=False, soft_wrap=True)


@app.command()
def get(
    ctx: typer.Context,
    docid_or_path: str = typer.Argument(..., help="Document path or docid"),
    lines: int = typer.Option(DEFAULT_GET_LINES, "--lines", "-l", help="Max lines"),
):
    """Get a document by path or docid."""
    with _vault_errors():
        output = _build_service(ctx).get(docid_or_path, lines=lines)
    console.print(output, markup=False, highlight=False, soft_wrap=True)


@app.command()
def index(
    ctx: typer.Context,
    embed: bool = typer.Option(False, "--embed", "-e", help="Run qmd embed"),
):
    """Refresh qmd index for the vault."""
    with _vault_errors():
        _build_service(ctx).index(embed=embed)
    console.print("Vault index updated")


@app.command("embed")
def embed_command(
    ctx: typer.Context,
    force: bool = typer.Option(False, "--force", "-f", help="Force re-embed"),
):
    """Generate embeddings for the vault."""
    with _vault_errors():
        _build_service(ctx).embed(force=force)
    console.print("Embeddings generated")


@app.command()
def status(ctx: typer.Context):
    """Show qmd status."""
    with _vault_errors():
        output = _build_service(ctx).status()
    console.print(output, markup=False, highlight=False, soft_wrap=True)


def run_cli():
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run_cli()
