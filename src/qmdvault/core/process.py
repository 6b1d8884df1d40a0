"""Running external binaries (git, qmd, bun, npm)."""

import logging
import subprocess
from collections.abc import Sequence

from qmdvault.core.config import COMMAND_TIMEOUT
from qmdvault.core.errors import CommandError

logger = logging.getLogger(__name__)


def run_command(
    args: Sequence[str],
    check: bool = True,
    timeout: int | None = None,
) -> subprocess.CompletedProcess[str]:
    """
    Run a command as an argument list, never through a shell.

    Args:
        args: Program and arguments
        check: Raise CommandError on a non-zero exit status
        timeout: Seconds before giving up (default COMMAND_TIMEOUT)

    Returns:
        Completed process with text stdout/stderr

    Raises:
        CommandError: If the binary is missing, times out, or (with check)
            exits non-zero.
    """
    argv = [str(arg) for arg in args]
    logger.debug(f"Running: {argv}")
    try:
        result = subprocess.run(
            argv,
            capture_output=True,
            text=True,
            timeout=timeout or COMMAND_TIMEOUT,
        )
    except FileNotFoundError as e:
        raise CommandError(argv, 127, stderr=str(e)) from e
    except subprocess.TimeoutExpired as e:
        raise CommandError(argv, -1, stderr=f"timed out after {e.timeout}s") from e

    if check and result.returncode != 0:
        logger.debug(f"Command exited {result.returncode}: {argv}")
        raise CommandError(
            argv, result.returncode, stdout=result.stdout or "", stderr=result.stderr or ""
        )
    return result
