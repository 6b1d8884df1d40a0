"""Error types raised by qmd-vault."""


class VaultError(Exception):
    """Base class for vault errors."""

    pass


class ConfigError(VaultError):
    """Raised when the vault configuration is missing or invalid."""

    pass


class ValidationError(VaultError):
    """Raised when a note request is missing required fields."""

    pass


class NoteExistsError(ValidationError):
    """Raised when a note would overwrite an existing file."""

    def __init__(self, relative_path: str):
        super().__init__(f"Note already exists at {relative_path}")
        self.relative_path = relative_path


class QmdNotInstalledError(VaultError):
    """Raised when qmd is missing and cannot be installed."""

    pass


class CommandError(VaultError):
    """Raised when an external command exits with a non-zero status."""

    def __init__(
        self,
        args: list[str],
        returncode: int,
        stdout: str = "",
        stderr: str = "",
    ):
        detail = (stderr or stdout).strip()
        message = f"Command failed ({returncode}): {' '.join(args)}"
        if detail:
            message = f"{message}: {detail}"
        super().__init__(message)
        self.command = list(args)
        self.returncode = returncode
        self.stdout = stdout
        self.stderr = stderr

    @property
    def output(self) -> str:
        """Combined stderr and stdout of the failed command."""
        return f"{self.stderr}\n{self.stdout}".strip()
