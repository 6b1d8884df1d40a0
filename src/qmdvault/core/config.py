"""Environment configuration for qmd-vault."""

import logging
import os
from pathlib import Path

from dotenv import load_dotenv

# Load environment variables
load_dotenv()

logger = logging.getLogger(__name__)


def get_env(key: str, default: str | None = None) -> str | None:
    """Get environment variable with optional default."""
    return os.getenv(key, default)


def get_env_int(key: str, default: int) -> int:
    """Get environment variable as integer."""
    value = os.getenv(key)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError:
        logger.warning(f"{key}={value!r} is not a valid integer, using {default}")
        return default


def get_env_bool(key: str, default: bool = False) -> bool:
    """Get environment variable as boolean."""
    value = os.getenv(key, "").lower()
    if value in ("true", "1", "yes"):
        return True
    if value in ("false", "0", "no"):
        return False
    if value:
        logger.warning(f"{key}={value!r} is not a valid boolean, using {default}")
    return default


# Environment variable consulted when the host config has no vaultPath
VAULT_PATH_ENV = "VAULT_PATH"

# External binaries
QMD_BINARY = get_env("QMD_BINARY", "qmd") or "qmd"
GIT_BINARY = get_env("GIT_BINARY", "git") or "git"
QMD_REPO_URL = "https://github.com/tobi/qmd"

# Seconds before an external command is abandoned
COMMAND_TIMEOUT = get_env_int("QMD_VAULT_TIMEOUT", 300)

# Host config file (plugins.entries.<id>.config)
CONFIG_FILE = Path(
    get_env("QMD_VAULT_CONFIG", os.path.expanduser("~/.config/qmd-vault/config.yaml"))
    or os.path.expanduser("~/.config/qmd-vault/config.yaml")
)

# Logging
LOG_LEVEL = get_env("LOG_LEVEL", "INFO") or "INFO"
DEBUG = get_env_bool("QMD_VAULT_DEBUG", False)


def setup_logging(level: str | None = None) -> logging.Logger:
    """Configure and return logger."""
    level_name = (level or ("DEBUG" if DEBUG else LOG_LEVEL)).upper()
    logging.basicConfig(
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        level=getattr(logging, level_name, logging.INFO),
    )
    return logging.getLogger("qmdvault")
