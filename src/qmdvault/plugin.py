"""Plugin entry point for agent hosts.

The host hands ``register`` an API object; configuration is read from it
once and passed explicitly to everything that needs it.
"""

import logging
import os
from collections.abc import Callable, Mapping
from typing import Any, Protocol

from qmdvault.core.settings import PLUGIN_ID, PLUGIN_NAME, read_config
from qmdvault.tools.vault_tools import VaultTools
from qmdvault.vault.service import VaultService

logger = logging.getLogger(__name__)

CONFIG_UI_HINTS: dict[str, dict[str, str]] = {
    "vaultPath": {"label": "Vault Path", "placeholder": "/Users/you/Vault"},
    "collectionName": {"label": "QMD Collection Name", "placeholder": "vault"},
    "gitRemote": {"label": "Git Remote", "placeholder": "origin"},
    "gitBranch": {"label": "Git Branch", "placeholder": "main"},
    "gitSync": {
        "label": "Git Sync",
        "description": "Pull before and push after changes.",
    },
    "gitAutoCommit": {"label": "Git Auto Commit"},
    "autoInstallQmd": {"label": "Auto Install QMD"},
    "mask": {"label": "File Mask", "placeholder": "**/*.md"},
}


class HostLogHandler(logging.Handler):
    """Forward qmdvault log records to the host's logger."""

    def __init__(self, host_logger: Any):
        super().__init__()
        self.host_logger = host_logger

    def emit(self, record: logging.LogRecord) -> None:
        name = record.levelname.lower()
        if name == "critical":
            name = "error"
        log = getattr(self.host_logger, name, None) or self.host_logger.info
        try:
            log(self.format(record))
        except Exception:
            self.handleError(record)


def attach_host_logger(host_logger: Any) -> HostLogHandler:
    """Route the package's log records to ``host_logger``, replacing any earlier one."""
    package_logger = logging.getLogger("qmdvault")
    for handler in list(package_logger.handlers):
        if isinstance(handler, HostLogHandler):
            package_logger.removeHandler(handler)
    if package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.INFO)
    handler = HostLogHandler(host_logger)
    package_logger.addHandler(handler)
    return handler


class PluginHost(Protocol):
    """What the plugin needs from its host."""

    config: Mapping[str, Any]
    logger: Any

    def register_tool(self, tool: Any) -> None: ...

    def register_gateway_method(
        self, name: str, handler: Callable[[dict[str, Any]], Any]
    ) -> None: ...


def register(api: PluginHost, env: Mapping[str, str] | None = None) -> VaultService:
    """
    Configure the vault and register its tools and gateway methods.

    Args:
        api: Plugin host
        env: Environment for the VAULT_PATH fallback (default os.environ)

    Returns:
        The VaultService backing the registered tools
    """
    host_logger = getattr(api, "logger", None)
    if host_logger is not None:
        attach_host_logger(host_logger)

    config = read_config(getattr(api, "config", None), os.environ if env is None else env)
    service = VaultService(config)
    service.setup()

    tools = VaultTools(service)
    for tool in tools.tool_definitions():
        api.register_tool(tool)
    for name, handler in tools.gateway_methods().items():
        api.register_gateway_method(name, handler)

    logger.info(f"{PLUGIN_NAME} ({PLUGIN_ID}) registered for {config.vault_path}")
    return service
