"""Agent tools and gateway methods for the vault.

Tools return host-style results: ``{"content": [{"type": "text", ...}]}``.
Gateway methods return plain data.
"""

import json
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from qmdvault.core.errors import ValidationError
from qmdvault.index.qmd import QueryMode
from qmdvault.vault.notes import parse_note_input
from qmdvault.vault.service import VaultService

_STRING_LIST = {"type": "array", "items": {"type": "string"}}


@dataclass
class ToolDefinition:
    """Definition of a tool."""

    name: str
    description: str
    parameters: dict[str, Any] = field(default_factory=dict)
    handler: Callable[..., Any] | None = None

    def execute(self, params: dict[str, Any] | None = None) -> Any:
        if self.handler is None:
            raise NotImplementedError(f"Tool {self.name} has no handler")
        return self.handler(params or {})


def text_result(text: str) -> dict[str, Any]:
    """Wrap text in the host's tool result shape."""
    return {"content": [{"type": "text", "text": text}]}


class QueryParams(BaseModel):
    """Query tool and RPC parameters. The mode is checked by the service."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    query: str
    mode: str | None = None
    limit: int | None = None
    min_score: float | None = Field(default=None, alias="minScore")


def _query_options(params: dict[str, Any]) -> dict[str, Any]:
    if not isinstance(params.get("query"), str):
        raise ValidationError("Query is required")
    try:
        options = QueryParams.model_validate(params)
    except PydanticValidationError as e:
        raise ValidationError(f"Invalid query parameters: {e}") from e
    return {
        "query": options.query,
        "mode": options.mode or QueryMode.QUERY,
        "limit": options.limit or None,
        "min_score": options.min_score,
    }


class VaultTools:
    """Tools and gateway methods backed by a VaultService."""

    def __init__(self, service: VaultService):
        """
        Initialize vault tools.

        Args:
            service: Service for the configured vault
        """
        self.service = service

    def add_note(self, params: dict[str, Any]) -> dict[str, Any]:
        relative_path = self.service.add_note(parse_note_input(params))
        return text_result(f"Saved {relative_path}")

    def query(self, params: dict[str, Any]) -> dict[str, Any]:
        results = self.service.query(**_query_options(params), as_json=True)
        return text_result(json.dumps(results, indent=2))

    def embed(self, params: dict[str, Any]) -> dict[str, Any]:
        self.service.embed(force=bool(params.get("force")))
        return text_result("Embeddings generated")

    def gateway_query(self, params: dict[str, Any]) -> Any:
        return self.service.query(**_query_options(params), as_json=True)

    def gateway_add(self, params: dict[str, Any]) -> dict[str, str]:
        return {"path": self.service.add_note(parse_note_input(params))}

    def tool_definitions(self) -> list[ToolDefinition]:
        """Tool definitions to register with the host."""
        return [
            ToolDefinition(
                name="vault_add_note",
                description=(
                    "Create a markdown note inside the vault with structured "
                    "frontmatter."
                ),
                parameters={
                    "type": "object",
                    "properties": {
                        "title": {"type": "string"},
                        "body": {"type": "string"},
                        "summary": {"type": "string"},
                        "tags": _STRING_LIST,
                        "people": _STRING_LIST,
                        "projects": _STRING_LIST,
                        "sources": {
                            "type": "array",
                            "items": {
                                "type": "object",
                                "properties": {
                                    "title": {"type": "string"},
                                    "url": {"type": "string"},
                                },
                                "required": ["title"],
                            },
                        },
                        "status": {"type": "string"},
                        "relativePath": {"type": "string"},
                        "overwrite": {"type": "boolean"},
                    },
                    "required": ["title", "body"],
                },
                handler=self.add_note,
            ),
            ToolDefinition(
                name="vault_query",
                description="Query the vault using qmd search, vsearch, or query.",
                parameters={
                    "type": "object",
                    "properties": {
                        "query": {"type": "string"},
                        "mode": {
                            "type": "string",
                            "enum": [mode.value for mode in QueryMode],
                        },
                        "limit": {"type": "number"},
                        "minScore": {"type": "number"},
                    },
                    "required": ["query"],
                },
                handler=self.query,
            ),
            ToolDefinition(
                name="vault_embed",
                description="Generate embeddings for the vault using qmd embed.",
                parameters={
                    "type": "object",
                    "properties": {"force": {"type": "boolean"}},
                },
                handler=self.embed,
            ),
        ]

    def gateway_methods(self) -> dict[str, Callable[[dict[str, Any]], Any]]:
        """Gateway RPC methods to register with the host."""
        return {
            "vault.query": self.gateway_query,
            "vault.add": self.gateway_add,
        }
