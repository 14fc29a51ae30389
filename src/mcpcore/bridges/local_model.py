"""LocalModelHandler — text generation with tool calling on a local model.

The model runtime itself is a collaborator behind :class:`TextGenerator`;
this module only prepares the messages and tool list, and runs any tool
calls the generated text contains.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Protocol

from mcpcore.protocol.errors import ToolError

if TYPE_CHECKING:
    from mcpcore.bridges.registry import LocalToolRegistry
    from mcpcore.protocol.json_value import JsonObject

logger = logging.getLogger(__name__)

DEFAULT_SYSTEM_PROMPT = "You are a helpful assistant with access to tools."
DEFAULT_TEMPERATURE = 0.7
DEFAULT_MAX_TOKENS = 1024


class TextGenerator(Protocol):
    """A loaded local model that generates text from chat messages."""

    async def generate(
        self,
        messages: list[dict[str, str]],
        tools: list[dict[str, Any]],
        *,
        temperature: float,
        max_tokens: int,
    ) -> str: ...


class LocalModelHandler:
    """Drives a :class:`TextGenerator` with the tools of a :class:`LocalToolRegistry`."""

    def __init__(
        self,
        tool_registry: LocalToolRegistry,
        generator: TextGenerator | None = None,
    ) -> None:
        self.tool_registry = tool_registry
        self._generator = generator

    @property
    def loaded(self) -> bool:
        return self._generator is not None

    def load(self, generator: TextGenerator) -> None:
        """Attach a loaded model."""
        self._generator = generator

    async def generate_with_function_calling(
        self,
        prompt: str,
        system_prompt: str | None = None,
        parameters: JsonObject | None = None,
    ) -> str:
        """Generate a reply to *prompt* with every registered tool available.

        ``parameters`` may set ``temperature`` and ``max_tokens``.
        """
        if self._generator is None:
            raise ToolError("Local model not loaded")

        params = parameters or {}
        messages = [
            {"role": "system", "content": system_prompt or DEFAULT_SYSTEM_PROMPT},
            {"role": "user", "content": prompt},
        ]
        tools = self.tool_registry.functions()
        logger.debug("Generating with %d tool(s) available", len(tools))
        return await self._generator.generate(
            messages,
            tools,
            temperature=_number(params.get("temperature"), DEFAULT_TEMPERATURE),
            max_tokens=int(_number(params.get("max_tokens"), DEFAULT_MAX_TOKENS)),
        )

    async def run(
        self,
        prompt: str,
        system_prompt: str | None = None,
        parameters: JsonObject | None = None,
    ) -> tuple[str, bool]:
        """Generate a reply and execute the tool calls it contains."""
        output = await self.generate_with_function_calling(prompt, system_prompt, parameters)
        return await self.tool_registry.process_tool_calls(output)


def _number(value: Any, default: float) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    return default
