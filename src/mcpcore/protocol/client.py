"""MCPClient — decodes JSON-RPC requests and routes them to registered tools.

Each inbound message goes through ``parse -> route -> invoke -> respond``.
Any failure along the way is converted into a JSON-RPC error response, so
every message yields exactly one response through the response handler.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Iterable
from typing import TYPE_CHECKING, Any, cast

from pydantic import ValidationError

from mcpcore.protocol.errors import (
    DecodeError,
    InvalidRequestError,
    MCPError,
    ToolError,
    ToolNotFoundError,
)
from mcpcore.protocol.json_value import JsonObject, coerce, decode
from mcpcore.protocol.models import NULL_ID, JsonRpcRequest, JsonRpcResponse
from mcpcore.utils.telemetry import (
    ATTR_ERROR_CODE,
    ATTR_METHOD,
    ATTR_OUTCOME,
    ATTR_REQUEST_ID,
    get_tracer,
)

if TYPE_CHECKING:
    from mcpcore.protocol.registry import ToolLookup

logger = logging.getLogger(__name__)
_tracer = get_tracer(__name__)

ResponseHandler = Callable[[str], None]


class MCPClient:
    """Routes JSON-RPC messages to tools and reports the outcome.

    The registry is borrowed, never created here; the host application owns
    it and may share it between clients.

    Usage::

        registry = ToolRegistry()
        registry.register(steps_tool)
        client = MCPClient(registry, responses.append)
        await client.handle_incoming_message(raw_bytes)
    """

    def __init__(self, tool_registry: ToolLookup, response_handler: ResponseHandler) -> None:
        self._registry = tool_registry
        self._response_handler = response_handler

    @property
    def registry(self) -> ToolLookup:
        return self._registry

    async def handle_incoming_message(self, data: bytes | str) -> None:
        """Dispatch *data* and send exactly one serialized response."""
        response = await self.dispatch(data)
        self._response_handler(response.to_json())

    async def handle_incoming_messages(self, messages: Iterable[bytes | str]) -> None:
        """Dispatch several messages concurrently.

        Responses are sent as each request completes, not in arrival order.
        """
        await asyncio.gather(*[self.handle_incoming_message(m) for m in messages])

    async def dispatch(self, data: bytes | str) -> JsonRpcResponse:
        """Run a message through parse, route and invoke.

        Request-level failures are returned as error responses, never raised.
        """
        with _tracer.start_as_current_span("mcp.dispatch") as span:
            request_id: str | None = None
            try:
                request = self._parse(data)
                request_id = request.id
                span.set_attribute(ATTR_METHOD, request.method)
                span.set_attribute(ATTR_REQUEST_ID, request.id)
                result = await self._invoke(request)
            except MCPError as exc:
                if request_id is None:
                    request_id = recover_id(data)
                span.set_attribute(ATTR_OUTCOME, "error")
                span.set_attribute(ATTR_ERROR_CODE, exc.code)
                logger.debug(
                    "Request %s failed with %d: %s",
                    request_id,
                    exc.code,
                    exc.detail or exc.message,
                )
                return JsonRpcResponse.failure(request_id, exc)

            span.set_attribute(ATTR_OUTCOME, "success")
            logger.debug("Request %s (%s) succeeded", request.id, request.method)
            return JsonRpcResponse.success(request.id, result)

    @staticmethod
    def _parse(data: bytes | str) -> JsonRpcRequest:
        # Unreadable bytes are reported like any other malformed envelope.
        try:
            payload = decode(data)
        except DecodeError as exc:
            raise InvalidRequestError(exc.detail) from exc
        try:
            return JsonRpcRequest.model_validate(payload)
        except ValidationError as exc:
            raise InvalidRequestError(str(exc)) from exc

    async def _invoke(self, request: JsonRpcRequest) -> JsonObject:
        tool = self._registry.tool_for(request.method)
        if tool is None:
            raise ToolNotFoundError(request.method)

        try:
            raw = await tool.handle(dict(request.params))
        except MCPError:
            raise
        except Exception as exc:
            logger.exception("Tool %s raised an unexpected error", request.method)
            raise ToolError(str(exc) or exc.__class__.__name__) from exc

        return _as_result(request.method, raw)


def recover_id(data: bytes | str) -> str:
    """Best-effort extraction of a string ``id`` from a raw payload.

    Falls back to ``"null"`` when the payload is not a JSON object or has no
    string id.
    """
    try:
        payload = decode(data)
    except DecodeError:
        return NULL_ID
    if isinstance(payload, dict):
        candidate = payload.get("id")
        if isinstance(candidate, str):
            return candidate
    return NULL_ID


def _as_result(method: str, raw: Any) -> JsonObject:
    if not isinstance(raw, dict):
        raise ToolError(f"{method} returned {type(raw).__name__}, expected an object")
    try:
        result = coerce(raw)
    except DecodeError as exc:
        raise ToolError(f"{method} returned a non-JSON result ({exc.detail})") from exc
    return cast("JsonObject", result)
