# =============================================================================
# core/dispatcher.py  —  Request Dispatcher
# =============================================================================
#
# WHAT THIS MODULE DOES:
#   Turns "operation name + arguments" into a ToolResult:
#
#     1. Look the name up in the operation table (core/operations.py)
#     2. Build the BackendRequest from the arguments
#     3. Send it through the ApiClient
#     4. Optionally run the operation's follow-up call (get_collection items)
#     5. Render the payload into text
#
#   Every outcome funnels through one rendering step:
#     success  → ToolResult(is_error=False, text)
#     failure  → ToolResult(is_error=True, "Error: <message>")
#
#   invoke() never raises.  The one exception is asyncio.CancelledError,
#   which must reach the task that was cancelled.
# =============================================================================

import logging
from typing import Any, Mapping, Optional

from core.errors import ContextRepoError, UnhandledOperationError
from core.models import InvocationRequest, ToolResult
from core.operations import OPERATIONS, Operation

logger = logging.getLogger(__name__)


class Dispatcher:
    """Routes invocations to their Operation and renders the outcome.

    Args:
        client: Anything with ``send(BackendRequest)`` and
            ``execute(method, path, body=None)`` coroutines; in production an
            ``ApiClient``.
        operations: Operation table; defaults to the full catalog.
    """

    def __init__(self, client: Any, operations: Optional[Mapping[str, Operation]] = None):
        self._client = client
        self._operations = OPERATIONS if operations is None else operations

    async def invoke(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> ToolResult:
        args = dict(arguments or {})
        logger.info("[MCP] Tool called: %s", name)

        try:
            text = await self._run(name, args)
        except ContextRepoError as exc:
            logger.error("[MCP] Tool error: %s", exc.message)
            return ToolResult.error(exc.message)
        except Exception as exc:
            # Malformed payloads or missing arguments; still a per-call failure.
            logger.exception("[MCP] Tool error: %s", exc)
            return ToolResult.error(str(exc) or exc.__class__.__name__)

        return ToolResult.text(text)

    async def handle(self, request: InvocationRequest) -> ToolResult:
        return await self.invoke(request.operation_name, request.arguments)

    async def _run(self, name: str, args: dict[str, Any]) -> str:
        operation = self._operations.get(name)
        if operation is None:
            raise UnhandledOperationError(name)

        request = operation.build(args)
        payload = await self._client.send(request)
        if operation.expand is not None:
            payload = await operation.expand(self._client, payload, args)
        return operation.render(payload, args)
