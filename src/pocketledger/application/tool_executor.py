from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Any

from pocketledger.domain.schemas import ToolContext, ToolRequest, ToolResponse
from pocketledger.tools.registry import ToolRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ToolCall:
    id: str
    tool: str
    args: dict[str, Any] = field(default_factory=dict)


class ToolExecutor:
    def __init__(self, registry: ToolRegistry):
        self._registry = registry

    def run_calls(self, calls: list[ToolCall], context: ToolContext, request_id: str) -> list[ToolResponse]:
        responses: list[ToolResponse] = []
        for call in calls:
            req = ToolRequest(
                request_id=f"{request_id}:{call.id}",
                tool=call.tool,
                args=dict(call.args),
                context=context,
            )
            logger.info("ToolExecutor running call_id=%s tool=%s user_id=%s", call.id, call.tool, context.user_id)
            t = time.perf_counter()
            if req.tool not in self._registry:
                logger.warning("ToolExecutor unknown tool call_id=%s tool=%s", call.id, call.tool)
                responses.append(
                    ToolResponse(
                        request_id=req.request_id,
                        tool=req.tool,
                        ok=False,
                        errors=[f"Tool not registered: {req.tool}"],
                        context=context,
                    )
                )
                continue
            try:
                tool = self._registry.get_tool(req.tool)
                response = tool.run(req)
            except Exception as exc:
                logger.exception("ToolExecutor failed call_id=%s tool=%s", call.id, call.tool)
                response = ToolResponse(
                    request_id=req.request_id,
                    tool=req.tool,
                    ok=False,
                    errors=[str(exc) or exc.__class__.__name__],
                    context=context,
                )
            responses.append(response)
            logger.info(
                "ToolExecutor finished call_id=%s tool=%s in %.2fs ok=%s",
                call.id,
                call.tool,
                time.perf_counter() - t,
                response.ok,
            )
        return responses
