from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Protocol

from .errors import ErrorKind, ToolCallError
from .schemas.outcome import ExecutionOutcome, Failure
from .schemas.tool import ToolCall, ToolDescriptor, ToolResponse
from .tools.registry import ToolRegistry
from .tools.validate_args import require_args

log = logging.getLogger(__name__)


class Executor(Protocol):
    async def run(self, code: str, cwd: str) -> ExecutionOutcome: ...


@dataclass(frozen=True)
class BridgeContext:
    """Everything a request needs; built once at startup and never mutated."""
    registry: ToolRegistry
    executor: Executor
    project_dir: str


class RequestDispatcher:
    def __init__(self, ctx: BridgeContext):
        self.ctx = ctx

    def list_tools(self) -> List[ToolDescriptor]:
        return self.ctx.registry.list_tools()

    async def handle(self, call: ToolCall) -> ToolResponse:
        """
        Validate, build the interpreter source, run it, and shape the result.

        Unknown tools and bad arguments raise ToolCallError before anything is
        spawned. Execution failures come back as a normal response with
        is_error=True.
        """
        spec = self.ctx.registry.get(call.name)
        if spec is None:
            raise ToolCallError(ErrorKind.METHOD_NOT_FOUND, f"Unknown tool: {call.name}")

        args = require_args(spec, call.arguments)
        source = spec.build_source(args, self.ctx.project_dir)

        outcome = await self.ctx.executor.run(source, self.ctx.project_dir)
        if isinstance(outcome, Failure):
            log.error("%s: %s", spec.error_prefix, outcome.message)
            return ToolResponse.text(f"{spec.error_prefix}: {outcome.message}", is_error=True)
        return ToolResponse.text(spec.format_output(args, outcome.stdout))
