"""The tool interface, tool results, and a manager that runs tools with limits."""

from __future__ import annotations

import abc
import asyncio
import contextlib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass
from typing import Any, ClassVar

from echoagent.errors import ToolNotFoundError, ToolTimeoutError


@dataclass(frozen=True)
class ToolResult:
    """What a tool reports back: its output on success, an error message otherwise."""

    success: bool
    output: str = ""
    error: str | None = None

    @classmethod
    def ok(cls, output: str) -> ToolResult:
        return cls(success=True, output=output, error=None)

    @classmethod
    def fail(cls, error: str) -> ToolResult:
        return cls(success=False, output="", error=error)


@dataclass(frozen=True)
class ToolExecutionConfig:
    """Timeout, retry and concurrency settings for running tools.

    ``timeout_ms`` of 0 disables the timeout. Retries wait ``retry_delay_ms``
    before the first retry and double the wait each time after that.
    ``max_concurrency`` of None runs any number of tools at once.
    """

    timeout_ms: int = 30_000
    retry_on_fail: bool = False
    max_retries: int = 2
    retry_delay_ms: int = 200
    max_concurrency: int | None = None


class Tool(abc.ABC):
    """A named operation an agent can call with JSON-like parameters."""

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""
    parameters: ClassVar[Mapping[str, Any]] = {"type": "object", "properties": {}}

    @abc.abstractmethod
    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        """Run the tool; raise a ToolError when it cannot do its work."""


class ToolManager:
    """Registry of tools that runs them with timeout, retry and concurrency limits."""

    def __init__(self, config: ToolExecutionConfig | None = None) -> None:
        self.config = config if config is not None else ToolExecutionConfig()
        self._tools: dict[str, Tool] = {}
        limit = self.config.max_concurrency
        self._semaphore = asyncio.Semaphore(max(limit, 1)) if limit is not None else None

    def max_concurrency(self) -> int | None:
        """The concurrency limit, or None when unlimited."""
        return self.config.max_concurrency

    def register(self, tool: Tool) -> None:
        """Add a tool, replacing any tool with the same name."""
        self._tools[tool.name] = tool

    def register_tools(self, tools: Iterable[Tool]) -> None:
        for tool in tools:
            self.register(tool)

    def list_tools(self) -> list[str]:
        return list(self._tools)

    def get_tool(self, tool_name: str) -> Tool | None:
        return self._tools.get(tool_name)

    def __contains__(self, tool_name: object) -> bool:
        return tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)

    async def _run_once(self, tool: Tool, tool_name: str, parameters: Mapping[str, Any]) -> ToolResult:
        call = tool.execute(dict(parameters))
        if self.config.timeout_ms <= 0:
            return await call
        try:
            return await asyncio.wait_for(call, timeout=self.config.timeout_ms / 1000)
        except asyncio.TimeoutError:
            raise ToolTimeoutError(tool_name) from None

    async def execute_tool(self, tool_name: str, parameters: Mapping[str, Any]) -> ToolResult:
        """Run a registered tool, honouring the configured limits.

        Raises ToolNotFoundError for an unknown name, ToolTimeoutError when the
        time limit is hit, and otherwise whatever the last attempt raised.
        """
        tool = self._tools.get(tool_name)
        if tool is None:
            raise ToolNotFoundError(tool_name)

        max_retries = self.config.max_retries if self.config.retry_on_fail else 0
        guard = self._semaphore if self._semaphore is not None else contextlib.nullcontext()

        async with guard:
            for attempt in range(max_retries + 1):
                if attempt > 0:
                    delay_ms = self.config.retry_delay_ms * (1 << min(attempt - 1, 5))
                    await asyncio.sleep(delay_ms / 1000)
                try:
                    return await self._run_once(tool, tool_name, parameters)
                except Exception:
                    if attempt >= max_retries:
                        raise
        raise ToolNotFoundError(tool_name)