"""Exceptions raised by tools and the task planner."""

from __future__ import annotations

from collections.abc import Iterable, Sequence


class ToolError(Exception):
    """Base class for every error a tool can raise."""


class MissingParameterError(ToolError):
    """A required tool parameter was not supplied or had the wrong type."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Missing required parameter: {name}")


class InvalidParameterError(ToolError):
    """A tool parameter was supplied but its value is not acceptable."""

    def __init__(self, name: str, message: str) -> None:
        self.name = name
        self.message = message
        super().__init__(f"Invalid parameter '{name}': {message}")


class ExecutionFailedError(ToolError):
    """A tool ran but could not complete its work."""

    def __init__(self, tool: str, message: str) -> None:
        self.tool = tool
        self.message = message
        super().__init__(f"Tool '{tool}' execution failed: {message}")


class ToolNotFoundError(ToolError):
    """No tool is registered under the requested name."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool not found: {name}")


class ToolTimeoutError(ToolError):
    """A tool did not finish within the configured time limit."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(f"Tool '{name}' timed out")


class CircularDependencyError(ValueError):
    """The task graph contains one or more dependency cycles."""

    def __init__(self, cycles: Iterable[Sequence[str]]) -> None:
        self.cycles = [list(cycle) for cycle in cycles]
        rendered = ", ".join(f"[{' -> '.join(cycle)}]" for cycle in self.cycles)
        super().__init__(f"存在循环依赖，无法进行拓扑排序: {rendered}")