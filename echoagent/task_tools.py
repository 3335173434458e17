"""Tools that let an agent create, update, list and order planning tasks."""

from __future__ import annotations

import json
import logging
import math
import time
from collections.abc import Mapping
from typing import Any

from echoagent.errors import CircularDependencyError, InvalidParameterError, MissingParameterError
from echoagent.tasks import Task, TaskManager, TaskStatus
from echoagent.tooling import Tool, ToolResult

logger = logging.getLogger(__name__)

_EMPTY_SCHEMA = {"type": "object", "properties": {}, "additionalProperties": False}


def _now_secs() -> int:
    return max(int(time.time()), 0)


def _require_str(parameters: Mapping[str, Any], name: str) -> str:
    value = parameters.get(name)
    if not isinstance(value, str):
        raise MissingParameterError(name)
    return value


def _optional_str(parameters: Mapping[str, Any], name: str) -> str | None:
    value = parameters.get(name)
    return value if isinstance(value, str) else None


def _priority(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return 5
    number = float(value)
    if math.isnan(number):
        return 0
    return int(min(max(number, 0.0), 10.0))


class _TaskTool(Tool):
    """A tool that works on a shared TaskManager."""

    def __init__(self, task_manager: TaskManager) -> None:
        self.task_manager = task_manager


class CreateTaskTool(_TaskTool):
    """Adds a pending task, refusing it if it would close a dependency cycle."""

    name = "create_task"
    description = "将复杂问题拆解为子任务。创建一个新的待执行任务。"
    parameters = {
        "type": "object",
        "properties": {
            "task_id": {"type": "string", "description": "任务唯一标识符，如 task_1, task_2"},
            "description": {"type": "string", "description": "任务的详细描述，说明要做什么"},
            "reasoning": {"type": "string", "description": "为什么需要这个任务，它如何帮助解决主问题"},
            "dependencies": {
                "type": "array",
                "items": {"type": "string"},
                "description": "依赖的任务ID列表（必须先完成这些任务）",
            },
            "priority": {"type": "number", "description": "优先级 0-10，默认5"},
        },
        "required": ["task_id", "description", "reasoning"],
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        task_id = _require_str(parameters, "task_id")
        description = _require_str(parameters, "description")
        reasoning = _require_str(parameters, "reasoning")

        raw_deps = parameters.get("dependencies")
        dependencies = (
            [dep for dep in raw_deps if isinstance(dep, str)] if isinstance(raw_deps, list) else []
        )
        priority = _priority(parameters.get("priority", 5.0))

        now = _now_secs()
        task = Task(
            id=task_id,
            description=description,
            dependencies=dependencies,
            priority=priority,
            reasoning=reasoning,
            created_at=now,
            updated_at=now,
        )

        manager = self.task_manager
        manager.add_task(task)
        cycles = manager.detect_circular_dependencies()
        if cycles:
            manager.delete_task(task_id)
            paths = " | ".join(f"[{' → '.join(cycle)}]" for cycle in cycles)
            return ToolResult.fail(
                f"❌ 任务 [{task_id}] 创建失败：此任务与现有任务形成循环依赖！\n\n"
                f"循环路径: {paths}\n\n请检查依赖关系并重新规划。"
            )

        logger.info("Task [%s] created successfully, no circular dependencies.", task_id)
        deps_str = ", ".join(dependencies) if dependencies else "无"
        message = (
            f"✅ 已创建任务 [{task_id}]\n📝 描述: {description}\n💭 推理: {reasoning}\n"
            f"⭐ 优先级: {priority}\n🔗 依赖: {deps_str}"
        )
        logger.debug("Task create parameters: %r", dict(parameters))
        return ToolResult.ok(message)


class UpdateTaskTool(_TaskTool):
    """Changes a task's status and records its result."""

    name = "update_task"
    description = "更新任务的状态（开始执行、标记完成、记录失败等）"
    parameters = {
        "type": "object",
        "properties": {
            "task_id": {"type": "string", "description": "要更新的任务ID"},
            "status": {
                "type": "string",
                "enum": ["in_progress", "completed", "cancelled", "failed"],
                "description": "新状态",
            },
            "result": {"type": "string", "description": "任务执行结果（完成时填写）"},
            "reason": {"type": "string", "description": "失败或取消的原因"},
        },
        "required": ["task_id", "status"],
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        task_id = _require_str(parameters, "task_id")
        status_str = _require_str(parameters, "status")
        result = _optional_str(parameters, "result")
        reason = _optional_str(parameters, "reason")

        if status_str == "in_progress":
            new_status = TaskStatus.in_progress()
        elif status_str == "completed":
            new_status = TaskStatus.completed()
        elif status_str == "cancelled":
            new_status = TaskStatus.cancelled()
        elif status_str == "failed":
            new_status = TaskStatus.failed(reason or "")
        else:
            raise InvalidParameterError("status", f"无效的状态: {status_str}")

        manager = self.task_manager
        manager.update_task(task_id, new_status)
        task = manager.get_task(task_id)
        if task is not None:
            task.result = result
            task.updated_at = _now_secs()

        message = f"✓ 任务 [{task_id}] 状态已更新为: {new_status}"
        logger.info("Task update:%s", message)
        return ToolResult.ok(message)


class ListTasksTool(_TaskTool):
    """Lists tasks, optionally filtered, under a progress summary."""

    name = "list_tasks"
    description = "查看当前所有任务的状态和进度"
    parameters = {
        "type": "object",
        "properties": {
            "filter": {
                "type": "string",
                "enum": ["all", "pending", "in_progress", "completed", "ready"],
                "description": "筛选条件：all-所有, pending-待处理, ready-可立即执行",
            }
        },
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        which = _optional_str(parameters, "filter") or "all"
        manager = self.task_manager
        selectors = {
            "pending": manager.get_pending_tasks,
            "in_progress": manager.get_in_progress_tasks,
            "completed": manager.get_completed_tasks,
            "ready": manager.get_ready_tasks,
        }
        tasks = selectors.get(which, manager.get_all_tasks)()

        task_list = "\n".join(
            f"taskid:[{task.id}] ,task status:{task.status}  ,task description: {task.description} "
            f"(任务优先级: {task.priority}, 任务依赖: {json.dumps(task.dependencies, ensure_ascii=False)})"
            for task in tasks
        )
        listing = f"{manager.get_summary()}\n\n任务列表:\n{task_list or '无任务'}"
        logger.info("Task list:%s", listing)
        return ToolResult.ok(listing)


class VisualizeDependenciesTool(_TaskTool):
    """Renders the task graph as a Mermaid flowchart."""

    name = "visualize_dependencies"
    description = "生成任务依赖关系的可视化图表（Mermaid 格式）"
    parameters = _EMPTY_SCHEMA

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        return ToolResult.ok(self.task_manager.visualize_dependencies())


class GetExecutionOrderTool(_TaskTool):
    """Reports a dependency-respecting execution order as a numbered list."""

    name = "get_execution_order"
    description = "获取任务的推荐执行顺序（基于依赖关系）"
    parameters = _EMPTY_SCHEMA

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        try:
            order = self.task_manager.get_topological_order()
        except CircularDependencyError as exc:
            return ToolResult.fail(str(exc))
        return ToolResult.ok("\n".join(f"{i}. {task_id}" for i, task_id in enumerate(order, 1)))