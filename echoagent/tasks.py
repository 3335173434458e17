"""Tasks, their statuses, and a manager that schedules them as a dependency graph."""

from __future__ import annotations

import dataclasses
import enum
import json
from collections.abc import Iterable
from dataclasses import dataclass, field

from echoagent.errors import CircularDependencyError


class StatusKind(enum.Enum):
    """The kind of state a task is in."""

    PENDING = "Pending"
    IN_PROGRESS = "InProgress"
    COMPLETED = "Completed"
    CANCELLED = "Cancelled"
    FAILED = "Failed"
    BLOCKED = "Blocked"


_TERMINAL_KINDS = frozenset({StatusKind.COMPLETED, StatusKind.CANCELLED, StatusKind.FAILED})


@dataclass(frozen=True)
class TaskStatus:
    """A task's state; failed and blocked states carry a reason."""

    kind: StatusKind
    reason: str | None = None

    @classmethod
    def pending(cls) -> TaskStatus:
        return cls(StatusKind.PENDING)

    @classmethod
    def in_progress(cls) -> TaskStatus:
        return cls(StatusKind.IN_PROGRESS)

    @classmethod
    def completed(cls) -> TaskStatus:
        return cls(StatusKind.COMPLETED)

    @classmethod
    def cancelled(cls) -> TaskStatus:
        return cls(StatusKind.CANCELLED)

    @classmethod
    def failed(cls, reason: str) -> TaskStatus:
        return cls(StatusKind.FAILED, reason)

    @classmethod
    def blocked(cls, reason: str) -> TaskStatus:
        return cls(StatusKind.BLOCKED, reason)

    def is_terminal(self) -> bool:
        """Completed, cancelled and failed tasks will not run again."""
        return self.kind in _TERMINAL_KINDS

    def __str__(self) -> str:
        if self.kind in (StatusKind.FAILED, StatusKind.BLOCKED):
            return f"{self.kind.value}({json.dumps(self.reason or '', ensure_ascii=False)})"
        return self.kind.value


@dataclass
class Task:
    """A unit of work with dependencies and a priority from 0 to 10 (10 highest)."""

    id: str
    description: str
    status: TaskStatus = field(default_factory=TaskStatus.pending)
    dependencies: list[str] = field(default_factory=list)
    priority: int = 5
    result: str | None = None
    reasoning: str | None = None
    parent_id: str | None = None
    created_at: int = 0
    updated_at: int = 0

    def with_dependencies(self, deps: Iterable[str]) -> Task:
        """Return a copy whose dependencies are replaced by ``deps``."""
        return dataclasses.replace(self, dependencies=list(deps))

    def add_dependency(self, dep: str) -> None:
        self.dependencies.append(dep)

    def with_priority(self, priority: int) -> Task:
        """Return a copy with ``priority`` capped at 10."""
        if priority < 0:
            raise ValueError(f"priority must not be negative: {priority}")
        return dataclasses.replace(self, priority=min(priority, 10))


class _Visit(enum.Enum):
    VISITING = enum.auto()
    VISITED = enum.auto()


class TaskManager:
    """Holds a set of tasks keyed by id and answers scheduling questions about them."""

    def __init__(self) -> None:
        self.tasks: dict[str, Task] = {}

    def add_task(self, task: Task) -> None:
        """Insert a task, replacing any task with the same id."""
        self.tasks[task.id] = task

    def update_task(self, task_id: str, status: TaskStatus) -> None:
        """Set the status of a task; unknown ids are ignored."""
        task = self.tasks.get(task_id)
        if task is not None:
            task.status = status

    def get_task(self, task_id: str) -> Task | None:
        return self.tasks.get(task_id)

    def delete_task(self, task_id: str) -> None:
        self.tasks.pop(task_id, None)

    def get_all_tasks(self) -> list[Task]:
        return list(self.tasks.values())

    def _with_kind(self, kind: StatusKind) -> list[Task]:
        return [task for task in self.tasks.values() if task.status.kind is kind]

    def get_pending_tasks(self) -> list[Task]:
        return self._with_kind(StatusKind.PENDING)

    def get_in_progress_tasks(self) -> list[Task]:
        return self._with_kind(StatusKind.IN_PROGRESS)

    def get_completed_tasks(self) -> list[Task]:
        return self._with_kind(StatusKind.COMPLETED)

    def _is_completed(self, task_id: str) -> bool:
        dep = self.tasks.get(task_id)
        return dep is not None and dep.status.kind is StatusKind.COMPLETED

    def get_ready_tasks(self) -> list[Task]:
        """Pending tasks whose dependencies all exist and are completed."""
        return [
            task
            for task in self.tasks.values()
            if task.status.kind is StatusKind.PENDING
            and all(self._is_completed(dep) for dep in task.dependencies)
        ]

    def get_progress(self) -> tuple[int, int]:
        """Return (completed, total)."""
        return len(self.get_completed_tasks()), len(self.tasks)

    def get_next_task(self) -> Task | None:
        """The ready task with the highest priority, or None."""
        ready = sorted(self.get_ready_tasks(), key=lambda task: -task.priority)
        return ready[0] if ready else None

    def is_all_completed(self) -> bool:
        """True when every task is completed, cancelled or failed."""
        return all(task.status.is_terminal() for task in self.tasks.values())

    def get_summary(self) -> str:
        """A one-line progress summary suitable for an LLM context."""
        completed, total = self.get_progress()
        pending = len(self.get_pending_tasks())
        in_progress = len(self.get_in_progress_tasks())
        return f"任务进度: {completed}/{total} 完成 | {pending} 待处理 | {in_progress} 进行中"

    def detect_circular_dependencies(self) -> list[list[str]]:
        """Return every dependency cycle found by a depth-first walk."""
        cycles: list[list[str]] = []
        visited: dict[str, _Visit] = {}
        path: list[str] = []

        def walk(task_id: str) -> None:
            visited[task_id] = _Visit.VISITING
            path.append(task_id)
            task = self.tasks.get(task_id)
            if task is not None:
                for dep_id in task.dependencies:
                    if dep_id not in self.tasks:
                        continue
                    state = visited.get(dep_id)
                    if state is _Visit.VISITING:
                        cycles.append(path[path.index(dep_id):])
                    elif state is None:
                        walk(dep_id)
            path.pop()
            visited[task_id] = _Visit.VISITED

        for task_id in self.tasks:
            if visited.get(task_id) is not _Visit.VISITED:
                walk(task_id)
        return cycles

    def has_circular_dependencies(self) -> bool:
        return bool(self.detect_circular_dependencies())

    def get_topological_order(self) -> list[str]:
        """Order task ids so each comes after its dependencies.

        Raises CircularDependencyError if the graph has a cycle. Tasks that
        depend on unknown ids never become free and are left out.
        """
        cycles = self.detect_circular_dependencies()
        if cycles:
            raise CircularDependencyError(cycles)

        in_degree = {task_id: 0 for task_id in self.tasks}
        dependents: dict[str, list[str]] = {task_id: [] for task_id in self.tasks}
        for task_id, task in self.tasks.items():
            for dep_id in task.dependencies:
                if dep_id in dependents:
                    dependents[dep_id].append(task_id)
                in_degree[task_id] += 1

        stack = sorted(
            (task_id for task_id, degree in in_degree.items() if degree == 0),
            key=lambda task_id: -self.tasks[task_id].priority,
        )
        order: list[str] = []
        while stack:
            task_id = stack.pop()
            order.append(task_id)
            for neighbor in dependents.get(task_id, []):
                in_degree[neighbor] -= 1
                if in_degree[neighbor] == 0:
                    stack.append(neighbor)
        return order

    def visualize_dependencies(self) -> str:
        """Render the dependency graph as a Mermaid flowchart."""
        lines = ["graph TD\n"]
        for task_id, task in self.tasks.items():
            for dep_id in task.dependencies:
                lines.append(f"  {dep_id}[{dep_id}] --> {task_id}[{task_id}]\n")
        return "".join(lines)

    def get_dependency_chain(self, task_id: str) -> list[list[str]]:
        """Every path from ``task_id`` down to a task with no dependencies."""
        chains: list[list[str]] = []
        current: list[str] = []

        def walk(node: str) -> None:
            current.append(node)
            task = self.tasks.get(node)
            if task is not None:
                if not task.dependencies:
                    chains.append(list(current))
                else:
                    for dep_id in task.dependencies:
                        walk(dep_id)
            current.pop()

        walk(task_id)
        return chains