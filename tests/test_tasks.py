import pytest

from echoagent.errors import CircularDependencyError
from echoagent.tasks import StatusKind, Task, TaskManager, TaskStatus


def create_task(task_id, description, dependencies):
    return Task(
        id=task_id,
        description=description,
        status=TaskStatus.pending(),
        dependencies=list(dependencies),
        priority=5,
    )


def chain_manager():
    manager = TaskManager()
    manager.add_task(create_task("task1", "Task 1", []))
    manager.add_task(create_task("task2", "Task 2", ["task1"]))
    manager.add_task(create_task("task3", "Task 3", ["task2"]))
    return manager


def test_no_circular_dependencies():
    manager = chain_manager()
    assert manager.detect_circular_dependencies() == []
    assert not manager.has_circular_dependencies()


def test_simple_circular_dependency():
    manager = TaskManager()
    manager.add_task(create_task("task1", "Task 1", ["task2"]))
    manager.add_task(create_task("task2", "Task 2", ["task1"]))
    cycles = manager.detect_circular_dependencies()
    assert len(cycles) == 1
    assert manager.has_circular_dependencies()
    assert "task1" in cycles[0]
    assert "task2" in cycles[0]


def test_complex_circular_dependency():
    manager = TaskManager()
    manager.add_task(create_task("task1", "Task 1", ["task3"]))
    manager.add_task(create_task("task2", "Task 2", ["task1"]))
    manager.add_task(create_task("task3", "Task 3", ["task2"]))
    cycles = manager.detect_circular_dependencies()
    assert len(cycles) == 1
    assert len(cycles[0]) == 3


def test_multiple_circular_dependencies():
    manager = TaskManager()
    manager.add_task(create_task("task1", "Task 1", ["task2"]))
    manager.add_task(create_task("task2", "Task 2", ["task1"]))
    manager.add_task(create_task("task3", "Task 3", ["task4"]))
    manager.add_task(create_task("task4", "Task 4", ["task3"]))
    assert len(manager.detect_circular_dependencies()) == 2


def test_self_dependency():
    manager = TaskManager()
    manager.add_task(create_task("task1", "Task 1", ["task1"]))
    cycles = manager.detect_circular_dependencies()
    assert len(cycles) == 1
    assert len(cycles[0]) == 1


def test_mixed_dependencies():
    manager = chain_manager()
    manager.add_task(create_task("task4", "Task 4", ["task5"]))
    manager.add_task(create_task("task5", "Task 5", ["task4"]))
    cycles = manager.detect_circular_dependencies()
    assert len(cycles) == 1
    assert "task4" in cycles[0]
    assert "task5" in cycles[0]


def test_topological_order_no_cycles():
    order = chain_manager().get_topological_order()
    assert len(order) == 3
    assert order.index("task1") < order.index("task2") < order.index("task3")


def test_topological_order_with_cycles():
    manager = TaskManager()
    manager.add_task(create_task("task1", "Task 1", ["task2"]))
    manager.add_task(create_task("task2", "Task 2", ["task1"]))
    with pytest.raises(CircularDependencyError) as info:
        manager.get_topological_order()
    assert "循环依赖" in str(info.value)


def test_topological_order_skips_tasks_with_unknown_dependency():
    manager = TaskManager()
    manager.add_task(create_task("task1", "Task 1", []))
    manager.add_task(create_task("task2", "Task 2", ["missing"]))
    assert manager.get_topological_order() == ["task1"]


def test_get_dependency_chain():
    chains = chain_manager().get_dependency_chain("task3")
    assert chains == [["task3", "task2", "task1"]]


def test_get_dependency_chain_multiple():
    manager = TaskManager()
    manager.add_task(create_task("task1", "Task 1", []))
    manager.add_task(create_task("task2", "Task 2", ["task1"]))
    manager.add_task(create_task("task3", "Task 3", ["task1"]))
    manager.add_task(create_task("task4", "Task 4", ["task2", "task3"]))
    chains = manager.get_dependency_chain("task4")
    assert len(chains) == 2
    assert ["task4", "task2", "task1"] in chains
    assert ["task4", "task3", "task1"] in chains


def test_visualize_dependencies():
    mermaid = chain_manager().visualize_dependencies()
    assert mermaid.startswith("graph TD\n")
    for name in ("task1", "task2", "task3"):
        assert name in mermaid
    assert "-->" in mermaid
    assert "  task1[task1] --> task2[task2]\n" in mermaid


def test_ready_tasks_with_dependencies():
    manager = chain_manager()
    ready = manager.get_ready_tasks()
    assert [task.id for task in ready] == ["task1"]
    manager.update_task("task1", TaskStatus.completed())
    ready = manager.get_ready_tasks()
    assert [task.id for task in ready] == ["task2"]


def test_get_next_task_priority():
    manager = TaskManager()
    manager.add_task(Task(id="task1", description="Low priority", priority=3))
    manager.add_task(Task(id="task2", description="High priority", priority=8))
    nxt = manager.get_next_task()
    assert nxt is not None
    assert nxt.id == "task2"


def test_get_next_task_none_when_empty():
    assert TaskManager().get_next_task() is None


def test_progress_and_summary():
    manager = chain_manager()
    manager.update_task("task1", TaskStatus.completed())
    manager.update_task("task2", TaskStatus.in_progress())
    assert manager.get_progress() == (1, 3)
    assert manager.get_summary() == "任务进度: 1/3 完成 | 1 待处理 | 1 进行中"


def test_is_all_completed():
    manager = chain_manager()
    assert not manager.is_all_completed()
    manager.update_task("task1", TaskStatus.completed())
    manager.update_task("task2", TaskStatus.cancelled())
    manager.update_task("task3", TaskStatus.failed("boom"))
    assert manager.is_all_completed()


def test_blocked_is_not_terminal():
    manager = TaskManager()
    manager.add_task(create_task("task1", "Task 1", []))
    manager.update_task("task1", TaskStatus.blocked("waiting"))
    assert not manager.is_all_completed()
    assert TaskStatus.blocked("waiting").kind is StatusKind.BLOCKED


def test_status_filters_and_delete():
    manager = chain_manager()
    manager.update_task("task2", TaskStatus.in_progress())
    manager.update_task("task3", TaskStatus.completed())
    assert [t.id for t in manager.get_pending_tasks()] == ["task1"]
    assert [t.id for t in manager.get_in_progress_tasks()] == ["task2"]
    assert [t.id for t in manager.get_completed_tasks()] == ["task3"]
    manager.delete_task("task2")
    assert manager.get_task("task2") is None
    assert len(manager.get_all_tasks()) == 2


def test_update_unknown_task_is_ignored():
    manager = chain_manager()
    manager.update_task("ghost", TaskStatus.completed())
    assert manager.get_progress() == (0, 3)


def test_task_defaults_and_builders():
    task = Task(id="t", description="d")
    assert task.status == TaskStatus.pending()
    assert task.priority == 5
    assert task.with_priority(42).priority == 10
    assert task.with_priority(7).priority == 7
    with_deps = task.with_dependencies(["a", "b"])
    assert with_deps.dependencies == ["a", "b"]
    assert task.dependencies == []
    task.add_dependency("x")
    assert task.dependencies == ["x"]


def test_negative_priority_rejected():
    with pytest.raises(ValueError):
        Task(id="t", description="d").with_priority(-1)


def test_status_str():
    assert str(TaskStatus.in_progress()) == "InProgress"
    assert str(TaskStatus.failed("oops")) == 'Failed("oops")'