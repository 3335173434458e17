# echoagent

Building blocks for tool-using LLM agents:

- **Tools** (`echoagent.tooling`): `Tool` is the async interface an agent calls. `ToolResult` is what a tool reports back. `ToolManager` registers tools by name and runs them under a `ToolExecutionConfig`. The config sets a timeout, optional retries with exponential backoff, and a concurrency limit.
- **Built-in tools** (`echoagent.builtin_tools`): arithmetic (`AddTool`, `SubtractTool`, `MultiplyTool`, `DivideTool`), plus `FinalAnswerTool`, `ThinkTool` and `PlanTool`. There is also a demo `WeatherTool`, which returns a fixed canned answer.
- **File tools** (`echoagent.file_tools`): create, read, write, append, update, move, delete and list files. Each tool takes an optional base directory. Paths that leave that directory are rejected, using the lexical resolution in `echoagent.paths`.
- **Shell tool** (`echoagent.shell`): `ShellTool` runs commands through `sh -c` (`cmd /C` on Windows). Every command first passes a three-level safety check.
- **Task planning** (`echoagent.tasks`): `TaskManager` holds a graph of `Task` objects. It finds cycles, gives a topological order, lists dependency chains and renders a Mermaid diagram. The tools in `echoagent.task_tools` expose the planner to an agent: `CreateTaskTool`, `UpdateTaskTool`, `ListTasksTool`, `VisualizeDependenciesTool` and `GetExecutionOrderTool`.
- **Skills** (`echoagent.skills`, `echoagent.builtin_skills`): a `Skill` bundles related tools with a system-prompt snippet. The built-in skills are `CalculatorSkill`, `FileSystemSkill`, `ShellSkill` and `WeatherSkill`. `SkillManager` records which skills are installed.

## Installation

```
pip install echoagent
```

The package has no runtime dependencies. To install it together with its test dependencies:

```
pip install "echoagent[test]"
```

## Running tools

```python
import asyncio
from echoagent.tooling import ToolManager, ToolExecutionConfig
from echoagent.builtin_tools import AddTool, DivideTool

async def main():
    manager = ToolManager(ToolExecutionConfig(timeout_ms=5_000, max_concurrency=4))
    manager.register_tools([AddTool(), DivideTool()])
    result = await manager.execute_tool("add", {"a": 1, "b": 2})
    print(result.output)  # 1 + 2 = 3

asyncio.run(main())
```

`ToolExecutionConfig` has these defaults:

- `timeout_ms=30_000`; set it to 0 for no timeout.
- `retry_on_fail=False` and `max_retries=2`.
- `retry_delay_ms=200`, doubled before each later retry.
- `max_concurrency=None`, meaning no limit.

Errors are raised as exceptions from `echoagent.errors`:

- `MissingParameterError`: a required parameter is absent or has the wrong type.
- `InvalidParameterError`: a value is not acceptable. This includes `final_answer` being called without an answer, and an unknown status given to `update_task`.
- `ToolNotFoundError`: no tool is registered under that name.
- `ToolTimeoutError`: the tool ran past the timeout.
- `ExecutionFailedError`: the tool could not finish. Examples are dividing by zero, a file system error, or a path outside the base directory.

All of these derive from `ToolError`. Outcomes the agent is meant to read come back as a `ToolResult` with `success=False` and an `error` message. Examples are "file not found", a refused shell command, or a task that would form a cycle.

## Planning with tasks

```python
from echoagent.tasks import Task, TaskManager, TaskStatus

tm = TaskManager()
tm.add_task(Task("fetch", "Fetch data"))
tm.add_task(Task("parse", "Parse data").with_dependencies(["fetch"]))

print(tm.get_topological_order())  # ['fetch', 'parse']
tm.update_task("fetch", TaskStatus.completed())
print(tm.get_next_task().id)       # parse
print(tm.get_summary())
print(tm.visualize_dependencies())
```

`get_topological_order` raises `CircularDependencyError` when the graph has a cycle. `detect_circular_dependencies` returns the cycles themselves. `get_dependency_chain(task_id)` returns every path from a task down to a task with no dependencies. Completed, cancelled and failed tasks all count as finished for `is_all_completed`.

## Shell safety

```python
from echoagent.shell import ShellTool

tool = ShellTool()
print(tool.check_command_safety("git status").level.value)    # safe
print(tool.check_command_safety("rm -rf build").level.value)  # requires_approval
print(tool.check_command_safety("sudo reboot").level.value)   # dangerous
```

`ShellTool` only runs commands judged safe. For the other two levels it returns a failed `ToolResult` that gives the reason. `ShellTool()` is strict, so commands outside the whitelist are refused. `ShellTool.permissive()` also lets unknown commands through. Commands on the approval and danger lists are still stopped in either mode.

## Skills

```python
from echoagent.builtin_skills import CalculatorSkill, FileSystemSkill
from echoagent.skills import SkillManager

skills = SkillManager()
for skill in (CalculatorSkill(), FileSystemSkill("/workspace")):
    skills.record(skill.info())

print([info.name for info in skills.list()])  # ['calculator', 'filesystem']
```

Each skill's `tools()` returns fresh tool instances. Its `system_prompt_injection()` returns text to append to an agent's system prompt.

## What this package does not do

This package provides tools, skills and the task planner only. It has none of the following:

- an agent loop
- an LLM client
- conversation memory or persistent storage
- sub-agent dispatch
- a human-in-the-loop channel
- a command-line program

Installing a skill into an agent means registering its tools with a `ToolManager` and appending its prompt text. That is left to the code that uses these pieces.