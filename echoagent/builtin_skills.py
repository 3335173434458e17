"""Ready-made skills: calculator, file system, shell and weather."""

from __future__ import annotations

import os
from pathlib import Path

from echoagent.builtin_tools import AddTool, DivideTool, MultiplyTool, SubtractTool, WeatherTool
from echoagent.file_tools import (
    AppendFileTool,
    CreateFileTool,
    DeleteFileTool,
    ListDirTool,
    MoveFileTool,
    ReadFileTool,
    UpdateFileTool,
    WriteFileTool,
)
from echoagent.shell import ShellTool
from echoagent.skills import Skill
from echoagent.tooling import Tool

_CALCULATOR_PROMPT = (
    "\n\n## 计算器能力（Calculator Skill）\n"
    "你拥有精确的数学计算工具，**禁止心算**，所有数值计算必须调用对应工具：\n"
    "- `add(a, b)`：计算 a + b\n"
    "- `subtract(a, b)`：计算 a - b\n"
    "- `multiply(a, b)`：计算 a × b\n"
    "- `divide(a, b)`：计算 a ÷ b（b 不能为 0）\n"
    "对于多步骤计算，逐步调用工具，将上一步结果作为下一步输入。"
)

_FILESYSTEM_PROMPT = (
    "\n\n## 文件系统能力（FileSystem Skill）{restriction}\n"
    "你可以操作本地文件系统，请合理使用以下工具：\n"
    "- `create_file(path)`：创建文件，适合创建一个空文件等\n"
    "- `delete_file(path)`：删除文件，适合删除 配置、日志、代码等不需要的旧文件\n"
    "- `move_file(old_path, new_path)`：移动文件路径，需要移动文件路径等\n"
    "- `read_file(path)`：读取文件内容，适合查看配置、日志、代码等\n"
    "- `write_file(path, content)`：覆盖写入文件，会清空原有内容\n"
    "- `update_file(path, old_content, new_content)`：修改文件内容，用新内容替换旧内容（精确替换，首次匹配）\n"
    "- `append_file(path, content)`：在文件末尾追加内容，不会清空原有内容\n"
    "- `list_dir(path)`：列出目录下的文件和子目录\n"
    "**注意**：write_file 会覆盖原文件，如需保留原内容请先 read_file 再决定使用 write_file 还是 append_file。"
)

_SHELL_PROMPT = (
    "\n\n## Shell 命令能力（Shell Skill）\n"
    "你可以使用 `shell(command)` 工具执行受限的 shell 命令：\n\n"
    "**安全（直接执行）：**\n"
    "- 文件查看：`ls`、`cat`、`head`、`tail`、`wc`、`stat`\n"
    "- 目录操作：`pwd`、`tree`、`find`、`du`\n"
    "- 代码工具：`git status/log/diff/show`、`cargo check/build/test/clippy`\n"
    "- 搜索：`grep`、`rg`（ripgrep）、`fd`\n"
    "- 文本处理：`echo`、`cut`、`sort`、`uniq`、`diff`\n\n"
    "**需要人工确认（会返回提示，不会执行）：**\n"
    "- `rm`、`mv`、`cp`、`curl`、`wget`、`npm`、`pip` 等\n\n"
    "**永久禁止（安全策略硬限制）：**\n"
    "- `sudo`、`dd`、`chmod`、`reboot`、`shutdown` 等\n\n"
    "**注意**：每次只执行一条命令；如需组合操作请用 `&&` 连接。"
)

_WEATHER_PROMPT = (
    "\n\n## 天气查询能力（Weather Skill）\n"
    "你可以使用 `query_weather(city, date)` 工具查询天气信息：\n"
    "- `city`：城市名称（如 \"北京\"、\"上海\"）\n"
    "- `date`：查询日期（如 \"今天\"、\"2024-01-15\"）\n"
    "当用户询问天气相关问题时，直接调用此工具获取准确信息，不要凭空捏造天气数据。"
)


class CalculatorSkill(Skill):
    """Exact add, subtract, multiply and divide tools."""

    name = "calculator"
    description = "精确四则运算能力（加减乘除），避免 LLM 直接心算导致的精度误差"

    def tools(self) -> list[Tool]:
        return [AddTool(), SubtractTool(), MultiplyTool(), DivideTool()]

    def system_prompt_injection(self) -> str | None:
        return _CALCULATOR_PROMPT


class FileSystemSkill(Skill):
    """Local file tools, optionally confined to ``base_dir``."""

    name = "filesystem"
    description = (
        "本地文件系统读写能力：创建文件、删除文件、移动文件路径、读取文件内容、"
        "写入文件内容、追加文件、修改文件内容，以及列出目录内容"
    )

    def __init__(self, base_dir: str | os.PathLike[str] | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def tools(self) -> list[Tool]:
        classes = (
            ReadFileTool,
            WriteFileTool,
            AppendFileTool,
            ListDirTool,
            CreateFileTool,
            DeleteFileTool,
            UpdateFileTool,
            MoveFileTool,
        )
        return [tool_class(self.base_dir) for tool_class in classes]

    def system_prompt_injection(self) -> str | None:
        if self.base_dir is not None:
            restriction = f"（操作范围限制在 '{self.base_dir}' 目录下）"
        else:
            restriction = "（无路径限制，操作时请谨慎）"
        return _FILESYSTEM_PROMPT.format(restriction=restriction)


class ShellSkill(Skill):
    """A guarded shell tool; strict by default."""

    name = "shell"
    description = "受控 shell 命令执行能力：支持文件查看、目录操作、代码构建（git/cargo）、搜索等安全命令"

    def __init__(self, permissive: bool = False) -> None:
        self.permissive = permissive

    def tools(self) -> list[Tool]:
        tool = ShellTool.permissive() if self.permissive else ShellTool()
        return [tool]

    def system_prompt_injection(self) -> str | None:
        return _SHELL_PROMPT


class WeatherSkill(Skill):
    """City weather lookup."""

    name = "weather"
    description = "城市天气查询能力，可查询指定城市在特定日期的天气状况"

    def tools(self) -> list[Tool]:
        return [WeatherTool()]

    def system_prompt_injection(self) -> str | None:
        return _WEATHER_PROMPT