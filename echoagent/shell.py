"""A shell tool that runs commands only after a three-level safety check."""

from __future__ import annotations

import asyncio
import enum
import sys
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from echoagent.errors import MissingParameterError
from echoagent.tooling import Tool, ToolResult

ALLOWED_COMMANDS = frozenset(
    {
        # file viewing
        "ls", "cat", "head", "tail", "less", "more", "file", "stat", "wc",
        # directories (read only)
        "pwd", "tree", "find", "du",
        # code tools
        "git", "cargo", "rustc", "clippy", "rustfmt",
        # search
        "grep", "rg", "ag", "fd",
        # text processing
        "echo", "printf", "sed", "awk", "cut", "sort", "uniq", "diff",
        # system information
        "which", "whereis", "env", "date", "uname",
    }
)

REQUIRE_APPROVAL_COMMANDS = frozenset(
    {
        "rm", "rmdir", "mv", "cp",
        "curl", "wget", "nc",
        "kill", "killall", "pkill",
        "apt", "apt-get", "yum", "dnf", "brew", "pip", "pip3", "npm", "yarn", "pnpm",
        "bash", "sh", "zsh", "fish", "python", "python3", "node", "perl", "ruby", "php",
    }
)

DANGEROUS_COMMANDS = frozenset(
    {
        "dd", "shred", "mkfs", "fdisk",
        "sudo", "su",
        "chmod", "chown", "chgrp",
        "reboot", "shutdown", "halt", "poweroff", "init",
        "nmap",
    }
)

GIT_SAFE_SUBCOMMANDS = frozenset(
    {
        "status", "log", "show", "diff", "branch", "tag", "ls-files", "ls-tree", "remote", "config",
        "add", "commit", "checkout", "switch", "stash",
    }
)

CARGO_SAFE_SUBCOMMANDS = frozenset(
    {
        "check", "build", "test", "clippy", "fmt", "tree", "search", "metadata",
        "clean", "update",
    }
)


class SafetyLevel(enum.Enum):
    """How a command is treated by the shell tool."""

    SAFE = "safe"
    REQUIRES_APPROVAL = "requires_approval"
    DANGEROUS = "dangerous"


@dataclass(frozen=True)
class CommandSafety:
    """The verdict on a command, with a reason unless it is safe."""

    level: SafetyLevel
    reason: str | None = None

    @classmethod
    def safe(cls) -> CommandSafety:
        return cls(SafetyLevel.SAFE)

    @classmethod
    def requires_approval(cls, reason: str) -> CommandSafety:
        return cls(SafetyLevel.REQUIRES_APPROVAL, reason)

    @classmethod
    def dangerous(cls, reason: str) -> CommandSafety:
        return cls(SafetyLevel.DANGEROUS, reason)


def _check_git(parts: Sequence[str]) -> CommandSafety:
    if len(parts) < 2:
        return CommandSafety.safe()
    sub = parts[1]
    if sub in ("push", "pull", "fetch", "clone"):
        return CommandSafety.requires_approval(f"git {sub} 涉及网络操作，需要确认")
    if sub == "reset":
        if "--hard" in parts:
            return CommandSafety.dangerous("git reset --hard 会丢失数据，已拒绝。如需执行请手动操作")
        return CommandSafety.requires_approval("git reset 会修改 Git 状态，需要确认")
    if sub == "clean":
        return CommandSafety.requires_approval("git clean 会删除未跟踪文件，需要确认")
    if sub in GIT_SAFE_SUBCOMMANDS:
        if sub in ("commit", "add", "checkout"):
            return CommandSafety.requires_approval(f"git {sub} 会修改仓库，需要确认")
        return CommandSafety.safe()
    return CommandSafety.requires_approval(f"git {sub} 不在已知安全列表中，需要确认")


def _check_cargo(parts: Sequence[str]) -> CommandSafety:
    if len(parts) < 2:
        return CommandSafety.safe()
    sub = parts[1]
    if sub in ("install", "uninstall", "publish"):
        return CommandSafety.requires_approval(f"cargo {sub} 涉及包安装/发布，需要确认")
    if sub == "run":
        return CommandSafety.requires_approval("cargo run 会执行程序，需要确认")
    if sub in CARGO_SAFE_SUBCOMMANDS:
        if sub in ("clean", "update"):
            return CommandSafety.requires_approval(f"cargo {sub} 会修改项目，需要确认")
        return CommandSafety.safe()
    return CommandSafety.requires_approval(f"cargo {sub} 不在已知安全列表中，需要确认")


def _exit_code_text(code: int | None) -> str:
    if code is None or code < 0:
        return "None"
    return f"Some({code})"


class ShellTool(Tool):
    """Runs shell commands that pass the safety check.

    In strict mode (the default) only whitelisted commands run; permissive
    mode also lets unknown commands through.
    """

    name = "shell"
    description = "执行受限的 shell 命令（仅允许安全的只读操作和代码相关命令）。参数：command - 要执行的命令"
    parameters = {
        "type": "object",
        "properties": {
            "command": {
                "type": "string",
                "description": "要执行的 shell 命令（仅限白名单中的安全命令）",
            }
        },
        "required": ["command"],
    }

    def __init__(self, strict_mode: bool = True) -> None:
        self.strict_mode = strict_mode

    @classmethod
    def permissive(cls) -> ShellTool:
        """A tool that also runs commands outside the whitelist."""
        return cls(strict_mode=False)

    def check_command_safety(self, command: str) -> CommandSafety:
        parts = command.split()
        if not parts:
            return CommandSafety.dangerous("空命令")
        base = parts[0]

        if base in DANGEROUS_COMMANDS:
            return CommandSafety.dangerous(f"命令 '{base}' 在危险命令黑名单中，已拒绝执行")
        if base in REQUIRE_APPROVAL_COMMANDS:
            return CommandSafety.requires_approval(f"命令 '{base}' 可能造成系统变更，需要人工确认")
        if self.strict_mode and base not in ALLOWED_COMMANDS:
            return CommandSafety.dangerous(f"命令 '{base}' 不在安全白名单中，已拒绝执行")

        if base == "git":
            return _check_git(parts)
        if base == "cargo":
            return _check_cargo(parts)
        if base in ("sed", "awk"):
            return CommandSafety.requires_approval(f"'{base}' 命令可能修改文件，需要确认")
        return CommandSafety.safe()

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        command = parameters.get("command")
        if not isinstance(command, str):
            raise MissingParameterError("command")

        verdict = self.check_command_safety(command)
        if verdict.level is SafetyLevel.REQUIRES_APPROVAL:
            return ToolResult.fail(
                f"⚠️  需要人工确认：{verdict.reason}\n命令：{command}\n\n"
                "请使用 human_loop 模块进行确认后再执行。"
            )
        if verdict.level is SafetyLevel.DANGEROUS:
            return ToolResult.fail(
                f"🚫 安全拒绝：{verdict.reason}\n命令：{command}\n\n"
                "如需执行此类操作，请手动在终端中执行。"
            )

        shell, flag = ("cmd", "/C") if sys.platform == "win32" else ("sh", "-c")
        try:
            process = await asyncio.create_subprocess_exec(
                shell,
                flag,
                command,
                stdin=asyncio.subprocess.DEVNULL,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
            out, err = await process.communicate()
        except OSError as exc:
            return ToolResult.fail(f"无法执行命令: {exc}")

        stdout = out.decode("utf-8", errors="replace")
        stderr = err.decode("utf-8", errors="replace")
        if process.returncode == 0:
            return ToolResult.ok(stdout)
        return ToolResult.fail(
            f"命令执行失败，退出码: {_exit_code_text(process.returncode)}\n"
            f"标准输出: {stdout}\n错误输出: {stderr}"
        )