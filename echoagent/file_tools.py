"""Tools that create, read, write, edit, move, delete and list local files."""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from echoagent.errors import ExecutionFailedError, MissingParameterError
from echoagent.paths import resolve_path
from echoagent.tooling import Tool, ToolResult


def _require_str(parameters: Mapping[str, Any], name: str) -> str:
    value = parameters.get(name)
    if not isinstance(value, str):
        raise MissingParameterError(name)
    return value


def _path_schema(description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {"path": {"type": "string", "description": description}},
        "required": ["path"],
    }


def _path_content_schema(path_description: str, content_description: str) -> dict[str, Any]:
    return {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": path_description},
            "content": {"type": "string", "description": content_description},
        },
        "required": ["path", "content"],
    }


class _FileTool(Tool):
    """A file tool, optionally confined to a base directory."""

    def __init__(self, base_dir: str | os.PathLike[str] | None = None) -> None:
        self.base_dir = Path(base_dir) if base_dir is not None else None

    def _resolve(self, path_str: str) -> Path:
        return resolve_path(self.name, path_str, self.base_dir)

    def _make_parents(self, path: Path, message: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise ExecutionFailedError(self.name, f"{message}: {exc}") from exc


class CreateFileTool(_FileTool):
    """Creates an empty file, making missing parent directories."""

    name = "create_file"
    description = "创建指定文件。"
    parameters = _path_schema("需要创建的文件路径（相对路径或绝对路径）")

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        path = self._resolve(_require_str(parameters, "path"))
        if path.exists():
            return ToolResult.fail(f"文件已存在: {path}")
        self._make_parents(path, "创建目录失败")
        try:
            path.write_bytes(b"")
        except OSError as exc:
            raise ExecutionFailedError(self.name, f"创建文件失败: {exc}") from exc
        return ToolResult.ok(f"创建文件:{path} 成功。")


class DeleteFileTool(_FileTool):
    """Deletes a regular file."""

    name = "delete_file"
    description = "删除指定文件。"
    parameters = _path_schema("需要删除的文件路径（相对路径或绝对路径）")

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        path = self._resolve(_require_str(parameters, "path"))
        if not path.exists():
            return ToolResult.fail(f"文件不存在: {path}")
        if not path.is_file():
            return ToolResult.fail(f"'{path}' 不是文件")
        try:
            path.unlink()
        except OSError as exc:
            raise ExecutionFailedError(self.name, f"删除失败: {exc}") from exc
        return ToolResult.ok(f"删除文件:{path} 成功。")


class ReadFileTool(_FileTool):
    """Returns the UTF-8 text of a file."""

    name = "read_file"
    description = "读取指定路径的文件内容，返回文本内容"
    parameters = _path_schema("要读取的文件路径（相对路径或绝对路径）")

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        path = self._resolve(_require_str(parameters, "path"))
        if not path.exists():
            return ToolResult.fail(f"文件不存在: {path}")
        if not path.is_file():
            return ToolResult.fail(f"'{path}' 不是文件")
        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ExecutionFailedError(self.name, f"读取失败: {exc}") from exc
        return ToolResult.ok(content)


class WriteFileTool(_FileTool):
    """Overwrites a file with new text, making missing parent directories."""

    name = "write_file"
    description = "将内容写入指定路径的文件（覆盖写），若目录不存在则自动创建"
    parameters = _path_content_schema("要写入的文件路径", "要写入的文本内容")

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        path_str = _require_str(parameters, "path")
        content = _require_str(parameters, "content")
        path = self._resolve(path_str)
        self._make_parents(path, "创建目录失败")
        data = content.encode("utf-8")
        try:
            path.write_bytes(data)
        except OSError as exc:
            raise ExecutionFailedError(self.name, f"写入失败: {exc}") from exc
        return ToolResult.ok(f"已成功写入 {len(data)} 字节到 '{path}'")


class AppendFileTool(_FileTool):
    """Appends text to a file, creating it if needed."""

    name = "append_file"
    description = "将内容追加到文件末尾（文件不存在时自动创建）"
    parameters = _path_content_schema("目标文件路径", "要追加的文本内容")

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        path_str = _require_str(parameters, "path")
        content = _require_str(parameters, "content")
        path = self._resolve(path_str)
        self._make_parents(path, "创建目录失败")
        data = content.encode("utf-8")
        try:
            handle = path.open("ab")
        except OSError as exc:
            raise ExecutionFailedError(self.name, f"打开文件失败: {exc}") from exc
        with handle:
            try:
                handle.write(data)
            except OSError as exc:
                raise ExecutionFailedError(self.name, f"追加写入失败: {exc}") from exc
        return ToolResult.ok(f"已追加 {len(data)} 字节到 '{path}'")


class UpdateFileTool(_FileTool):
    """Replaces the first occurrence of some text in a file."""

    name = "update_file"
    description = "更新文件内容，即用新内容替换旧内容。"
    parameters = {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "目标文件路径"},
            "old_content": {"type": "string", "description": "旧文件内容，废弃不用的内容。"},
            "new_content": {"type": "string", "description": "新文件内容，最新生成的文件内容"},
        },
        "required": ["path", "old_content", "new_content"],
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        path_str = _require_str(parameters, "path")
        old_content = _require_str(parameters, "old_content")
        new_content = _require_str(parameters, "new_content")
        path = self._resolve(path_str)
        if not path.exists():
            return ToolResult.fail(f"文件不存在: {path}")
        try:
            content = path.read_bytes().decode("utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ExecutionFailedError(self.name, f"读取文件失败: {exc}") from exc
        if old_content not in content:
            return ToolResult.fail(f"文件中未找到指定内容，替换失败: {path}")
        updated = content.replace(old_content, new_content, 1)
        try:
            path.write_bytes(updated.encode("utf-8"))
        except OSError as exc:
            raise ExecutionFailedError(self.name, f"更新写入失败: {exc}") from exc
        return ToolResult.ok(f"已更新文件: {path}，替换成功。")


class MoveFileTool(_FileTool):
    """Moves a file to a path that does not exist yet."""

    name = "move_file"
    description = "移动文件到新路径"
    parameters = {
        "type": "object",
        "properties": {
            "old_path": {"type": "string", "description": "旧文件路径"},
            "new_path": {"type": "string", "description": "新文件路径"},
        },
        "required": ["old_path", "new_path"],
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        old_str = _require_str(parameters, "old_path")
        new_str = _require_str(parameters, "new_path")
        old_path = self._resolve(old_str)
        new_path = self._resolve(new_str)
        if not old_path.exists():
            return ToolResult.fail(f"源文件不存在: {old_path}")
        if not old_path.is_file():
            return ToolResult.fail(f"'{old_path}' 不是文件")
        if new_path.exists():
            return ToolResult.fail(f"目标路径已存在: {new_path}")
        self._make_parents(new_path, "创建目标目录失败")
        try:
            old_path.rename(new_path)
        except OSError as exc:
            raise ExecutionFailedError(
                self.name,
                f"移动文件失败，old_path: {old_path}，new_path:{new_path}。err:{exc}",
            ) from exc
        return ToolResult.ok(f"移动文件成功，old_path: {old_path}，new_path:{new_path}。")


class ListDirTool(_FileTool):
    """Lists a directory's subdirectories and files, each group sorted."""

    name = "list_dir"
    description = "列出目录中的所有文件和子目录，返回名称列表"
    parameters = {
        "type": "object",
        "properties": {
            "path": {"type": "string", "description": "要列出的目录路径，默认为当前目录"}
        },
        "required": [],
    }

    async def execute(self, parameters: Mapping[str, Any]) -> ToolResult:
        path_str = parameters.get("path")
        path = self._resolve(path_str if isinstance(path_str, str) else ".")
        if not path.exists():
            return ToolResult.fail(f"目录不存在: {path}")
        if not path.is_dir():
            return ToolResult.fail(f"'{path}' 不是目录")

        dirs: list[str] = []
        files: list[str] = []
        try:
            with os.scandir(path) as entries:
                for entry in entries:
                    if entry.is_dir(follow_symlinks=False):
                        dirs.append(f"[目录] {entry.name}/")
                    else:
                        files.append(f"[文件] {entry.name}")
        except OSError as exc:
            raise ExecutionFailedError(self.name, f"读取目录失败: {exc}") from exc

        if not dirs and not files:
            return ToolResult.ok(f"目录 '{path}' 为空")

        dirs.sort()
        files.sort()
        lines = [f"目录 '{path}' 内容：\n"]
        lines.extend(f"  {item}\n" for item in dirs + files)
        lines.append(f"\n共 {len(dirs)} 个目录，{len(files)} 个文件")
        return ToolResult.ok("".join(lines))