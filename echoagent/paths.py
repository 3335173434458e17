"""Lexical path normalisation and sandboxed path resolution for file tools."""

from __future__ import annotations

import os
from pathlib import Path

from echoagent.errors import ExecutionFailedError


def normalize_path(path: str | os.PathLike[str]) -> Path:
    """Remove '.' and '..' components without touching the file system.

    A '..' that has no ordinary component before it to cancel is dropped.
    """
    candidate = Path(path)
    anchor = candidate.anchor
    parts = candidate.parts[1:] if anchor else candidate.parts
    components: list[str] = []
    for part in parts:
        if part == "..":
            if components:
                components.pop()
        elif part != ".":
            components.append(part)
    return Path(anchor, *components) if anchor else Path(*components)


def resolve_path(
    tool: str,
    path_str: str,
    base_dir: str | os.PathLike[str] | None,
) -> Path:
    """Resolve ``path_str`` to a normalised path, confined to ``base_dir`` if given.

    Relative paths are taken from ``base_dir``; absolute paths are normalised as
    they are. Raises ExecutionFailedError when the result leaves ``base_dir``.
    """
    requested = Path(path_str)
    if base_dir is None:
        return normalize_path(requested)

    base = normalize_path(base_dir)
    if requested.is_absolute():
        resolved = normalize_path(requested)
    else:
        resolved = normalize_path(base / requested)

    if not resolved.is_relative_to(base):
        raise ExecutionFailedError(tool, f"路径 '{path_str}' 超出允许的目录范围")
    return resolved