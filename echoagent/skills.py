"""Skills: bundles of related tools plus guidance text for the system prompt."""

from __future__ import annotations

import abc
from dataclasses import dataclass, field
from typing import ClassVar

from echoagent.tooling import Tool


@dataclass
class SkillInfo:
    """A snapshot of an installed skill's metadata."""

    name: str
    description: str
    tool_names: list[str] = field(default_factory=list)
    has_prompt_injection: bool = False


class Skill(abc.ABC):
    """A domain capability: a set of tools and optional prompt guidance.

    ``tools()`` returns fresh tool instances on every call.
    """

    name: ClassVar[str] = ""
    description: ClassVar[str] = ""

    @abc.abstractmethod
    def tools(self) -> list[Tool]:
        """The tools this skill provides."""

    def system_prompt_injection(self) -> str | None:
        """Text appended to the agent's system prompt, or None."""
        return None

    def info(self) -> SkillInfo:
        """Describe this skill without holding on to it."""
        return SkillInfo(
            name=self.name,
            description=self.description,
            tool_names=[tool.name for tool in self.tools()],
            has_prompt_injection=self.system_prompt_injection() is not None,
        )


class SkillManager:
    """Keeps track of the skills installed on an agent."""

    def __init__(self) -> None:
        self._skills: dict[str, SkillInfo] = {}

    def record(self, info: SkillInfo) -> None:
        """Remember an installed skill, replacing one with the same name."""
        self._skills[info.name] = info

    def is_installed(self, name: str) -> bool:
        return name in self._skills

    def count(self) -> int:
        return len(self._skills)

    def list(self) -> list[SkillInfo]:
        """All installed skills, sorted by name."""
        return sorted(self._skills.values(), key=lambda info: info.name)

    def get(self, name: str) -> SkillInfo | None:
        return self._skills.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._skills

    def __len__(self) -> int:
        return len(self._skills)